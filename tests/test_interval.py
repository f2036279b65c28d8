"""Tests for interval values and the static and blip-driven intervals."""

import pytest

from stepwise.interval import (
    Interval,
    after,
    before,
    between,
    from_interval,
    from_interval_with,
    hold,
    hold_for,
    hold_transient,
    off,
    off_for,
    on_for,
    to_on,
    unless,
    when,
)
from stepwise.kernel import Blip, count, emit_at, step_auto_n, stream_auto

from fakes import OFF, On, blips, count_with_blip_at


class TestIntervalValue:
    def test_on_none_is_not_off(self):
        assert Interval.On(None) != Interval.Off()
        assert Interval.On(None).is_on

    def test_equality_and_repr(self):
        assert Interval.On(1) == Interval.On(1)
        assert Interval.Off() == Interval.Off()
        assert repr(Interval.On("a")) == "On('a')"
        assert repr(Interval.Off()) == "Off"

    def test_eliminators(self):
        assert Interval.On(2).value_or(0) == 2
        assert Interval.Off().value_or(0) == 0
        assert Interval.On(2).maybe("off", str) == "2"
        assert Interval.Off().maybe("off", str) == "off"

    def test_map(self):
        assert Interval.On(2).map(lambda x: x + 1) == On(3)
        assert Interval.Off().map(lambda x: x + 1) == OFF

    def test_flatten(self):
        assert Interval.On(Interval.On(1)).flatten() == On(1)
        assert Interval.On(Interval.Off()).flatten() == OFF
        assert Interval.Off().flatten() == OFF

    def test_or_else_prefers_on(self):
        assert On(1).or_else(On(2)) == On(1)
        assert OFF.or_else(On(2)) == On(2)
        assert OFF.or_else(OFF) == OFF


class TestStatic:
    def test_off_is_always_off(self):
        outputs, _ = stream_auto(off(), [1, "a", None, 4.0])
        assert outputs == [OFF] * 4

    def test_to_on_is_always_on(self):
        outputs, _ = stream_auto(to_on(), [1, "a", None])
        assert outputs == [On(1), On("a"), On(None)]

    def test_on_for(self):
        outputs, _ = stream_auto(on_for(2), [1, 2, 3, 4, 5])
        assert outputs == [On(1), On(2), OFF, OFF, OFF]

    def test_off_for(self):
        outputs, _ = stream_auto(off_for(2), [1, 2, 3, 4, 5])
        assert outputs == [OFF, OFF, On(3), On(4), On(5)]

    @pytest.mark.parametrize("n", [0, -3])
    def test_non_positive_counts_are_clamped(self, n):
        on_outputs, _ = stream_auto(on_for(n), [1, 2])
        off_outputs, _ = stream_auto(off_for(n), [1, 2])
        assert on_outputs == [OFF, OFF]
        assert off_outputs == [On(1), On(2)]

    def test_when_is_reevaluated_each_step(self):
        outputs, _ = stream_auto(when(lambda x: 2 <= x <= 4), [1, 2, 3, 4, 5, 3])
        assert outputs == [OFF, On(2), On(3), On(4), OFF, On(3)]

    def test_unless_is_complement_of_when(self):
        outputs, _ = stream_auto(unless(lambda x: x % 2 == 0), [1, 2, 3])
        assert outputs == [On(1), OFF, On(3)]

    def test_from_interval(self):
        outputs, _ = stream_auto(on_for(2).then(from_interval(0)), [7, 8, 9])
        assert outputs == [7, 8, 0]

    def test_from_interval_with(self):
        auto = count().then(on_for(2)).then(from_interval_with("off", str))
        outputs, _ = step_auto_n(5, auto, None)
        assert outputs == ["1", "2", "off", "off", "off"]

    def test_from_interval_after_to_on_is_identity(self):
        outputs, _ = stream_auto(to_on().then(from_interval("default")), [None, 0, "x"])
        assert outputs == [None, 0, "x"]


class TestAfterBefore:
    def test_after_latches_on(self):
        outputs, _ = step_auto_n(5, count_with_blip_at(3).then(after()), None)
        assert outputs == [OFF, OFF, On(3), On(4), On(5)]

    def test_after_ignores_later_blips(self):
        stream = list(zip([1, 2, 3, 4], blips(4, at=[2, 4])))
        outputs, _ = stream_auto(after(), stream)
        assert outputs == [OFF, On(2), On(3), On(4)]

    def test_before_latches_off(self):
        outputs, _ = step_auto_n(5, count_with_blip_at(3).then(before()), None)
        assert outputs == [On(1), On(2), OFF, OFF, OFF]

    def test_before_blip_on_first_step(self):
        stream = list(zip([1, 2], blips(2, at=[1])))
        outputs, _ = stream_auto(before(), stream)
        assert outputs == [OFF, OFF]


class TestBetween:
    @staticmethod
    def run(starts: list[int], ends: list[int], length: int = 5) -> list[Interval[int]]:
        values = list(range(1, length + 1))
        stream = list(zip(values, zip(blips(length, starts), blips(length, ends))))
        outputs, _ = stream_auto(between(), stream)
        return outputs

    def test_toggles_on_and_off(self):
        assert self.run(starts=[3], ends=[5], length=7) == [OFF, OFF, On(3), On(4), OFF, OFF, OFF]

    def test_can_turn_on_again(self):
        assert self.run(starts=[1, 4], ends=[2]) == [On(1), OFF, OFF, On(4), On(5)]

    def test_end_beats_simultaneous_start(self):
        assert self.run(starts=[3], ends=[3, 5]) == [OFF, OFF, OFF, OFF, OFF]

    def test_end_beats_start_while_already_on(self):
        assert self.run(starts=[1, 3], ends=[3]) == [On(1), On(2), OFF, OFF, OFF]

    def test_end_while_off_is_harmless(self):
        assert self.run(starts=[2], ends=[1]) == [OFF, On(2), On(3), On(4), On(5)]


class TestHold:
    def test_hold_keeps_last_payload(self):
        outputs, _ = step_auto_n(5, count().then(emit_at(3)).then(hold()), None)
        assert outputs == [OFF, OFF, On(3), On(3), On(3)]

    def test_hold_replaces_payload(self):
        stream = [Blip.NoEmit(), Blip.Emit("a"), Blip.NoEmit(), Blip.Emit("b"), Blip.NoEmit()]
        outputs, _ = stream_auto(hold(), stream)
        assert outputs == [OFF, On("a"), On("a"), On("b"), On("b")]

    def test_hold_transient_steps_like_hold(self):
        stream = [Blip.Emit(1), Blip.NoEmit(), Blip.Emit(None)]
        persisting, _ = stream_auto(hold(), stream)
        transient, _ = stream_auto(hold_transient(), stream)
        assert persisting == transient == [On(1), On(1), On(None)]

    def test_hold_for_expires(self):
        stream = blips(7, at=[3], payload="v")
        outputs, _ = stream_auto(hold_for(2), stream)
        assert outputs == [OFF, OFF, On("v"), On("v"), OFF, OFF, OFF]

    def test_hold_for_resets_on_new_blip(self):
        stream = [Blip.Emit("a"), Blip.NoEmit(), Blip.Emit("b"), Blip.NoEmit(), Blip.NoEmit(), Blip.NoEmit()]
        outputs, _ = stream_auto(hold_for(3), stream)
        assert outputs == [On("a"), On("a"), On("b"), On("b"), On("b"), OFF]

    @pytest.mark.parametrize("n", [0, 1, -2])
    def test_hold_for_short_holds_cover_emitting_step_only(self, n):
        outputs, _ = stream_auto(hold_for(n), blips(3, at=[1], payload="x"))
        assert outputs == [On("x"), OFF, OFF]
