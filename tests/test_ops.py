"""Tests for interval choice, gating, and composition combinators."""

import pytest

from stepwise.interval import (
    bind_interval,
    choice,
    choose,
    choose_interval,
    compose_interval,
    compose_intervals,
    during,
    fallback,
    off,
    off_for,
    on_for,
    to_on,
    when,
    window,
)
from stepwise.kernel import count, mk_const, mk_func, step_auto_n, stream_auto

from fakes import OFF, On, Recorder, sum_from


def constant_for(n: int, value: str):
    """On with ``value`` for ``n`` steps, then off."""
    return mk_const(value).then(on_for(n))


class TestChoice:
    def test_binary_choice_prefers_left(self):
        outputs, _ = step_auto_n(4, choice(constant_for(1, "a"), constant_for(3, "b")), None)
        assert outputs == [On("a"), On("b"), On("b"), OFF]

    def test_variadic_choice(self):
        auto = choice(constant_for(1, "a"), constant_for(2, "b"), constant_for(3, "c"))
        outputs, _ = step_auto_n(4, auto, None)
        assert outputs == [On("a"), On("b"), On("c"), OFF]

    def test_single_operand_choice_is_operand(self):
        outputs, _ = step_auto_n(2, choice(constant_for(1, "a")), None)
        assert outputs == [On("a"), OFF]

    def test_fallback_chain_is_right_associative(self):
        auto = fallback(constant_for(2, "hello"), constant_for(4, "world"), mk_const("goodbye!"))
        outputs, _ = step_auto_n(6, auto, None)
        assert outputs == ["hello", "hello", "world", "world", "goodbye!", "goodbye!"]

    def test_nested_fallback_matches_chain(self):
        nested = fallback(constant_for(2, "hello"), fallback(constant_for(4, "world"), mk_const("goodbye!")))
        chained = fallback(constant_for(2, "hello"), constant_for(4, "world"), mk_const("goodbye!"))
        assert step_auto_n(6, nested, None)[0] == step_auto_n(6, chained, None)[0]

    def test_choose_matches_fallback_chain(self):
        auto = choose(mk_const("goodbye!"), [constant_for(2, "hello"), constant_for(4, "world")])
        outputs, _ = step_auto_n(6, auto, None)
        assert outputs == ["hello", "hello", "world", "world", "goodbye!", "goodbye!"]

    def test_choose_with_no_intervals_is_default(self):
        outputs, _ = stream_auto(choose(mk_func(str), []), [1, 2])
        assert outputs == ["1", "2"]

    def test_choose_interval_first_on(self):
        auto = choose_interval([when(lambda x: x > 3), when(lambda x: x % 2 == 0)])
        outputs, _ = stream_auto(auto, [1, 2, 3, 4, 5])
        assert outputs == [OFF, On(2), OFF, On(4), On(5)]

    def test_choose_interval_empty_is_off(self):
        outputs, _ = stream_auto(choose_interval([]), [1, 2])
        assert outputs == [OFF, OFF]


class TestChoiceSteppingOrder:
    """Choice combinators step every operand, even when its result is unused."""

    def test_choice_steps_both_operands_in_order(self):
        rec = Recorder()
        auto = choice(rec.wrap("left", to_on()), rec.wrap("right", to_on()))
        stream_auto(auto, [1, 2])
        assert rec.actions() == ["left", "right", "left", "right"]

    def test_fallback_steps_default_while_interval_on(self):
        rec = Recorder()
        auto = fallback(rec.wrap("interval", to_on()), rec.const("default", 0))
        outputs, _ = stream_auto(auto, [5, 6])
        assert outputs == [5, 6]
        assert rec.actions() == ["interval", "default", "interval", "default"]

    def test_choose_interval_steps_all(self):
        rec = Recorder()
        auto = choose_interval([rec.wrap("a", to_on()), rec.wrap("b", off()), rec.wrap("c", to_on())])
        outputs, _ = stream_auto(auto, [1])
        assert outputs == [On(1)]
        assert rec.actions() == ["a", "b", "c"]

    def test_unused_operand_state_still_advances(self):
        auto = fallback(to_on(), sum_from(0))
        _, stepped = stream_auto(auto, [1, 1, 1])
        # Right operand summed all three inputs even though it was never chosen.
        assert stepped.snapshot() == [None, 3]

    def test_upstream_of_off_is_still_stepped(self):
        rec = Recorder()
        auto = rec.wrap("source", count()).then(off())
        outputs, _ = step_auto_n(3, auto, None)
        assert outputs == [OFF, OFF, OFF]
        assert rec.actions() == ["source"] * 3


class TestDuring:
    def test_during_freezes_operand_while_off(self):
        outputs, _ = stream_auto(during(sum_from(0)), [On(1), On(1), OFF, OFF, On(1)])
        assert outputs == [On(1), On(2), OFF, OFF, On(3)]

    def test_during_skips_effects_while_off(self):
        rec = Recorder()
        auto = during(rec.wrap("inner", sum_from(0)))
        stream_auto(auto, [OFF, On(1), OFF])
        assert rec.actions() == ["inner"]

    def test_during_after_on_for(self):
        auto = mk_const(1).then(on_for(2)).then(during(sum_from(0)))
        outputs, _ = step_auto_n(5, auto, None)
        assert outputs == [On(1), On(2), OFF, OFF, OFF]

    def test_during_after_off_for_starts_counting_late(self):
        auto = mk_const(1).then(off_for(2)).then(during(sum_from(0)))
        outputs, _ = step_auto_n(5, auto, None)
        assert outputs == [OFF, OFF, On(1), On(2), On(3)]

    def test_summing_before_off_for_never_pauses(self):
        auto = mk_const(1).then(sum_from(0)).then(off_for(2))
        outputs, _ = step_auto_n(5, auto, None)
        assert outputs == [OFF, OFF, On(3), On(4), On(5)]

    def test_bind_interval_flattens(self):
        outputs, _ = stream_auto(bind_interval(on_for(2)), [On(1), OFF, On(2), On(3)])
        assert outputs == [On(1), OFF, On(2), OFF]

    def test_bind_interval_is_compose_with_identity(self):
        inputs = [On(1), OFF, On(2), On(3)]
        bound, _ = stream_auto(bind_interval(on_for(2)), inputs)
        composed, _ = stream_auto(compose_interval(on_for(2), mk_func(lambda i: i)), inputs)
        assert bound == composed


class TestCompose:
    def test_compose_skips_left_while_right_off(self):
        auto = count().then(compose_interval(on_for(4), off_for(1)))
        outputs, _ = step_auto_n(6, auto, None)
        assert outputs == [OFF, On(2), On(3), On(4), On(5), OFF]

    def test_compose_chain(self):
        auto = count().then(compose_intervals(when(lambda x: x % 2 == 0), on_for(4), off_for(1)))
        outputs, _ = step_auto_n(6, auto, None)
        assert outputs == [OFF, On(2), OFF, On(4), OFF, OFF]

    def test_compose_skips_effects(self):
        rec = Recorder()
        auto = compose_interval(rec.wrap("f", to_on()), rec.wrap("g", when(lambda x: x > 1)))
        stream_auto(auto, [1, 2])
        assert rec.actions() == ["g", "g", "f"]

    def test_compose_intervals_requires_an_operand(self):
        with pytest.raises(ValueError):
            compose_intervals()

    def test_window(self):
        outputs, _ = step_auto_n(6, count().then(window(1, 4)), None)
        assert outputs == [OFF, On(2), On(3), On(4), OFF, OFF]

    @pytest.mark.parametrize("start,finish", [(3, 3), (4, 2), (-1, 0)])
    def test_empty_window_is_off(self, start, finish):
        outputs, _ = step_auto_n(5, count().then(window(start, finish)), None)
        assert outputs == [OFF] * 5
