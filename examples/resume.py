"""
Example: pausing an accumulator with an interval and resuming it from a snapshot.

This example shows:
1. during() freezing a running sum while its input interval is off
2. encode()/decode() carrying the frozen sum across a restart
"""

from __future__ import annotations

import logging

from stepwise import Auto, Interval, during, mk_accum, stream_auto, when

logging.basicConfig(level=logging.DEBUG)


def gated_total() -> Auto[int, Interval[int]]:
    """Sum only the readings above 10."""
    total = mk_accum(lambda x, acc: acc + x, 0, int)
    return when(lambda x: x > 10).then(during(total))


if __name__ == "__main__":
    readings = [12, 3, 15, 9, 20]
    first_half, paused = stream_auto(gated_total(), readings[:3])
    print("before restart:", first_half)

    snapshot = paused.encode()
    print("snapshot:", snapshot.decode())

    resumed = gated_total().decode(snapshot)
    second_half, _ = stream_auto(resumed, readings[3:])
    print("after restart:", second_half)
