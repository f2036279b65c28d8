from __future__ import annotations

from stepwise import Auto, count, fallback, mk_const, on_for, step_auto_n


def greeting() -> Auto[None, str]:
    """Say hello for two steps, world for two more, then goodbye forever."""
    return fallback(
        mk_const("hello").then(on_for(2)),
        mk_const("world").then(on_for(4)),
        mk_const("goodbye!"),
    )


def labelled_count() -> Auto[None, str]:
    return count().map(lambda n: f"step {n}")


if __name__ == "__main__":
    outputs, _ = step_auto_n(6, greeting().fanout(labelled_count()), None)
    for word, label in outputs:
        print(f"{label}: {word}")
