"""Detection of stairs and poles that would send a player round in a loop."""

from __future__ import annotations

from collections.abc import Sequence

from .model import Pole, Stair, StairDirection


def is_stair_loop(a: Stair, b: Stair) -> bool:
    """True if taking the two stairs could bring a player back to the floor it left."""
    if a.end_floor == b.start_floor and a.start_floor == b.end_floor:
        return True
    for first, second in ((a, b), (b, a)):
        if first.direction is StairDirection.BI and (
            (first.start_floor == second.start_floor and first.end_floor == second.end_floor)
            or (first.start_floor == second.end_floor and first.end_floor == second.start_floor)
        ):
            return True
    return False


def is_stair_pole_loop(stair: Stair, pole: Pole) -> bool:
    """True if a stair and a pole together form a loop between two floors."""
    if pole.end_floor == stair.start_floor and stair.end_floor == pole.start_floor:
        return True
    if stair.direction is StairDirection.BI:
        if pole.start_floor == stair.start_floor and pole.end_floor == stair.end_floor:
            return True
        if pole.start_floor == stair.end_floor and pole.end_floor == stair.start_floor:
            return True
    return False


def _poles_loop(a: Pole, b: Pole) -> bool:
    return a.end_floor == b.start_floor and b.end_floor == a.start_floor


def non_looping(
    stairs: Sequence[Stair], poles: Sequence[Pole]
) -> tuple[list[Stair], list[Pole]]:
    """Stairs and poles from one cell that take part in no loop, in their given order.

    Every stair and pole is checked against every other one and against itself.
    """
    kept_stairs = [
        stair
        for stair in stairs
        if not any(is_stair_loop(stair, other) for other in stairs)
        and not any(is_stair_pole_loop(stair, pole) for pole in poles)
    ]
    kept_poles = [
        pole
        for pole in poles
        if not any(is_stair_pole_loop(stair, pole) for stair in stairs)
        and not any(_poles_loop(pole, other) for other in poles)
    ]
    return kept_stairs, kept_poles