"""Walls, stairs, poles and the flag that make up a maze layout, and the files they come from."""

from __future__ import annotations

import logging
import math
import re
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from .geometry import is_in_playable_area
from .model import (
    MAX_POLES_FROM_SAME_CELL,
    MAX_STAIRS_FROM_SAME_CELL,
    Pole,
    Position,
    Stair,
    StairDirection,
    Wall,
)

logger = logging.getLogger(__name__)

_INT = re.compile(r"\s*([+-]?\d+)")


class LayoutError(Exception):
    """Raised when a layout cannot be built from its description."""


def _scan(text: str, count: int) -> list[int]:
    """Read up to ``count`` integers written as ``[a, b, c, ...]``; stop at the first mismatch."""
    values: list[int] = []
    if not text.startswith("["):
        return values
    pos = 1
    for index in range(count):
        if index:
            if text[pos:pos + 1] != ",":
                break
            pos += 1
        match = _INT.match(text, pos)
        if match is None:
            break
        values.append(int(match.group(1)))
        pos = match.end()
    return values


def _round_half_away(value: float) -> int:
    if value >= 0:
        return math.floor(value + 0.5)
    return -math.floor(-value + 0.5)


def _blocked_by_wall(walls: Iterable[Wall], floor: int, width: int, length: int) -> bool:
    return any(
        wall.floor == floor
        and wall.start_width <= width <= wall.end_width
        and wall.start_length <= length <= wall.end_length
        for wall in walls
    )


def _blocked_by_stair(stairs: Iterable[Stair], floor: int, width: int, length: int) -> bool:
    for stair in stairs:
        upper = max(stair.start_floor, stair.end_floor)
        lower = min(stair.start_floor, stair.end_floor)
        if floor < lower or floor > upper or upper == lower:
            continue
        if floor in (stair.start_floor, stair.end_floor):
            continue
        factor = abs(floor - stair.start_floor) / abs(stair.start_floor - stair.end_floor)
        calc_width = stair.start_width + (stair.end_width - stair.start_width) * factor
        calc_length = stair.start_length + (stair.end_length - stair.start_length) * factor
        if width == _round_half_away(calc_width) and length == _round_half_away(calc_length):
            return True
    return False


@dataclass
class Layout:
    """The fixed features of a maze: walls, stairs, poles and the flag cell."""

    walls: list[Wall] = field(default_factory=list)
    stairs: list[Stair] = field(default_factory=list)
    poles: list[Pole] = field(default_factory=list)
    flag: Position = (0, 0, 0)

    def is_blocked_by_wall(self, floor: int, width: int, length: int) -> bool:
        """True if a wall covers the cell."""
        return _blocked_by_wall(self.walls, floor, width, length)

    def is_blocked_by_stair(self, floor: int, width: int, length: int) -> bool:
        """True if a stair passes through the cell on a floor between its two ends."""
        return _blocked_by_stair(self.stairs, floor, width, length)

    def is_stair_cell(self, floor: int, width: int, length: int) -> bool:
        """True if a stair starts or ends on the cell."""
        cell = (floor, width, length)
        return any(cell in (stair.start, stair.end) for stair in self.stairs)

    def is_pole_cell(self, floor: int, width: int, length: int) -> bool:
        """True if a pole starts on the cell."""
        cell = (floor, width, length)
        return any(pole.start == cell for pole in self.poles)

    def stairs_from_cell(self, floor: int, width: int, length: int) -> list[Stair]:
        """Stairs that can be taken from the cell, in layout order."""
        cell = (floor, width, length)
        found: list[Stair] = []
        for stair in self.stairs:
            if stair.start == cell:
                found.append(stair)
            if stair.direction is StairDirection.BI and stair.end == cell:
                found.append(stair)
        return found

    def poles_from_cell(self, floor: int, width: int, length: int) -> list[Pole]:
        """Poles that start on the cell, in layout order."""
        cell = (floor, width, length)
        return [pole for pole in self.poles if pole.start == cell]

    def describe(self) -> str:
        """Human-readable listing of walls, stairs, poles and the flag."""
        parts = ["\nWalls:\n"]
        parts.extend(
            f"\tFloor {w.floor}: from [{w.start_width}, {w.start_length}] "
            f"to [{w.end_width}, {w.end_length}]\n"
            for w in self.walls
        )
        parts.append("\nStairs:\n")
        parts.extend(
            f"\t[{s.start_floor}, {s.start_width}, {s.start_length}] to "
            f"[{s.end_floor}, {s.end_width}, {s.end_length}], direction: {s.direction}\n"
            for s in self.stairs
        )
        parts.append("\nPoles:\n")
        parts.extend(
            f"\t[{p.start_floor}, {p.width}, {p.length}] to "
            f"[{p.end_floor}, {p.width}, {p.length}]\n"
            for p in self.poles
        )
        floor, width, length = self.flag
        parts.append(f"\nFlag is at [{floor}, {width}, {length}]\n\n")
        return "".join(parts)


def parse_walls(lines: Iterable[str]) -> list[Wall]:
    """Build walls from ``[floor, sw, sl, ew, el]`` lines, skipping invalid ones."""
    walls: list[Wall] = []
    for line in lines:
        values = _scan(line, 5)
        if len(values) != 5:
            logger.warning(
                "Error : Skipping error line walls.txt (got %d values but expect 5)", len(values)
            )
            continue
        floor, start_width, start_length, end_width, end_length = values
        if not (
            is_in_playable_area(floor, start_width, start_length)
            and is_in_playable_area(floor, end_width, end_length)
        ):
            logger.warning("Error : Skipping error line walls.txt (walls out of playable area)")
            continue
        walls.append(Wall(floor, start_width, start_length, end_width, end_length))
    return walls


def parse_stairs(lines: Iterable[str], walls: Iterable[Wall]) -> list[Stair]:
    """Build bidirectional stairs from six-value lines, skipping invalid ones."""
    walls = list(walls)
    stairs: list[Stair] = []
    for line in lines:
        values = _scan(line, 6)
        if len(values) != 6:
            logger.warning(
                "Error : Skipping error line stairs.txt (got %d values but expect 6)", len(values)
            )
            continue
        stair = Stair(*values, direction=StairDirection.BI)
        if stair.start_floor == stair.end_floor:
            logger.warning("Error : Skipping error line stairs.txt (stairs on the same floor)")
            continue
        if stair.start_floor > stair.end_floor:
            logger.warning(
                "Error : Skipping error line stairs.txt (start floor greater than end floor)"
            )
            continue
        if not (is_in_playable_area(*stair.start) and is_in_playable_area(*stair.end)):
            logger.warning("Error : Skipping error line stairs.txt (stairs out of playable area)")
            continue
        if _blocked_by_wall(walls, *stair.start) or _blocked_by_wall(walls, *stair.end):
            logger.warning("Error : Skipping error line stairs.txt (stairs blocked by wall)")
            continue
        shared = sum(other.start == stair.start for other in stairs) + sum(
            other.end == stair.end for other in stairs
        )
        if shared >= MAX_STAIRS_FROM_SAME_CELL:
            logger.warning(
                "Error : Skipping error line stairs.txt (more than %d stairs in the same cell)",
                MAX_STAIRS_FROM_SAME_CELL,
            )
            continue
        stairs.append(stair)
    return stairs


def parse_poles(
    lines: Iterable[str], walls: Iterable[Wall], stairs: Iterable[Stair]
) -> list[Pole]:
    """Build poles from ``[start_floor, end_floor, width, length]`` lines, skipping invalid ones."""
    walls = list(walls)
    stairs = list(stairs)
    poles: list[Pole] = []
    for line in lines:
        values = _scan(line, 4)
        if len(values) != 4:
            logger.warning(
                "Error : Skipping error line poles.txt (got %d values but expect 4)", len(values)
            )
            continue
        pole = Pole(*values)
        if not is_in_playable_area(*pole.start):
            logger.warning("Error : Skipping error line poles.txt (poles out of playable area)")
            continue
        if (
            _blocked_by_wall(walls, *pole.start)
            or _blocked_by_wall(walls, *pole.end)
            or _blocked_by_stair(stairs, *pole.start)
            or _blocked_by_stair(stairs, *pole.end)
        ):
            logger.warning("Error : Skipping error line poles.txt (poles blocked by wall)")
            continue
        if sum(other.start == pole.start for other in poles) >= MAX_POLES_FROM_SAME_CELL:
            logger.warning(
                "Error : Skipping error line poles.txt (more than %d pole in the same cell)",
                MAX_POLES_FROM_SAME_CELL,
            )
            continue
        poles.append(pole)
    return poles


def parse_flag(text: str, walls: Iterable[Wall], stairs: Iterable[Stair]) -> Position:
    """Read the flag cell from ``[floor, width, length]`` text."""
    values = _scan(text, 3)
    if len(values) != 3:
        raise LayoutError("Error : No matched cell found for flag in flag.txt")
    floor, width, length = values
    if (
        not is_in_playable_area(floor, width, length)
        or _blocked_by_stair(stairs, floor, width, length)
        or _blocked_by_wall(walls, floor, width, length)
    ):
        raise LayoutError("Error : Flag out of playable area in flag.txt")
    return (floor, width, length)


def _read_lines(path: Path) -> list[str]:
    try:
        return path.read_text().splitlines()
    except OSError:
        logger.warning("Error opening %s", path.name)
        return []


def load_layout(directory: str | Path) -> Layout:
    """Load walls.txt, stairs.txt, poles.txt and flag.txt from a directory."""
    base = Path(directory)
    walls = parse_walls(_read_lines(base / "walls.txt"))
    stairs = parse_stairs(_read_lines(base / "stairs.txt"), walls)
    poles = parse_poles(_read_lines(base / "poles.txt"), walls, stairs)
    try:
        flag_text = (base / "flag.txt").read_text()
    except OSError as exc:
        raise LayoutError("Error opening flag.txt") from exc
    flag = parse_flag(flag_text, walls, stairs)
    return Layout(walls=walls, stairs=stairs, poles=poles, flag=flag)