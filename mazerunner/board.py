"""The grid of maze cells with their consumables, and the Bawana area."""

from __future__ import annotations

import random
from collections.abc import Iterator, MutableSequence
from dataclasses import replace
from typing import TypeVar

from .geometry import is_in_playable_area
from .layout import Layout
from .model import (
    BAWANA_DISORIENTED_ROUNDS,
    BAWANA_FOOD_POISONING_ROUNDS,
    BAWANA_SQUARES,
    FLOORS,
    LENGTH,
    WIDTH,
    BawanaCell,
    BawanaState,
    Block,
    ConsumeType,
)

T = TypeVar("T")

# How many Bawana cells carry each state, in the order they are handed out.
_BAWANA_STATES: tuple[tuple[BawanaState, int, int], ...] = (
    (BawanaState.FOOD_POISONING, 2, BAWANA_FOOD_POISONING_ROUNDS),
    (BawanaState.DISORIENTED, 2, BAWANA_DISORIENTED_ROUNDS),
    (BawanaState.TRIGGERED, 2, -1),
    (BawanaState.HAPPY, 2, -1),
    (BawanaState.NORMAL, 4, -1),
)


def shuffle(items: MutableSequence[T], rng: random.Random) -> None:
    """Shuffle ``items`` in place with a Fisher-Yates pass driven by ``rng``."""
    for i in range(len(items) - 1, 0, -1):
        j = rng.randrange(i + 1)
        items[i], items[j] = items[j], items[i]


def _in_bounds(floor: int, width: int, length: int) -> bool:
    return 0 <= floor < FLOORS and 0 <= width < WIDTH and 0 <= length < LENGTH


class Board:
    """Every cell of the maze for a given layout, with consumables and Bawana cells assigned."""

    def __init__(self, layout: Layout, rng: random.Random | None = None) -> None:
        self.layout = layout
        self.rng = rng if rng is not None else random.Random()
        self._grid: list[list[list[Block]]] = [
            [[self._make_block(f, w, l) for l in range(LENGTH)] for w in range(WIDTH)]
            for f in range(FLOORS)
        ]
        self._assign_consumables()
        self.bawana: list[BawanaCell] = self._make_bawana()

    def _make_block(self, floor: int, width: int, length: int) -> Block:
        if (
            self.layout.is_blocked_by_wall(floor, width, length)
            or self.layout.is_blocked_by_stair(floor, width, length)
            or not is_in_playable_area(floor, width, length)
        ):
            return Block(floor, width, length, ConsumeType.NONE, -1)
        return Block(floor, width, length, ConsumeType.ZERO, 0)

    def _assign_consumables(self) -> None:
        candidates = [
            block
            for block in self.blocks()
            if block.is_open()
            and not self.layout.is_pole_cell(*block.position())
            and not self.layout.is_stair_cell(*block.position())
        ]
        shuffle(candidates, self.rng)
        total = len(candidates)
        cells = iter(candidates)

        # The first quarter keeps its zero cost.
        for _ in range(total * 25 // 100):
            next(cells)
        groups = (
            (total * 35 // 100, ConsumeType.COST, lambda: self.rng.randrange(4) + 1),
            (total * 25 // 100, ConsumeType.BONUS, lambda: self.rng.randrange(2) + 1),
            (total * 10 // 100, ConsumeType.BONUS, lambda: self.rng.randrange(3) + 3),
            (total * 5 // 100, ConsumeType.MULTIPLIER, lambda: self.rng.randrange(2) + 2),
        )
        for count, kind, draw in groups:
            for _ in range(count):
                block = next(cells)
                block.type = kind
                block.value = draw()

    def _make_bawana(self) -> list[BawanaCell]:
        cells = [
            BawanaCell(BawanaState.NONE, w, l, -1)
            for w in range(7, WIDTH)
            for l in range(21, LENGTH)
        ]
        order = list(cells)
        shuffle(order, self.rng)
        handed = iter(order)
        for state, count, rounds in _BAWANA_STATES:
            for _ in range(count):
                cell = next(handed)
                cell.state = state
                cell.effect_rounds = rounds
        return cells

    def block(self, floor: int, width: int, length: int) -> Block:
        """The cell at the given coordinates; IndexError if they lie outside the maze."""
        if not _in_bounds(floor, width, length):
            raise IndexError(f"cell [{floor}, {width}, {length}] is outside the maze")
        return self._grid[floor][width][length]

    def is_open(self, floor: int, width: int, length: int) -> bool:
        """True if the cell is in the playable area and a player may stand on it."""
        if not is_in_playable_area(floor, width, length):
            return False
        return self._grid[floor][width][length].is_open()

    def blocks(self) -> Iterator[Block]:
        """Every cell, floor by floor, row by row."""
        for floor in self._grid:
            for row in floor:
                yield from row

    def random_bawana_cell(self) -> BawanaCell:
        """A copy of a Bawana cell picked at random."""
        return replace(self.bawana[self.rng.randrange(BAWANA_SQUARES)])