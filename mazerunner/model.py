"""Core data types shared by the maze game: directions, cells, stairs, poles and players."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum

FLOORS = 3
WIDTH = 10
LENGTH = 25
BAWANA_SQUARES = (WIDTH - 7) * (LENGTH - 21)

BAWANA_FOOD_POISONING_ROUNDS = 3
BAWANA_FOOD_POISONING_BONUS = 0
BAWANA_DISORIENTED_ROUNDS = 4
BAWANA_DISORIENTED_BONUS = 50
BAWANA_TRIGGERED_BONUS = 50
BAWANA_TRIGGERED_MULTIPLIER = 2
BAWANA_HAPPY_BONUS = 200

BAWANA_ENTRANCE = (0, 9, 19)

INITIAL_MOVEMENT_POINTS = 100

MAX_STAIRS_FROM_SAME_CELL = 2
MAX_POLES_FROM_SAME_CELL = 1

PLAYER_COUNT = 3

ROUNDS_TO_CHANGE_STAIR_DIRECTION = 5

Position = tuple[int, int, int]


class Direction(IntEnum):
    """Heading of a player; NA means no direction."""

    NA = 0
    NORTH = 1
    EAST = 2
    SOUTH = 3
    WEST = 4

    def __str__(self) -> str:
        return "DIR_NA" if self is Direction.NA else self.name


class BawanaState(IntEnum):
    """Effect a Bawana cell puts on a player."""

    NONE = 0
    FOOD_POISONING = 1
    DISORIENTED = 2
    TRIGGERED = 3
    HAPPY = 4
    NORMAL = 5

    def __str__(self) -> str:
        return self.name


class ConsumeType(IntEnum):
    """What stepping onto a cell does to a player's movement points."""

    NONE = 0
    ZERO = 1
    COST = 2
    BONUS = 3
    MULTIPLIER = 4

    def __str__(self) -> str:
        return self.name


class StairDirection(IntEnum):
    """Which ways a stair may be taken."""

    UNI_UP = 0
    UNI_DOWN = 1
    BI = 2

    def __str__(self) -> str:
        return self.name


class PlayerID(Enum):
    """Identity of one of the three players."""

    A = 0
    B = 1
    C = 2

    def __str__(self) -> str:
        return self.name


_DICE_DIRECTIONS = {
    2: Direction.NORTH,
    3: Direction.EAST,
    4: Direction.SOUTH,
    5: Direction.WEST,
}


def direction_from_dice(value: int) -> Direction:
    """Map a direction-dice face to a direction; faces 1 and 6 give NA."""
    return _DICE_DIRECTIONS.get(value, Direction.NA)


@dataclass
class Block:
    """A single maze cell and the consumable it carries."""

    floor: int
    width: int
    length: int
    type: ConsumeType = ConsumeType.NONE
    value: int = -1

    def position(self) -> Position:
        """Return the cell's (floor, width, length) coordinates."""
        return (self.floor, self.width, self.length)

    def is_open(self) -> bool:
        """True if a player may stand on this cell."""
        return self.type is not ConsumeType.NONE and self.value != -1


@dataclass
class Stair:
    """A stair linking two cells on different floors."""

    start_floor: int
    start_width: int
    start_length: int
    end_floor: int
    end_width: int
    end_length: int
    direction: StairDirection = StairDirection.BI

    @property
    def start(self) -> Position:
        return (self.start_floor, self.start_width, self.start_length)

    @property
    def end(self) -> Position:
        return (self.end_floor, self.end_width, self.end_length)

    def swap_ends(self) -> None:
        """Exchange the start and end cells of the stair."""
        (
            self.start_floor,
            self.start_width,
            self.start_length,
            self.end_floor,
            self.end_width,
            self.end_length,
        ) = (
            self.end_floor,
            self.end_width,
            self.end_length,
            self.start_floor,
            self.start_width,
            self.start_length,
        )


@dataclass(frozen=True)
class Pole:
    """A pole sliding from one floor to another at a fixed cell."""

    start_floor: int
    end_floor: int
    width: int
    length: int

    @property
    def start(self) -> Position:
        return (self.start_floor, self.width, self.length)

    @property
    def end(self) -> Position:
        return (self.end_floor, self.width, self.length)


@dataclass(frozen=True)
class Wall:
    """A rectangle of blocked cells on one floor."""

    floor: int
    start_width: int
    start_length: int
    end_width: int
    end_length: int


@dataclass
class BawanaCell:
    """A cell of the Bawana area, or a player's active Bawana effect."""

    state: BawanaState = BawanaState.NONE
    width: int = -1
    length: int = -1
    effect_rounds: int = -1


@dataclass
class Player:
    """A player's piece and everything that changes as it moves."""

    id: PlayerID
    block: Block
    direction: Direction
    points: int = INITIAL_MOVEMENT_POINTS
    effect: BawanaCell = field(default_factory=BawanaCell)
    rounds: int = 0

    def clear_effect(self) -> None:
        """Drop any Bawana effect the player carries."""
        self.effect = BawanaCell()