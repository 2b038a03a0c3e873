"""Fixed shape of the maze: playable cells, Bawana, the starting area and player positions."""

from __future__ import annotations

from .model import FLOORS, LENGTH, WIDTH, PlayerID, Position

_STARTING_POSITIONS: dict[PlayerID, Position] = {
    PlayerID.A: (0, 6, 12),
    PlayerID.B: (0, 9, 8),
    PlayerID.C: (0, 9, 16),
}

_ENTRY_POSITIONS: dict[PlayerID, Position] = {
    PlayerID.A: (0, 5, 12),
    PlayerID.B: (0, 9, 7),
    PlayerID.C: (0, 9, 17),
}


def is_in_playable_area(floor: int, width: int, length: int) -> bool:
    """True if the coordinates lie inside the maze and are not a dead zone of their floor."""
    if not (0 <= floor < FLOORS and 0 <= width < WIDTH and 0 <= length < LENGTH):
        return False
    if floor == 0:
        if (width == 6 and length >= 20) or (length == 20 and width >= 6):
            return False
    elif floor == 1:
        if 0 <= width <= 5 and 8 <= length <= 16:
            return False
    elif floor == 2:
        if not 8 <= length <= 16:
            return False
    return True


def is_in_bawana_area(floor: int, width: int, length: int) -> bool:
    """True if the cell belongs to the Bawana enclosure."""
    return floor == 0 and 6 < width < WIDTH and 20 < length < LENGTH


def is_in_starting_area(floor: int, width: int, length: int) -> bool:
    """True if the cell belongs to the area where players wait before entering."""
    return floor == 0 and 6 <= width < WIDTH and 8 <= length <= 16


def starting_position(player_id: PlayerID) -> Position:
    """Cell in the starting area where the player begins the game."""
    return _STARTING_POSITIONS[player_id]


def entry_position(player_id: PlayerID) -> Position:
    """Maze cell a player is placed on when entering the maze or after capture."""
    return _ENTRY_POSITIONS[player_id]