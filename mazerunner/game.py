"""Turn-by-turn rules of the maze game: dice, movement, Bawana effects and captures."""

from __future__ import annotations

import random
import sys
from collections.abc import Iterable, Sequence
from enum import IntEnum
from typing import TextIO

from .board import Board
from .geometry import (
    entry_position,
    is_in_bawana_area,
    is_in_playable_area,
    is_in_starting_area,
)
from .loops import non_looping
from .model import (
    BAWANA_DISORIENTED_BONUS,
    BAWANA_DISORIENTED_ROUNDS,
    BAWANA_ENTRANCE,
    BAWANA_FOOD_POISONING_BONUS,
    BAWANA_HAPPY_BONUS,
    BAWANA_TRIGGERED_BONUS,
    BAWANA_TRIGGERED_MULTIPLIER,
    INITIAL_MOVEMENT_POINTS,
    MAX_POLES_FROM_SAME_CELL,
    MAX_STAIRS_FROM_SAME_CELL,
    ROUNDS_TO_CHANGE_STAIR_DIRECTION,
    BawanaState,
    Block,
    ConsumeType,
    Direction,
    Player,
    Pole,
    Position,
    Stair,
    StairDirection,
    direction_from_dice,
)

_STEPS: dict[Direction, tuple[int, int]] = {
    Direction.NORTH: (-1, 0),
    Direction.SOUTH: (1, 0),
    Direction.EAST: (0, 1),
    Direction.WEST: (0, -1),
}


class MoveResult(IntEnum):
    """Outcome of a player's move."""

    BLOCKED = 0
    MOVED = 1
    WON = 2


def _fmt(position: Position) -> str:
    floor, width, length = position
    return f"[{floor}, {width}, {length}]"


def _consume(cost: int, remaining: int, block: Block) -> tuple[int, int]:
    if block.type is ConsumeType.COST:
        return cost + block.value, remaining - block.value
    if block.type is ConsumeType.BONUS:
        return cost, remaining + block.value
    if block.type is ConsumeType.MULTIPLIER:
        return cost * block.value, remaining
    return cost, remaining


class Game:
    """A running game on a board with its players, dice and event output."""

    def __init__(
        self,
        board: Board,
        players: Iterable[Player],
        rng: random.Random | None = None,
        output: TextIO | None = None,
    ) -> None:
        self.board = board
        self.layout = board.layout
        self.players: list[Player] = list(players)
        self.rng = rng if rng is not None else board.rng
        self.output = output if output is not None else sys.stdout
        self.rounds = 0
        self.movement_dice = -1
        self.current: Player | None = None

    # -- output -------------------------------------------------------------

    def _write(self, text: str) -> None:
        self.output.write(text)

    def _say(self, message: str) -> None:
        self._write(f"\t-> {message}\n")

    def _log_won(self, player: Player) -> None:
        self._say(f"{player.id} has reached the flag at {_fmt(self.layout.flag)} and wins the game!")

    # -- dice ---------------------------------------------------------------

    def roll_dice(self) -> int:
        """Roll the six-sided movement dice."""
        return self.rng.randrange(6) + 1

    def roll_direction_dice(self, previous: Direction) -> Direction:
        """Roll the direction dice; faces 1 and 6 keep the previous direction."""
        face = self.roll_dice()
        if face in (1, 6):
            return previous
        return direction_from_dice(face)

    # -- moves --------------------------------------------------------------

    def move_piece(self, player: Player) -> MoveResult:
        """Move a player according to the current movement dice."""
        self.current = player
        rolled_direction = (
            player.rounds % 4 == 0
            and not is_in_starting_area(*player.block.position())
            and player.effect.state is not BawanaState.DISORIENTED
        )
        if rolled_direction:
            player.direction = self.roll_direction_dice(player.direction)

        destination, cost, moved = self._destination(player)
        if destination is None:
            return MoveResult.BLOCKED
        player.block = destination
        if destination.position() == self.layout.flag:
            self._log_won(player)
            return MoveResult.WON

        dice = self.movement_dice
        where = _fmt(destination.position())
        if rolled_direction:
            d = player.direction
            self._say(
                f"{player.id} rolls {dice} on the movement dice and {d} on the direction dice, "
                f"changes direction to {d} and moves {d} by {dice} cells and is now at {where}."
            )
        else:
            self._say(
                f"{player.id} rolls {dice} on the movement dice and moves {player.direction} "
                f"by {dice} cells and is now at {where}."
            )
        self._say(
            f"{player.id} moved {moved} that cost {cost} movement points and is left with "
            f"{player.points} movement points and is moving in the {player.direction}."
        )
        return MoveResult.MOVED

    def _destination(self, player: Player) -> tuple[Block | None, int, int]:
        """Work out where the player ends up; returns (block, cost, cells moved)."""
        f, w, l = player.block.position()
        dice = self.movement_dice

        if is_in_starting_area(f, w, l):
            if dice != 6:
                self._say(
                    f"{player.id} is at the starting area and rolls {dice} on the movement "
                    "dice cannot enter the maze."
                )
                return None, 0, 0
            entry = self.board.block(*entry_position(player.id))
            self._say(
                f"{player.id} is at the starting area and rolls 6 on the movement dice and is "
                f"placed on {_fmt(entry.position())} of the maze."
            )
            player.direction = Direction.NORTH
            return entry, 0, 0

        if (f, w, l) == entry_position(player.id) and player.points == INITIAL_MOVEMENT_POINTS:
            player.direction = Direction.NORTH

        cost = 0
        remaining = player.points
        moved = 0
        block: Block | None = None

        if (
            player.direction is not Direction.NORTH
            and player.effect.state is not BawanaState.NONE
            and (f, w, l) == BAWANA_ENTRANCE
        ):
            player.direction = Direction.NORTH

        steps = dice
        if player.effect.state is BawanaState.TRIGGERED and player.effect.effect_rounds == -1:
            steps *= BAWANA_TRIGGERED_MULTIPLIER
            self._say(
                f"{player.id} is triggered and rolls and {dice} on the movement dice and move in "
                f"the {player.direction} and moves {2 * dice} cells and is placed at the "
                f"{_fmt(player.block.position())}."
            )

        for step in range(1, steps + 1):
            moved += 1
            effect = player.effect
            if effect.state is BawanaState.FOOD_POISONING:
                if effect.effect_rounds > 1:
                    effect.effect_rounds -= 1
                    self._say(f"{player.id} is still food poisoned and misses the turn.")
                    return None, 0, moved
                if effect.effect_rounds == 1:
                    return self._direct_to_bawana(player), 0, moved
            elif effect.state is BawanaState.DISORIENTED:
                fresh = (
                    (f, w, l) == BAWANA_ENTRANCE
                    and effect.effect_rounds == BAWANA_DISORIENTED_ROUNDS
                )
                if fresh:
                    pass
                elif effect.effect_rounds >= 1:
                    player.direction = Direction(self.rng.randrange(4) + 1)
                    effect.effect_rounds -= 1
                    self._say(
                        f"{player.id} rolls and {dice} on the movement dice and is disoriented "
                        f"and move in the {player.direction} and moves {dice} cells and is "
                        f"placed at the {_fmt(player.block.position())}."
                    )
                elif effect.effect_rounds == 0:
                    player.direction = Direction.NORTH
                    self._say(f"{player.id} has recovered from disorientation.")
                    player.clear_effect()

            delta = _STEPS.get(player.direction)
            if delta is None:
                self._write("Invalid direction!\n")
                return None, 0, moved
            w += delta[0]
            l += delta[1]

            if not self.board.is_open(f, w, l):
                player.points -= 2
                if player.points <= 0:
                    return self._direct_to_bawana(player), 0, moved
                self._say(
                    f"{player.id} rolls {dice} on the movement dice and cannot move in the "
                    f"{player.direction}. Player remains at {_fmt(player.block.position())}."
                )
                return None, 0, moved

            cell = self.board.block(f, w, l)
            cost, remaining = _consume(cost, remaining, cell)

            if cell.position() == self.layout.flag:
                self._log_won(player)
                return cell, 0, moved

            if player.points <= 0:
                return self._direct_to_bawana(player), 0, moved

            block, to_bawana, to_start = self._take_stair_or_pole(player, f, w, l)
            if to_bawana or to_start:
                if step == steps:
                    player.direction = Direction.NORTH
                    return cell, 0, moved
                return None, 0, moved

            if block.position() == (f, w, l):
                continue

            f, w, l = block.position()
            if step == steps and is_in_playable_area(f, w, l):
                self.check_for_captures(block)
                break
            if (f, w, l) == self.layout.flag:
                return self.board.block(f, w, l), 0, moved
            block = self.board.block(f, w, l)

        player.points = remaining
        if player.points <= 0:
            block = self._direct_to_bawana(player)
        return block, cost, moved

    # -- Bawana -------------------------------------------------------------

    def _direct_to_bawana(self, player: Player) -> Block:
        self._go_to_bawana(player)
        entrance = self.board.block(*BAWANA_ENTRANCE)
        self.check_for_captures(entrance)
        return entrance

    def _go_to_bawana(self, player: Player) -> None:
        new_effect = self.board.random_bawana_cell()
        previous = player.effect
        name = player.id
        if previous.state is BawanaState.FOOD_POISONING and previous.effect_rounds == 1:
            self._say(
                f"{name} is now fit to proceed from the food poisoning episode and now placed "
                f"on a {new_effect.state} and the effects take place."
            )
        elif player.points <= 0:
            self._say(
                f"{name} movement points are depleted and requires replenishment. "
                "Transporting to Bawana."
            )
            self._say(f"{name} is place on a {new_effect.state} and effects take place.")
        else:
            self._say(
                f"{name} is delivering to Bawana due to landing on a stair or pole cell or a "
                f"loop. {name} is placed on a {new_effect.state} and effects take place."
            )

        player.effect = new_effect
        player.points = 0
        state = new_effect.state
        if state is BawanaState.FOOD_POISONING:
            player.points = BAWANA_FOOD_POISONING_BONUS
            self._say(
                f"{name} eats from Bawana and have a bad case of food poisoning. "
                "Will need three rounds to recover."
            )
        elif state is BawanaState.DISORIENTED:
            player.points = BAWANA_DISORIENTED_BONUS
            self._say(
                f"{name} eats from Bawana and is disoriented and is placed at the entrance of "
                "Bawana with 50 movement points."
            )
        elif state is BawanaState.TRIGGERED:
            player.points = BAWANA_TRIGGERED_BONUS
            self._say(
                f"{name} eats from Bawana and is triggered due to bad quality of food. {name} "
                "is placed at the entrance of Bawana with 50 movement points."
            )
        elif state is BawanaState.HAPPY:
            player.points = BAWANA_HAPPY_BONUS
            self._say(
                f"{name} eats from Bawana and is happy. {name} is placed at the entrance of "
                "Bawana with 200 movement points."
            )
            player.clear_effect()
        elif state is BawanaState.NORMAL:
            player.points = self.rng.randrange(89) + 11
            self._say(
                f"{name} eats from Bawana and earns {player.points} movement points and is "
                "placed at the entrance of Bawana."
            )
            player.clear_effect()

    # -- stairs and poles ---------------------------------------------------

    def _send_to_start(self, player: Player) -> Block:
        block = self.board.block(*entry_position(player.id))
        self.check_for_captures(block)
        return block

    def _redirect(self, player: Player, target: Block) -> tuple[Block, bool, bool]:
        if is_in_bawana_area(*target.position()):
            return self._direct_to_bawana(player), True, False
        if is_in_starting_area(*target.position()):
            return self._send_to_start(player), False, True
        return target, False, False

    def _log_stair(self, player: Player, target: Block) -> None:
        self._say(
            f"{player.id} lands on {_fmt(player.block.position())} which is a stair cell. "
            f"{player.id} takes the stairs and now placed at {_fmt(target.position())} "
            f"in floor {target.floor}."
        )

    def _log_pole(self, player: Player, target: Block) -> None:
        self._say(
            f"{player.id} lands on {_fmt(player.block.position())} which is a pole cell. "
            f"{player.id} slides down and now placed at {_fmt(target.position())} "
            f"in floor {target.floor}."
        )

    def _take_stair_or_pole(
        self, player: Player, floor: int, width: int, length: int
    ) -> tuple[Block, bool, bool]:
        """Follow a stair or pole from the landed cell; returns (block, to_bawana, to_start)."""
        cell = (floor, width, length)
        stairs = self.layout.stairs_from_cell(*cell)
        poles = self.layout.poles_from_cell(*cell)

        if not stairs and not poles:
            return self.board.block(*cell), False, False

        if len(poles) == 1 and not stairs:
            target = self.board.block(*poles[0].end)
            result = self._redirect(player, target)
            if result[1] or result[2]:
                return result
            self._log_pole(player, target)
            return target, False, False

        if not poles and len(stairs) == 1:
            stair = stairs[0]
            if stair.start == cell:
                target = self.board.block(*stair.end)
            elif stair.end == cell and stair.direction is StairDirection.BI:
                target = self.board.block(*stair.start)
            else:
                return self.board.block(*cell), False, False
            self._log_stair(player, target)
            return self._redirect(player, target)

        if len(poles) > MAX_POLES_FROM_SAME_CELL or len(stairs) > MAX_STAIRS_FROM_SAME_CELL:
            raise RuntimeError(
                "Error: More than maximum poles or stairs from the same cell in "
                "move_from_stair_or_pole"
            )

        kept_stairs, kept_poles = non_looping(stairs, poles)
        if not kept_stairs and not kept_poles:
            return self._direct_to_bawana(player), True, False

        target = self._closest_destination(player, kept_stairs, kept_poles)
        if target is None:
            return self._send_to_start(player), False, True
        return self._redirect(player, target)

    def _closest_destination(
        self, player: Player, stairs: Sequence[Stair], poles: Sequence[Pole]
    ) -> Block | None:
        flag_floor, flag_width, flag_length = self.layout.flag

        def distance(position: Position) -> int:
            floor, width, length = position
            return abs(floor - flag_floor) + abs(width - flag_width) + abs(length - flag_length)

        options: list[tuple[int, Stair | Pole]] = [(distance(s.end), s) for s in stairs]
        options += [(distance(p.end), p) for p in poles]
        if not options:
            return None
        best = min(d for d, _ in options)
        candidates = [item for d, item in options if d == best]
        chosen = candidates[self.rng.randrange(len(candidates))]

        here = player.block.position()
        if isinstance(chosen, Stair):
            if chosen.direction is StairDirection.BI and here == chosen.end:
                target = self.board.block(*chosen.start)
            elif here == chosen.start:
                target = self.board.block(*chosen.end)
            else:
                return None
            self._log_stair(player, target)
            return target
        target = self.board.block(*chosen.end)
        self._log_pole(player, target)
        return target

    # -- captures and stairs ------------------------------------------------

    def check_for_captures(self, block: Block) -> None:
        """Send every other player standing on ``block`` back to its entry cell."""
        mover = self.current
        if mover is None:
            raise RuntimeError("no player is moving")
        target = block.position()
        for other in self.players:
            if other.id == mover.id:
                continue
            position = other.block.position()
            if position == target and is_in_playable_area(*position):
                self._say(
                    f"{mover.id} has captured {other.id} at {_fmt(position)}. "
                    f"{other.id} is sent to the starting area."
                )
                other.block = self.board.block(*entry_position(other.id))
                other.points = INITIAL_MOVEMENT_POINTS
                other.clear_effect()

    def change_stair_direction(self) -> None:
        """Turn every stair up-only, down-only or both ways at random."""
        direction = StairDirection(self.rng.randrange(3))
        for stair in self.layout.stairs:
            if direction is StairDirection.UNI_DOWN and stair.start_floor < stair.end_floor:
                stair.swap_ends()
            elif direction is StairDirection.UNI_UP and stair.start_floor > stair.end_floor:
                stair.swap_ends()
            stair.direction = direction

    # -- rounds -------------------------------------------------------------

    def status(self, player: Player) -> str:
        """Report of a player's state before its move."""
        return (
            "\tStatus before move : \n"
            f"\t\tDice Value: {self.movement_dice}\n"
            f"\t\tMovement Points: {player.points}\n"
            f"\t\tCurrent Position: {_fmt(player.block.position())}\n"
            f"\t\tDirection: {player.direction}\n"
            f"\t\tBawana State: {player.effect.state}\n"
            f"\t\tPlayer Rounds: {player.rounds}\n\n"
        )

    def play_round(self) -> Player | None:
        """Give every player one turn; return the winner, if someone wins."""
        self._write(f"================  Round - {self.rounds + 1} ================\n\n")
        if (
            self.rounds > ROUNDS_TO_CHANGE_STAIR_DIRECTION
            and self.rounds % ROUNDS_TO_CHANGE_STAIR_DIRECTION == 0
        ):
            self._write("Changing stairs direction...\n\n")
            self.change_stair_direction()

        for player in self.players:
            self._write(f"Player {player.id}'s turn :\n")
            self.movement_dice = self.roll_dice()
            self._write(self.status(player))
            if self.move_piece(player) is MoveResult.WON:
                self._write("\n")
                return player
            self._write("\n")
            player.rounds += 1

        self.rounds += 1
        self._write("\n")
        return None

    def run(self) -> Player:
        """Play rounds until a player reaches the flag and return that player."""
        while True:
            winner = self.play_round()
            if winner is not None:
                return winner