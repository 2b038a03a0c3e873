import io
import random

import pytest

from mazerunner.board import Board
from mazerunner.game import Game, MoveResult
from mazerunner.geometry import entry_position, starting_position
from mazerunner.layout import Layout
from mazerunner.model import (
    BAWANA_ENTRANCE,
    BAWANA_HAPPY_BONUS,
    INITIAL_MOVEMENT_POINTS,
    BawanaCell,
    BawanaState,
    ConsumeType,
    Direction,
    Player,
    PlayerID,
    Pole,
    Stair,
    StairDirection,
    Wall,
)


class ScriptedRandom(random.Random):
    def __init__(self, *values):
        super().__init__(0)
        self.values = list(values)

    def feed(self, *values):
        self.values.extend(values)

    def randrange(self, *args, **kwargs):
        return self.values.pop(0)


def make_game(layout=None, *values):
    layout = layout if layout is not None else Layout(flag=(2, 0, 12))
    board = Board(layout, random.Random(7))
    for block in board.blocks():
        if block.is_open():
            block.type = ConsumeType.ZERO
            block.value = 0
    script = ScriptedRandom(*values)
    board.rng = script
    players = [
        Player(pid, board.block(*starting_position(pid)), Direction.NORTH) for pid in PlayerID
    ]
    out = io.StringIO()
    game = Game(board, players, rng=script, output=out)
    return game, out


def place(game, player, position, direction=Direction.NORTH):
    player.block = game.board.block(*position)
    player.direction = direction
    player.rounds = 1


def bawana_index(game, state):
    return next(i for i, cell in enumerate(game.board.bawana) if cell.state is state)


def test_cannot_leave_start_without_six():
    game, out = make_game()
    a = game.players[0]
    game.movement_dice = 3
    assert game.move_piece(a) is MoveResult.BLOCKED
    assert a.block.position() == starting_position(PlayerID.A)
    assert "cannot enter the maze" in out.getvalue()


def test_six_enters_maze():
    game, _ = make_game()
    a = game.players[0]
    a.direction = Direction.EAST
    game.movement_dice = 6
    assert game.move_piece(a) is MoveResult.MOVED
    assert a.block.position() == entry_position(PlayerID.A)
    assert a.direction is Direction.NORTH


def test_moves_north_by_dice():
    game, out = make_game()
    a = game.players[0]
    place(game, a, (0, 8, 3))
    game.movement_dice = 3
    assert game.move_piece(a) is MoveResult.MOVED
    assert a.block.position() == (0, 8 - 3, 3)
    assert a.points == INITIAL_MOVEMENT_POINTS
    assert "moves NORTH by 3 cells" in out.getvalue()


def test_moves_east_by_dice():
    game, _ = make_game()
    a = game.players[0]
    place(game, a, (0, 2, 0), Direction.EAST)
    game.movement_dice = 4
    game.move_piece(a)
    assert a.block.position() == (0, 2, 0 + 4)


def test_edge_costs_two_points():
    game, out = make_game()
    a = game.players[0]
    place(game, a, (0, 0, 3))
    game.movement_dice = 2
    assert game.move_piece(a) is MoveResult.BLOCKED
    assert a.block.position() == (0, 0, 3)
    assert a.points == INITIAL_MOVEMENT_POINTS - 2
    assert "cannot move in the NORTH" in out.getvalue()


def test_wall_blocks_movement():
    game, _ = make_game(Layout(walls=[Wall(0, 3, 3, 3, 3)], flag=(2, 0, 12)))
    a = game.players[0]
    place(game, a, (0, 5, 3))
    game.movement_dice = 4
    assert game.move_piece(a) is MoveResult.BLOCKED
    assert a.block.position() == (0, 5, 3)
    assert a.points == INITIAL_MOVEMENT_POINTS - 2


def test_cost_cell_takes_points():
    game, out = make_game()
    a = game.players[0]
    place(game, a, (0, 5, 3))
    cell = game.board.block(0, 4, 3)
    cell.type, cell.value = ConsumeType.COST, 3
    game.movement_dice = 1
    game.move_piece(a)
    assert a.points == INITIAL_MOVEMENT_POINTS - 3
    assert "cost 3 movement points" in out.getvalue()


def test_bonus_cell_adds_points():
    game, _ = make_game()
    a = game.players[0]
    place(game, a, (0, 5, 3))
    cell = game.board.block(0, 4, 3)
    cell.type, cell.value = ConsumeType.BONUS, 2
    game.movement_dice = 1
    game.move_piece(a)
    assert a.points == INITIAL_MOVEMENT_POINTS + 2


def test_multiplier_leaves_remaining_points():
    game, _ = make_game()
    a = game.players[0]
    place(game, a, (0, 5, 3))
    first = game.board.block(0, 4, 3)
    first.type, first.value = ConsumeType.COST, 2
    second = game.board.block(0, 3, 3)
    second.type, second.value = ConsumeType.MULTIPLIER, 3
    game.movement_dice = 2
    game.move_piece(a)
    assert a.points == INITIAL_MOVEMENT_POINTS - 2


def test_reaching_flag_wins():
    game, out = make_game(Layout(flag=(0, 3, 3)))
    a = game.players[0]
    place(game, a, (0, 5, 3))
    game.movement_dice = 2
    assert game.move_piece(a) is MoveResult.WON
    assert a.block.position() == (0, 3, 3)
    assert "wins the game!" in out.getvalue()


def test_depleted_points_send_to_bawana():
    game, out = make_game()
    a = game.players[0]
    place(game, a, (0, 0, 3))
    a.points = 1
    game.board.rng.feed(bawana_index(game, BawanaState.HAPPY))
    game.movement_dice = 1
    assert game.move_piece(a) is MoveResult.MOVED
    assert a.block.position() == BAWANA_ENTRANCE
    assert a.points == BAWANA_HAPPY_BONUS
    assert a.effect.state is BawanaState.NONE
    assert "depleted" in out.getvalue()


def test_normal_bawana_gives_random_points():
    game, _ = make_game()
    a = game.players[0]
    place(game, a, (0, 0, 3))
    a.points = 2
    game.board.rng.feed(bawana_index(game, BawanaState.NORMAL), 0)
    game.movement_dice = 1
    game.move_piece(a)
    assert a.points == 11
    assert a.effect.state is BawanaState.NONE


def test_food_poisoning_misses_turn():
    game, out = make_game()
    a = game.players[0]
    place(game, a, (0, 5, 3))
    a.effect = BawanaCell(BawanaState.FOOD_POISONING, 7, 21, 3)
    game.movement_dice = 2
    assert game.move_piece(a) is MoveResult.BLOCKED
    assert a.effect.effect_rounds == 2
    assert a.block.position() == (0, 5, 3)
    assert "still food poisoned" in out.getvalue()


def test_food_poisoning_ends_with_new_effect():
    game, out = make_game()
    a = game.players[0]
    place(game, a, (0, 5, 3))
    a.effect = BawanaCell(BawanaState.FOOD_POISONING, 7, 21, 1)
    game.board.rng.feed(bawana_index(game, BawanaState.HAPPY))
    game.movement_dice = 2
    assert game.move_piece(a) is MoveResult.MOVED
    assert a.block.position() == BAWANA_ENTRANCE
    assert a.points == BAWANA_HAPPY_BONUS
    assert "fit to proceed" in out.getvalue()


def test_triggered_doubles_movement():
    game, _ = make_game()
    a = game.players[0]
    place(game, a, (0, 8, 3))
    a.effect = BawanaCell(BawanaState.TRIGGERED, 7, 21, -1)
    game.movement_dice = 2
    game.move_piece(a)
    assert a.block.position() == (0, 8 - 2 * 2, 3)


def test_disoriented_picks_random_direction():
    game, _ = make_game(None, 2)
    a = game.players[0]
    place(game, a, (0, 8, 3))
    a.effect = BawanaCell(BawanaState.DISORIENTED, 7, 21, 2)
    game.movement_dice = 1
    game.move_piece(a)
    assert a.direction is Direction.SOUTH
    assert a.block.position() == (0, 8 + 1, 3)
    assert a.effect.effect_rounds == 1


def test_direction_dice_rolled_every_fourth_turn():
    game, out = make_game(None, 2)
    a = game.players[0]
    place(game, a, (0, 8, 3), Direction.WEST)
    a.rounds = 0
    game.movement_dice = 1
    game.move_piece(a)
    assert a.direction is Direction.EAST
    assert a.block.position() == (0, 8, 3 + 1)
    assert "on the direction dice" in out.getvalue()


def test_pole_slides_down():
    game, out = make_game(Layout(poles=[Pole(1, 0, 5, 3)], flag=(2, 0, 12)))
    a = game.players[0]
    place(game, a, (1, 6, 3))
    game.movement_dice = 1
    game.move_piece(a)
    assert a.block.position() == (0, 5, 3)
    assert "pole cell" in out.getvalue()


def test_stair_climbs_up():
    game, out = make_game(Layout(stairs=[Stair(0, 4, 3, 1, 4, 3)], flag=(2, 0, 12)))
    a = game.players[0]
    place(game, a, (0, 5, 3))
    game.movement_dice = 1
    game.move_piece(a)
    assert a.block.position() == (1, 4, 3)
    assert "stair cell" in out.getvalue()


def test_check_for_captures_sends_player_back():
    game, out = make_game()
    a, b = game.players[0], game.players[1]
    game.current = a
    b.block = game.board.block(0, 3, 3)
    b.points = 5
    b.effect = BawanaCell(BawanaState.TRIGGERED, 7, 21, -1)
    game.check_for_captures(game.board.block(0, 3, 3))
    assert b.block.position() == entry_position(PlayerID.B)
    assert b.points == INITIAL_MOVEMENT_POINTS
    assert b.effect.state is BawanaState.NONE
    assert "A has captured B" in out.getvalue()


def test_check_for_captures_leaves_other_cells():
    game, _ = make_game()
    a, b = game.players[0], game.players[1]
    game.current = a
    b.block = game.board.block(0, 3, 3)
    game.check_for_captures(game.board.block(0, 2, 3))
    assert b.block.position() == (0, 3, 3)


def test_check_for_captures_needs_a_mover():
    game, _ = make_game()
    with pytest.raises(RuntimeError):
        game.check_for_captures(game.board.block(0, 2, 3))


def make_stair_game(*values):
    layout = Layout(
        stairs=[Stair(0, 4, 3, 1, 4, 3), Stair(1, 6, 3, 2, 6, 10)], flag=(2, 0, 12)
    )
    return make_game(layout, *values)


def test_change_stairs_down():
    game, _ = make_stair_game(1)
    game.change_stair_direction()
    for stair in game.layout.stairs:
        assert stair.start_floor > stair.end_floor
        assert stair.direction is StairDirection.UNI_DOWN


def test_change_stairs_down_then_up_restores_ends():
    game, _ = make_stair_game(1, 0)
    before = [(s.start, s.end) for s in game.layout.stairs]
    game.change_stair_direction()
    game.change_stair_direction()
    assert [(s.start, s.end) for s in game.layout.stairs] == before
    assert all(s.direction is StairDirection.UNI_UP for s in game.layout.stairs)


def test_change_stairs_both_ways_keeps_ends():
    game, _ = make_stair_game(2)
    before = [(s.start, s.end) for s in game.layout.stairs]
    game.change_stair_direction()
    assert [(s.start, s.end) for s in game.layout.stairs] == before
    assert all(s.direction is StairDirection.BI for s in game.layout.stairs)


def test_roll_dice_covers_all_faces():
    layout = Layout(flag=(2, 0, 12))
    board = Board(layout, random.Random(3))
    game = Game(board, [], rng=random.Random(3), output=io.StringIO())
    rolls = [game.roll_dice() for _ in range(600)]
    assert set(rolls) == {1, 2, 3, 4, 5, 6}


def test_roll_direction_dice_faces():
    game, _ = make_game(None, 0, 1, 2, 3, 4, 5)
    results = [game.roll_direction_dice(Direction.SOUTH) for _ in range(6)]
    assert results == [
        Direction.SOUTH,
        Direction.NORTH,
        Direction.EAST,
        Direction.SOUTH,
        Direction.WEST,
        Direction.SOUTH,
    ]


def test_status_report():
    game, _ = make_game()
    game.movement_dice = 4
    report = game.status(game.players[0])
    assert "Dice Value: 4" in report
    assert f"Movement Points: {INITIAL_MOVEMENT_POINTS}" in report
    assert "Current Position: [0, 6, 12]" in report
    assert "Bawana State: NONE" in report
    assert report.startswith("\tStatus before move : \n")


def test_play_round_without_six():
    game, out = make_game(None, 0, 0, 0)
    assert game.play_round() is None
    assert game.rounds == 1
    assert all(p.rounds == 1 for p in game.players)
    assert "Round - 1" in out.getvalue()


def test_play_round_changes_stairs_on_schedule():
    game, out = make_stair_game(1, 0, 0, 0)
    game.rounds = 10
    game.play_round()
    assert "Changing stairs direction" in out.getvalue()
    assert all(s.direction is StairDirection.UNI_DOWN for s in game.layout.stairs)


def test_run_returns_winner():
    game, out = make_game(Layout(flag=entry_position(PlayerID.A)), 5)
    winner = game.run()
    assert winner.id is PlayerID.A
    assert "wins the game!" in out.getvalue()