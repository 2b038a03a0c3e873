# mazerunner

A console simulation of a dice-driven race through a three-floor maze.
Three players, A, B and C, start in the starting area on floor 0. Every
turn each player rolls a movement die, and the first to reach the flag
wins. All moves are decided by the dice; nobody steers a player.

## How a game plays out

- A player leaves the starting area only on a roll of 6. It is then placed
  on its entry cell of the maze, facing north.
- On every fourth turn of a player that is inside the maze (its 1st, 5th,
  9th, ... turn), and unless it is disoriented, a direction die is rolled:
  faces 2 to 5 turn the player north, east, south or west, faces 1 and 6
  keep its direction.
- Cells cost movement points, give bonus points, multiply the cost of the
  move, or cost nothing. Walking into a wall or off the playable area costs
  2 points and the player stays where it was.
- Stairs carry players between floors and poles slide them to another
  floor. From round 11 on, every fifth round (11, 16, 21, ...) all stairs
  change together to up-only, down-only or two-way.
- A player whose movement points run out, or who lands on a cell whose
  stairs and poles only lead round in a loop, is sent to the Bawana
  entrance and given the effect of a random Bawana cell:
  - food poisoning: 0 points, the player misses turns and is then sent to
    Bawana again for a new effect;
  - disoriented: 50 points, the player moves in random directions for a
    while;
  - triggered: 50 points, every movement roll counts double;
  - happy: 200 points;
  - normal: between 11 and 99 points.
- A stair or pole that ends in the starting area sends the player back to
  its entry cell; one that ends in Bawana sends it to Bawana.
- Ending a move on the cell of another player inside the maze captures that
  player: it goes back to its entry cell with 100 movement points and loses
  any Bawana effect.

## Running a game

Install the package and run the command:

```
pip install .
mazerunner [DIRECTORY] [--seed-file FILE]
```

`DIRECTORY` (default: the current directory) holds the layout files.
`--seed-file` names the file holding the random seed; by default it is
`seed.txt` in `DIRECTORY`. If the seed file is missing or holds no integer,
a message is printed and an unseeded generator is used.

The game prints the loaded walls, stairs, poles and flag, then every round
turn by turn until a player reaches the flag. The command exits with
status 0 when the game ends and 1 when the flag cannot be loaded.

## Layout files

All files are plain text.

| File         | One entry per line                                                           |
|--------------|------------------------------------------------------------------------------|
| `walls.txt`  | `[floor, start_width, start_length, end_width, end_length]`                  |
| `stairs.txt` | `[start_floor, start_width, start_length, end_floor, end_width, end_length]` |
| `poles.txt`  | `[start_floor, end_floor, width, length]`                                    |
| `flag.txt`   | `[floor, width, length]` (a single entry)                                    |
| `seed.txt`   | a single integer used to seed the random number generator                    |

Lines of `walls.txt`, `stairs.txt` and `poles.txt` that do not match the
expected form, or that describe something outside the playable area or
blocked, are reported as warnings through the `logging` module and skipped;
a missing file of these three is reported and treated as empty. A stair must
join two different floors and start on the lower one; at most two stairs may
share a cell and at most one pole may start from a cell. A missing or
invalid `flag.txt` stops the game.

The same seed and the same layout give the same game every time.

## Using it from Python

- `mazerunner.layout.load_layout(directory)` reads the layout files and
  returns a `Layout`. `parse_walls(lines)`, `parse_stairs(lines, walls)`,
  `parse_poles(lines, walls, stairs)` and `parse_flag(text, walls, stairs)`
  parse the individual files' contents; `parse_flag` and `load_layout`
  raise `LayoutError` when the flag cannot be used. `Layout.describe()`
  returns the listing the command prints.
- `mazerunner.geometry` tells where the playable area, the starting area and
  Bawana lie (`is_in_playable_area`, `is_in_starting_area`,
  `is_in_bawana_area`) and gives each player's `starting_position` and
  `entry_position`.
- `mazerunner.loops.non_looping(stairs, poles)` keeps the stairs and poles
  from one cell that take part in no loop; `is_stair_loop` and
  `is_stair_pole_loop` test single pairs.
- `mazerunner.board.Board(layout, rng)` builds every maze cell with its
  consumable and the Bawana cells; `block`, `is_open`, `blocks` and
  `random_bawana_cell` look them up.
- `mazerunner.game.Game(board, players, rng, output)` plays single turns
  with `move_piece` (returning a `MoveResult`), whole rounds with
  `play_round`, or a full game with `run`, writing every event to `output`.
- `mazerunner.cli.read_seed(path)` and `mazerunner.cli.create_players(board)`
  set a game up the way the command does.

```python
import random

from mazerunner.board import Board
from mazerunner.cli import create_players
from mazerunner.game import Game
from mazerunner.layout import load_layout

rng = random.Random(42)
board = Board(load_layout("."), rng)
winner = Game(board, create_players(board), rng=rng).run()
print(winner.id)
```