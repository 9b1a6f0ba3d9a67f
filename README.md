# solong

A small top-down puzzle game. You walk a character around a walled map
and pick up every heart. Then you step onto the exit to win. Each step
the player takes is counted, and the terminal shows `Moves: N`.

## Installing

```
pip install .
```

This also installs `pygame`, which provides the window and the drawing.

## Playing

```
solong path/to/level.ber
```

The game takes exactly one argument. With any other number of arguments
it prints a usage message.

Controls (a move happens when you release the key):

- `w` / `a` / `s` / `d`: move up, left, down, right
- `Esc` or closing the window: quit

The exit stays closed until you have collected every heart. When you
step onto it, the game prints `You win! Exiting the game...` and closes.

### Textures

The game reads tile images from XPM files in a `textures/` directory.
It looks for that directory in the current working directory. The files
are:

| File         | Tile    |
|--------------|---------|
| `wall.xpm`   | wall    |
| `floor.xpm`  | floor   |
| `heart.xpm`  | heart   |
| `exit.xpm`   | exit    |
| `player.xpm` | player  |

Only `player.xpm` is required. If any other file is missing or cannot be
read, its tiles are not drawn.

## Map files

A map is a plain text file with the `.ber` extension. It has one row per
line and uses these characters:

| Char | Meaning      |
|------|--------------|
| `1`  | wall         |
| `0`  | floor        |
| `C`  | heart        |
| `E`  | exit         |
| `P`  | player start |

Example:

```
1111111
1P0C0E1
1111111
```

The game rejects a map when any of these is true:

- the map is larger than the screen, allowing 32 pixels per tile and
  80 pixels of vertical margin,
- it is not rectangular,
- it is not surrounded by walls,
- it contains any other character,
- it does not have exactly one `P`, exactly one `E` and at least one `C`,
- the player cannot reach a heart without stepping on the exit,
- the player cannot reach the exit.

When a map is rejected, the game prints `Error` and the reason on the
next line, then stops.

## Using it as a library

You can use the modules on their own.

- `solong.grid`
  - `parse_map` builds a `GameMap` from lines of text.
  - `read_map_file` reads a `.ber` file.
  - `validate_map` runs every structural check. It raises `MapError`.
  - The checks are also available one by one: `check_rectangular`,
    `check_closed`, `check_characters`, `check_accessibility` and
    `check_map_size`.
  - `reachable` does a breadth-first search over a map.
  - `GameMap` has `cell`, `count` and `find`, and `width` and `height`.
- `solong.game`
  - `Game` has `move`, `handle_key` and `tiles`.
  - `move` and `handle_key` each return a `MoveOutcome`: `IGNORED`,
    `BLOCKED`, `MOVED`, `COLLECTED`, `WON` or `QUIT`.
- `solong.xpm`
  - `parse_xpm` and `read_xpm_file` decode XPM images into an
    `XpmImage`, which has `width`, `height`, `pixels` and `pixel(x, y)`.
  - They raise `XpmError` on bad data.
  - Helpers: `split_words`, `strip_comments` and `text_to_rgb`.
- `solong.colors`
  - `lookup_color` returns the value for an X11 colour name. Case does
    not matter.
  - `color_names` lists every known name.
- `solong.app`
  - `image_to_surface`, `load_textures` and `draw_map` do the pygame
    drawing.
  - `run` and `main` start the game.

```python
from solong.grid import parse_map, validate_map

game_map = parse_map(["1111111\n", "1P0C0E1\n", "1111111\n"])
validate_map(game_map)
print(game_map.count("C"))  # 1
```

## What it does not do

- It ships no texture files. You must supply the `textures/` directory
  yourself.
- The command always exits with status 0, even after an error. Read the
  printed `Error` message to find out what went wrong.

## Running the tests

```
pip install .[test]
pytest
```