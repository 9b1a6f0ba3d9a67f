"""Map loading and validation for ``.ber`` level files."""

from __future__ import annotations

import os
from collections import deque
from collections.abc import Iterable
from dataclasses import dataclass

TILE_SIZE = 32
SCREEN_MARGIN = 80
MAP_EXTENSION = ".ber"

WALL = "1"
FLOOR = "0"
COLLECTIBLE = "C"
EXIT = "E"
PLAYER = "P"
VALID_CHARACTERS = frozenset({WALL, FLOOR, COLLECTIBLE, EXIT, PLAYER})

_DIRECTIONS = ((-1, 0), (1, 0), (0, -1), (0, 1))


class MapError(Exception):
    """Raised when a map file cannot be read or describes an invalid level."""


@dataclass
class GameMap:
    """A grid of map characters, stored row by row."""

    rows: list[list[str]]
    width: int

    @property
    def height(self) -> int:
        return len(self.rows)

    def cell(self, x: int, y: int) -> str:
        """Return the character at column ``x``, row ``y``."""
        if x < 0 or y < 0:
            raise IndexError(f"position ({x}, {y}) is outside the map")
        try:
            return self.rows[y][x]
        except IndexError:
            raise IndexError(f"position ({x}, {y}) is outside the map") from None

    def _scan(self) -> Iterable[tuple[int, int, str]]:
        for y, row in enumerate(self.rows):
            for x, char in enumerate(row[: self.width]):
                yield x, y, char

    def count(self, element: str) -> int:
        """Count the cells holding ``element``."""
        return sum(1 for _, _, char in self._scan() if char == element)

    def find(self, element: str) -> tuple[int, int] | None:
        """Return the first ``(x, y)`` holding ``element``, scanning row by row."""
        return next(((x, y) for x, y, char in self._scan() if char == element), None)


def _at(game_map: GameMap, x: int, y: int) -> str:
    """Return the character at a position, or an empty string past the edge."""
    if not 0 <= y < game_map.height:
        return ""
    row = game_map.rows[y]
    return row[x] if 0 <= x < len(row) else ""


def parse_map(lines: Iterable[str]) -> GameMap:
    """Build a map from text lines; a trailing newline on each line is dropped."""
    rows = [list(line[:-1] if line.endswith("\n") else line) for line in lines]
    width = next((len(row) for row in rows if row), 0)
    return GameMap(rows=rows, width=width)


def read_map_file(path: str | os.PathLike[str]) -> GameMap:
    """Read a ``.ber`` map file."""
    name = os.fspath(path)
    if len(name) < len(MAP_EXTENSION) or not name.endswith(MAP_EXTENSION):
        raise MapError("File must end with .ber.")
    try:
        with open(name, encoding="utf-8") as handle:
            return parse_map(handle)
    except OSError as exc:
        raise MapError("No such file or cannot open.") from exc


def reachable(
    game_map: GameMap, start: tuple[int, int], target: str
) -> set[tuple[int, int]]:
    """Return every cell reachable from ``start`` by breadth-first search.

    Floor, collectibles and ``target`` cells can be walked on.
    """
    passable = {FLOOR, COLLECTIBLE, target}
    seen = {start}
    queue = deque([start])
    while queue:
        x, y = queue.popleft()
        for dx, dy in _DIRECTIONS:
            step = (x + dx, y + dy)
            if step not in seen and _at(game_map, *step) in passable:
                seen.add(step)
                queue.append(step)
    return seen


def check_rectangular(game_map: GameMap) -> None:
    """Every row but the last must be exactly as wide as the map."""
    if any(len(row) != game_map.width for row in game_map.rows[:-1]):
        raise MapError("Map is not rectangular.")


def check_closed(game_map: GameMap) -> None:
    """The map border must consist of walls only."""
    last_row = game_map.height - 1
    last_col = game_map.width - 1
    for x in range(game_map.width):
        if _at(game_map, x, 0) != WALL or _at(game_map, x, last_row) != WALL:
            raise MapError("Map is not surrounded by walls.")
    for y in range(game_map.height):
        if _at(game_map, 0, y) != WALL or _at(game_map, last_col, y) != WALL:
            raise MapError("Map is not surrounded by walls.")


def check_characters(game_map: GameMap) -> None:
    """Only walls, floor, collectibles, the exit and the player are allowed."""
    for y in range(game_map.height):
        for x in range(game_map.width):
            if _at(game_map, x, y) not in VALID_CHARACTERS:
                raise MapError("Invalid character in map.")


def _require_all_visited(
    game_map: GameMap, seen: set[tuple[int, int]], element: str
) -> None:
    for x, y, char in game_map._scan():
        if char == element and (x, y) not in seen:
            raise MapError("Some items or the exit are not accessible!")


def check_accessibility(game_map: GameMap) -> None:
    """Every collectible and the exit must be reachable from the player.

    Collectibles must be reachable without stepping onto the exit.
    """
    start = game_map.find(PLAYER)
    if start is None:
        raise MapError(
            "Map must contain exactly 1 exit, 1 player, and at least 1 collectible."
        )
    _require_all_visited(game_map, reachable(game_map, start, PLAYER), COLLECTIBLE)
    _require_all_visited(game_map, reachable(game_map, start, EXIT), EXIT)


def check_map_size(
    game_map: GameMap,
    screen_width: int,
    screen_height: int,
    tile_size: int = TILE_SIZE,
) -> None:
    """The map, drawn at ``tile_size``, must fit on the screen."""
    map_width = game_map.width * tile_size
    map_height = game_map.height * tile_size
    if map_width > screen_width or map_height > screen_height - SCREEN_MARGIN:
        raise MapError("Map is too large for the screen.")


def validate_map(game_map: GameMap) -> None:
    """Run every structural check on a map; the screen size is checked apart."""
    exits = game_map.count(EXIT)
    players = game_map.count(PLAYER)
    collectibles = game_map.count(COLLECTIBLE)
    if game_map.height <= 0 or game_map.width <= 0:
        raise MapError("Invalid map or dimensions.")
    check_rectangular(game_map)
    check_closed(game_map)
    check_characters(game_map)
    if exits != 1 or players != 1 or collectibles < 1:
        raise MapError(
            "Map must contain exactly 1 exit, 1 player, and at least 1 collectible."
        )
    check_accessibility(game_map)