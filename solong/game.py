"""Game state and player movement."""

from __future__ import annotations

from collections.abc import Iterator
from enum import Enum, auto

from solong.grid import COLLECTIBLE, EXIT, FLOOR, PLAYER, WALL, GameMap

ESCAPE_KEY = 65307

_KEY_STEPS = {
    ord("w"): (0, -1),
    ord("a"): (-1, 0),
    ord("s"): (0, 1),
    ord("d"): (1, 0),
}


class MoveOutcome(Enum):
    """What happened after a move or a key press."""

    IGNORED = auto()
    BLOCKED = auto()
    MOVED = auto()
    COLLECTED = auto()
    WON = auto()
    QUIT = auto()


class Game:
    """A running level: the map, the player and the score."""

    def __init__(self, game_map: GameMap) -> None:
        start = game_map.find(PLAYER)
        if start is None:
            raise ValueError("the map has no player")
        self.map = game_map
        self.player = start
        self.collected = 0
        self.total = game_map.count(COLLECTIBLE)
        self.moves = 0
        self.finished = False

    def move(self, dx: int, dy: int) -> MoveOutcome:
        """Try to move the player by ``(dx, dy)``."""
        x, y = self.player
        nx, ny = x + dx, y + dy
        if not (0 <= nx < self.map.width and 0 <= ny < self.map.height):
            return MoveOutcome.BLOCKED
        target = self.map.cell(nx, ny)
        if target == WALL:
            return MoveOutcome.BLOCKED
        if target == EXIT:
            if self.collected < self.total:
                return MoveOutcome.BLOCKED
            self.finished = True
            return MoveOutcome.WON
        outcome = MoveOutcome.MOVED
        if target == COLLECTIBLE:
            self.collected += 1
            outcome = MoveOutcome.COLLECTED
        self.map.rows[y][x] = FLOOR
        self.map.rows[ny][nx] = PLAYER
        self.player = (nx, ny)
        self.moves += 1
        return outcome

    def handle_key(self, keycode: int) -> MoveOutcome:
        """React to a key: escape quits, w/a/s/d move the player."""
        if keycode == ESCAPE_KEY:
            self.finished = True
            return MoveOutcome.QUIT
        step = _KEY_STEPS.get(keycode)
        if step is None:
            return MoveOutcome.IGNORED
        return self.move(*step)

    def tiles(self) -> Iterator[tuple[int, int, str]]:
        """Yield ``(x, y, character)`` for every cell, row by row."""
        for y in range(self.map.height):
            for x in range(self.map.width):
                yield x, y, self.map.cell(x, y)