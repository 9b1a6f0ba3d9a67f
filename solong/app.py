"""The playable game: window, textures, drawing and the event loop."""

from __future__ import annotations

import os
import sys
from collections.abc import Mapping, Sequence
from pathlib import Path

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import pygame  # noqa: E402

from solong.game import ESCAPE_KEY, Game, MoveOutcome  # noqa: E402
from solong.grid import (  # noqa: E402
    COLLECTIBLE,
    EXIT,
    FLOOR,
    PLAYER,
    TILE_SIZE,
    WALL,
    MapError,
    check_map_size,
    read_map_file,
    validate_map,
)
from solong.xpm import XpmError, XpmImage, read_xpm_file  # noqa: E402

TEXTURE_DIR = "textures"
TEXTURE_FILES = {
    WALL: "wall.xpm",
    FLOOR: "floor.xpm",
    COLLECTIBLE: "heart.xpm",
    EXIT: "exit.xpm",
    PLAYER: "player.xpm",
}
WINDOW_TITLE = "So Long"


class _StartupError(Exception):
    """Raised when the display or the window cannot be set up."""


def image_to_surface(image: XpmImage) -> pygame.Surface:
    """Build an opaque surface from a decoded image; the alpha byte is ignored."""
    surface = pygame.Surface((image.width, image.height))
    for y, row in enumerate(image.pixels):
        for x, value in enumerate(row):
            surface.set_at(
                (x, y), ((value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF)
            )
    return surface


def load_textures(
    directory: str | os.PathLike[str],
) -> dict[str, pygame.Surface]:
    """Load the tile textures, keyed by map character.

    Textures that cannot be read are left out; only the player's is required.
    """
    textures = {}
    for char, name in TEXTURE_FILES.items():
        try:
            image = read_xpm_file(Path(directory) / name)
        except XpmError:
            continue
        textures[char] = image_to_surface(image)
    if PLAYER not in textures:
        raise XpmError("Failed to load player image.")
    return textures


def draw_map(
    surface: pygame.Surface,
    game: Game,
    textures: Mapping[str, pygame.Surface],
    tile_size: int = TILE_SIZE,
) -> None:
    """Blit the texture of every map cell onto ``surface``."""
    for x, y, char in game.tiles():
        texture = textures.get(char)
        if texture is not None:
            surface.blit(texture, (x * tile_size, y * tile_size))


def _redraw(screen: pygame.Surface, game: Game, textures) -> None:
    draw_map(screen, game, textures)
    pygame.display.flip()


def _play(path: str) -> None:
    info = pygame.display.Info()
    game_map = read_map_file(path)
    check_map_size(game_map, info.current_w, info.current_h)
    validate_map(game_map)
    try:
        screen = pygame.display.set_mode(
            (game_map.width * TILE_SIZE, game_map.height * TILE_SIZE)
        )
    except pygame.error as exc:
        raise _StartupError("Failed to create window.") from exc
    pygame.display.set_caption(WINDOW_TITLE)
    textures = load_textures(TEXTURE_DIR)
    game = Game(game_map)
    _redraw(screen, game, textures)

    while True:
        event = pygame.event.wait()
        if event.type == pygame.QUIT:
            return
        if event.type != pygame.KEYUP:
            continue
        keycode = ESCAPE_KEY if event.key == pygame.K_ESCAPE else event.key
        outcome = game.handle_key(keycode)
        if outcome in (MoveOutcome.MOVED, MoveOutcome.COLLECTED):
            print(f"Moves: {game.moves}")
        elif outcome is MoveOutcome.WON:
            print("You win! Exiting the game...")
            return
        elif outcome is MoveOutcome.QUIT:
            return
        _redraw(screen, game, textures)


def run(path: str) -> int:
    """Play the level stored at ``path`` until it is won or closed."""
    try:
        try:
            pygame.display.init()
        except pygame.error as exc:
            raise _StartupError("Failed to initialize display.") from exc
        _play(path)
    except (MapError, XpmError, _StartupError) as exc:
        print(f"Error\n{exc}")
    finally:
        pygame.quit()
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Command entry point: ``solong map.ber``."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) != 1:
        print("Error\nUsage: solong map.ber")
        return 0
    return run(args[0])


if __name__ == "__main__":
    sys.exit(main())