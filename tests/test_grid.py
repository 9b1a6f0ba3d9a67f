import pytest

from solong.grid import (
    MapError,
    TILE_SIZE,
    check_accessibility,
    check_closed,
    check_map_size,
    check_rectangular,
    parse_map,
    read_map_file,
    reachable,
    validate_map,
)

VALID = [
    "111111\n",
    "1P0C01\n",
    "1000E1\n",
    "111111\n",
]

COUNTS_MESSAGE = "exactly 1 exit, 1 player, and at least 1 collectible"


def test_parse_map_basic_shape():
    game_map = parse_map(VALID)
    assert game_map.width == 6
    assert game_map.height == len(VALID)
    assert game_map.find("P") == (1, 1)


def test_count_matches_cells():
    game_map = parse_map(VALID)
    assert game_map.count("C") == 1
    assert game_map.count("X") == 0


def test_find_missing_returns_none():
    assert parse_map(VALID).find("X") is None


def test_cell_agrees_with_find():
    game_map = parse_map(VALID)
    x, y = game_map.find("E")
    assert game_map.cell(x, y) == "E"


def test_cell_outside_raises():
    game_map = parse_map(VALID)
    with pytest.raises(IndexError):
        game_map.cell(-1, 0)
    with pytest.raises(IndexError):
        game_map.cell(0, game_map.height)


def test_valid_map_passes_validation():
    game_map = parse_map(VALID)
    validate_map(game_map)
    assert game_map.find("P") == parse_map(VALID).find("P")


def test_empty_map_is_invalid():
    with pytest.raises(MapError, match="Invalid map or dimensions"):
        validate_map(parse_map([]))


def test_not_rectangular():
    lines = ["111111\n", "1P0C1\n", "1000E1\n", "111111\n"]
    with pytest.raises(MapError, match="not rectangular"):
        validate_map(parse_map(lines))


def test_last_row_is_not_checked_for_width():
    game_map = parse_map(["111\n", "111\n", "11111"])
    check_rectangular(game_map)
    assert game_map.width == len("111")


def test_not_closed():
    lines = ["111111\n", "1P0C00\n", "1000E1\n", "111111\n"]
    with pytest.raises(MapError, match="not surrounded by walls"):
        validate_map(parse_map(lines))


def test_short_last_row_is_not_closed():
    with pytest.raises(MapError, match="not surrounded by walls"):
        check_closed(parse_map(["1111\n", "1PC1\n", "11"]))


def test_invalid_character():
    lines = ["111111\n", "1P0CX1\n", "1000E1\n", "111111\n"]
    with pytest.raises(MapError, match="Invalid character"):
        validate_map(parse_map(lines))


@pytest.mark.parametrize(
    "lines",
    [
        ["111111\n", "1P0CP1\n", "1000E1\n", "111111\n"],
        ["111111\n", "1P0CE1\n", "1000E1\n", "111111\n"],
        ["111111\n", "1P0001\n", "1000E1\n", "111111\n"],
        ["111111\n", "100C01\n", "1000E1\n", "111111\n"],
    ],
)
def test_element_counts(lines):
    with pytest.raises(MapError, match=COUNTS_MESSAGE):
        validate_map(parse_map(lines))


def test_unreachable_collectible():
    lines = ["1111111\n", "1P01C01\n", "1E01001\n", "1111111\n"]
    with pytest.raises(MapError, match="not accessible"):
        validate_map(parse_map(lines))


def test_unreachable_exit():
    lines = ["1111111\n", "1PC01E1\n", "1111111\n"]
    with pytest.raises(MapError, match="not accessible"):
        validate_map(parse_map(lines))


def test_collectible_behind_exit_is_unreachable():
    lines = ["111111\n", "1P0EC1\n", "111111\n"]
    with pytest.raises(MapError, match="not accessible"):
        check_accessibility(parse_map(lines))


def test_reachable_only_walks_passable_cells():
    game_map = parse_map(VALID)
    start = game_map.find("P")
    seen = reachable(game_map, start, "P")
    assert start in seen
    assert all(game_map.cell(x, y) in "0CP" for x, y in seen)
    assert game_map.find("E") not in seen


def test_reachable_with_exit_target_includes_exit():
    game_map = parse_map(VALID)
    seen = reachable(game_map, game_map.find("P"), "E")
    assert game_map.find("E") in seen
    assert game_map.find("C") in seen


def test_map_too_large_for_screen():
    game_map = parse_map(VALID)
    with pytest.raises(MapError, match="too large"):
        check_map_size(
            game_map,
            game_map.width * TILE_SIZE,
            game_map.height * TILE_SIZE + 79,
            TILE_SIZE,
        )
    with pytest.raises(MapError, match="too large"):
        check_map_size(
            game_map,
            game_map.width * TILE_SIZE - 1,
            game_map.height * TILE_SIZE + 1000,
            TILE_SIZE,
        )


def test_read_map_file_round_trip(tmp_path):
    path = tmp_path / "level.ber"
    path.write_text("".join(VALID), encoding="utf-8")
    game_map = read_map_file(path)
    assert game_map.rows == parse_map(VALID).rows


def test_read_map_file_wrong_extension(tmp_path):
    path = tmp_path / "level.txt"
    path.write_text("".join(VALID), encoding="utf-8")
    with pytest.raises(MapError, match="must end with .ber"):
        read_map_file(path)


def test_read_map_file_missing(tmp_path):
    with pytest.raises(MapError, match="No such file"):
        read_map_file(tmp_path / "missing.ber")