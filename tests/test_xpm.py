import pytest

from solong.colors import lookup_color
from solong.xpm import (
    TRANSPARENT,
    XpmError,
    parse_xpm,
    read_xpm_file,
    split_words,
    strip_comments,
    text_to_rgb,
)

SAMPLE = """/* XPM */
static char *sample[] = {
/* columns rows colors chars-per-pixel */
"3 2 3 1 ",
"  c None",
". c #FF0000",
"X c white",
". X",
"X. "
};
"""


def _xpm(*strings):
    body = ",\n".join(f'"{s}"' for s in strings)
    return f"static char *img[] = {{\n{body}\n}};\n"


def test_split_words_on_spaces_and_tabs():
    assert split_words("  a\tb  c ") == ["a", "b", "c"]


def test_split_words_keeps_newlines_inside_words():
    assert split_words("a\nb") == ["a\nb"]


def test_split_words_empty():
    assert split_words(" \t ") == []


def test_strip_block_comment_keeps_length():
    text = "a/*b*/c"
    result = strip_comments(text)
    assert len(result) == len(text)
    assert result == "a" + " " * 5 + "c"


def test_strip_comments_ignores_quoted_markers():
    text = '"/*x*/" "//y"'
    assert strip_comments(text) == text


def test_strip_line_comment_through_newline():
    assert strip_comments('// note\n"x"') == " " * 8 + '"x"'


def test_text_to_rgb_hex():
    assert text_to_rgb("#FF0000", None) == 0xFF0000


def test_text_to_rgb_full_width_hex_wraps():
    assert text_to_rgb("#ffffffff", None) == -1


def test_text_to_rgb_two_word_name():
    assert text_to_rgb("light", "blue") == lookup_color("light blue")


def test_text_to_rgb_named_case_insensitive():
    assert text_to_rgb("WHITE", None) == lookup_color("white")


def test_text_to_rgb_none_and_unknown():
    assert text_to_rgb("None", None) == -1
    assert text_to_rgb("nosuchcolour", None) == 0


def test_parse_sample():
    image = parse_xpm(SAMPLE)
    white = lookup_color("white")
    assert (image.width, image.height) == (3, 2)
    assert image.pixels == (
        (0xFF0000, TRANSPARENT, white),
        (white, 0xFF0000, TRANSPARENT),
    )


def test_pixel_accessor_matches_rows():
    image = parse_xpm(SAMPLE)
    assert image.pixel(1, 1) == image.pixels[1][1]
    with pytest.raises(IndexError):
        image.pixel(3, 0)


def test_two_chars_per_pixel():
    image = parse_xpm(_xpm("2 1 2 2", "ab c #000010", "cd c #000020", "cdab"))
    assert image.pixels == ((0x20, 0x10),)


def test_short_keys_last_definition_wins():
    image = parse_xpm(_xpm("1 1 2 1", "a c #000001", "a c #000002", "a"))
    assert image.pixel(0, 0) == 2


def test_long_keys_first_definition_wins():
    image = parse_xpm(_xpm("1 1 2 3", "abc c #000001", "abc c #000002", "abc"))
    assert image.pixel(0, 0) == 1


def test_undefined_key_is_black():
    image = parse_xpm(_xpm("2 1 1 1", "a c #123456", "az"))
    assert image.pixel(1, 0) == 0
    assert image.pixel(0, 0) == 0x123456


@pytest.mark.parametrize(
    "strings",
    [
        ("0 1 1 1", "a c #000000", "a"),
        ("1 1",),
        ("1 1 1 1", "a #FF0000", "a"),
        ("1 1 1 1", "a c", "a"),
        ("1 2 1 1", "a c #000000", "a"),
        ("1 1 2 1", "a c #000000"),
    ],
)
def test_malformed_data_raises(strings):
    with pytest.raises(XpmError):
        parse_xpm(_xpm(*strings))


def test_no_strings_raises():
    with pytest.raises(XpmError):
        parse_xpm("/* nothing here */")


def test_read_file_round_trip(tmp_path):
    path = tmp_path / "sample.xpm"
    path.write_text(SAMPLE)
    assert read_xpm_file(path) == parse_xpm(SAMPLE)


def test_read_missing_file(tmp_path):
    with pytest.raises(XpmError):
        read_xpm_file(tmp_path / "missing.xpm")