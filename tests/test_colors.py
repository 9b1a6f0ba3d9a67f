import pytest

from solong.colors import color_names, lookup_color


@pytest.mark.parametrize(
    "name, expected",
    [
        ("snow", 0xFFFAFA),
        ("black", 0x0),
        ("white", 0xFFFFFF),
        ("red", 0xFF0000),
        ("navy", 0x80),
        ("gray50", 0x7F7F7F),
        ("light green", 0x90EE90),
    ],
)
def test_known_names(name, expected):
    assert lookup_color(name) == expected


def test_lookup_ignores_case():
    assert lookup_color("SNOW") == lookup_color("snow")
    assert lookup_color("Ghost White") == lookup_color("ghost white")


def test_none_is_transparent_marker():
    assert lookup_color("none") == -1
    assert lookup_color("NONE") == -1


def test_unknown_name_gives_none():
    assert lookup_color("no-such-colour") is None
    assert lookup_color("") is None


def test_first_duplicate_wins():
    assert lookup_color("dark slate") == 0x2F4F4F
    assert lookup_color("light slate") == 0x778899
    assert lookup_color("light goldenrod") == 0xFAFAD2


def test_names_are_unique():
    names = color_names()
    assert len(names) == len(set(names))


def test_every_name_resolves():
    for name in color_names():
        value = lookup_color(name)
        assert value is not None and -1 <= value <= 0xFFFFFF, name
        assert lookup_color(name.upper()) == value, name


def test_values_in_rgb_range():
    for name in color_names():
        value = lookup_color(name)
        if name == "none":
            assert value == -1
        else:
            assert 0 <= value <= 0xFFFFFF, name


def test_order_starts_with_snow_and_ends_with_none():
    names = color_names()
    assert names[0] == "snow"
    assert names[-1] == "none"


def test_grey_and_gray_spellings_agree():
    for level in range(101):
        assert lookup_color(f"gray{level}") == lookup_color(f"grey{level}")