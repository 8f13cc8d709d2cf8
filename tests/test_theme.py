import pytest

from simplemenu.theme import (
    IniFile,
    SectionColors,
    Theme,
    ThemeLayout,
    hex_to_int,
    rgb_from_hex,
    theme_resource,
    to_int,
)

COLOURS = """
[DEFAULT]
headerBackGround = 102030
headerFont = 405060
bodyBackground = 708090
bodyFont = a0b0c0
selectedItemBackground = d0e0f0
selectedItemFont = 010203

[SNES]
headerBackGround = ff0000
"""


def _hex(rgb):
    return "".join(f"{c:02x}" for c in rgb)


def test_parse_sections_and_values():
    ini = IniFile.parse("; comment\n[GENERAL]\nfont = font.ttf\n# other\n[SNES]\nlogo=\"snes.png\"\n")
    assert ini.get("GENERAL", "font") == "font.ttf"
    assert ini.get("SNES", "logo") == "snes.png"
    assert ini.get("SNES", "font") is None
    assert ini.get("MISSING", "font") is None


def test_parse_ignores_lines_without_equals():
    ini = IniFile.parse("[A]\njunk line\nkey=value=more\n")
    assert ini.sections["A"] == {"key": "value=more"}


def test_load_reads_file(tmp_path):
    path = tmp_path / "config.ini"
    path.write_text("[SCREEN]\nwidth=320\n", encoding="utf-8")
    assert IniFile.load(path).get("SCREEN", "width") == "320"


def test_load_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        IniFile.load(tmp_path / "absent.ini")


@pytest.mark.parametrize(
    "text,expected",
    [("42", 42), ("  -7x", -7), ("+5", 5), ("abc", 0), ("", 0), (None, 0)],
)
def test_to_int(text, expected):
    assert to_int(text) == expected


@pytest.mark.parametrize("number", [0, 1, 9, 10, 15, 16, 171, 255, 4096, 0xDEADBEEF])
def test_hex_to_int_round_trip(number):
    assert hex_to_int(format(number, "x")) == number
    assert hex_to_int(format(number, "X")) == number


def test_hex_to_int_wraps_to_32_bits():
    assert hex_to_int("1" + "0" * 8) == 0


def test_rgb_from_hex_round_trip():
    for rgb in [(0, 0, 0), (255, 255, 255), (18, 52, 86), (171, 205, 239)]:
        assert rgb_from_hex(_hex(rgb)) == rgb


def test_rgb_from_hex_rejects_short_text():
    with pytest.raises(ValueError):
        rgb_from_hex("fff")


def test_theme_resource_fallbacks():
    ini = IniFile.parse(
        "[GENERAL]\nfont=g.ttf\nlogo=general.png\n[DEFAULT]\nlogo=default.png\n[SNES]\nlogo=snes.png\n"
    )
    assert theme_resource(ini, "SNES", "logo", "/themes/x") == "/themes/x/snes.png"
    assert theme_resource(ini, "NES", "logo", "/themes/x") == "/themes/x/default.png"
    assert theme_resource(ini, "NES", "font", "/themes/x/") == "/themes/x/g.ttf"
    assert theme_resource(ini, "NES", "missing", "/themes/x") == ""


def test_section_colors_fall_back_to_default():
    ini = IniFile.parse(COLOURS)
    snes = SectionColors.from_ini(ini, "SNES")
    other = SectionColors.from_ini(ini, "NES")
    assert _hex(snes.header_background) == "ff0000"
    assert _hex(other.header_background) == "102030"
    assert snes.body_font == other.body_font
    assert _hex(other.selected_item_font) == "010203"


def test_section_colors_missing_everywhere_raises():
    with pytest.raises(KeyError):
        SectionColors.from_ini(IniFile.parse("[SNES]\nheaderFont=000000\n"), "SNES")


def test_layout_reads_general_and_defaults_to_zero():
    ini = IniFile.parse("[GENERAL]\nfont_size=20\nitems_in_simple=7\nitems_in_full_custom=12\n")
    layout = ThemeLayout.from_ini(ini)
    assert layout.font_size == 20
    assert layout.items_in_simple == 7
    assert layout.items_in_full_custom == 12
    assert layout.items_in_traditional == 0


def test_mode_settings():
    layout = ThemeLayout(
        font_size=20,
        font_size_custom=17,
        items_in_simple=7,
        items_in_full_simple=8,
        items_in_traditional=9,
        items_in_full_traditional=10,
        items_in_drunken_monkey=11,
        items_in_full_drunken_monkey=12,
        items_in_custom=13,
        items_in_full_custom=14,
    )
    simple = layout.mode_settings(0)
    traditional = layout.mode_settings(1)
    monkey = layout.mode_settings(2)
    custom = layout.mode_settings(9)
    assert simple == (0, 20, 7, 8)
    assert simple.font_size - traditional.font_size == 2
    assert simple.font_size - monkey.font_size == 4
    assert (traditional.items_per_page, traditional.fullscreen_items_per_page) == (9, 10)
    assert (monkey.items_per_page, monkey.fullscreen_items_per_page) == (11, 12)
    assert custom == (3, 17, 13, 14)


def test_theme_load(tmp_path):
    path = tmp_path / "theme.ini"
    path.write_text(COLOURS + "\n[GENERAL]\nfont=menu.ttf\nfont_size=18\n", encoding="utf-8")
    theme = Theme.load(path)
    assert theme.directory == str(tmp_path)
    assert theme.resource("SNES", "font") == f"{tmp_path}/menu.ttf"
    assert theme.resource("SNES", "nothing") == ""
    assert theme.layout.font_size == 18
    assert _hex(theme.section_colors("SNES").header_background) == "ff0000"