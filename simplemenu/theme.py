"""Theme files: INI parsing, colour values, resource paths and layout settings."""

from __future__ import annotations

import re
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import NamedTuple, Optional, Union

_INT_PREFIX = re.compile(r"\s*([+-]?\d+)")

_SECTION_FALLBACKS = ("DEFAULT", "GENERAL")


@dataclass
class IniFile:
    """A parsed INI document: named sections holding string values."""

    sections: dict = field(default_factory=dict)

    @classmethod
    def load(cls, path: Union[str, Path]) -> "IniFile":
        """Read and parse the INI file at ``path``."""
        return cls.parse(Path(path).read_text(encoding="utf-8", errors="replace"))

    @classmethod
    def parse(cls, text: str) -> "IniFile":
        """Parse INI text.

        Lines starting with ``;`` or ``#`` are comments. Keys that appear
        before any section header belong to the section named ``""``.
        Values are stripped of whitespace and of one pair of enclosing
        double quotes.
        """
        sections: dict = {}
        current = sections.setdefault("", {})
        for raw in text.splitlines():
            line = raw.strip()
            if not line or line[0] in ";#":
                continue
            if line.startswith("[") and "]" in line:
                name = line[1:line.index("]")].strip()
                current = sections.setdefault(name, {})
                continue
            key, sep, value = line.partition("=")
            if not sep:
                continue
            value = value.strip()
            if len(value) >= 2 and value[0] == value[-1] == '"':
                value = value[1:-1]
            current[key.strip()] = value
        return cls(sections)

    def get(self, section: str, key: str) -> Optional[str]:
        """Return the value of ``key`` in ``section``, or None if absent."""
        return self.sections.get(section, {}).get(key)


def to_int(value: Optional[str]) -> int:
    """Read a leading decimal integer; missing or non-numeric values give 0."""
    if value is None:
        return 0
    match = _INT_PREFIX.match(value)
    return int(match.group(1)) if match else 0


def hex_to_int(text: str) -> int:
    """Read hexadecimal digits into an unsigned 32-bit value.

    Characters that are not hex digits contribute their low four bits.
    """
    result = 0
    for byte in text.encode("utf-8"):
        if 0x30 <= byte <= 0x39:
            digit = byte - 0x30
        elif 0x61 <= byte <= 0x66:
            digit = byte - 0x61 + 10
        elif 0x41 <= byte <= 0x46:
            digit = byte - 0x41 + 10
        else:
            digit = byte
        result = ((result << 4) | (digit & 0xF)) & 0xFFFFFFFF
    return result


def rgb_from_hex(text: str) -> tuple:
    """Turn a six-digit ``RRGGBB`` string into an ``(r, g, b)`` tuple."""
    if text is None or len(text) < 6:
        raise ValueError(f"expected a six-digit RRGGBB colour, got {text!r}")
    return hex_to_int(text[0:2]), hex_to_int(text[2:4]), hex_to_int(text[4:6])


def theme_resource(ini: IniFile, section: str, key: str, theme_dir: str) -> str:
    """Resolve a theme resource path.

    The value is looked up in ``section``, then ``DEFAULT``, then
    ``GENERAL``, and placed under ``theme_dir``. A key found nowhere
    gives an empty string.
    """
    for name in (section, *_SECTION_FALLBACKS):
        value = ini.get(name, key)
        if value is not None:
            if not theme_dir:
                return value
            return f"{theme_dir.rstrip('/')}/{value}"
    return ""


def _section_colour(ini: IniFile, section: str, key: str) -> tuple:
    value = ini.get(section, key)
    if value is None:
        value = ini.get("DEFAULT", key)
    if value is None:
        raise KeyError(f"colour {key!r} missing from [{section}] and [DEFAULT]")
    return rgb_from_hex(value)


@dataclass(frozen=True)
class SectionColors:
    """The six colours a section is drawn with, each an ``(r, g, b)`` tuple."""

    header_background: tuple
    header_font: tuple
    body_background: tuple
    body_font: tuple
    selected_item_background: tuple
    selected_item_font: tuple

    @classmethod
    def from_ini(cls, ini: IniFile, section: str) -> "SectionColors":
        """Read a section's colours, falling back to ``DEFAULT`` per key."""
        return cls(
            header_background=_section_colour(ini, section, "headerBackGround"),
            header_font=_section_colour(ini, section, "headerFont"),
            body_background=_section_colour(ini, section, "bodyBackground"),
            body_font=_section_colour(ini, section, "bodyFont"),
            selected_item_background=_section_colour(ini, section, "selectedItemBackground"),
            selected_item_font=_section_colour(ini, section, "selectedItemFont"),
        )


class ModeSettings(NamedTuple):
    """Font size and page sizes in effect for one display mode."""

    mode: int
    font_size: int
    items_per_page: int
    fullscreen_items_per_page: int


@dataclass(frozen=True)
class ThemeLayout:
    """Numeric layout settings from a theme's ``GENERAL`` section.

    Field names match the INI keys; missing keys read as 0.
    """

    system_w_in_custom: int = 0
    system_h_in_custom: int = 0
    colorful_fullscreen_menu: int = 0
    display_section_group_name: int = 0
    game_list_position_in_simple: int = 0
    game_list_position_in_full_simple: int = 0
    header_position_in_simple: int = 0
    footer_position_in_simple: int = 0
    game_list_position_in_traditional: int = 0
    game_list_position_in_full_traditional: int = 0
    header_position_in_traditional: int = 0
    footer_position_in_traditional: int = 0
    items_separation_in_simple: int = 0
    items_separation_in_traditional: int = 0
    items_separation_in_drunken_monkey: int = 0
    game_list_position_in_drunken_monkey: int = 0
    game_list_position_in_full_drunken_monkey: int = 0
    header_position_in_drunken_monkey: int = 0
    footer_position_in_drunken_monkey: int = 0
    items_in_custom: int = 0
    items_separation_in_custom: int = 0
    items_in_full_custom: int = 0
    game_list_alignment_in_custom: int = 0
    game_list_x_in_custom: int = 0
    game_list_y_in_custom: int = 0
    game_list_w_in_custom: int = 0
    game_list_position_in_full_custom: int = 0
    art_max_w_in_custom: int = 0
    art_max_h_in_custom: int = 0
    art_x_in_custom: int = 0
    art_y_in_custom: int = 0
    system_x_in_custom: int = 0
    system_y_in_custom: int = 0
    font_size_custom: int = 0
    text1_font_size_in_custom: int = 0
    text1_x_in_custom: int = 0
    text1_y_in_custom: int = 0
    text1_alignment_in_custom: int = 0
    text2_font_size_in_custom: int = 0
    text2_x_in_custom: int = 0
    text2_y_in_custom: int = 0
    text2_alignment_in_custom: int = 0
    art_text_distance_from_picture_in_custom: int = 0
    art_text_line_separation_in_custom: int = 0
    art_text_font_size_in_custom: int = 0
    font_size: int = 0
    transparent_shading: int = 0
    items_in_simple: int = 0
    items_in_full_simple: int = 0
    items_in_traditional: int = 0
    items_in_full_traditional: int = 0
    items_in_drunken_monkey: int = 0
    items_in_full_drunken_monkey: int = 0
    fullscreen_footer_on_top: int = 0

    @classmethod
    def from_ini(cls, ini: IniFile) -> "ThemeLayout":
        """Read every layout value from the ``GENERAL`` section."""
        return cls(**{f.name: to_int(ini.get("GENERAL", f.name)) for f in fields(cls)})

    def mode_settings(self, mode: int) -> ModeSettings:
        """Return the settings for display ``mode``.

        Modes 0, 1 and 2 are simple, traditional and drunken monkey; any
        other value selects the custom mode 3.
        """
        if mode == 0:
            return ModeSettings(0, self.font_size, self.items_in_simple, self.items_in_full_simple)
        if mode == 1:
            return ModeSettings(
                1, self.font_size - 2, self.items_in_traditional, self.items_in_full_traditional
            )
        if mode == 2:
            return ModeSettings(
                2,
                self.font_size - 4,
                self.items_in_drunken_monkey,
                self.items_in_full_drunken_monkey,
            )
        return ModeSettings(3, self.font_size_custom, self.items_in_custom, self.items_in_full_custom)


@dataclass
class Theme:
    """A loaded theme: its INI data, its directory and its layout."""

    path: str
    directory: str
    ini: IniFile
    layout: ThemeLayout

    @classmethod
    def load(cls, path: Union[str, Path]) -> "Theme":
        """Load the theme INI file at ``path``."""
        path = Path(path)
        ini = IniFile.load(path)
        return cls(str(path), str(path.parent), ini, ThemeLayout.from_ini(ini))

    def section_colors(self, section: str) -> SectionColors:
        """Return the colours for ``section``."""
        return SectionColors.from_ini(self.ini, section)

    def resource(self, section: str, key: str) -> str:
        """Return the path of a resource for ``section``, or an empty string."""
        return theme_resource(self.ini, section, key, self.directory)