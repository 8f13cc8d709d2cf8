"""Menu data kept on disk: favourites, sections, groups, aliases, settings and saved state."""

from __future__ import annotations

import os
import posixpath
import shutil
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Union

from .theme import IniFile, SectionColors, Theme, to_int

STATE_VERSION = 61
"""Version number written at the top of the saved state file."""

FAVORITES_SECTION = "FAVORITES"

_FAVORITES_FOLDER = "/some/folder"
_FAVORITES_EXTENSION = ".zzz"

_CONTROL_KEYS = (
    "A", "B", "X", "Y", "L1", "L2", "R1", "R2",
    "UP", "DOWN", "LEFT", "RIGHT", "START", "SELECT", "R",
)

PathLike = Union[str, "os.PathLike[str]"]


def _tokens(text: str, separator: str) -> List[str]:
    """Split like strtok: runs of separators yield no empty tokens."""
    return [token for token in text.split(separator) if token]


# ---------------------------------------------------------------- favourites


@dataclass
class Favorite:
    """A game marked as favourite, with everything needed to launch it."""

    section: str
    name: str
    alias: str = ""
    emulator_folder: str = ""
    executable: str = ""
    files_directory: str = ""

    def _line(self) -> str:
        alias = self.alias if self.alias else " "
        return ";".join(
            (self.section, self.name, alias, self.emulator_folder, self.executable,
             self.files_directory)
        )


def save_favorites(path: PathLike, favorites: List[Favorite]) -> None:
    """Write favourites one per line, fields separated by ``;``.

    An empty alias is written as a single space. Writing stops at the first
    favourite whose name is a single character.
    """
    lines = []
    for favorite in favorites:
        if len(favorite.name) == 1:
            break
        lines.append(favorite._line())
    Path(path).write_text("\n".join(lines), encoding="utf-8")


def load_favorites(path: PathLike) -> List[Favorite]:
    """Read favourites in file order.

    Raises FileNotFoundError if the file is missing and ValueError for a
    line with fewer than six fields.
    """
    favorites = []
    with open(path, encoding="utf-8") as handle:
        for number, line in enumerate(handle, 1):
            if not line.strip():
                continue
            parts = _tokens(line, ";")
            if len(parts) < 6:
                raise ValueError(f"{path}:{number}: expected 6 fields, got {len(parts)}")
            section, name, alias, folder, executable, files_directory = parts[:6]
            if files_directory.endswith("\n"):
                files_directory = files_directory[:-1]
            favorites.append(
                Favorite(
                    section=section,
                    name=name,
                    alias="" if not alias.strip() else alias,
                    emulator_folder=folder,
                    executable=executable,
                    files_directory=files_directory,
                )
            )
    return favorites


# ------------------------------------------------------------------ sections


@dataclass
class Section:
    """One console section of the menu."""

    name: str
    executables: list = field(default_factory=list)
    emulator_directories: list = field(default_factory=list)
    files_directories: str = ""
    file_extensions: str = ""
    scaling: str = "3"
    colors: Optional[SectionColors] = None
    system_logo: str = ""
    background: str = ""
    system_picture: str = ""
    alias_file_name: str = ""
    category: str = ""
    only_file_names_no_extension: bool = False
    hidden: bool = False
    active_executable: int = 0
    current_page: int = 0
    current_game_in_page: int = 0
    real_current_game_number: int = 0


def _console_names(ini: IniFile, path: PathLike) -> List[str]:
    consoles = ini.get("CONSOLES", "consoleList")
    if consoles is None:
        raise KeyError(f"{path}: [CONSOLES] consoleList is missing")
    return [name for name in _tokens(consoles, ",") if ini.get(name, "execs") is not None]


def _themed(section: Section, theme: Theme, theme_section: str) -> None:
    section.colors = theme.section_colors(theme_section)
    section.system_logo = theme.resource(theme_section, "logo")
    section.background = theme.resource(theme_section, "background")
    section.system_picture = theme.resource(theme_section, "system")


def load_sections(path: PathLike, theme: Theme) -> List[Section]:
    """Read the sections listed in a group file, then append the favourites section.

    Only consoles in ``consoleList`` that define ``execs`` become sections.
    """
    ini = IniFile.load(path)
    sections = []
    for name in _console_names(ini, path):
        section = Section(name)
        for command in _tokens(ini.get(name, "execs") or "", ","):
            section.executables.append(posixpath.basename(command))
            section.emulator_directories.append(posixpath.dirname(command) + "/")
        section.files_directories = ini.get(name, "romDirs") or ""
        section.file_extensions = ini.get(name, "romExts") or ""
        scaling = ini.get(name, "scaling")
        section.scaling = "3" if scaling is None else scaling
        _themed(section, theme, name)
        section.alias_file_name = ini.get(name, "aliasFile") or ""
        section.category = ini.get(name, "category") or ""
        section.only_file_names_no_extension = (
            ini.get(name, "onlyFileNamesNoPathOrExtension") == "yes"
        )
        sections.append(section)

    favorites = Section(
        FAVORITES_SECTION,
        executables=[],
        emulator_directories=[_FAVORITES_FOLDER + "/"],
        files_directories=_FAVORITES_FOLDER,
        file_extensions=_FAVORITES_EXTENSION,
        category="all",
    )
    _themed(favorites, theme, FAVORITES_SECTION)
    sections.append(favorites)
    return sections


def count_sections(path: PathLike) -> int:
    """Count the consoles in a group file that define ``execs``."""
    return len(_console_names(IniFile.load(path), path))


@dataclass(frozen=True)
class SectionGroup:
    """A group file of sections, with its display name and background picture."""

    path: str
    name: str
    background: str


def load_section_groups(folder: PathLike) -> List[SectionGroup]:
    """Find group files under ``folder``, sorted by name ignoring case.

    Paths containing ``.png`` are pictures, not groups. Each group's
    background is the ``.png`` with the same stem beside it.
    """
    groups = []
    for root, dirs, files in os.walk(folder):
        dirs.sort()
        for file_name in sorted(files):
            full = os.path.join(root, file_name)
            if ".png" in full:
                continue
            stem = os.path.splitext(file_name)[0]
            groups.append(
                SectionGroup(full, stem.upper(), os.path.join(root, stem + ".png"))
            )
    groups.sort(key=lambda group: group.name.lower())
    return groups


def load_alias_list(path: PathLike) -> Dict[str, str]:
    """Read ``rom=alias`` lines into a mapping; a missing file gives no aliases."""
    aliases: Dict[str, str] = {}
    try:
        handle = open(path, encoding="utf-8")
    except FileNotFoundError:
        return aliases
    with handle:
        for line in handle:
            parts = _tokens(line.rstrip("\r\n"), "=")
            if len(parts) < 2:
                continue
            aliases[parts[0]] = parts[1]
    return aliases


# -------------------------------------------------------------------- config


@dataclass
class MenuConfig:
    """Settings from the main ``config.ini``."""

    media_folder: str
    logging_enabled: bool = False
    underclocked_speed: int = 0
    normal_speed: int = 0
    overclocked_speed: int = 0
    sleep_speed: int = 0
    screen_width: int = 0
    screen_height: int = 0
    controls: Dict[str, int] = field(default_factory=dict)


def load_config(path: PathLike) -> MenuConfig:
    """Read the main configuration file.

    Only buttons present in ``[CONTROLS]`` appear in ``controls``.
    Raises KeyError if ``[GENERAL] media_folder`` is missing.
    """
    ini = IniFile.load(path)
    media_folder = ini.get("GENERAL", "media_folder")
    if media_folder is None:
        raise KeyError(f"{path}: [GENERAL] media_folder is missing")
    controls = {
        key: to_int(value)
        for key in _CONTROL_KEYS
        if (value := ini.get("CONTROLS", key))
    }
    return MenuConfig(
        media_folder=media_folder,
        logging_enabled=to_int(ini.get("GENERAL", "logging_enabled")) == 1,
        underclocked_speed=to_int(ini.get("CPU", "underclocked_speed")),
        normal_speed=to_int(ini.get("CPU", "normal_speed")),
        overclocked_speed=to_int(ini.get("CPU", "overclocked_speed")),
        sleep_speed=to_int(ini.get("CPU", "sleep_speed")),
        screen_width=to_int(ini.get("SCREEN", "width")),
        screen_height=to_int(ini.get("SCREEN", "height")),
        controls=controls,
    )


# --------------------------------------------------------------- saved state


@dataclass
class SectionState:
    """Remembered position within one section."""

    is_active: int = 0
    page: int = 0
    game_in_page: int = 0
    real_game_number: int = 0
    return_to: int = 0


_HEADER_FIELDS = (
    "strip_games",
    "fullscreen_mode",
    "footer_visible",
    "menu_visible",
    "active_theme",
    "timeout",
    "auto_hide_logos",
    "active_group",
    "current_section",
    "current_mode",
)


@dataclass
class LastState:
    """Menu state kept between runs.

    ``section_states`` maps a group number to a mapping of section number
    to ``SectionState``.
    """

    strip_games: int = 0
    fullscreen_mode: int = 0
    footer_visible: int = 0
    menu_visible: int = 0
    active_theme: int = 0
    timeout: int = 0
    auto_hide_logos: int = 0
    active_group: int = 0
    current_section: int = 0
    current_mode: int = 0
    return_to: int = 0
    section_states: Dict[int, Dict[int, SectionState]] = field(default_factory=dict)

    def save(self, path: PathLike, group_section_counts: List[int]) -> None:
        """Write the state file.

        ``group_section_counts`` holds each group's console count; one line
        is written per section including the favourites section after them.
        In the active group the active flag follows ``current_section``.
        """
        lines = [f"{STATE_VERSION};"]
        lines.extend(f"{getattr(self, name)};" for name in _HEADER_FIELDS)
        for group, count in enumerate(group_section_counts):
            states = self.section_states.get(group, {})
            for section in range(count + 1):
                state = states.get(section, SectionState())
                active = state.is_active
                if group == self.active_group:
                    active = int(section == self.current_section)
                lines.append(
                    f"{active};{section};{state.page};{state.game_in_page};"
                    f"{state.real_game_number};{self.return_to}"
                )
        Path(path).write_text("\n".join(lines) + "\n", encoding="utf-8")


def load_last_state(path: PathLike) -> Optional[LastState]:
    """Read a saved state file.

    Returns None when the file is missing or written by another version.
    Header values absent from a short file read as -1.
    """
    try:
        text = Path(path).read_text(encoding="utf-8")
    except FileNotFoundError:
        return None
    rows = [_tokens(line, ";") or [""] for line in text.splitlines()]
    if rows and to_int(rows[0][0]) != STATE_VERSION:
        return None

    header = [to_int(row[0]) for row in rows[1:1 + len(_HEADER_FIELDS)]]
    header += [-1] * (len(_HEADER_FIELDS) - len(header))
    state = LastState(**dict(zip(_HEADER_FIELDS, header)))

    group = -1
    for number, row in enumerate(rows[1 + len(_HEADER_FIELDS):], 2 + len(_HEADER_FIELDS)):
        if len(row) < 6:
            raise ValueError(f"{path}:{number}: expected 6 fields, got {len(row)}")
        values = [to_int(token) for token in row[:6]]
        is_active, section, page, game, real_game, return_to = values
        if section == 0:
            group += 1
        if group < 0:
            raise ValueError(f"{path}:{number}: section rows must start at section 0")
        state.section_states.setdefault(group, {})[section] = SectionState(
            is_active, page, game, real_game, return_to
        )
        if group == state.active_group:
            state.return_to = return_to
    return state


# -------------------------------------------------------------- installation


def find_themes(themes_dir: PathLike) -> List[str]:
    """Return the paths of the theme directories in ``themes_dir``, sorted."""
    base = os.fspath(themes_dir)
    with os.scandir(base) as entries:
        return sorted(os.path.join(base, entry.name) for entry in entries if entry.is_dir())


def _copy_contents(source: Path, target: Path, recursive: bool) -> None:
    if not source.is_dir():
        return
    for entry in sorted(source.iterdir()):
        if entry.is_dir():
            if recursive:
                shutil.copytree(entry, target / entry.name, dirs_exist_ok=True)
        else:
            shutil.copy(entry, target / entry.name)


def create_config_dirs(home: PathLike, bundle_dir: PathLike) -> bool:
    """Create ``~/.simplemenu`` and fill it from the bundled defaults.

    Defaults are copied only when the directory did not exist yet; the
    ``tmp`` subdirectory is always ensured. Returns True if it was created.
    """
    base = Path(home) / ".simplemenu"
    try:
        base.mkdir(mode=0o700)
    except FileExistsError:
        created = False
    else:
        created = True
        bundle = Path(bundle_dir)
        _copy_contents(bundle / "config", base, recursive=False)
        for name, recursive in (
            ("apps", False),
            ("games", False),
            ("themes", True),
            ("section_groups", True),
        ):
            target = base / name
            target.mkdir(mode=0o700, exist_ok=True)
            _copy_contents(bundle / name, target, recursive)
    (base / "tmp").mkdir(mode=0o700, exist_ok=True)
    return created


def is_default_launcher(installed: PathLike, bundled: PathLike) -> bool:
    """Tell whether the installed start script matches the bundled one.

    The files are compared up to the end of the shorter one. A missing
    file means the menu is not the default launcher.
    """
    try:
        first = Path(installed).read_bytes()
        second = Path(bundled).read_bytes()
    except OSError:
        return False
    common = min(len(first), len(second))
    return first[:common] == second[:common]