"""Menu choosers: the settings screen, the group picker, executables and favourites."""

from __future__ import annotations

import enum
import posixpath
from dataclasses import dataclass, field
from typing import Callable, Collection, List, Optional

from .navigation import Rom
from .storage import Favorite, Section
from .theme import ModeSettings, ThemeLayout

MAX_SCREEN_TIMEOUT = 60
"""Largest screen timeout the settings screen allows."""


class Button(enum.Enum):
    """Buttons of the handheld, as named in ``[CONTROLS]``."""

    A = "A"
    B = "B"
    X = "X"
    Y = "Y"
    L1 = "L1"
    L2 = "L2"
    R1 = "R1"
    R2 = "R2"
    UP = "UP"
    DOWN = "DOWN"
    LEFT = "LEFT"
    RIGHT = "RIGHT"
    START = "START"
    SELECT = "SELECT"
    R = "R"


class Mode(enum.IntEnum):
    """Display modes of the game list."""

    SIMPLE = 0
    TRADITIONAL = 1
    DRUNKEN_MONKEY = 2
    CUSTOM = 3


class SettingOption(enum.IntEnum):
    """Lines of the settings screen, top to bottom."""

    TIDY_ROMS = 0
    THEME = 1
    ITEMS_PER_PAGE = 2
    FULL_SCREEN_FOOTER = 3
    FULL_SCREEN_MENU = 4
    AUTO_HIDE_LOGOS = 5
    SCREEN_TIMEOUT = 6
    DEFAULT = 7
    SHUTDOWN = 8
    USB = 9


class ShutdownChoice(enum.IntEnum):
    """What leaving the menu from the shutdown line does."""

    SHUTDOWN = 0
    REBOOT = 1
    QUIT = 2


class SettingsAction(enum.Enum):
    """Work the caller has to carry out after a key press."""

    RELOAD_THEME = "reload_theme"
    INSTALL_LAUNCHER = "install_launcher"
    REMOVE_LAUNCHER = "remove_launcher"
    QUIT = "quit"
    USB_MODE = "usb_mode"
    RESTART = "restart"
    CLOSE = "close"
    OPEN_SETTINGS = "open_settings"
    SWITCH_GROUP = "switch_group"


@dataclass
class MenuSettings:
    """State of the settings screen and of the section-group picker."""

    layout: ThemeLayout = field(default_factory=ThemeLayout)
    theme_count: int = 1
    active_theme: int = 0
    chosen_setting: SettingOption = SettingOption.TIDY_ROMS
    usb_available: bool = True
    strip_games: bool = False
    footer_visible: bool = False
    menu_visible: bool = False
    auto_hide_logos: bool = False
    shutdown_enabled: bool = False
    selected_shutdown: ShutdownChoice = ShutdownChoice.SHUTDOWN
    current_mode: Mode = Mode.CUSTOM
    fullscreen_mode: bool = False
    timeout: int = 0
    hdmi_enabled: bool = False
    hdmi_changed: bool = False
    running: bool = True
    settings_open: bool = False
    group_menu_open: bool = False
    active_group: int = 0
    group_count: int = 1
    group_before_choice: int = 0

    def __post_init__(self) -> None:
        if self.theme_count < 1:
            raise ValueError("at least one theme is needed")
        if self.group_count < 1:
            raise ValueError("at least one section group is needed")
        self.chosen_setting = SettingOption(self.chosen_setting)
        self.selected_shutdown = ShutdownChoice(self.selected_shutdown)
        self.current_mode = Mode(self.current_mode)

    @property
    def _last_option(self) -> SettingOption:
        return SettingOption.USB if self.usb_available else SettingOption.SHUTDOWN

    @property
    def mode_settings(self) -> ModeSettings:
        """Font size and page sizes of the current mode."""
        return self.layout.mode_settings(int(self.current_mode))

    @property
    def font_size(self) -> int:
        return self.mode_settings.font_size

    @property
    def items_per_page(self) -> int:
        """Games per page on the screen currently shown."""
        settings = self.mode_settings
        if self.fullscreen_mode:
            return settings.fullscreen_items_per_page
        return settings.items_per_page

    def next_mode(self, direction: int) -> Mode:
        """Step to the neighbouring display mode, skipping modes with no items.

        ``direction`` is -1 (left) or 1 (right). The simple mode is always
        accepted, so the search ends there at the latest.
        """
        if direction not in (-1, 1):
            raise ValueError("direction must be -1 or 1")
        mode = int(self.current_mode)
        while True:
            mode = (mode + direction) % len(Mode)
            if mode == Mode.SIMPLE or self.layout.mode_settings(mode).items_per_page != 0:
                break
        self.current_mode = Mode(mode)
        return self.current_mode

    def _change_value(self, pressed: Collection[Button]) -> Optional[SettingsAction]:
        left = Button.LEFT in pressed
        right = Button.RIGHT in pressed
        option = self.chosen_setting
        if option is SettingOption.TIDY_ROMS:
            self.strip_games = not self.strip_games
        elif option is SettingOption.USB and self.usb_available:
            self.hdmi_changed = not self.hdmi_changed
        elif option is SettingOption.SHUTDOWN:
            if self.shutdown_enabled:
                self.selected_shutdown = (
                    ShutdownChoice.SHUTDOWN
                    if self.selected_shutdown is ShutdownChoice.REBOOT
                    else ShutdownChoice.REBOOT
                )
            else:
                step = 1 if right else -1
                self.selected_shutdown = ShutdownChoice(
                    (int(self.selected_shutdown) + step) % len(ShutdownChoice)
                )
        elif option is SettingOption.FULL_SCREEN_FOOTER:
            self.footer_visible = not self.footer_visible
        elif option is SettingOption.AUTO_HIDE_LOGOS:
            self.auto_hide_logos = not self.auto_hide_logos
        elif option is SettingOption.FULL_SCREEN_MENU:
            self.menu_visible = not self.menu_visible
        elif option is SettingOption.THEME:
            step = -1 if left else 1
            self.active_theme = (self.active_theme + step) % self.theme_count
            self.current_mode = Mode.CUSTOM
            return SettingsAction.RELOAD_THEME
        elif option is SettingOption.ITEMS_PER_PAGE:
            if left:
                self.next_mode(-1)
            if right:
                self.next_mode(1)
            return SettingsAction.RELOAD_THEME
        elif option is SettingOption.SCREEN_TIMEOUT:
            if not self.hdmi_enabled:
                if left:
                    self.timeout = max(self.timeout - 1, 0) if self.timeout > 0 else self.timeout
                elif self.timeout < MAX_SCREEN_TIMEOUT:
                    self.timeout += 1
        elif option is SettingOption.DEFAULT:
            action = (
                SettingsAction.REMOVE_LAUNCHER
                if self.shutdown_enabled
                else SettingsAction.INSTALL_LAUNCHER
            )
            if self.selected_shutdown is ShutdownChoice.QUIT:
                self.selected_shutdown = ShutdownChoice.SHUTDOWN
            self.shutdown_enabled = not self.shutdown_enabled
            return action
        return None

    def handle_settings(self, pressed: Collection[Button]) -> Optional[SettingsAction]:
        """React to buttons pressed on the settings screen.

        Returns the work left to the caller, or None when only this state
        changed.
        """
        last = int(self._last_option)
        if Button.UP in pressed:
            value = int(self.chosen_setting)
            self.chosen_setting = SettingOption(value - 1 if value > 0 else last)
            return None
        if Button.DOWN in pressed:
            value = int(self.chosen_setting)
            self.chosen_setting = SettingOption(value + 1 if value < last else 0)
            return None
        if Button.LEFT in pressed or Button.RIGHT in pressed:
            return self._change_value(pressed)
        if self.chosen_setting is SettingOption.SHUTDOWN and Button.A in pressed:
            self.running = False
            return SettingsAction.QUIT
        if (
            self.usb_available
            and self.chosen_setting is SettingOption.USB
            and Button.A in pressed
        ):
            self.settings_open = False
            return SettingsAction.USB_MODE
        if Button.START in pressed:
            self.settings_open = False
            if self.hdmi_changed != self.hdmi_enabled:
                return SettingsAction.RESTART
            return SettingsAction.CLOSE
        return None

    def handle_group_choice(self, pressed: Collection[Button]) -> Optional[SettingsAction]:
        """React to buttons pressed while picking a section group."""
        if Button.START in pressed:
            self.settings_open = True
            return SettingsAction.OPEN_SETTINGS
        if Button.UP in pressed or Button.L1 in pressed:
            self.active_group = (self.active_group - 1) % self.group_count
            return None
        if Button.DOWN in pressed or Button.R1 in pressed:
            self.active_group = (self.active_group + 1) % self.group_count
            return None
        if Button.A in pressed:
            self.group_menu_open = False
            if self.group_before_choice != self.active_group:
                return SettingsAction.SWITCH_GROUP
            self.active_group = self.group_before_choice
            return SettingsAction.CLOSE
        return None


@dataclass
class ExecutableChooser:
    """Picks which of a section's executables launches its games."""

    executables: List[str] = field(default_factory=list)
    active: int = 0
    open: bool = True

    def handle(self, pressed: Collection[Button]) -> int:
        """React to buttons and return the index of the active executable."""
        last = max(len(self.executables) - 1, 0)
        if Button.UP in pressed:
            self.active = self.active - 1 if self.active > 0 else last
        elif Button.DOWN in pressed:
            self.active = self.active + 1 if self.active < last else 0
        elif Button.A in pressed and self.open:
            self.open = False
        return self.active


def _game_name(path: str) -> str:
    return posixpath.splitext(posixpath.basename(path))[0]


def _by_name(favorite: Favorite) -> str:
    return favorite.name.lower()


@dataclass
class FavoritesList:
    """Favourite games, kept sorted, with a fixed capacity."""

    items: List[Favorite] = field(default_factory=list)
    capacity: int = 1000
    changed: bool = False
    sort_key: Callable[[Favorite], str] = _by_name

    def mark(self, rom: Rom, section: Section, only_names: bool = False) -> bool:
        """Add ``rom`` from ``section`` as a favourite.

        With ``only_names`` the file is stored without path or extension.
        Returns False when the list is full or the game is already there.
        """
        self.changed = True
        if len(self.items) >= self.capacity:
            return False
        name = _game_name(rom.name) if only_names else rom.name
        if any(favorite.name == name for favorite in self.items):
            return False
        active = section.active_executable
        alias = rom.alias if rom.alias is not None and len(rom.alias) > 2 else ""
        self.items.append(
            Favorite(
                section=section.name,
                name=name,
                alias=alias,
                emulator_folder=section.emulator_directories[active],
                executable=section.executables[active],
                files_directory=rom.directory,
            )
        )
        self.items.sort(key=self.sort_key)
        return True

    def remove(self, index: int) -> int:
        """Remove the favourite at ``index`` and return the index to select next."""
        self.changed = True
        if not 0 <= index < len(self.items):
            raise IndexError(f"no favourite at position {index}")
        del self.items[index]
        if index == len(self.items):
            return index - 1
        return index