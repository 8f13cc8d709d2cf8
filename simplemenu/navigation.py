"""Moving through a paged game list and between menu sections."""

from __future__ import annotations

import posixpath
from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class Rom:
    """A game file shown in a section's list."""

    name: str
    alias: Optional[str] = None
    directory: str = ""

    @property
    def display_name(self) -> str:
        """The alias if there is one, otherwise the file name without path or extension."""
        if self.alias and self.alias.strip():
            return self.alias
        return posixpath.splitext(posixpath.basename(self.name))[0]


def _first(text: str) -> str:
    return text[:1].lower()


def _is_digit(text: str) -> bool:
    return text[:1].isascii() and text[:1].isdigit()


@dataclass
class GameList:
    """A list of games split into pages, with a selected game.

    The selection is tracked both as an index into ``roms`` and as a page
    plus a position within that page.
    """

    roms: List[Rom] = field(default_factory=list)
    items_per_page: int = 10
    alphabetical_paging: bool = False
    index: int = 0
    current_page: int = 0
    current_game_in_page: int = 0
    real_current_game_number: int = 0

    def __post_init__(self) -> None:
        if self.items_per_page < 1:
            raise ValueError("items_per_page must be at least 1")
        self.roms = list(self.roms)

    @property
    def game_count(self) -> int:
        return len(self.roms)

    @property
    def total_pages(self) -> int:
        """Number of the last page (pages are counted from 0)."""
        if not self.roms:
            return 0
        return (len(self.roms) - 1) // self.items_per_page

    @property
    def current(self) -> Optional[Rom]:
        """The selected game, or None for an empty list."""
        return self.roms[self.index] if self.roms else None

    def current_game_number(self) -> int:
        """Position of the selected game counted from the start of the list."""
        return self.current_page * self.items_per_page + self.current_game_in_page

    def _reset(self) -> None:
        self.index = 0
        self.current_page = 0
        self.current_game_in_page = 0

    def _at_start(self) -> bool:
        return self.current_page == 0 and self.current_game_in_page == 0

    def scroll_up(self) -> None:
        """Select the previous game, wrapping from the first to the last."""
        if not self.roms:
            return
        ipp = self.items_per_page
        if self.index == 0:
            count = self.game_count
            self.current_page = self.total_pages
            if self.total_pages == 0:
                self.current_game_in_page = count - 1
            elif count % ipp:
                self.current_game_in_page = count % ipp - 1
            else:
                self.current_game_in_page = ipp - 1
            self.index = count - 1
        else:
            self.index -= 1
            if self.current_game_in_page > 0:
                self.current_game_in_page -= 1
            else:
                self.current_page -= 1
                self.current_game_in_page = ipp - 1
        self.real_current_game_number = self.current_game_number()

    def scroll_down(self) -> None:
        """Select the next game, wrapping from the last to the first."""
        if not self.roms:
            return
        if self.index + 1 >= self.game_count:
            self._reset()
        else:
            self.index += 1
            if self.current_game_in_page < self.items_per_page - 1:
                self.current_game_in_page += 1
            else:
                self.current_page += 1
                self.current_game_in_page = 0
        self.real_current_game_number = self.current_game_number()

    def scroll_to_game(self, game_number: int) -> None:
        """Select game ``game_number``; a number past the list selects the first game."""
        self._reset()
        if game_number >= self.game_count:
            return
        while self.current_game_number() < game_number:
            self.scroll_down()

    def advance_page(self) -> None:
        """Jump to the next page, or to the next initial letter with alphabetical paging."""
        if not self.roms:
            return
        if self.current_page <= self.total_pages:
            if self.alphabetical_paging:
                name = self.roms[self.index].display_name
                letter = _first(name)
                while _first(name) == letter or (_is_digit(letter) and _is_digit(name)):
                    self.scroll_down()
                    name = self.roms[self.index].display_name
                    if self.index == 0:
                        break
            else:
                if self.current_page != self.total_pages:
                    step = self.items_per_page - self.current_game_in_page
                    self.current_page += 1
                    self.index = min(self.index + step, self.game_count - 1)
                else:
                    self.current_page = 0
                    self.index = 0
                self.current_game_in_page = 0
        self.real_current_game_number = self.current_game_number()

    def _previous_name(self) -> str:
        return self.roms[self.index - 1].display_name

    def rewind_page(self) -> None:
        """Jump to the previous page, or to the previous initial letter with alphabetical paging."""
        if not self.roms:
            return
        if self.alphabetical_paging:
            name = self.roms[self.index].display_name
            while not self._at_start():
                if _first(name) == _first(self._previous_name()):
                    self.scroll_up()
                    name = self.roms[self.index].display_name
                else:
                    break
            self.scroll_up()
            name = self.roms[self.index].display_name
            while not self._at_start():
                previous = self._previous_name()
                if _first(name) == _first(previous) or (_is_digit(name) and _is_digit(previous)):
                    self.scroll_up()
                    name = self.roms[self.index].display_name
                else:
                    break
        elif self.current_page > 0:
            target = self.current_page - 1
            while not (self.current_page == target and self.current_game_in_page == 0):
                self.scroll_up()
        else:
            last = self.total_pages
            while not (self.current_page == last and self.current_game_in_page == 0):
                self.scroll_up()
        self.real_current_game_number = self.current_game_number()


def advance_section(current: int, favorites_section: int) -> int:
    """Return the section after ``current``, wrapping before the favourites section.

    The favourites section itself is left unchanged.
    """
    if current == favorites_section:
        return current
    if current < favorites_section - 1:
        return current + 1
    return 0


def rewind_section(current: int, favorites_section: int, section_count: int) -> int:
    """Return the section before ``current``, wrapping to the last console section.

    ``section_count`` includes the favourites section. The favourites
    section itself is left unchanged.
    """
    if current == favorites_section:
        return current
    if current > 0:
        return current - 1
    return section_count - 2