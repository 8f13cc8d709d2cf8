import pytest

from simplemenu.navigation import (
    GameList,
    Rom,
    advance_section,
    rewind_section,
)


def make_list(names, items_per_page=3, alphabetical=False):
    return GameList([Rom(n) for n in names], items_per_page, alphabetical)


NAMES = [f"game{i}.zip" for i in range(7)]


def test_rom_display_name_prefers_alias():
    assert Rom("/roms/mario.nes", alias="Super Mario").display_name == "Super Mario"
    assert Rom("/roms/mario.nes").display_name == "mario"


def test_invalid_items_per_page():
    with pytest.raises(ValueError):
        GameList([], 0)


def test_scroll_down_tracks_index():
    games = make_list(NAMES)
    for expected in range(1, len(NAMES)):
        games.scroll_down()
        assert games.current_game_number() == expected
        assert games.index == expected
        assert games.real_current_game_number == expected


def test_scroll_down_wraps_to_start():
    games = make_list(NAMES)
    for _ in range(len(NAMES)):
        games.scroll_down()
    assert games.index == 0
    assert games.current_page == 0
    assert games.current_game_in_page == 0


def test_scroll_up_from_start_wraps_to_last():
    games = make_list(NAMES)
    games.scroll_up()
    assert games.index == len(NAMES) - 1
    assert games.current_game_number() == len(NAMES) - 1
    assert games.current_page == games.total_pages


def test_scroll_up_wraps_on_exact_pages():
    games = make_list(NAMES[:6])
    games.scroll_up()
    assert games.current_game_in_page == 3 - 1
    assert games.current_game_number() == 6 - 1


def test_scroll_down_then_up_round_trip():
    games = make_list(NAMES)
    games.scroll_to_game(4)
    games.scroll_down()
    games.scroll_up()
    assert games.current_game_number() == 4
    assert games.current.name == NAMES[4]


def test_scroll_to_game():
    games = make_list(NAMES)
    games.scroll_to_game(5)
    assert games.current.name == NAMES[5]
    assert games.current_game_number() == 5


def test_scroll_to_game_beyond_list_resets():
    games = make_list(NAMES)
    games.scroll_to_game(3)
    games.scroll_to_game(100)
    assert games.index == 0
    assert games.current_game_number() == 0


def test_advance_page_moves_one_page():
    games = make_list(NAMES)
    games.scroll_down()
    games.advance_page()
    assert games.current_page == 1
    assert games.current_game_in_page == 0
    assert games.current.name == NAMES[3]


def test_advance_page_on_last_page_wraps():
    games = make_list(NAMES)
    games.scroll_to_game(6)
    games.advance_page()
    assert games.index == 0
    assert games.current_page == 0


def test_rewind_page_goes_to_previous_page_start():
    games = make_list(NAMES)
    games.scroll_to_game(4)
    games.rewind_page()
    assert games.current_page == 0
    assert games.current.name == NAMES[0]


def test_rewind_page_from_first_page_goes_to_last_page():
    games = make_list(NAMES)
    games.rewind_page()
    assert games.current_page == games.total_pages
    assert games.current_game_in_page == 0
    assert games.current.name == NAMES[6]


ALPHA = ["a1", "a2", "b1", "b2", "c1"]


def test_alphabetical_advance_skips_to_next_letter():
    games = make_list(ALPHA, items_per_page=2, alphabetical=True)
    games.advance_page()
    assert games.current.name == "b1"
    games.advance_page()
    assert games.current.name == "c1"


def test_alphabetical_advance_wraps_at_end():
    games = make_list(ALPHA, items_per_page=2, alphabetical=True)
    games.scroll_to_game(4)
    games.advance_page()
    assert games.current.name == "a1"


def test_alphabetical_digits_grouped_together():
    games = make_list(["1x", "2y", "zed"], items_per_page=2, alphabetical=True)
    games.advance_page()
    assert games.current.name == "zed"


def test_alphabetical_rewind_goes_to_previous_letter():
    games = make_list(ALPHA, items_per_page=2, alphabetical=True)
    games.scroll_to_game(4)
    games.rewind_page()
    assert games.current.name == "b1"
    assert games.current_game_number() == games.index


def test_empty_list_is_untouched():
    games = make_list([])
    games.scroll_down()
    games.advance_page()
    games.rewind_page()
    assert games.current is None
    assert games.current_game_number() == 0


def test_advance_section():
    assert advance_section(2, 5) == 3
    assert advance_section(4, 5) == 0
    assert advance_section(5, 5) == 5


def test_rewind_section():
    assert rewind_section(3, 5, 6) == 2
    assert rewind_section(0, 5, 6) == 4
    assert rewind_section(5, 5, 6) == 5


def test_advance_then_rewind_section_round_trip():
    for section in range(5):
        assert rewind_section(advance_section(section, 5), 5, 6) == section