# simplemenu

The logic of a small game launcher for handheld consoles, as a plain Python
library with no third-party dependencies.

## Modules

- `simplemenu.zoom`: `Surface` is an in-memory block of pixels. At depth 8 a
  pixel is a palette index from 0 to 255. At depth 32 a pixel is an `Rgba`
  tuple. Build one with `Surface.blank` or `Surface.from_rows`. Read it with
  `get` and `rows`, change it with `set`, and duplicate it with `copy`.
  - `zoom_surface(src, zoomx, zoomy, smooth)` scales a surface. A negative
    factor mirrors that axis. `smooth` turns on bilinear interpolation, for
    32-bit surfaces only.
  - `zoom_surface_size` gives the size the result will have.
  - `shrink_surface(src, factorx, factory)` shrinks by whole factors and
    averages each box of source pixels.
- `simplemenu.rotate`:
  - `rotozoom_surface` and `rotozoom_surface_xy` rotate by an angle in
    degrees and scale in the same step. An angle within 0.001 of zero gives
    a plain zoom.
  - `rotate_surface_90` turns a 32-bit surface clockwise in quarter turns.
  - `rotozoom_surface_size` and `rotozoom_surface_size_xy` give the size of
    the result.
- `simplemenu.theme`:
  - `IniFile` parses INI text.
  - `to_int`, `hex_to_int` and `rgb_from_hex` read values.
  - `theme_resource` resolves a resource path. It looks in the named section,
    then in `DEFAULT`, then in `GENERAL`.
  - `SectionColors` holds the six colours of a section.
  - `ThemeLayout` holds the numeric values of the `GENERAL` section.
    `mode_settings` gives the font size and page sizes of a display mode.
  - `Theme.load` loads a theme file and combines all of the above.
- `simplemenu.storage`: the files in `~/.simplemenu`.
  - `load_favorites` and `save_favorites` read and write favorites.
  - `load_sections` and `count_sections` handle section lists.
  - `load_section_groups` finds the section groups in a folder.
  - `load_alias_list` reads an alias list.
  - `load_config` reads `config.ini`.
  - `LastState.save` and `load_last_state` write and read the saved state.
  - `find_themes` lists the theme directories.
  - `create_config_dirs` creates the directory and copies bundled defaults
    into it.
  - `is_default_launcher` compares two start scripts.
- `simplemenu.navigation`:
  - `GameList` is a paged list of `Rom` entries. It scrolls by item, by page,
    or by first letter when alphabetical paging is on.
  - `advance_section` and `rewind_section` compute the neighbouring section
    number.
- `simplemenu.settings`:
  - `MenuSettings` handles the buttons on the settings screen and in the
    section-group chooser.
  - `ExecutableChooser` picks which emulator launches a section's games.
  - `FavoritesList` keeps favorites sorted by name, up to a fixed capacity.

## Example

```python
from simplemenu.zoom import Surface, zoom_surface
from simplemenu.rotate import rotate_surface_90

image = Surface.from_rows([[1, 2], [3, 4]], 8)
bigger = zoom_surface(image, 2.0, 2.0, False)
turned = rotate_surface_90(Surface.blank(4, 2, 32), 1)
print(bigger.rows(), turned.width, turned.height)
```

## What it does not do

This package has no screen, no font rendering, no image-file loading and no
command to start a menu. It also does not launch emulators or games.

The button handlers only change their own state. They return a
`SettingsAction` such as `RELOAD_THEME`, `INSTALL_LAUNCHER`, `RESTART` or
`SWITCH_GROUP`, and the calling program must carry out that action.

## Testing

```
pip install -e .[test]
pytest
```