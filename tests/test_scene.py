import pytest

from raycube.config import MapError
from raycube.scene import (
    MAX_MAP_LINES,
    check_border,
    check_walls,
    find_map_width,
    find_start,
    is_only_spaces,
    load_scene,
    parse_scene,
    read_map_lines,
)

HEADER = (
    "NO ./north.png\n"
    "SO ./south.png\n"
    "WE ./west.png\n"
    "EA ./east.png\n"
    "F 220,100,0\n"
    "C 225,30,0\n"
    "\n"
)

MAP_ROWS = [
    "111111\n",
    "100101\n",
    "101001\n",
    "1100N1\n",
    "111111\n",
]

SAMPLE = HEADER + "".join(MAP_ROWS)


def test_parse_scene_reads_header_and_map():
    scene = parse_scene(SAMPLE)
    assert scene.config.north == "./north.png"
    assert scene.config.east == "./east.png"
    assert scene.config.ceiling == (225, 30, 0)
    assert scene.config.floor == (220, 100, 0)
    assert scene.grid == tuple(MAP_ROWS)
    assert scene.height == len(MAP_ROWS)
    assert scene.orientation == "N"
    assert MAP_ROWS[scene.start_row][scene.start_col] == "N"


def test_parse_scene_width_ignores_newlines():
    scene = parse_scene(SAMPLE)
    assert scene.width == len(MAP_ROWS[0].rstrip("\n"))


def test_parse_scene_tolerates_trailing_blank_lines():
    scene = parse_scene(SAMPLE + "\n   \n\n")
    assert scene.grid == tuple(MAP_ROWS)


def test_open_map_is_rejected():
    rows = list(MAP_ROWS)
    rows[0] = "111101\n"
    with pytest.raises(MapError):
        parse_scene(HEADER + "".join(rows))


def test_space_inside_reachable_area_is_rejected():
    rows = list(MAP_ROWS)
    rows[2] = "101 01\n"
    with pytest.raises(MapError):
        parse_scene(HEADER + "".join(rows))


def test_missing_map_is_rejected():
    with pytest.raises(MapError):
        parse_scene(HEADER + "\n\n")


@pytest.mark.parametrize(
    "line, expected",
    [("   \t\n", True), ("\n", True), ("", True), ("  1\n", False), ("1N1", False)],
)
def test_is_only_spaces(line, expected):
    assert is_only_spaces(line) is expected


def test_read_map_lines_trims_blank_lines():
    lines = ["\n", "  \n", "11\n", "1N\n", "\n", " \n"]
    assert read_map_lines(lines) == ["11\n", "1N\n"]


def test_read_map_lines_keeps_inner_blank_lines():
    lines = ["11\n", "\n", "1N\n"]
    assert read_map_lines(lines) == lines


def test_read_map_lines_requires_content():
    with pytest.raises(MapError):
        read_map_lines(["\n", "   \n"])


def test_read_map_lines_rejects_too_many_rows():
    with pytest.raises(MapError):
        read_map_lines(["1\n"] * (MAX_MAP_LINES + 1))


def test_find_map_width_ignores_trailing_spaces():
    assert find_map_width(["1 1  \n", "111\n"]) == len("1 1")


def test_find_start_returns_position():
    assert find_start(MAP_ROWS) == (3, 4, "N")


def test_find_start_rejects_wrong_letter():
    with pytest.raises(MapError, match="Wrong player character"):
        find_start(["111\n", "1X1\n", "111\n"])


@pytest.mark.parametrize(
    "grid",
    [["111\n", "101\n", "111\n"], ["111\n", "1NS1\n", "111\n"]],
)
def test_find_start_requires_exactly_one_player(grid):
    with pytest.raises(MapError, match="Insufficient characters"):
        find_start(grid)


@pytest.mark.parametrize(
    "row, col, height",
    [(0, 3, 5), (2, 0, 5), (2, 9, 40), (2, 31, 40), (4, 3, 5)],
)
def test_check_border_rejects(row, col, height):
    with pytest.raises(MapError):
        check_border(row, col, height)


def test_check_walls_returns_reachable_cells():
    cells = check_walls(MAP_ROWS, 3, 4, find_map_width(MAP_ROWS))
    assert (3, 4) in cells
    assert (1, 1) not in cells
    assert all(MAP_ROWS[r][c] != "1" for r, c in cells)
    assert all(0 < r < len(MAP_ROWS) - 1 for r, _ in cells)


def test_check_walls_rejects_floor_on_last_row():
    grid = ["1111\n", "1N01\n", "1101\n"]
    with pytest.raises(MapError):
        check_walls(grid, 1, 1, find_map_width(grid))


def test_check_walls_rejects_gap_past_row_end():
    grid = ["1111\n", "1N01\n", "10\n", "1111\n"]
    with pytest.raises(MapError):
        check_walls(grid, 1, 1, find_map_width(grid))


def test_load_scene_matches_parse(tmp_path):
    path = tmp_path / "level.cub"
    path.write_text(SAMPLE, encoding="utf-8")
    assert load_scene(path) == parse_scene(SAMPLE)


def test_load_scene_missing_file(tmp_path):
    with pytest.raises(MapError, match="Couldn't load the map"):
        load_scene(tmp_path / "absent.cub")