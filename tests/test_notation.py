import pytest

from rubik_cube.notation import face_move, inverse_notation, notation, parse_notation


@pytest.mark.parametrize("axis,layer,direction,expected", [
    ('x', 1, 1, "R"),
    ('x', -1, -1, "L'"),
    ('y', 1, -1, "U'"),
    ('y', -1, 1, "D"),
    ('z', 1, 1, "F"),
    ('z', -1, 1, "B"),
    ('x', 0, 1, "M"),
    ('y', 0, -1, "E'"),
    ('z', 0, 1, "S"),
])
def test_three_by_three(axis, layer, direction, expected):
    assert notation(axis, layer, direction, 3) == expected


def test_big_cube_inner_layers_fall_back_to_axis_index():
    assert notation('x', -1.5, 1, 4) == "L"
    assert notation('x', -0.5, 1, 4) == "x2"
    assert notation('y', 0.5, -1, 4) == "y3'"
    assert notation('z', 0, 1, 5) == "S"
    assert notation('z', 1, 1, 5) == "z4"


def test_two_by_two_is_all_outer_faces():
    assert notation('x', 0.5, 1, 2) == "R"
    assert notation('x', -0.5, 1, 2) == "L"


def test_parse():
    assert parse_notation("R'", 3) == ('x', 1.0, -1)
    assert parse_notation(" U ", 4) == ('y', 1.5, 1)
    assert parse_notation("M", 5) == ('x', 0.0, 1)
    assert parse_notation("x2", 4) == ('x', -0.5, 1)
    assert parse_notation("y3'", 4) == ('y', 0.5, -1)


@pytest.mark.parametrize("text,size", [("M", 4), ("x9", 3), ("x0", 3), ("Q", 3), ("'", 3), ("", 3), (None, 3)])
def test_parse_rejects(text, size):
    assert parse_notation(text, size) is None


def test_notation_and_parse_agree_for_every_layer_of_a_six():
    for axis in 'xyz':
        for i in range(6):
            layer = i - 2.5
            assert parse_notation(notation(axis, layer, -1, 6), 6) == (axis, layer, -1)


def test_inverse_notation():
    assert inverse_notation("R", 3) == "R'"
    assert inverse_notation("M'", 3) == "M"
    assert inverse_notation("x2'", 4) == "x2"
    assert inverse_notation("Rw", 3) == "Rw'"


def test_face_move():
    assert face_move('B', 5) == ('z', -2.0)
    assert face_move('X', 5) is None
