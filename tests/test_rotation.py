import itertools, logging, math

import pytest
from pyglet.math import Vec3

from dragcube import Axis, Color, Face, PuzzleState, RING_CYCLES, apply_color_permutation, axis_from_normal, direction_from_drag, layer_coordinate_from, resolve, select_layer
from dragcube.rotation import turn_face, turn_position

LAYERS = (-1, 0, 1)
SIGNS = (+1, -1)
ALL_TURNS = list(itertools.product(Axis, LAYERS, SIGNS))


@pytest.mark.parametrize("axis", list(Axis))
def test_select_layer_partitions_lattice(state, axis):
    layers = [select_layer(state.positions(), axis, layer) for layer in LAYERS]
    assert all(len(l) == 9 for l in layers)
    assert sorted(itertools.chain.from_iterable(layers)) == list(range(27))


def test_select_layer_rounds_positions(state):
    jittered = [(i, (x + 0.2, y - 0.3, z + 0.1)) for i, (x, y, z) in state.positions()]
    assert select_layer(jittered, Axis.Y, 1) == state.layer(Axis.Y, 1)


@pytest.mark.parametrize("face", list(Face))
def test_axis_from_face_normals(face):
    assert axis_from_normal(face.direction) == face.axis
    for scale in (0.01, 0.5, 3, 100):
        assert axis_from_normal([d * scale for d in face.direction]) == face.axis


def test_axis_from_off_axis_normal():
    assert axis_from_normal((0.1, -0.9, 0.2)) == Axis.Y
    assert axis_from_normal(Vec3(0.0, 0.0, -1.0)) == Axis.Z


@pytest.mark.parametrize("normal", [(0, 0, 0), (1e-5, -1e-5, 0), (math.nan, 1, 0), (math.inf, 0, 0)])
def test_axis_from_degenerate_normal(normal):
    assert axis_from_normal(normal) is None


def test_layer_coordinate_from_hit_position():
    assert layer_coordinate_from((0.96, -0.02, -1.04), Axis.X) == 1
    assert layer_coordinate_from((0.96, -0.02, -1.04), Axis.Y) == 0
    assert layer_coordinate_from((0.96, -0.02, -1.04), Axis.Z) == -1


def test_layer_coordinate_rounds_halves_up():
    assert layer_coordinate_from((0.5, 0, 0), Axis.X) == 1
    assert layer_coordinate_from((0, -0.5, 0), Axis.Y) == 0
    assert layer_coordinate_from((0, 0, -1.5), Axis.Z) == -1
    assert select_layer([(0, (0.5, 0, 0)), (1, (-0.5, 0, 0))], Axis.X, 0) == frozenset({1})


def test_direction_from_drag():
    assert direction_from_drag((0, 0), (1, 0)) == +1
    assert direction_from_drag((0, 0), (-1, 0)) == -1
    assert direction_from_drag((0, 0), (0, 1)) == +1
    assert direction_from_drag((0, 0), (0, -1)) == -1
    assert direction_from_drag((0, 0), (1, 1)) == direction_from_drag((0, 0), (1, 0))
    assert direction_from_drag((0, 0), (-3, 3)) == -1
    assert direction_from_drag((10, 10), (12, 4)) == -1


@pytest.mark.parametrize("axis, sign", list(itertools.product(Axis, SIGNS)))
def test_ring_cycle_matches_lattice_turn(axis, sign):
    assert len(set(RING_CYCLES[axis])) == 4
    for f in Face:
        turned = Face.from_direction(turn_position(f.direction, axis, sign))
        assert turn_face(f, axis, sign) == turned
        if f.axis == axis:
            assert turned == f


def test_ring_cycles():
    assert RING_CYCLES[Axis.Y] == (Face.FRONT, Face.RIGHT, Face.BACK, Face.LEFT)
    assert RING_CYCLES[Axis.X] == (Face.TOP, Face.FRONT, Face.BOTTOM, Face.BACK)
    assert tuple(reversed(RING_CYCLES[Axis.Z])) == (Face.RIGHT, Face.BOTTOM, Face.LEFT, Face.TOP)


def test_resolve_front_face_drag(state):
    rotation = resolve((0, 0, 1), (1, 1, 1), (100, 100), (140, 105), state.positions())
    assert rotation.axis == Axis.Z
    assert rotation.layer == 1
    assert rotation.sign == +1
    assert rotation.affected == state.layer(Axis.Z, 1)


def test_resolve_rounds_hit_and_reads_drag(state):
    rotation = resolve((0, 1, 0), (0.1, 0.9, -0.05), (0, 0), (0, -20), state.positions())
    assert (rotation.axis, rotation.layer, rotation.sign) == (Axis.Y, 1, -1)

    rotation = resolve((1, 0, 0), (1, 0, 0), (0, 0), (-5, 1), state.positions())
    assert (rotation.axis, rotation.layer, rotation.sign) == (Axis.X, 1, -1)


@pytest.mark.parametrize("normal, hit, start, end", [
    ((0, 0, 0), (1, 1, 1), (0, 0), (1, 0)),
    ((0, 0, 1), (1, 1, 3), (0, 0), (1, 0)),
    ((0, 0, 1), (1, 1, math.nan), (0, 0), (1, 0)),
])
def test_resolve_drops_bad_gestures(state, normal, hit, start, end):
    assert resolve(normal, hit, start, end, state.positions()) is None


def test_resolve_zero_drag_turns_negative(state):
    rotation = resolve((0, 0, 1), (1, 1, 1), (5, 5), (5, 5), state.positions())
    assert (rotation.axis, rotation.layer, rotation.sign) == (Axis.Z, 1, -1)


def test_resolve_drops_gesture_while_busy(state):
    assert resolve((0, 0, 1), (1, 1, 1), (0, 0), (1, 0), state.positions(), busy=True) is None


def test_resolve_reports_incomplete_layer(state, caplog):
    caplog.set_level(logging.WARNING, logger="dragcube")
    positions = state.positions()[:-1]
    assert resolve((0, 0, 1), (1, 1, 1), (0, 0), (1, 0), positions) is None
    assert any("instead of 9" in r.getMessage() for r in caplog.records)


@pytest.mark.parametrize("axis, layer, sign", ALL_TURNS)
def test_inverse_restores_state(state, make_rotation, axis, layer, sign):
    before = state.face_maps()
    rotation = make_rotation(axis, layer, sign)
    state.apply(rotation)
    state.apply(rotation.inverse)
    assert state.face_maps() == before


@pytest.mark.parametrize("axis, layer, sign", ALL_TURNS)
def test_four_turns_restore_state(state, make_rotation, axis, layer, sign):
    state.apply(make_rotation(Axis.X, 1, +1))
    state.apply(make_rotation(Axis.Z, -1, -1))
    before = state.face_maps()

    rotation = make_rotation(axis, layer, sign)
    for _ in range(4): state.apply(rotation)
    assert state.face_maps() == before


@pytest.mark.parametrize("axis, layer, sign", ALL_TURNS)
def test_apply_only_touches_affected_cubies(state, make_rotation, axis, layer, sign):
    before = [c for _, c in state]
    rotation = make_rotation(axis, layer, sign)
    state.apply(rotation)
    for i, c in state:
        if i not in rotation.affected: assert c is before[i]


@pytest.mark.parametrize("axis, layer", list(itertools.product(Axis, LAYERS)))
def test_every_layer_turn_recolors(state, make_rotation, axis, layer):
    state.apply(make_rotation(axis, layer, +1))
    assert not state.is_solved


def test_interior_faces_stay_neutral(state, make_rotation):
    for axis, layer, sign in ALL_TURNS: state.apply(make_rotation(axis, layer, sign))
    for _, c in state:
        for f in Face:
            assert (c.faces[f] == Color.NEUTRAL) != f.is_exposed_at(c.position)
    assert all(len(state.facelets(f)) == 9 for f in Face)

    colors = [c.faces[f] for _, c in state for f in c.live_faces]
    assert all(colors.count(f.color) == 9 for f in Face)


def test_permutation_is_pure(state, make_rotation):
    maps = state.face_maps()
    snapshot = [dict(m) for m in maps]
    result = apply_color_permutation(make_rotation(Axis.Y, 1, +1), maps)
    assert [dict(m) for m in maps] == snapshot
    assert result is not maps


def test_top_layer_quarter_turn(state, make_rotation):
    state.apply(make_rotation(Axis.Y, 1, +1))
    N = Color.NEUTRAL
    expected = {
        #index: (FRONT, BACK, LEFT, RIGHT, TOP, BOTTOM)
        6:  (N, Color.ORANGE, Color.WHITE, N, Color.BLUE, N),
        7:  (N, N, Color.WHITE, N, Color.BLUE, N),
        8:  (Color.RED, N, Color.WHITE, N, Color.BLUE, N),
        15: (N, Color.ORANGE, N, N, Color.BLUE, N),
        16: (N, N, N, N, Color.BLUE, N),
        17: (Color.RED, N, N, N, Color.BLUE, N),
        24: (N, Color.ORANGE, N, Color.YELLOW, Color.BLUE, N),
        25: (N, N, N, Color.YELLOW, Color.BLUE, N),
        26: (Color.RED, N, N, Color.YELLOW, Color.BLUE, N),
    }
    for i, colors in expected.items():
        c = state.cubie_at(i)
        assert c.position[1] == 1
        assert tuple(c.faces[f] for f in (Face.FRONT, Face.BACK, Face.LEFT, Face.RIGHT, Face.TOP, Face.BOTTOM)) == colors

    for i, c in state:
        if i not in expected: assert c.faces == PuzzleState().cubie_at(i).faces
    assert str(state) == "YYRYYRYYR WWOWWOWWO RRRRRRWWW OOOOOOYYY BBBBBBBBB GGGGGGGGG"
