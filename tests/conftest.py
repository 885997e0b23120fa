import pytest

from dragcube import Axis, LayerRotation, PuzzleState, GestureController


@pytest.fixture
def state():
    return PuzzleState()


@pytest.fixture
def make_rotation(state):
    def _make(axis: Axis, layer: int, sign: int) -> LayerRotation:
        return LayerRotation(axis, layer, sign, state.layer(axis, layer))
    return _make


@pytest.fixture
def controller(state):
    return GestureController(state, animation_steps=4)
