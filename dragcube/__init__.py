from .log import LOGGER
from .state import Color, Face, Axis, Cubie, PuzzleState, MATERIAL_ORDER
from .rotation import LayerRotation, RING_CYCLES, axis_from_normal, layer_coordinate_from, select_layer, direction_from_drag, resolve, apply_color_permutation
from .animation import LayerAnimation
from .gesture import GesturePhase, GestureController
