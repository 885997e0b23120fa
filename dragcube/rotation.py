import logging, typing, dataclasses, math
from pyglet.math import Vec2, Vec3
from . import log
from .state import Axis, Face, Position, FaceMap, PuzzleState, LATTICE

NORMAL_THRESHOLD = 1e-3
LAYER_SIZE = 9

#Ring faces of each axis in the order a positive (right-handed) quarter turn carries them
RING_CYCLES: typing.Dict[Axis, typing.Tuple[Face, Face, Face, Face]] = {
    Axis.X: (Face.TOP, Face.FRONT, Face.BOTTOM, Face.BACK),
    Axis.Y: (Face.FRONT, Face.RIGHT, Face.BACK, Face.LEFT),
    Axis.Z: (Face.TOP, Face.LEFT, Face.BOTTOM, Face.RIGHT)
}
assert set(RING_CYCLES) == set(Axis)

def turn_face(face: Face, axis: Axis, sign: int) -> Face:
    ring = RING_CYCLES[axis]
    if face not in ring: return face
    return ring[(ring.index(face) + sign) % len(ring)]

def turn_position(position: Position, axis: Axis, sign: int) -> Position:
    x, y, z = position
    return {
        Axis.X: (x, -sign*z, sign*y),
        Axis.Y: (sign*z, y, -sign*x),
        Axis.Z: (-sign*y, sign*x, z)
    }[axis]

@dataclasses.dataclass(frozen=True)
class LayerRotation:
    axis: Axis
    layer: int
    sign: int
    affected: typing.FrozenSet[int]

    @property
    def angle(self) -> float: return self.sign * math.pi / 2

    @property
    def inverse(self) -> "LayerRotation": return LayerRotation(self.axis, self.layer, -self.sign, self.affected)

    def permute(self, face_maps: typing.Sequence[FaceMap]) -> typing.List[FaceMap]: return apply_color_permutation(self, face_maps)

    def __str__(self): return f"{self.axis.name}{self.layer:+d}{'+' if self.sign > 0 else '-'}"

def axis_from_normal(normal: typing.Iterable[float]) -> typing.Optional[Axis]:
    n = Vec3(*normal)
    mags = [abs(n.x), abs(n.y), abs(n.z)]
    if not all(math.isfinite(m) for m in mags): return None

    #Ties go to the first axis; they don't happen for face-aligned normals
    best = max(range(3), key=lambda i: mags[i])
    if mags[best] < NORMAL_THRESHOLD: return None
    return Axis(best)

def round_half_up(v: float) -> int: return int(math.floor(v + 0.5))

def layer_coordinate_from(hit_position: typing.Iterable[float], axis: Axis) -> int:
    return round_half_up(tuple(hit_position)[axis.index])

def select_layer(positions: typing.Iterable[typing.Tuple[int, typing.Iterable[float]]], axis: Axis, layer: int) -> typing.FrozenSet[int]:
    return frozenset(i for i, p in positions if round_half_up(tuple(p)[axis.index]) == layer)

def direction_from_drag(drag_start: typing.Iterable[float], drag_end: typing.Iterable[float]) -> int:
    #Fixed screen-space convention: right and down are positive, regardless of the camera
    d = Vec2(*drag_end) - Vec2(*drag_start)
    if abs(d.x) >= abs(d.y): return +1 if d.x > 0 else -1
    return +1 if d.y > 0 else -1

def resolve(normal, hit_position, drag_start, drag_end, positions, busy: bool = False) -> typing.Optional[LayerRotation]:
    if busy:
        log.LOGGER.log(logging.DEBUG, "Dropping gesture: a rotation is already in progress")
        return None

    axis = axis_from_normal(normal)
    if axis is None:
        log.LOGGER.log(logging.DEBUG, f"Dropping gesture: can't classify normal {tuple(normal)}")
        return None

    hit_position = tuple(hit_position)
    if not all(math.isfinite(c) for c in hit_position) or layer_coordinate_from(hit_position, axis) not in LATTICE:
        log.LOGGER.log(logging.DEBUG, f"Dropping gesture: hit position {hit_position} is off the lattice")
        return None
    layer = layer_coordinate_from(hit_position, axis)

    affected = select_layer(positions, axis, layer)
    if len(affected) != LAYER_SIZE:
        log.LOGGER.log(logging.WARNING, f"Layer {axis.name}={layer} selected {len(affected)} cubies instead of {LAYER_SIZE}")
        return None

    rotation = LayerRotation(axis, layer, direction_from_drag(drag_start, drag_end), affected)
    log.LOGGER.log(logging.DEBUG, f"Resolved gesture -> {rotation}")
    return rotation

def apply_color_permutation(rotation: LayerRotation, face_maps: typing.Sequence[FaceMap]) -> typing.List[FaceMap]:
    new_maps = list(face_maps)
    turned = { i: dict(face_maps[i]) for i in rotation.affected }

    for i in rotation.affected:
        position = PuzzleState.position_of(i)
        target = PuzzleState.index_of(turn_position(position, rotation.axis, rotation.sign))
        assert target in turned

        #Carry each exterior sticker along with its cubie; interior faces stay neutral where they are
        for f in Face:
            if f.is_exposed_at(position): turned[target][turn_face(f, rotation.axis, rotation.sign)] = face_maps[i][f]

    for i, m in turned.items(): new_maps[i] = m
    return new_maps
