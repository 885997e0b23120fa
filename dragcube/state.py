import typing, enum, dataclasses, types

Position = typing.Tuple[int, int, int]
FaceMap = typing.Mapping["Face", "Color"]

class Color(enum.Enum):
    WHITE = 'W'
    YELLOW = 'Y'
    RED = 'R'
    GREEN = 'G'
    BLUE = 'B'
    ORANGE = 'O'
    NEUTRAL = '-'

    @property
    def rgb(self) -> typing.Tuple[int, int, int]: return {
        Color.WHITE: (255, 255, 255),
        Color.YELLOW: (255, 213, 0),
        Color.RED: (185, 0, 0),
        Color.GREEN: (0, 155, 72),
        Color.BLUE: (0, 69, 173),
        Color.ORANGE: (255, 89, 0),
        Color.NEUTRAL: (13, 13, 13)
    }[self]

class Axis(enum.Enum):
    X = 0
    Y = 1
    Z = 2

    @property
    def index(self) -> int: return self.value

    @property
    def direction(self) -> Position: return tuple(1 if i == self.value else 0 for i in range(3))

class Face(enum.Enum):
    FRONT = enum.auto()
    BACK = enum.auto()
    LEFT = enum.auto()
    RIGHT = enum.auto()
    TOP = enum.auto()
    BOTTOM = enum.auto()

    @property
    def direction(self) -> Position: return {
        Face.LEFT:   (-1,  0,  0),
        Face.RIGHT:  (+1,  0,  0),
        Face.TOP:    ( 0, +1,  0),
        Face.BOTTOM: ( 0, -1,  0),
        Face.FRONT:  ( 0,  0, +1),
        Face.BACK:   ( 0,  0, -1)
    }[self]

    @property
    def axis(self) -> Axis: return Axis(next(i for i, d in enumerate(self.direction) if d != 0))

    @property
    def color(self) -> Color: return {
        Face.LEFT: Color.RED,
        Face.RIGHT: Color.ORANGE,
        Face.TOP: Color.BLUE,
        Face.BOTTOM: Color.GREEN,
        Face.FRONT: Color.YELLOW,
        Face.BACK: Color.WHITE
    }[self]

    @property
    def opposite(self) -> "Face": return {
        Face.LEFT: Face.RIGHT,
        Face.RIGHT: Face.LEFT,
        Face.TOP: Face.BOTTOM,
        Face.BOTTOM: Face.TOP,
        Face.FRONT: Face.BACK,
        Face.BACK: Face.FRONT
    }[self]

    @staticmethod
    def from_direction(direction: Position) -> "Face":
        return next(f for f in Face if f.direction == tuple(direction))

    def is_exposed_at(self, position: Position) -> bool:
        #A face is on the puzzle exterior if the cubie sits at the extreme of the face's axis, on the face's side
        return sum(d * c for d, c in zip(self.direction, position)) == 1

#Material order of a unit cube mesh: +x, -x, +y, -y, +z, -z
MATERIAL_ORDER = (Face.RIGHT, Face.LEFT, Face.TOP, Face.BOTTOM, Face.FRONT, Face.BACK)

LATTICE = (-1, 0, 1)

@dataclasses.dataclass(frozen=True)
class Cubie:
    position: Position
    faces: FaceMap

    def __post_init__(self):
        object.__setattr__(self, "faces", types.MappingProxyType(dict(self.faces)))

    def __hash__(self): return hash((self.position, frozenset(self.faces.items())))

    @property
    def live_faces(self) -> typing.List[Face]: return [f for f in Face if f.is_exposed_at(self.position)]

    @property
    def materials(self) -> typing.List[Color]: return [self.faces[f] for f in MATERIAL_ORDER]

    @property
    def is_core(self): return len(self.live_faces) == 0
    @property
    def is_center(self): return len(self.live_faces) == 1
    @property
    def is_edge(self): return len(self.live_faces) == 2
    @property
    def is_corner(self): return len(self.live_faces) == 3

    def __str__(self): return f"{self.position} " + "".join(self.faces[f].value for f in MATERIAL_ORDER)

class PuzzleState:
    NUM_CUBIES = 27

    cubies: typing.List[Cubie]

    def __init__(self): self.initialize()

    def initialize(self):
        self.cubies = [
            Cubie((x, y, z), { f: f.color if f.is_exposed_at((x, y, z)) else Color.NEUTRAL for f in Face })
            for x in LATTICE for y in LATTICE for z in LATTICE
        ]

    def cubie_at(self, index: int) -> Cubie:
        if not 0 <= index < len(self.cubies): raise IndexError(f"cubie index {index} out of range")
        return self.cubies[index]

    @staticmethod
    def index_of(position: Position) -> int:
        x, y, z = position
        if x not in LATTICE or y not in LATTICE or z not in LATTICE: raise ValueError(f"position {position} is not on the lattice")
        return (x+1)*9 + (y+1)*3 + (z+1)

    @staticmethod
    def position_of(index: int) -> Position:
        if not 0 <= index < PuzzleState.NUM_CUBIES: raise IndexError(f"cubie index {index} out of range")
        return (index // 9 - 1, index // 3 % 3 - 1, index % 3 - 1)

    def positions(self) -> typing.List[typing.Tuple[int, Position]]: return [(i, c.position) for i, c in enumerate(self.cubies)]

    def face_maps(self) -> typing.List[FaceMap]: return [c.faces for c in self.cubies]

    def layer(self, axis: Axis, layer: int) -> typing.FrozenSet[int]:
        return frozenset(i for i, c in enumerate(self.cubies) if c.position[axis.index] == layer)

    def apply(self, rotation: "LayerRotation"):
        #Validate the whole rotation before touching any cubie
        if not isinstance(rotation.axis, Axis): raise ValueError(f"invalid rotation axis {rotation.axis!r}")
        if rotation.layer not in LATTICE: raise ValueError(f"invalid layer coordinate {rotation.layer!r}")
        if rotation.sign not in (-1, +1): raise ValueError(f"invalid rotation sign {rotation.sign!r}")
        if frozenset(rotation.affected) != self.layer(rotation.axis, rotation.layer):
            raise ValueError(f"affected cubies of {rotation} do not match layer {rotation.axis.name}={rotation.layer}")

        #Compute all new face maps, then swap them in
        new_maps = rotation.permute(self.face_maps())
        self.cubies = [c if m is c.faces else Cubie(c.position, m) for c, m in zip(self.cubies, new_maps)]

    def facelets(self, face: Face) -> typing.List[Color]:
        return [c.faces[face] for c in self.cubies if face.is_exposed_at(c.position)]

    @property
    def is_solved(self) -> bool:
        return all(len(set(self.facelets(f))) == 1 for f in Face)

    def __len__(self): return len(self.cubies)

    def __iter__(self) -> typing.Iterator[typing.Tuple[int, Cubie]]:
        for i, c in enumerate(self.cubies): yield i, c

    def __str__(self):
        s = ""
        for f in Face:
            if len(s) > 0: s += " "
            s += "".join(c.value for c in self.facelets(f))

        return s
