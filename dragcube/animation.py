import typing, math
from pyglet.math import Mat4, Vec3
from .rotation import LayerRotation

class LayerAnimation:
    """Cosmetic quarter-turn of one layer, advanced in equal steps by an external scheduler.

    The animation never touches the puzzle state; the owner commits the rotation once
    `is_complete` turns true.
    """

    STEPS = 20

    rotation: LayerRotation
    steps: int
    step_angle: float
    cur_step: int

    def __init__(self, rotation: LayerRotation, steps: typing.Optional[int] = None):
        self.rotation = rotation
        self.steps = LayerAnimation.check_steps(LayerAnimation.STEPS if steps is None else steps)
        self.step_angle = (math.pi / 2) / self.steps
        if not math.isfinite(self.step_angle) or self.step_angle <= 0:
            raise ValueError(f"invalid animation step angle {self.step_angle!r}")

        self.cur_step = 0

    @staticmethod
    def check_steps(steps: int) -> int:
        if isinstance(steps, bool) or not isinstance(steps, int) or steps <= 0:
            raise ValueError(f"animation step count must be a positive integer, got {steps!r}")
        return steps

    def step(self) -> bool:
        if self.is_complete: return False
        self.cur_step += 1
        return True

    @property
    def is_complete(self) -> bool: return self.cur_step >= self.steps

    @property
    def progress(self) -> float: return self.cur_step / self.steps

    @property
    def angle(self) -> float:
        if self.is_complete: return self.rotation.angle
        return self.rotation.sign * self.step_angle * self.cur_step

    @property
    def transform(self) -> Mat4: return Mat4.from_rotation(self.angle, Vec3(*self.rotation.axis.direction))

    def __str__(self): return f"{self.rotation} {self.cur_step}/{self.steps}"
