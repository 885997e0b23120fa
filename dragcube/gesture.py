import logging, typing, enum
from . import log
from .state import PuzzleState
from .rotation import LayerRotation, resolve
from .animation import LayerAnimation

class GesturePhase(enum.Enum):
    IDLE = enum.auto()
    DRAGGING = enum.auto()
    RESOLVING = enum.auto()
    ANIMATING = enum.auto()

class GestureController:
    state: PuzzleState
    phase: GesturePhase
    animation: typing.Optional[LayerAnimation]
    animation_steps: typing.Optional[int]

    _pick: typing.Optional[tuple]
    _handlers: typing.List[typing.Callable[[PuzzleState, LayerRotation], None]]

    def __init__(self, state: PuzzleState, animation_steps: typing.Optional[int] = None):
        self.state = state
        self.phase = GesturePhase.IDLE
        self.animation = None
        self.animation_steps = None if animation_steps is None else LayerAnimation.check_steps(animation_steps)

        self._pick = None
        self._handlers = []

    @property
    def is_animating(self) -> bool: return self.phase == GesturePhase.ANIMATING

    def register_handler(self, cb: typing.Callable[[PuzzleState, LayerRotation], None]): self._handlers.append(cb)

    def unregister_handler(self, cb: typing.Callable[[PuzzleState, LayerRotation], None]): self._handlers.remove(cb)

    def on_pick(self, normal, hit_position, point) -> bool:
        #Only one rotation may animate at a time; gestures aren't queued
        if self.is_animating:
            log.LOGGER.log(logging.DEBUG, f"Ignoring pick while animating {self.animation}")
            return False

        self._pick = (tuple(normal), tuple(hit_position), tuple(point))
        self.phase = GesturePhase.DRAGGING
        return True

    def on_release(self, point) -> typing.Optional[LayerRotation]:
        if self.phase != GesturePhase.DRAGGING: return None
        normal, hit_position, start = self._pick
        self._pick = None

        self.phase = GesturePhase.RESOLVING
        rotation = resolve(normal, hit_position, start, tuple(point), self.state.positions(), busy=self.animation is not None)
        if rotation is None:
            self.phase = GesturePhase.IDLE
            return None

        #Mark the layer busy before handing it to the animation driver
        self.animation = LayerAnimation(rotation, self.animation_steps)
        self.phase = GesturePhase.ANIMATING
        return rotation

    def on_gesture_complete(self, normal, hit_position, drag_start, drag_end) -> typing.Optional[LayerRotation]:
        if not self.on_pick(normal, hit_position, drag_start): return None
        return self.on_release(drag_end)

    def tick(self) -> bool:
        if self.animation is None: return False

        self.animation.step()
        if not self.animation.is_complete: return True

        #Commit the color permutation, then release the busy flag
        rotation = self.animation.rotation
        self.state.apply(rotation)
        self.animation = None
        self.phase = GesturePhase.IDLE
        log.LOGGER.log(logging.DEBUG, f"Committed {rotation} -> {self.state}")

        for h in list(self._handlers): h(self.state, rotation)
        return False

    def run_to_completion(self):
        if self.animation is None: return
        for _ in range(self.animation.steps):
            if not self.tick(): break
