import asyncio, aioconsole, logging, dragcube, argparse

parser = argparse.ArgumentParser()
parser.add_argument("-d", "--debug", action="store_true", help="Enable debug logging")
parser.add_argument("-s", "--steps", type=int, default=dragcube.LayerAnimation.STEPS, help="Number of animation steps per quarter turn")
parser.add_argument("-t", "--tick", type=float, default=1/60, help="Seconds between animation steps")
args = parser.parse_args([])

def print_state(state: dragcube.PuzzleState):
    for f in dragcube.Face:
        colors = "".join(c.value for c in state.facelets(f))
        print(f"{f.name:7s} {colors[0:3]} {colors[3:6]} {colors[6:9]}")
    print(f"solved: {state.is_solved}")

async def animate(ctrl: dragcube.GestureController):
    #Drive the active animation, one step per tick
    while ctrl.tick():
        print(f"Animating {ctrl.animation} ({ctrl.animation.angle:+.3f} rad)", end=" "*10 + "\r")
        await asyncio.sleep(args.tick)
    print(" "*40, end="\r")

async def command_loop(ctrl: dragcube.GestureController):
    anim_task: asyncio.Task = None
    try:
        while True:
            cmd, *params = (await aioconsole.ainput("> ")).strip().lower().split() or [""]
            if cmd == "h" or cmd == "help":
                print("(h)elp:              Shows this help text")
                print("(q)uit:              Exits the demo")
                print("(s)how:              Shows the colors of every puzzle face")
                print("(c)ubie i:           Shows the position and face colors of cubie i")
                print("(g)esture n h s e:   Feeds a gesture: normal nx ny nz, hit position hx hy hz, drag sx sy -> ex ey")
                print("(w)atch:             Shows rotations as they are committed")
                print("(r)eset:             Resets the puzzle to the solved state")
                print("(d)ebug:             Toggles debug logging")
            elif cmd == "q" or cmd == "quit":
                print("Exiting...")
                break
            elif cmd == "s" or cmd == "show":
                print_state(ctrl.state)
            elif cmd == "c" or cmd == "cubie":
                try: print(ctrl.state.cubie_at(int(params[0])))
                except (IndexError, ValueError): print("Usage: cubie <0-26>")
            elif cmd == "g" or cmd == "gesture":
                try: vals = [float(p) for p in params]
                except ValueError: vals = []
                if len(vals) != 10:
                    print("Usage: gesture nx ny nz hx hy hz sx sy ex ey")
                    continue

                rotation = ctrl.on_gesture_complete(vals[0:3], vals[3:6], vals[6:8], vals[8:10])
                if not rotation:
                    print("Nothing happens")
                    continue

                print(f"Rotating layer {rotation.axis.name}={rotation.layer:+d} {'+' if rotation.sign > 0 else '-'}90 deg")
                if anim_task: await anim_task
                anim_task = asyncio.ensure_future(animate(ctrl))
            elif cmd == "w" or cmd == "watch":
                def rotation_cb(state: dragcube.PuzzleState, rotation: dragcube.LayerRotation):
                    print(f"ROTATION | {rotation} | {state}")

                ctrl.register_handler(rotation_cb)
                await aioconsole.ainput("Press ENTER to stop\n")
                ctrl.unregister_handler(rotation_cb)
            elif cmd == "r" or cmd == "reset":
                if ctrl.is_animating:
                    print("Wait for the current rotation to finish")
                    continue
                ctrl.state.initialize()
                print("Puzzle reset")
            elif cmd == "d" or cmd == "debug":
                if dragcube.LOGGER.level != logging.DEBUG:
                    dragcube.LOGGER.setLevel(logging.DEBUG)
                    print("Enabled debug logging")
                else:
                    dragcube.LOGGER.setLevel(logging.INFO)
                    print("Disabled debug logging")
            elif cmd == "": pass
            else: print("Unknown command")
    finally:
        if anim_task: await anim_task

async def main():
    state = dragcube.PuzzleState()
    ctrl = dragcube.GestureController(state, args.steps)

    print("Puzzle ready:")
    print_state(state)

    await command_loop(ctrl)

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)

    args = parser.parse_args()
    if args.debug: dragcube.LOGGER.setLevel(logging.DEBUG)

    asyncio.run(main())
