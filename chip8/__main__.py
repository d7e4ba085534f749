"""
CHIP-8 emulator
===============
Usage:
  python -m chip8 ROM [--hz N] [--scale N] [--log] [--seed N]

Keypad      Keyboard
 1 2 3 C     1 2 3 4
 4 5 6 D     Q W E R
 7 8 9 E     A S D F
 A 0 B F     Z X C V

ESC quits, F1 toggles the instruction trace.
"""

import argparse
import random
import sys

from chip8 import config
from chip8.errors import RomError
from chip8.log import set_logs
from chip8.rom import load_rom, read_rom
from chip8.state import new_state


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="chip8",
        description=__doc__,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("rom", help="path to a CHIP-8 program image")
    parser.add_argument("--hz", type=int, default=config.CPU_HZ,
                        help=f"CPU cycles per second (default {config.CPU_HZ})")
    parser.add_argument("--scale", type=int, default=config.scale, metavar="N",
                        help=f"window pixels per CHIP-8 pixel (default {config.scale})")
    parser.add_argument("--log", action="store_true",
                        help="print an instruction trace")
    parser.add_argument("--seed", type=int, default=None,
                        help="seed for the RND instruction")
    args = parser.parse_args(argv)

    set_logs(args.log)

    state = new_state()
    try:
        load_rom(state, read_rom(args.rom))
    except (OSError, RomError) as e:
        print(f"Cannot load ROM {args.rom}: {e}", file=sys.stderr)
        return 1

    # imported late so loading errors show up without a display
    import pyglet
    from chip8.window import Chip8Window

    Chip8Window(state, cpu_hz=args.hz, scale=args.scale, rng=random.Random(args.seed))
    pyglet.app.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
