# CHIP-8 machine state: memory, registers, timers, stack, framebuffer and keys.
# No behaviour lives here; the executor mutates it and the driver owns it.

import numpy as np

from chip8 import config


class Chip8State:

    def __init__(self):
        self.memory = bytearray(config.MEMORY_SIZE)
        self.V = [0] * config.NUM_REGISTERS      # V0..VF, VF doubles as the flag register
        self.I = 0
        self.pc = config.PROGRAM_START

        self.stack = np.zeros(config.STACK_SIZE, dtype=np.uint16)
        self.sp = 0

        self.delay = 0
        self.sound = 0

        # framebuffer indexed as vram[x, y]
        self.vram = np.zeros((config.width, config.height), dtype=bool)
        self.keys = np.zeros(config.NUM_KEYS, dtype=bool)

        # set by CLS/DRW, cleared by whoever presents the framebuffer
        self.should_draw = True

    def load_font(self):
        base = config.FONT_BASE
        self.memory[base:base + len(config.fontset)] = bytes(config.fontset)


def new_state():
    state = Chip8State()
    state.load_font()
    return state
