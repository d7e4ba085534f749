# Opcode handlers. Each one applies a decoded Instruction to a Chip8State.
# PC has already been advanced past the instruction when a handler runs,
# so skips add 2 more and "await key" takes 2 back off.

import random

from chip8 import config
from chip8.errors import OutOfBoundsAccess, StackOverflow, StackUnderflow


def _skip(state):
    state.pc = (state.pc + 2) & 0xFFFF


def _check_range(state, ins, count):
    # I-relative access of `count` bytes must stay inside memory
    last = state.I + count - 1
    if count > 0 and last >= config.MEMORY_SIZE:
        raise OutOfBoundsAccess(last, ins.opcode)


# ---- 0nnn / 00E0 / 00EE ----
def op_SYS(state, ins, rng):
    # 0nnn is ignored on modern interpreters
    pass


def op_CLS(state, ins, rng):
    state.vram[:] = False
    state.should_draw = True


def op_RET(state, ins, rng):
    if state.sp == 0:
        raise StackUnderflow(ins.opcode)
    state.sp -= 1
    state.pc = int(state.stack[state.sp])


# ---- jumps and calls ----
def op_JP(state, ins, rng):
    state.pc = ins.nnn


def op_CALL(state, ins, rng):
    if state.sp >= config.STACK_SIZE:
        raise StackOverflow(ins.opcode)
    state.stack[state.sp] = state.pc
    state.sp += 1
    state.pc = ins.nnn


def op_JP_V0(state, ins, rng):
    state.pc = ins.nnn + state.V[0]


# ---- conditional skips ----
def op_SE_Vx_kk(state, ins, rng):
    if state.V[ins.x] == ins.kk:
        _skip(state)


def op_SNE_Vx_kk(state, ins, rng):
    if state.V[ins.x] != ins.kk:
        _skip(state)


def op_SE_Vx_Vy(state, ins, rng):
    if state.V[ins.x] == state.V[ins.y]:
        _skip(state)


def op_SNE_Vx_Vy(state, ins, rng):
    if state.V[ins.x] != state.V[ins.y]:
        _skip(state)


# ---- register loads and arithmetic ----
def op_LD_Vx_kk(state, ins, rng):
    state.V[ins.x] = ins.kk


def op_ADD_Vx_kk(state, ins, rng):
    # no carry flag for the immediate add
    state.V[ins.x] = (state.V[ins.x] + ins.kk) & 0xFF


def op_LD_Vx_Vy(state, ins, rng):
    state.V[ins.x] = state.V[ins.y]


def op_OR(state, ins, rng):
    state.V[ins.x] |= state.V[ins.y]


def op_AND(state, ins, rng):
    state.V[ins.x] &= state.V[ins.y]


def op_XOR(state, ins, rng):
    state.V[ins.x] ^= state.V[ins.y]


# ADD writes the flag last, so x == 0xF ends up holding the carry.
# SUB, SUBN and the shifts write it first, so x == 0xF keeps the result.
def op_ADD(state, ins, rng):
    total = state.V[ins.x] + state.V[ins.y]
    state.V[ins.x] = total & 0xFF
    state.V[0xF] = 1 if total > 0xFF else 0


def op_SUB(state, ins, rng):
    vx, vy = state.V[ins.x], state.V[ins.y]
    state.V[0xF] = 1 if vx > vy else 0
    state.V[ins.x] = (vx - vy) & 0xFF


def op_SUBN(state, ins, rng):
    vx, vy = state.V[ins.x], state.V[ins.y]
    state.V[0xF] = 1 if vy > vx else 0
    state.V[ins.x] = (vy - vx) & 0xFF


# legacy shifts: Vy is ignored and the shift is always by one
def op_SHR(state, ins, rng):
    vx = state.V[ins.x]
    state.V[0xF] = vx & 0x1
    state.V[ins.x] = vx >> 1


def op_SHL(state, ins, rng):
    vx = state.V[ins.x]
    state.V[0xF] = (vx >> 7) & 0x1
    state.V[ins.x] = (vx << 1) & 0xFF


def op_RND(state, ins, rng):
    state.V[ins.x] = rng.getrandbits(8) & ins.kk


# ---- I register ----
def op_LD_I(state, ins, rng):
    state.I = ins.nnn


def op_ADD_I_Vx(state, ins, rng):
    state.I = (state.I + state.V[ins.x]) & 0xFFFF


def op_LD_F_Vx(state, ins, rng):
    state.I = config.FONT_BASE + state.V[ins.x] * config.FONT_STRIDE


# ---- display ----
def op_DRW(state, ins, rng):
    """XOR an 8 x n sprite from memory[I] onto the screen at (Vx, Vy).

    The origin wraps to the screen and so does every row and column of
    the sprite. VF is 1 if any lit pixel was turned off, else 0.
    """
    _check_range(state, ins, ins.n)
    px = state.V[ins.x] % config.width
    py = state.V[ins.y] % config.height
    vram = state.vram
    collision = False
    for row in range(ins.n):
        sprite = state.memory[state.I + row]
        if sprite == 0:
            continue
        vy = (py + row) % config.height
        for bit in range(8):
            if sprite & (0x80 >> bit):
                vx = (px + bit) % config.width
                if vram[vx, vy]:
                    collision = True
                vram[vx, vy] = not vram[vx, vy]
    state.V[0xF] = 1 if collision else 0
    state.should_draw = True


# ---- keyboard ----
def op_SKP(state, ins, rng):
    if state.keys[state.V[ins.x] & 0xF]:
        _skip(state)


def op_SKNP(state, ins, rng):
    if not state.keys[state.V[ins.x] & 0xF]:
        _skip(state)


def op_LD_Vx_K(state, ins, rng):
    # wait for a key press: stall by re-issuing this instruction next cycle
    for i in range(config.NUM_KEYS):
        if state.keys[i]:
            state.V[ins.x] = i
            return
    state.pc = (state.pc - 2) & 0xFFFF


# ---- timers ----
def op_LD_Vx_DT(state, ins, rng):
    state.V[ins.x] = state.delay


def op_LD_DT_Vx(state, ins, rng):
    state.delay = state.V[ins.x]


def op_LD_ST_Vx(state, ins, rng):
    state.sound = state.V[ins.x]


# ---- memory ----
def op_LD_B_Vx(state, ins, rng):
    _check_range(state, ins, 3)
    v = state.V[ins.x]
    state.memory[state.I] = v // 100
    state.memory[state.I + 1] = (v // 10) % 10
    state.memory[state.I + 2] = v % 10


def op_LD_I_Vx(state, ins, rng):
    # V0..Vx inclusive
    _check_range(state, ins, ins.x + 1)
    state.memory[state.I:state.I + ins.x + 1] = bytes(state.V[:ins.x + 1])


def op_LD_Vx_I(state, ins, rng):
    _check_range(state, ins, ins.x + 1)
    state.V[:ins.x + 1] = list(state.memory[state.I:state.I + ins.x + 1])


# dispatch table
HANDLERS = {
    "SYS": op_SYS,
    "CLS": op_CLS,
    "RET": op_RET,

    "JP": op_JP,
    "CALL": op_CALL,
    "SE_Vx_kk": op_SE_Vx_kk,
    "SNE_Vx_kk": op_SNE_Vx_kk,
    "SE_Vx_Vy": op_SE_Vx_Vy,
    "LD_Vx_kk": op_LD_Vx_kk,
    "ADD_Vx_kk": op_ADD_Vx_kk,

    "LD_Vx_Vy": op_LD_Vx_Vy,
    "OR": op_OR,
    "AND": op_AND,
    "XOR": op_XOR,
    "ADD": op_ADD,
    "SUB": op_SUB,
    "SHR": op_SHR,
    "SUBN": op_SUBN,
    "SHL": op_SHL,

    "SNE_Vx_Vy": op_SNE_Vx_Vy,
    "LD_I": op_LD_I,
    "JP_V0": op_JP_V0,
    "RND": op_RND,
    "DRW": op_DRW,

    "SKP": op_SKP,
    "SKNP": op_SKNP,

    "LD_Vx_DT": op_LD_Vx_DT,
    "LD_Vx_K": op_LD_Vx_K,
    "LD_DT_Vx": op_LD_DT_Vx,
    "LD_ST_Vx": op_LD_ST_Vx,
    "ADD_I_Vx": op_ADD_I_Vx,
    "LD_F_Vx": op_LD_F_Vx,
    "LD_B_Vx": op_LD_B_Vx,
    "LD_I_Vx": op_LD_I_Vx,
    "LD_Vx_I": op_LD_Vx_I,
}


def execute(state, ins, rng=random):
    """Apply one decoded instruction to the state.

    Faults (StackOverflow, StackUnderflow, OutOfBoundsAccess) are raised
    before anything is written.
    """
    HANDLERS[ins.op](state, ins, rng)
