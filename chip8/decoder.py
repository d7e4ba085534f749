# Instruction fetch and decode.
# An opcode is four nibbles: the high one picks the category, and for
# 0x0, 0x8, 0xE and 0xF the low nibble or low byte picks the operation.
#   x, y = middle nibbles (registers), n = low nibble,
#   kk = low byte, nnn = low 12 bits (address)

from collections import namedtuple

from chip8 import config
from chip8.errors import OutOfBoundsAccess, UnknownOpcode


class Instruction(namedtuple("Instruction", "op opcode x y n kk nnn")):
    __slots__ = ()

    def __str__(self):
        return MNEMONICS[self.op].format(
            x=self.x, y=self.y, n=self.n, kk=self.kk, nnn=self.nnn
        )


# (mask, pattern, op) - checked in order, first match wins
OPCODES = [
    (0xFFFF, 0x00E0, "CLS"),
    (0xFFFF, 0x00EE, "RET"),
    (0xF000, 0x0000, "SYS"),

    (0xF000, 0x1000, "JP"),
    (0xF000, 0x2000, "CALL"),
    (0xF000, 0x3000, "SE_Vx_kk"),
    (0xF000, 0x4000, "SNE_Vx_kk"),
    (0xF000, 0x5000, "SE_Vx_Vy"),
    (0xF000, 0x6000, "LD_Vx_kk"),
    (0xF000, 0x7000, "ADD_Vx_kk"),

    (0xF00F, 0x8000, "LD_Vx_Vy"),
    (0xF00F, 0x8001, "OR"),
    (0xF00F, 0x8002, "AND"),
    (0xF00F, 0x8003, "XOR"),
    (0xF00F, 0x8004, "ADD"),
    (0xF00F, 0x8005, "SUB"),
    (0xF00F, 0x8006, "SHR"),
    (0xF00F, 0x8007, "SUBN"),
    (0xF00F, 0x800E, "SHL"),

    (0xF000, 0x9000, "SNE_Vx_Vy"),
    (0xF000, 0xA000, "LD_I"),
    (0xF000, 0xB000, "JP_V0"),
    (0xF000, 0xC000, "RND"),
    (0xF000, 0xD000, "DRW"),

    (0xF0FF, 0xE09E, "SKP"),
    (0xF0FF, 0xE0A1, "SKNP"),

    (0xF0FF, 0xF007, "LD_Vx_DT"),
    (0xF0FF, 0xF00A, "LD_Vx_K"),
    (0xF0FF, 0xF015, "LD_DT_Vx"),
    (0xF0FF, 0xF018, "LD_ST_Vx"),
    (0xF0FF, 0xF01E, "ADD_I_Vx"),
    (0xF0FF, 0xF029, "LD_F_Vx"),
    (0xF0FF, 0xF033, "LD_B_Vx"),
    (0xF0FF, 0xF055, "LD_I_Vx"),
    (0xF0FF, 0xF065, "LD_Vx_I"),
]

MNEMONICS = {
    "CLS": "CLS",
    "RET": "RET",
    "SYS": "SYS {nnn:#05x}",
    "JP": "JP {nnn:#05x}",
    "CALL": "CALL {nnn:#05x}",
    "SE_Vx_kk": "SE V{x:X}, {kk:#04x}",
    "SNE_Vx_kk": "SNE V{x:X}, {kk:#04x}",
    "SE_Vx_Vy": "SE V{x:X}, V{y:X}",
    "LD_Vx_kk": "LD V{x:X}, {kk:#04x}",
    "ADD_Vx_kk": "ADD V{x:X}, {kk:#04x}",
    "LD_Vx_Vy": "LD V{x:X}, V{y:X}",
    "OR": "OR V{x:X}, V{y:X}",
    "AND": "AND V{x:X}, V{y:X}",
    "XOR": "XOR V{x:X}, V{y:X}",
    "ADD": "ADD V{x:X}, V{y:X}",
    "SUB": "SUB V{x:X}, V{y:X}",
    "SHR": "SHR V{x:X}",
    "SUBN": "SUBN V{x:X}, V{y:X}",
    "SHL": "SHL V{x:X}",
    "SNE_Vx_Vy": "SNE V{x:X}, V{y:X}",
    "LD_I": "LD I, {nnn:#05x}",
    "JP_V0": "JP V0, {nnn:#05x}",
    "RND": "RND V{x:X}, {kk:#04x}",
    "DRW": "DRW V{x:X}, V{y:X}, {n}",
    "SKP": "SKP V{x:X}",
    "SKNP": "SKNP V{x:X}",
    "LD_Vx_DT": "LD V{x:X}, DT",
    "LD_Vx_K": "LD V{x:X}, K",
    "LD_DT_Vx": "LD DT, V{x:X}",
    "LD_ST_Vx": "LD ST, V{x:X}",
    "ADD_I_Vx": "ADD I, V{x:X}",
    "LD_F_Vx": "LD F, V{x:X}",
    "LD_B_Vx": "LD B, V{x:X}",
    "LD_I_Vx": "LD [I], V{x:X}",
    "LD_Vx_I": "LD V{x:X}, [I]",
}


def fetch(state):
    """Read the big-endian opcode at PC without advancing it."""
    pc = state.pc
    if pc < 0 or pc + 1 >= config.MEMORY_SIZE:
        raise OutOfBoundsAccess(pc, None, pc)
    return (state.memory[pc] << 8) | state.memory[pc + 1]


def decode(opcode):
    """Map a 16-bit opcode to an Instruction, or raise UnknownOpcode.

    Pure: never touches machine state.
    """
    opcode &= 0xFFFF
    for mask, pattern, op in OPCODES:
        if (opcode & mask) == pattern:
            return Instruction(
                op=op,
                opcode=opcode,
                x=(opcode >> 8) & 0xF,
                y=(opcode >> 4) & 0xF,
                n=opcode & 0xF,
                kk=opcode & 0xFF,
                nnn=opcode & 0x0FFF,
            )
    raise UnknownOpcode(opcode)
