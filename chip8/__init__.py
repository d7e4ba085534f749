"""CHIP-8 virtual machine: decoder, executor and cycle driver."""

from chip8.decoder import Instruction, decode, fetch
from chip8.driver import CycleDriver
from chip8.errors import (Chip8Error, CpuFault, OutOfBoundsAccess, RomError,
                          StackOverflow, StackUnderflow, UnknownOpcode)
from chip8.executor import execute
from chip8.rom import load_rom, read_rom
from chip8.state import Chip8State, new_state

__version__ = "0.1.0"
