# ROM loading: copy a program image into memory at 0x200.

from chip8 import config
from chip8.errors import RomError
from chip8.log import log


def read_rom(path):
    log("Loading ROM:", path)
    with open(path, "rb") as f:
        return f.read()


def load_rom(state, data):
    data = bytes(data)
    if not data:
        raise RomError("ROM image is empty")
    if len(data) > config.MAX_ROM_SIZE:
        raise RomError(
            f"ROM image is {len(data)} bytes, at most {config.MAX_ROM_SIZE} fit in memory"
        )
    start = config.PROGRAM_START
    state.memory[start:start + len(data)] = data
    state.pc = start
    log(f"Loaded {len(data)} bytes at {start:03X}")
    return len(data)
