import pytest

from chip8 import config
from chip8.errors import RomError
from chip8.rom import load_rom, read_rom
from chip8.state import new_state


def test_font_is_preloaded(state):
    base = config.FONT_BASE
    assert list(state.memory[base:base + 80]) == config.fontset
    assert state.memory[0x200] == 0


def test_fresh_state_is_zeroed(state):
    assert state.V == [0] * 16
    assert (state.I, state.sp, state.delay, state.sound) == (0, 0, 0, 0)
    assert state.pc == 0x200
    assert not state.vram.any()
    assert state.vram.shape == (64, 32)
    assert not state.keys.any()


def test_load_rom_copies_at_program_start(state):
    state.pc = 0x300
    assert load_rom(state, b"\x6a\x05\x12\x02") == 4
    assert state.memory[0x200:0x204] == b"\x6a\x05\x12\x02"
    assert state.pc == 0x200


def test_largest_rom_fits():
    state = new_state()
    load_rom(state, bytes([0xAB]) * config.MAX_ROM_SIZE)
    assert state.memory[0xFFF] == 0xAB


def test_rom_too_large(state):
    with pytest.raises(RomError):
        load_rom(state, bytes(config.MAX_ROM_SIZE + 1))
    assert state.memory[0x200] == 0


def test_empty_rom(state):
    with pytest.raises(RomError):
        load_rom(state, b"")


def test_read_rom(tmp_path):
    path = tmp_path / "maze.ch8"
    path.write_bytes(b"\x00\xe0")
    assert read_rom(str(path)) == b"\x00\xe0"
