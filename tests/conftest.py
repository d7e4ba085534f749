"""Shared fixtures for the CHIP-8 test suite."""

import random

import pytest

from chip8 import config
from chip8.driver import CycleDriver
from chip8.state import new_state


class FakeClock:
    """Stands in for time.perf_counter; only moves when told to."""

    def __init__(self, start=0.0):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


def write_program(state, *words, at=config.PROGRAM_START):
    for i, word in enumerate(words):
        state.memory[at + 2 * i] = (word >> 8) & 0xFF
        state.memory[at + 2 * i + 1] = word & 0xFF


@pytest.fixture
def state():
    return new_state()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def make_driver(state, clock):
    """Build a driver over the shared state with `words` loaded at 0x200."""
    def _make(*words, **kwargs):
        write_program(state, *words)
        state.pc = config.PROGRAM_START
        kwargs.setdefault("rng", random.Random(1234))
        return CycleDriver(state, clock=clock, **kwargs)
    return _make
