# Cycle driver: fetch -> decode -> execute once per cycle, with the delay
# and sound timers counted down on their own 60 Hz wall clock.

import random
import time

from chip8 import config
from chip8.decoder import decode, fetch
from chip8.errors import CpuFault
from chip8.executor import execute
from chip8.log import dump_state, log

# slack for float clocks that land a hair short of a full period
TIMER_SLACK = 1e-9


def cycles_owed(dt, cpu_hz):
    """Cycles to run for a callback that came dt seconds after the last one.

    At least one, at most a tenth of a second's worth of cycles.
    """
    limit = max(1, cpu_hz // 10)
    return min(limit, max(1, int(round(dt * cpu_hz))))


class CycleDriver:
    """Owns a Chip8State and runs it.

    ``clock`` returns seconds as a float and is what gates the timers,
    so tests can hand in a fake one. ``on_input`` is called with the
    state before each cycle and ``on_render`` after a cycle that changed
    the screen.
    """

    def __init__(self, state, clock=time.perf_counter, timer_hz=config.timer_HZ,
                 rng=None, on_input=None, on_render=None):
        self.state = state
        self.clock = clock
        self.timer_interval = 1.0 / timer_hz
        self.rng = rng if rng is not None else random.Random()
        self.on_input = on_input
        self.on_render = on_render

        self.cycle_count = 0
        self.last_instruction = None
        self._last_timer_tick = clock()

    # ---- CPU ----
    def cycle(self):
        """Run exactly one instruction. Faults propagate with the PC filled in."""
        state = self.state
        pc = state.pc

        try:
            opcode = fetch(state)
            state.pc = (pc + 2) & 0xFFFF
            ins = decode(opcode)
            execute(state, ins, self.rng)
        except CpuFault as e:
            if e.pc is None:
                e.pc = pc
            log(e)
            log(dump_state(state))
            raise

        self.cycle_count += 1
        self.last_instruction = ins
        log(f"{pc:03X}: {opcode:04X}  {ins}")
        return ins

    # ---- timers ----
    def tick_timers(self):
        """Count both timers down by one if a 60 Hz period has gone by.

        Returns True when a tick happened. Timers stop at zero.
        """
        now = self.clock()
        if now - self._last_timer_tick + TIMER_SLACK < self.timer_interval:
            return False
        state = self.state
        if state.delay > 0:
            state.delay -= 1
        if state.sound > 0:
            state.sound -= 1
        self._last_timer_tick = now
        return True

    # ---- one full step: input, cpu, timers, output ----
    def step(self):
        if self.on_input is not None:
            self.on_input(self.state)
        ins = self.cycle()
        self.tick_timers()
        if self.on_render is not None and self.state.should_draw:
            self.on_render(self.state)
            self.state.should_draw = False
        return ins

    def run(self, max_cycles):
        for _ in range(max_cycles):
            self.step()
        return self.cycle_count

    # ---- keyboard ----
    def press(self, key):
        self.state.keys[key & 0xF] = True

    def release(self, key):
        self.state.keys[key & 0xF] = False
