# We're subclassing pyglet (it handles graphics and keyboard handling)
# and overriding whatever def we need from there. The CPU itself lives in
# CycleDriver; this window only feeds it keys and shows the framebuffer.

import pyglet
from pyglet.window import key
import numpy as np

from chip8 import config
from chip8.driver import CycleDriver, cycles_owed
from chip8.errors import Chip8Error
from chip8.log import dump_state, log, toggle_logs

#map binding keys
keymap = {getattr(key, name): value for name, value in config.keymap_names.items()}


class Chip8Window(pyglet.window.Window):

    def __init__(self, state, cpu_hz=config.CPU_HZ, scale=config.scale, rng=None):
        # set before the base class can dispatch on_draw
        self.scale = scale
        self.state = state
        self.cpu_hz = cpu_hz
        self.driver = CycleDriver(state, clock=pyglet.clock.get_default().time, rng=rng)
        self._cps_counter = 0
        win_w, win_h = config.width * scale, config.height * scale
        super().__init__(
            width=win_w,
            height=win_h,
            caption="CHIP-8 Emulator",
            vsync=False
        )

        # Pre-allocated small framebuffer (64x32 RGBA), upscaled with numpy.repeat
        self._small_framebuf = np.zeros((config.height, config.width, 4), dtype=np.uint8)
        self._small_framebuf[..., 3] = 255
        self.image = pyglet.image.ImageData(
            win_w,
            win_h,
            'RGBA',
            np.repeat(np.repeat(self._small_framebuf, scale, axis=0), scale, axis=1).tobytes()
        )

        # Performance tracking
        self.cps_label = pyglet.text.Label(
            "Cycles/s: 0",
            font_size=12,
            x=5,
            y=win_h - 15,
            anchor_x='left',
            anchor_y='center',
            color=(255, 255, 255, 255)
        )

        # Schedule the loops
        pyglet.clock.schedule_interval(self.tick, 1 / cpu_hz)     # CPU cycles
        pyglet.clock.schedule(self.draw_frame)                    # Screen redraw
        pyglet.clock.schedule_interval(self._update_bench, 1.0)   # cycles/s label

    # cpu tick: pyglet may call late, so catch up on the cycles owed for dt (capped)
    def tick(self, dt):
        if self.has_exit:
            return
        cycles = cycles_owed(dt, self.cpu_hz)
        try:
            for _ in range(cycles):
                self.driver.step()
                self._cps_counter += 1
        except Chip8Error as e:
            print("Emulation error:", e)
            log(dump_state(self.state))
            self.has_exit = True
            self.close()

    def draw_frame(self, dt):
        if self.state.should_draw:
            self.dispatch_event('on_draw')

    def _update_bench(self, dt):
        self.cps_label.text = f"Cycles/s: {int(self._cps_counter / dt)}"
        self._cps_counter = 0

    # draw
    def on_draw(self):
        self.clear()
        # vram is [x, y] with y down; pyglet rows go bottom-up
        pixels = self.state.vram.T[::-1]
        self._small_framebuf[..., :3] = pixels[..., None] * np.uint8(255)

        if self.scale != 1:
            scaled = np.repeat(np.repeat(self._small_framebuf, self.scale, axis=0), self.scale, axis=1)
        else:
            scaled = self._small_framebuf

        #updates existing image without creating new object
        self.image.set_data('RGBA', self.width * 4, scaled.tobytes())
        self.image.blit(0, 0)
        self.cps_label.draw()
        self.state.should_draw = False

    # keyboard
    def on_key_press(self, symbol, modifiers):
        if symbol == key.ESCAPE:
            self.has_exit = True
            self.close()
        elif symbol == key.F1:
            toggle_logs()
        elif symbol in keymap:
            self.driver.press(keymap[symbol])

    def on_key_release(self, symbol, modifiers):
        if symbol in keymap:
            self.driver.release(keymap[symbol])

    def on_close(self):
        pyglet.clock.unschedule(self.tick)
        pyglet.clock.unschedule(self.draw_frame)
        pyglet.clock.unschedule(self._update_bench)
        super().on_close()
