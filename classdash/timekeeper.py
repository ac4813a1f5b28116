"""The countdown clock for a level."""

from __future__ import annotations

import threading
import time

from classdash.sound import SoundEffect, get_instance

START_TIME = 60
TICK_SECONDS = 0.05
TICKS_PER_SECOND = 20
WARNING_SECONDS = 10


def _split(total):
    """Minutes and seconds of ``total``, truncating toward zero."""
    minutes = int(total / 60)
    return minutes, total - minutes * 60


class TimeKeeper:
    """Counts the level time down once a second while running."""

    def __init__(self, start_time=START_TIME, sound_manager=None):
        self.start_time = start_time
        self.time_elapsed = start_time
        self.end_time = 0
        self.minutes, self.seconds = _split(start_time)
        self.time_running = False
        self.iterations = 0
        self.is_warning = False
        self.warn_time = start_time
        self.played_warn_sound = False
        self._sound_manager = sound_manager
        self._lock = threading.Lock()

    def begin_timer(self):
        """Run the clock until :meth:`pause_timer` is called; blocks the caller."""
        self.time_running = True
        self.warn_time = self.start_time
        while self.time_running:
            self.step()
            time.sleep(TICK_SECONDS)

    def step(self):
        """Advance the clock by one 50 ms tick."""
        with self._lock:
            if self.time_elapsed <= 0:
                self.minutes = 0
                self.seconds = 0
                return
            self.iterations += 1
            if self.iterations < TICKS_PER_SECOND:
                return
            self.time_elapsed -= 1
            self.minutes, self.seconds = _split(self.time_elapsed)
            self.iterations = 0

            if abs(self.time_elapsed - self.warn_time) > 1:
                self.is_warning = False

            if self.time_elapsed <= WARNING_SECONDS:
                self.is_warning = True
                if not self.played_warn_sound:
                    sound = self._sound_manager or get_instance()
                    sound.play_sound(SoundEffect.CLOCK_TICK, True)
                    self.played_warn_sound = True

    def pause_timer(self):
        self.time_running = False

    def subtract_time(self, seconds):
        """Take ``seconds`` off the clock as a penalty and flash the warning."""
        with self._lock:
            self.time_elapsed -= seconds
            self.minutes, self.seconds = _split(self.time_elapsed)
            self.is_warning = True
            self.warn_time = self.time_elapsed

    def reset_timer(self):
        self.end_time = self.time_elapsed

    def get_time(self):
        """Remaining time as MM:SS."""
        minutes_pad = "0" if self.minutes < 10 else ""
        seconds_pad = "0" if self.seconds < 10 else ""
        return f"{minutes_pad}{self.minutes}:{seconds_pad}{self.seconds}"