"""Scene entities updated once per frame."""

from __future__ import annotations

import math
import time as _time
import uuid
from enum import Enum
from typing import Callable

from .animation import Animation


class Entity:
    """Something that takes part in the frame loop.

    The base hooks only keep track of where the entity is in its lifecycle;
    subclasses override them to do their own work.
    """

    def __init__(self) -> None:
        self.id = uuid.uuid4()
        self.started = False
        self.rendering = False
        self.destroyed = False
        self.last_time = 0.0
        self.last_frame_time = 0.0

    def start(self) -> None:
        """Called once when the engine starts."""
        self.started = True
        self.destroyed = False

    def frame_move(self, time: float, frame_time: float) -> None:
        """Called every frame with the current time and the last frame's duration."""
        self.last_time = time
        self.last_frame_time = frame_time

    def pre_render(self) -> None:
        """Called before the scene is rendered."""
        self.rendering = True

    def post_render(self) -> None:
        """Called after the scene is rendered."""
        self.rendering = False

    def destroy(self) -> None:
        """Called when the engine is released."""
        self.destroyed = True
        self.started = False
        self.rendering = False


class PlayState(Enum):
    IDLE = "idle"
    PLAYING = "playing"
    PAUSED = "paused"
    SNAPSHOT = "snapshot"
    RESET = "reset"


class PlayMode(Enum):
    ONCE = "once"
    LOOP = "loop"


def _milliseconds() -> float:
    return _time.perf_counter() * 1000.0


class AnimatedEntity(Entity):
    """Plays a group of animations; times are in milliseconds."""

    def __init__(self, clock: Callable[[], float] | None = None) -> None:
        super().__init__()
        self.clock = clock or _milliseconds
        self.animations: list[Animation] = []
        self.length = 0.0
        self.play_mode = PlayMode.ONCE
        self.state = PlayState.IDLE
        self.start_time = 0.0
        self.start_offset = 0.0
        self._speed = 1.0

    @property
    def speed(self) -> float:
        return self._speed

    @speed.setter
    def speed(self, value: float) -> None:
        self._speed = max(0.0, value)

    def add_animation(self, animation: Animation) -> None:
        """Add an animation, extending the total length if needed."""
        self.length = max(self.length, animation.length())
        self.animations.append(animation)

    def play(self) -> None:
        """Start from the beginning when idle, or resume when paused."""
        if self.state is PlayState.IDLE:
            self.start_time = self.clock()
            self.start_offset = 0.0
            self.state = PlayState.PLAYING
        elif self.state in (PlayState.PAUSED, PlayState.SNAPSHOT):
            self.start_time = self.clock()
            self.state = PlayState.PLAYING

    def pause(self) -> None:
        """Stop advancing, remembering how far playback got."""
        if self.state is PlayState.PLAYING:
            self.start_offset += self.clock() - self.start_time
            self.state = PlayState.PAUSED

    def reset(self) -> None:
        """Rewind; the first pose is applied on the next frame."""
        if self.state in (PlayState.PLAYING, PlayState.PAUSED, PlayState.SNAPSHOT):
            self.start_time = 0.0
            self.start_offset = 0.0
            self.state = PlayState.RESET

    def snapshot(self, offset: float) -> None:
        """Show the pose at ``offset`` on the next frame, then stay paused there."""
        self.start_time = self.clock()
        self.start_offset = offset
        self.state = PlayState.SNAPSHOT

    def _apply(self, offset: float) -> None:
        for animation in self.animations:
            animation.apply(offset)

    def frame_move(self, time: float, frame_time: float) -> None:
        super().frame_move(time, frame_time)
        if self.state is PlayState.PLAYING:
            offset = (time - self.start_time + self.start_offset) * self._speed
            if offset > self.length:
                if self.play_mode is PlayMode.ONCE:
                    self.reset()
                    return
                if self.play_mode is PlayMode.LOOP:
                    offset = math.fmod(offset, self.length) if self.length > 0 else 0.0
            self._apply(offset)
        elif self.state is PlayState.RESET:
            self._apply(0.0)
            self.state = PlayState.IDLE
        elif self.state is PlayState.SNAPSHOT:
            self._apply(self.start_offset)
            self.state = PlayState.PAUSED