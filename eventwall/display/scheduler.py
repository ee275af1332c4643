"""Slideshow scheduler state.

Pure, synchronous state for the display wall. Timing lives in
``SlideshowSession``; this class only decides what each tick, poll
result or button press does to the rotation.
"""

from dataclasses import dataclass, field

from eventwall.schemas.photo import DisplayImageDTO


@dataclass
class SlideshowScheduler:
    """Rotation over the most recently polled image list.

    ``current_index`` is positional: a refresh that reorders or resizes
    ``images`` keeps the position, not the photo. An index past the end of
    a shorter list wraps around; an empty list resets it to 0.
    """

    interval_seconds: int = 8
    current_index: int = 0
    paused: bool = False
    images: list[DisplayImageDTO] = field(default_factory=list)
    error: str | None = None

    _issued_polls: int = field(default=0, repr=False)
    _applied_poll: int = field(default=0, repr=False)

    def __post_init__(self) -> None:
        if self.interval_seconds < 1:
            raise ValueError("interval_seconds must be at least 1")

    @property
    def is_empty(self) -> bool:
        return not self.images

    @property
    def current(self) -> DisplayImageDTO | None:
        """Photo on screen, or None for the "no approved photos" state."""
        if self.is_empty:
            return None
        return self.images[self.current_index % len(self.images)]

    @property
    def advancing(self) -> bool:
        """Whether the advance timer should be running."""
        return not self.paused and not self.is_empty

    def tick(self) -> bool:
        """Timer advance. Returns True when the index moved."""
        if not self.advancing:
            return False
        self.current_index = (self.current_index + 1) % len(self.images)
        return True

    def next(self) -> None:
        if self.is_empty:
            return
        self.current_index = (self.current_index + 1) % len(self.images)

    def previous(self) -> None:
        if self.is_empty:
            return
        self.current_index = (self.current_index - 1) % len(self.images)

    def pause(self) -> None:
        self.paused = True

    def resume(self) -> None:
        self.paused = False

    def toggle_pause(self) -> bool:
        self.paused = not self.paused
        return self.paused

    def set_interval(self, seconds: int) -> bool:
        """Change the slide interval. Returns True when it changed."""
        if seconds < 1:
            raise ValueError("interval must be at least 1 second")
        if seconds == self.interval_seconds:
            return False
        self.interval_seconds = seconds
        return True

    def begin_poll(self) -> int:
        """Sequence number for a poll about to be sent."""
        self._issued_polls += 1
        return self._issued_polls

    def _accept(self, seq: int) -> bool:
        # Last write wins: a response older than one already applied is dropped
        if seq <= self._applied_poll:
            return False
        self._applied_poll = seq
        return True

    def apply_images(self, seq: int, images: list[DisplayImageDTO]) -> bool:
        """Install a successful poll result. Returns False if it was stale."""
        if not self._accept(seq):
            return False

        self.images = list(images)
        self.error = None
        if self.is_empty:
            self.current_index = 0
        elif self.current_index >= len(self.images):
            self.current_index %= len(self.images)
        return True

    def apply_error(self, seq: int, message: str) -> bool:
        """Record a failed poll; the previous images stay on screen."""
        if not self._accept(seq):
            return False
        self.error = message
        return True
