"""Display wall slideshow client."""

from eventwall.display.client import DisplayClient, DisplayClientError
from eventwall.display.scheduler import SlideshowScheduler
from eventwall.display.session import SlideshowSession

__all__ = [
    "DisplayClient",
    "DisplayClientError",
    "SlideshowScheduler",
    "SlideshowSession",
]
