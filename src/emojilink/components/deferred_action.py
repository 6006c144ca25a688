from dataclasses import dataclass, field
from typing import Callable


@dataclass(slots=True)
class DeferredAction:
    """A callback waiting on the scheduler clock.

    due: scheduler time (seconds) at which the action fires.
    generation: session generation captured when scheduled; stale actions are dropped.
    interval: when set, the action re-arms itself every ``interval`` seconds.
    sequence: scheduling order, used to break ties between equal due times.
    """
    label: str
    due: float
    callback: Callable[[], None] = field(repr=False)
    generation: int = 0
    interval: float | None = None
    sequence: int = 0
