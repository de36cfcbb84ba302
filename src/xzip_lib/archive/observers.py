# Released under MIT License.
# Copyright (c) 2025 Ladislav Bartos and Robert Vacha Lab

from time import sleep

from .events import Phase, ProgressEvent, ProgressObserver


class Throttle:
    """
    Observer that pauses the run before every entry is written.

    Attributes:
        delay (float): Time (in seconds) to wait whenever an entry is started.
    """

    def __init__(self, delay: float):
        self.delay = delay

    def __call__(self, event: ProgressEvent) -> None:
        if event.phase == Phase.STARTED and self.delay > 0:
            sleep(self.delay)


class Broadcast:
    """
    Observer that forwards every event to several observers, in the order they were given.
    """

    def __init__(self, *observers: ProgressObserver):
        self._observers = list(observers)

    def add(self, observer: ProgressObserver) -> None:
        """Register another observer."""
        self._observers.append(observer)

    def __call__(self, event: ProgressEvent) -> None:
        for observer in self._observers:
            observer(event)

    def __len__(self) -> int:
        return len(self._observers)
