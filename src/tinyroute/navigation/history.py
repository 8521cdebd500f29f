"""History collaborators.

The router only needs two things from its host: the current location
string and a way to push a new entry. ``MemoryHistory`` provides both
for headless use and tests, and doubles as a navigation event source
for back/forward moves.
"""

from typing import Protocol

from tinyroute.navigation.events import Disconnect, Navigate


class History(Protocol):
    """Host history as seen by the router."""

    @property
    def location(self) -> str: ...

    def push(self, path: str) -> None: ...


class MemoryHistory:
    """An in-memory history stack.

    ``push()`` discards any forward entries, like a browser does.
    ``back()``, ``forward()`` and ``go()`` move the cursor and notify
    connected routers, which then re-dispatch the new location::

        history = MemoryHistory("/")
        router = Router(history=history)
        router.connect(history)
        router.start()
        router.load("/about")
        history.back()  # router dispatches "/" again
    """

    __slots__ = ("_entries", "_index", "_listeners")

    def __init__(self, initial: str = "/") -> None:
        self._entries: list[str] = [initial]
        self._index = 0
        self._listeners: list[Navigate] = []

    @property
    def location(self) -> str:
        return self._entries[self._index]

    @property
    def entries(self) -> tuple[str, ...]:
        return tuple(self._entries)

    @property
    def index(self) -> int:
        return self._index

    def push(self, path: str) -> None:
        del self._entries[self._index + 1 :]
        self._entries.append(path)
        self._index = len(self._entries) - 1

    def go(self, delta: int) -> bool:
        """Move the cursor by *delta* entries.

        Returns ``False`` (and notifies nobody) if the move would leave
        the stack.
        """
        target = self._index + delta
        if delta == 0 or not 0 <= target < len(self._entries):
            return False
        self._index = target
        for navigate in list(self._listeners):
            navigate(self.location)
        return True

    def back(self) -> bool:
        return self.go(-1)

    def forward(self) -> bool:
        return self.go(1)

    def connect(self, navigate: Navigate) -> Disconnect:
        """Call *navigate* with the new location after every back/forward move."""
        self._listeners.append(navigate)

        def disconnect() -> None:
            if navigate in self._listeners:
                self._listeners.remove(navigate)

        return disconnect
