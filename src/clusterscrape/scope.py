import threading


class CancelScope:
    """
    A shared cancellation signal for cooperating tasks.

    Cancelling a scope is visible to every child created from it;
    cancelling a child leaves the parent untouched.
    """

    def __init__(self, parent: "CancelScope | None" = None):
        self._event = threading.Event()
        self._parent = parent

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        if self._event.is_set():
            return True
        return self._parent is not None and self._parent.cancelled

    def child(self) -> "CancelScope":
        return CancelScope(parent=self)
