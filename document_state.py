import threading

from records import ConnectedDocument


class DocumentState:
    """
    Holds the document the Google service currently answers from.

    Writers run one at a time (the lock is held across fetch and commit).
    The committed value is an immutable ConnectedDocument replaced in one
    assignment, so readers never see a reference paired with another
    document's records.
    """

    def __init__(self):
        self._write_lock = threading.Lock()
        self._current = None

    @property
    def current(self):
        return self._current

    def replace(self, load):
        """
        Call load() under the writer lock and commit what it returns.
        If load raises, the previous document stays in place.
        """
        with self._write_lock:
            connected = load()
            if not isinstance(connected, ConnectedDocument):
                raise TypeError("load() must return a ConnectedDocument")
            self._current = connected
            return connected
