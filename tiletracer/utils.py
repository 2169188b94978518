# utils.py
import threading
from typing import Callable, Optional, Tuple

ProgressCallback = Callable[[int, int], None]


class TileProgress:
    """Counts finished tiles across worker threads"""

    def __init__(self, total: int, callback: Optional[ProgressCallback] = None):
        self.total = total
        self.callback = callback
        self.finished = 0
        self.lock = threading.Lock()

    def advance(self) -> Tuple[int, float]:
        """Mark one more tile as done, returns (finished count, percent)"""
        with self.lock:
            self.finished += 1
            finished = self.finished
        percent = 100.0 * finished / self.total if self.total else 100.0
        if self.callback is not None:
            self.callback(finished, self.total)
        return finished, percent
