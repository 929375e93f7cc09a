"""
Progress bar utility for displaying batch recalculation progress.
"""
import threading
from colorama import Fore
from .utils import color_text


class ProgressBar:
    """
    Thread-safe progress bar for per-item batch work.

    Args:
        total: Total number of items to process
        label: Label to display before the progress bar
        width: Width of the progress bar in characters
    """
    def __init__(self, total: int, label: str = "Items", width: int = 30):
        self.total = max(total, 1)
        self.label = label
        self.width = width
        self.current = 0
        self._lock = threading.Lock()

    def update(self, step: int = 1):
        """
        Advance the bar and redraw it.

        Args:
            step: Number of items completed (default: 1)
        """
        with self._lock:
            self.current = min(self.total, self.current + step)
            ratio = self.current / self.total
            filled = int(self.width * ratio)
            bar = "█" * filled + "-" * (self.width - filled)
            print(
                f"\r{color_text(f'{self.label}: [{bar}] {self.current}/{self.total} ({ratio * 100:5.1f}%)', Fore.CYAN)}",
                end="",
                flush=True,
            )

    def finish(self):
        """Redraw the final state and print a newline."""
        self.update(0)
        print()
