import io
import threading
from contextlib import redirect_stdout

from modules.common.ProgressBar import ProgressBar


def test_progress_bar_reaches_total_and_prints_label():
    buf = io.StringIO()
    bar = ProgressBar(total=5, label="Items", width=10)

    with redirect_stdout(buf):
        for _ in range(5):
            bar.update()
        bar.finish()

    output = buf.getvalue()
    assert "Items" in output
    assert "5/5" in output


def test_progress_bar_incomplete():
    """Test ProgressBar that doesn't reach total."""
    buf = io.StringIO()
    bar = ProgressBar(total=10, label="Items", width=10)

    with redirect_stdout(buf):
        for _ in range(3):
            bar.update()
        bar.finish()

    assert "3/10" in buf.getvalue()


def test_progress_bar_zero_total():
    """Test ProgressBar with zero total."""
    buf = io.StringIO()
    bar = ProgressBar(total=0, label="Items", width=10)

    with redirect_stdout(buf):
        bar.update()
        bar.finish()

    assert "1/1" in buf.getvalue()



def test_progress_bar_does_not_overshoot():
    """Test ProgressBar with more updates than total."""
    buf = io.StringIO()
    bar = ProgressBar(total=5, label="Items", width=10)

    with redirect_stdout(buf):
        for _ in range(7):
            bar.update()
        bar.finish()

    assert bar.current == 5


def test_progress_bar_thread_safe_updates():
    """Test concurrent updates from worker threads."""
    buf = io.StringIO()
    bar = ProgressBar(total=40, label="Items", width=10)

    def _work():
        for _ in range(10):
            bar.update()

    with redirect_stdout(buf):
        threads = [threading.Thread(target=_work) for _ in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

    assert bar.current == 40
