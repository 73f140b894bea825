import time
from contextlib import contextmanager


def elapsed_ms(t0: float) -> int:
    return int((time.perf_counter() - t0) * 1000)


@contextmanager
def timer():
    """`with timer() as ms: ...; ms()` -> milliseconds since the block started."""
    t0 = time.perf_counter()
    yield lambda: elapsed_ms(t0)
