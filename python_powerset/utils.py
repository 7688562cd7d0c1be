import time
import logging
from contextlib import contextmanager
from typing import Dict, List, Iterator

_TIMINGS: Dict[str, List[float]] = {}


@contextmanager
def timed(label: str) -> Iterator[None]:
    """
    Time one benchmark run, typically a single power-set materialisation.

    The elapsed seconds are logged and appended to the samples kept under
    label, which the harness averages once all runs are done.
    """
    start = time.perf_counter()
    try:
        yield
    finally:
        dur = time.perf_counter() - start
        logging.getLogger(__name__).info("%s took %.3f s", label, dur)
        _TIMINGS.setdefault(label, []).append(dur)


def timings() -> Dict[str, List[float]]:
    """Timing samples in seconds, keyed by label (the strategy name in benchmarks)."""
    return _TIMINGS


def reset_timings(label: str | None = None) -> None:
    """Drop the samples of label, or all samples if label is None."""
    if label is None:
        _TIMINGS.clear()
    else:
        _TIMINGS.pop(label, None)
