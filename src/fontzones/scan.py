"""Walk the code point space and collect the fonts supporting each character."""

from __future__ import annotations

from collections import deque
from collections.abc import Callable, Iterator, Sequence
from concurrent.futures import Future, ThreadPoolExecutor
from itertools import islice
import unicodedata

from fontzones.oracle import CapabilityOracle


CODEPOINT_LIMIT = 0x110000
# Exclusive upper bound of a full scan.
SCAN_STOP = 0x10FFFF
PROGRESS_STEP = 0x1000

ScanEntry = tuple[int, tuple[str, ...]]


def is_private_use(codepoint: int) -> bool:
    """Return True for code points in the ``Co`` general category."""
    return unicodedata.category(chr(codepoint)) == "Co"


def _check_range(start: int, stop: int) -> None:
    if not 0 <= start < stop <= CODEPOINT_LIMIT:
        raise ValueError(
            f"Invalid scan range [{start:#x}, {stop:#x}): expected 0 <= start < stop <= "
            f"{CODEPOINT_LIMIT:#x}."
        )


def probe(
    codepoint: int,
    fonts: Sequence[str],
    oracle: CapabilityOracle,
    *,
    skip_private_use: bool = True,
) -> tuple[str, ...]:
    """Return the fonts able to render ``codepoint``, in inventory order."""
    if skip_private_use and is_private_use(codepoint):
        return ()
    return tuple(font for font in fonts if oracle.supports(font, codepoint))


def _probe_chunk(
    bounds: tuple[int, int],
    fonts: Sequence[str],
    oracle: CapabilityOracle,
    skip_private_use: bool,
) -> list[ScanEntry]:
    lo, hi = bounds
    return [
        (codepoint, probe(codepoint, fonts, oracle, skip_private_use=skip_private_use))
        for codepoint in range(lo, hi)
    ]


def scan(
    fonts: Sequence[str],
    oracle: CapabilityOracle,
    *,
    start: int = 0,
    stop: int = SCAN_STOP,
    skip_private_use: bool = True,
    workers: int = 1,
    progress: Callable[[int], None] | None = None,
) -> Iterator[ScanEntry]:
    """Yield ``(codepoint, fonts)`` for every code point of ``[start, stop)``.

    Entries always come out in ascending code point order, including when the
    probes run on ``workers`` threads. Oracle failures propagate unchanged.
    """
    _check_range(start, stop)
    return _iter_scan(
        tuple(fonts),
        oracle,
        start=start,
        stop=stop,
        skip_private_use=skip_private_use,
        workers=workers,
        progress=progress,
    )


def _iter_threaded(
    fonts: tuple[str, ...],
    oracle: CapabilityOracle,
    start: int,
    stop: int,
    skip_private_use: bool,
    workers: int,
    progress: Callable[[int], None] | None,
) -> Iterator[ScanEntry]:
    # At most ``2 * workers`` chunks are queued; closing the generator cancels them.
    executor = ThreadPoolExecutor(max_workers=workers)
    lows = iter(range(start, stop, PROGRESS_STEP))
    window: deque[Future[list[ScanEntry]]] = deque()

    def _submit(lo: int) -> None:
        bounds = (lo, min(lo + PROGRESS_STEP, stop))
        window.append(executor.submit(_probe_chunk, bounds, fonts, oracle, skip_private_use))

    try:
        for lo in islice(lows, 2 * workers):
            _submit(lo)
        while window:
            entries = window.popleft().result()
            for lo in islice(lows, 1):
                _submit(lo)
            yield from entries
            if progress is not None:
                progress(len(entries))
    finally:
        executor.shutdown(wait=True, cancel_futures=True)


def _iter_scan(
    fonts: tuple[str, ...],
    oracle: CapabilityOracle,
    *,
    start: int,
    stop: int,
    skip_private_use: bool,
    workers: int,
    progress: Callable[[int], None] | None,
) -> Iterator[ScanEntry]:
    if workers > 1:
        yield from _iter_threaded(fonts, oracle, start, stop, skip_private_use, workers, progress)
        return

    pending = 0
    for codepoint in range(start, stop):
        yield codepoint, probe(codepoint, fonts, oracle, skip_private_use=skip_private_use)
        if progress is not None:
            pending += 1
            if pending == PROGRESS_STEP:
                progress(pending)
                pending = 0
    if progress is not None and pending:
        progress(pending)


__all__ = [
    "CODEPOINT_LIMIT",
    "PROGRESS_STEP",
    "SCAN_STOP",
    "ScanEntry",
    "is_private_use",
    "probe",
    "scan",
]
