from __future__ import annotations

import pytest

from fontzones.exceptions import FontLoadError
from fontzones.oracle import StaticOracle
from fontzones.scan import PROGRESS_STEP, is_private_use, scan


class _RecordingOracle(StaticOracle):
    def __init__(self, coverage) -> None:
        super().__init__(coverage)
        self.probed: list[int] = []

    def supports(self, font: str, codepoint: int) -> bool:
        self.probed.append(codepoint)
        return super().supports(font, codepoint)


def test_scan_preserves_inventory_order() -> None:
    oracle = StaticOracle({"B": {65}, "A": {65, 66}})

    entries = list(scan(["B", "A"], oracle, start=64, stop=68))

    assert entries == [(64, ()), (65, ("B", "A")), (66, ("A",)), (67, ())]


def test_private_use_code_points_skip_the_oracle() -> None:
    oracle = _RecordingOracle({"A": {0xE000, 0xE001, 0xDFFF}})

    entries = dict(scan(["A"], oracle, start=0xDFFF, stop=0xE002))

    assert entries[0xE000] == ()
    assert entries[0xE001] == ()
    assert entries[0xDFFF] == ("A",)
    assert oracle.probed == [0xDFFF]


def test_private_use_can_be_probed_on_request() -> None:
    oracle = StaticOracle({"A": {0xE000}})

    entries = dict(scan(["A"], oracle, start=0xE000, stop=0xE001, skip_private_use=False))

    assert entries[0xE000] == ("A",)


def test_is_private_use() -> None:
    assert is_private_use(0xE000)
    assert is_private_use(0xF0000)
    assert not is_private_use(0x41)


def test_threaded_scan_matches_sequential_scan() -> None:
    oracle = StaticOracle({"A": set(range(0, 9000, 3)), "B": set(range(5000, 12000))})

    sequential = list(scan(["A", "B"], oracle, start=0, stop=12345))
    threaded = list(scan(["A", "B"], oracle, start=0, stop=12345, workers=4))

    assert threaded == sequential
    assert [cp for cp, _ in threaded] == list(range(12345))


def test_progress_counts_every_code_point() -> None:
    oracle = StaticOracle({})
    steps: list[int] = []

    list(scan([], oracle, start=0, stop=10000, progress=steps.append))

    assert sum(steps) == 10000


def test_probe_failure_aborts_the_scan() -> None:
    oracle = StaticOracle({"A": {1}})

    with pytest.raises(FontLoadError) as excinfo:
        list(scan(["A", "missing.ttf"], oracle, start=0, stop=10))

    assert excinfo.value.font == "missing.ttf"


def test_invalid_range_is_rejected_immediately() -> None:
    oracle = StaticOracle({})

    with pytest.raises(ValueError):
        scan([], oracle, start=10, stop=10)
    with pytest.raises(ValueError):
        scan([], oracle, start=0, stop=0x110001)


def test_closing_a_threaded_scan_cancels_pending_chunks() -> None:
    fonts = [f"F{index}.ttf" for index in range(8)]
    oracle = StaticOracle({font: set(range(0, 0x10000, 7)) for font in fonts})
    workers = 4

    entries = scan(fonts, oracle, workers=workers)
    assert next(entries) == (0, tuple(fonts))
    entries.close()

    # Only the queued window plus one refill may have been probed.
    assert oracle.calls <= (2 * workers + 1) * PROGRESS_STEP * len(fonts)


def test_threaded_scan_reports_progress_per_chunk() -> None:
    oracle = StaticOracle({"A": {1}})
    steps: list[int] = []
    stop = PROGRESS_STEP * 3 + 5

    list(scan(["A"], oracle, start=0, stop=stop, workers=2, progress=steps.append))

    assert steps == [PROGRESS_STEP, PROGRESS_STEP, PROGRESS_STEP, 5]
