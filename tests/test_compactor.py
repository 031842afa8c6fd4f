from __future__ import annotations

import pytest

from fontzones.compactor import RunLengthCompactor, Zone, compact
from fontzones.exceptions import CompactionError


def test_compact_keeps_only_boundaries() -> None:
    pairs = [(0, 0), (1, 0), (2, 1), (3, 1), (4, 2), (5, 0)]

    assert compact(pairs) == [Zone(0, 0), Zone(2, 1), Zone(4, 2), Zone(5, 0)]


def test_single_index_stream_yields_one_zone() -> None:
    assert compact((cp, 0) for cp in range(1000)) == [Zone(0, 0)]


def test_feed_reports_opened_zones() -> None:
    compactor = RunLengthCompactor()

    assert compactor.feed(10, 3) == Zone(10, 3)
    assert compactor.feed(11, 3) is None
    assert compactor.feed(12, 1) == Zone(12, 1)
    assert compactor.zones == [Zone(10, 3), Zone(12, 1)]


def test_out_of_order_code_points_are_rejected() -> None:
    compactor = RunLengthCompactor()
    compactor.feed(5, 0)

    with pytest.raises(CompactionError):
        compactor.feed(5, 1)
    with pytest.raises(CompactionError):
        compactor.feed(4, 0)


def test_empty_stream_has_no_zone() -> None:
    assert compact([]) == []
