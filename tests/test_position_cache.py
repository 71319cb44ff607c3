"""Tests for the member position cache."""
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from decimal import Decimal
from typing import List, Optional

import pytest

from sheetbinder.domain.annotations import excel_field, excel_object, mapped_excel_object
from sheetbinder.domain.exceptions import ConfigurationError
from sheetbinder.domain.models import MemberBinding
from sheetbinder.services.position_cache import MemberPositionCache


@dataclass
class Invoice:
    number: str = excel_field(1)


@excel_object(start=1, end=5)
@dataclass
class Line:
    amount: Decimal = excel_field(3)
    sku: str = excel_field(1)
    note: Optional[str] = excel_field(2)
    untracked: int = 0
    invoice: Optional[Invoice] = mapped_excel_object()


@dataclass
class Loose:
    value: List[int] = excel_field(1)


def test_position_map_orders_by_position():
    mapping = MemberPositionCache().position_map(Line)

    assert list(mapping) == [1, 2, 3]
    assert mapping[1] == MemberBinding(position=1, name="sku", value_type=str)
    assert mapping[2].value_type is str
    assert mapping[3].value_type is Decimal


def test_position_map_is_read_only():
    mapping = MemberPositionCache().position_map(Line)

    with pytest.raises(TypeError):
        mapping[9] = None


def test_cache_hit_does_not_rescan():
    cache = MemberPositionCache()

    first = cache.position_map(Line)
    second = cache.position_map(Line)

    assert first is second
    assert cache.scan_count == 1
    assert len(cache) == 1


def test_undecorated_dataclass_is_still_mapped():
    cache = MemberPositionCache()

    assert dict(cache.position_map(Invoice)) == {1: MemberBinding(1, "number", str)}
    assert cache.scan_count == 1


def test_generic_member_type_is_rejected():
    with pytest.raises(ConfigurationError, match="Loose.value"):
        MemberPositionCache().position_map(Loose)


def test_clear_forces_rescan():
    cache = MemberPositionCache()
    cache.position_map(Line)

    cache.clear()
    cache.position_map(Line)

    assert cache.scan_count == 2


def test_concurrent_first_requests_scan_once():
    cache = MemberPositionCache()

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(lambda _: cache.position_map(Line), range(32)))

    assert cache.scan_count == 1
    assert all(result is results[0] for result in results)
