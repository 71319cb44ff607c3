"""Tests for instance construction and member assignment."""
from dataclasses import dataclass
from typing import List, Optional

import pytest

from sheetbinder.domain.exceptions import FieldAccessError, InstantiationError
from sheetbinder.services.instance_builder import assign, new_instance


@dataclass
class Account:
    number: Optional[str] = None
    balance: float = 0.0
    tags: List[str] = None


@dataclass
class NeedsArgs:
    number: str


@dataclass(frozen=True)
class Frozen:
    number: str = ""


class Exploding:
    def __init__(self):
        raise RuntimeError("no")


def test_new_instance_uses_zero_argument_constructor():
    assert new_instance(Account) == Account()


def test_new_instance_wraps_constructor_failures():
    with pytest.raises(InstantiationError, match="NeedsArgs") as exc_info:
        new_instance(NeedsArgs)
    assert isinstance(exc_info.value.__cause__, TypeError)

    with pytest.raises(InstantiationError) as exc_info:
        new_instance(Exploding)
    assert isinstance(exc_info.value.__cause__, RuntimeError)


def test_assign_sets_value():
    account = Account()

    assign(account, "number", "AC-1", str)
    assign(account, "tags", ["a"], List[str])

    assert account.number == "AC-1"
    assert account.tags == ["a"]


def test_assign_allows_none():
    account = Account(number="AC-1")

    assign(account, "number", None, str)

    assert account.number is None


def test_assign_rejects_type_mismatch():
    with pytest.raises(FieldAccessError, match="Account.balance"):
        assign(Account(), "balance", "lots", float)


def test_assign_wraps_access_failures():
    with pytest.raises(FieldAccessError, match="Frozen.number"):
        assign(Frozen(), "number", "AC-1", str)
