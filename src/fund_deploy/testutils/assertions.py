"""Assertions on revert reasons and addresses."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any

from web3.exceptions import ContractLogicError

from ..chain.transactions import decode_revert_reason
from ..exceptions import TransactionRevertedError
from ..utils import to_address


@dataclass
class RevertInfo:
    reason: str | None = None


@contextmanager
def assert_reverted_with(reason: str) -> Iterator[RevertInfo]:
    """Assert the block raises a revert whose reason contains ``reason``.

    Accepts both the harness' ``TransactionRevertedError`` and web3's
    ``ContractLogicError`` so raw contract calls can be asserted too.
    """

    info = RevertInfo()
    try:
        yield info
    except TransactionRevertedError as exc:
        info.reason = exc.reason
    except ContractLogicError as exc:
        info.reason = decode_revert_reason(exc)
    else:
        raise AssertionError(f"Expected revert with reason '{reason}', but nothing reverted")

    if reason not in info.reason:
        raise AssertionError(f"Expected revert reason '{reason}', got '{info.reason}'")


def assert_address_equal(actual: Any, expected: Any) -> None:
    left, right = to_address(actual), to_address(expected)
    if left != right:
        raise AssertionError(f"Expected address {right}, got {left}")
