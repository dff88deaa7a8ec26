"""Event extraction and assertions over transaction receipts."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from web3 import Web3
from web3.contract import Contract
from web3.logs import DISCARD
from web3.types import EventData, TxReceipt

from ..utils import to_address


def extract_event(receipt: TxReceipt, contract: Contract, event_name: str) -> list[EventData]:
    """Decode every ``event_name`` log emitted in ``receipt`` by ``contract``'s ABI."""

    event = getattr(contract.events, event_name)()
    return list(event.process_receipt(receipt, errors=DISCARD))


def _normalise(value: Any) -> Any:
    if isinstance(value, Contract):
        return value.address
    if isinstance(value, str) and Web3.is_address(value):
        return to_address(value)
    if isinstance(value, list | tuple):
        return [_normalise(item) for item in value]
    if isinstance(value, bytes | bytearray):
        return bytes(value)
    return value


def match_event_args(event: EventData, expected: Mapping[str, Any]) -> None:
    """Assert that ``event`` carries ``expected`` args, comparing addresses case-insensitively."""

    args = event["args"]
    for key, value in expected.items():
        if key not in args:
            raise AssertionError(f"Event {event['event']} has no argument '{key}'")
        actual = _normalise(args[key])
        wanted = _normalise(value)
        if actual != wanted:
            raise AssertionError(
                f"Event {event['event']}.{key}: expected {wanted!r}, got {actual!r}"
            )


def assert_event(
    receipt: TxReceipt,
    contract: Contract,
    event_name: str,
    expected: Mapping[str, Any] | None = None,
) -> EventData:
    """Assert exactly one ``event_name`` was emitted and optionally check its args."""

    events = extract_event(receipt, contract, event_name)
    if len(events) != 1:
        raise AssertionError(f"Expected exactly one {event_name} event, found {len(events)}")
    if expected:
        match_event_args(events[0], expected)
    return events[0]


def assert_no_event(receipt: TxReceipt, contract: Contract, event_name: str) -> None:
    events = extract_event(receipt, contract, event_name)
    if events:
        raise AssertionError(f"Expected no {event_name} event, found {len(events)}")
