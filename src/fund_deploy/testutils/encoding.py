"""ABI encoding helpers for extension call arguments."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from eth_abi import encode as abi_encode
from eth_utils import function_signature_to_4byte_selector

from ..utils import to_address, to_bytes


def encode_args(types: Sequence[str], values: Sequence[Any]) -> bytes:
    """ABI-encode ``values``; addresses may be contracts or strings, bytes may be hex."""

    converted = [_convert(kind, value) for kind, value in zip(types, values, strict=True)]
    return abi_encode(list(types), converted)


def function_selector(signature: str) -> bytes:
    """Return the 4-byte selector of ``signature`` such as ``takeOrder(address,bytes,bytes)``."""

    return function_signature_to_4byte_selector(signature)


def _convert(kind: str, value: Any) -> Any:
    if kind.endswith("[]"):
        inner = kind[:-2]
        return [_convert(inner, item) for item in value]
    if kind == "address":
        return to_address(value)
    if kind.startswith("bytes"):
        return to_bytes(value)
    return value
