"""Dispatch helpers for the comptroller proxy's extension entry point."""

from __future__ import annotations

from typing import Any

from web3.contract import Contract
from web3.types import TxReceipt

from ..chain.transactions import TransactionDispatcher
from ..utils import to_address, to_bytes


def transact(
    contract_function: Any,
    *,
    signer: Any,
    gas: int | None = None,
    value: int = 0,
) -> TxReceipt:
    """Send ``contract_function`` from ``signer`` and return the successful receipt."""

    dispatcher = TransactionDispatcher(contract_function.w3)
    return dispatcher.send(contract_function, sender=to_address(signer), gas=gas, value=value)


def call_on_extension(
    comptroller_proxy: Contract,
    *,
    extension: Any,
    action_id: int,
    call_args: bytes | str = b"",
    signer: Any | None = None,
    gas: int | None = None,
) -> TxReceipt:
    """Invoke ``callOnExtension`` on the comptroller proxy.

    Without ``signer`` the connection's default account sends the call.
    """

    function = comptroller_proxy.functions.callOnExtension(
        to_address(extension), int(action_id), to_bytes(call_args)
    )
    sender = signer if signer is not None else comptroller_proxy.w3.eth.default_account
    return transact(function, signer=sender, gas=gas)
