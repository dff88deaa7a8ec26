"""Helpers driving the ExternalPositionManager through the comptroller proxy."""

from __future__ import annotations

from collections.abc import Sequence
from enum import IntEnum
from typing import Any

from web3.contract import Contract
from web3.types import TxReceipt

from ..abi import EXTERNAL_POSITION_PROXY_ABI
from ..constants import EXTERNAL_POSITION_CALL_GAS
from .encoding import encode_args
from .events import assert_event
from .extensions import call_on_extension


class ExternalPositionManagerActionId(IntEnum):
    CREATE_EXTERNAL_POSITION = 0
    CALL_ON_EXTERNAL_POSITION = 1
    REMOVE_EXTERNAL_POSITION = 2
    REACTIVATE_EXTERNAL_POSITION = 3


def call_on_external_position_args(
    *,
    external_position_proxy: Any,
    action_id: int,
    action_args: bytes | str,
) -> bytes:
    return encode_args(
        ["address", "uint256", "bytes"],
        [external_position_proxy, int(action_id), action_args],
    )


def external_position_remove_args(*, external_position_proxy: Any) -> bytes:
    return encode_args(["address"], [external_position_proxy])


def external_position_reactivate_args(*, external_position_proxy: Any) -> bytes:
    return encode_args(["address"], [external_position_proxy])


def create_external_position(
    *,
    signer: Any,
    comptroller_proxy: Contract,
    external_position_manager: Contract,
    external_position_type_id: int,
    initialization_data: bytes | str = b"",
    call_on_external_position_data: bytes | str = b"",
    proxy_abi: Sequence[dict[str, Any]] | None = None,
) -> tuple[Contract, TxReceipt]:
    """Create a new external position and return its proxy with the receipt."""

    receipt = call_on_extension(
        comptroller_proxy,
        extension=external_position_manager,
        action_id=ExternalPositionManagerActionId.CREATE_EXTERNAL_POSITION,
        call_args=encode_args(
            ["uint256", "bytes", "bytes"],
            [external_position_type_id, initialization_data, call_on_external_position_data],
        ),
        signer=signer,
    )

    event = assert_event(receipt, external_position_manager, "ExternalPositionDeployedForFund")
    proxy = comptroller_proxy.w3.eth.contract(
        address=event["args"]["externalPosition"],
        abi=list(proxy_abi or EXTERNAL_POSITION_PROXY_ABI),
    )
    return proxy, receipt


def call_on_external_position(
    *,
    signer: Any,
    comptroller_proxy: Contract,
    external_position_manager: Contract,
    external_position_proxy: Any,
    action_id: int,
    action_args: bytes | str,
) -> TxReceipt:
    call_args = call_on_external_position_args(
        external_position_proxy=external_position_proxy,
        action_id=action_id,
        action_args=action_args,
    )
    return call_on_extension(
        comptroller_proxy,
        extension=external_position_manager,
        action_id=ExternalPositionManagerActionId.CALL_ON_EXTERNAL_POSITION,
        call_args=call_args,
        signer=signer,
        gas=EXTERNAL_POSITION_CALL_GAS,
    )


def remove_external_position(
    *,
    signer: Any,
    comptroller_proxy: Contract,
    external_position_manager: Contract,
    external_position_proxy: Any,
) -> TxReceipt:
    return call_on_extension(
        comptroller_proxy,
        extension=external_position_manager,
        action_id=ExternalPositionManagerActionId.REMOVE_EXTERNAL_POSITION,
        call_args=external_position_remove_args(external_position_proxy=external_position_proxy),
        signer=signer,
    )


def reactivate_external_position(
    *,
    signer: Any,
    comptroller_proxy: Contract,
    external_position_manager: Contract,
    external_position_proxy: Any,
) -> TxReceipt:
    return call_on_extension(
        comptroller_proxy,
        extension=external_position_manager,
        action_id=ExternalPositionManagerActionId.REACTIVATE_EXTERNAL_POSITION,
        call_args=external_position_reactivate_args(
            external_position_proxy=external_position_proxy
        ),
        signer=signer,
    )
