"""Call-argument encoders for the IntegrationManager and its adapters."""

from __future__ import annotations

from collections.abc import Sequence
from enum import IntEnum
from typing import Any

from web3.contract import Contract
from web3.types import TxReceipt

from .encoding import encode_args, function_selector
from .extensions import call_on_extension


class IntegrationManagerActionId(IntEnum):
    CALL_ON_INTEGRATION = 0
    ADD_TRACKED_ASSETS_TO_VAULT = 1
    REMOVE_TRACKED_ASSETS_FROM_VAULT = 2


class SpendAssetsHandleType(IntEnum):
    NONE = 0
    APPROVE = 1
    TRANSFER = 2


take_order_selector = function_selector("takeOrder(address,bytes,bytes)")
lend_selector = function_selector("lend(address,bytes,bytes)")
redeem_selector = function_selector("redeem(address,bytes,bytes)")


def call_on_integration_args(
    *,
    adapter: Any,
    selector: bytes | str,
    encoded_call_args: bytes | str,
) -> bytes:
    return encode_args(["address", "bytes4", "bytes"], [adapter, selector, encoded_call_args])


def add_tracked_assets_args(assets: Sequence[Any]) -> bytes:
    return encode_args(["address[]"], [list(assets)])


def remove_tracked_assets_args(assets: Sequence[Any]) -> bytes:
    return encode_args(["address[]"], [list(assets)])


def aave_lend_args(*, a_token: Any, amount: int) -> bytes:
    return encode_args(["address", "uint256"], [a_token, amount])


def aave_redeem_args(*, a_token: Any, amount: int) -> bytes:
    return encode_args(["address", "uint256"], [a_token, amount])


def call_on_integration(
    *,
    comptroller_proxy: Contract,
    integration_manager: Contract,
    signer: Any,
    adapter: Any,
    selector: bytes | str,
    encoded_call_args: bytes | str,
) -> TxReceipt:
    return call_on_extension(
        comptroller_proxy,
        extension=integration_manager,
        action_id=IntegrationManagerActionId.CALL_ON_INTEGRATION,
        call_args=call_on_integration_args(
            adapter=adapter, selector=selector, encoded_call_args=encoded_call_args
        ),
        signer=signer,
    )


def add_tracked_assets(
    *,
    comptroller_proxy: Contract,
    integration_manager: Contract,
    signer: Any,
    assets: Sequence[Any],
) -> TxReceipt:
    return call_on_extension(
        comptroller_proxy,
        extension=integration_manager,
        action_id=IntegrationManagerActionId.ADD_TRACKED_ASSETS_TO_VAULT,
        call_args=add_tracked_assets_args(assets),
        signer=signer,
    )


def aave_v2_lend(
    *,
    comptroller_proxy: Contract,
    integration_manager: Contract,
    signer: Any,
    aave_v2_adapter: Any,
    a_token: Any,
    amount: int,
) -> TxReceipt:
    return call_on_integration(
        comptroller_proxy=comptroller_proxy,
        integration_manager=integration_manager,
        signer=signer,
        adapter=aave_v2_adapter,
        selector=lend_selector,
        encoded_call_args=aave_lend_args(a_token=a_token, amount=amount),
    )


def aave_v2_redeem(
    *,
    comptroller_proxy: Contract,
    integration_manager: Contract,
    signer: Any,
    aave_v2_adapter: Any,
    a_token: Any,
    amount: int,
) -> TxReceipt:
    return call_on_integration(
        comptroller_proxy=comptroller_proxy,
        integration_manager=integration_manager,
        signer=signer,
        adapter=aave_v2_adapter,
        selector=redeem_selector,
        encoded_call_args=aave_redeem_args(a_token=a_token, amount=amount),
    )
