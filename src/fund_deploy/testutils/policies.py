"""PolicyManager hooks, config encoders and per-fund policy actions."""

from __future__ import annotations

from collections.abc import Sequence
from enum import IntEnum
from typing import Any

from web3.contract import Contract
from web3.types import TxReceipt

from ..exceptions import ValidationError
from ..utils import to_address, to_bytes
from .encoding import encode_args
from .extensions import transact


class PolicyHook(IntEnum):
    POST_BUY_SHARES = 0
    POST_CALL_ON_INTEGRATION = 1
    PRE_TRANSFER_SHARES = 2
    REDEEM_SHARES_FOR_SPECIFIC_ASSETS = 3
    ADD_TRACKED_ASSETS = 4
    REMOVE_TRACKED_ASSETS = 5
    CREATE_EXTERNAL_POSITION = 6
    POST_CALL_ON_EXTERNAL_POSITION = 7
    REMOVE_EXTERNAL_POSITION = 8
    REACTIVATE_EXTERNAL_POSITION = 9


def policy_manager_config_args(
    *,
    policies: Sequence[Any],
    settings: Sequence[bytes | str],
) -> bytes:
    """Encode the policy manager config passed when creating a fund."""

    if len(policies) != len(settings):
        raise ValidationError(
            "policies and settings lengths unequal",
            field="settings",
            details={"policies": len(policies), "settings": len(settings)},
        )
    return encode_args(["address[]", "bytes[]"], [list(policies), list(settings)])


def validate_rule_post_buy_shares_args(
    *,
    buyer: Any,
    investment_amount: int,
    shares_issued: int,
    fund_gav: int,
) -> bytes:
    return encode_args(
        ["address", "uint256", "uint256", "uint256"],
        [buyer, investment_amount, shares_issued, fund_gav],
    )


def validate_rule_post_coi_args(
    *,
    caller: Any,
    adapter: Any,
    selector: bytes | str,
    incoming_assets: Sequence[Any] = (),
    incoming_asset_amounts: Sequence[int] = (),
    spend_assets: Sequence[Any] = (),
    spend_asset_amounts: Sequence[int] = (),
) -> bytes:
    return encode_args(
        ["address", "address", "bytes4", "address[]", "uint256[]", "address[]", "uint256[]"],
        [
            caller,
            adapter,
            selector,
            list(incoming_assets),
            list(incoming_asset_amounts),
            list(spend_assets),
            list(spend_asset_amounts),
        ],
    )


def enable_policy_for_fund(
    *,
    policy_manager: Contract,
    comptroller_proxy: Any,
    policy: Any,
    settings_data: bytes | str = b"",
    signer: Any,
) -> TxReceipt:
    function = policy_manager.functions.enablePolicyForFund(
        to_address(comptroller_proxy), to_address(policy), to_bytes(settings_data)
    )
    return transact(function, signer=signer)


def disable_policy_for_fund(
    *,
    policy_manager: Contract,
    comptroller_proxy: Any,
    policy: Any,
    signer: Any,
) -> TxReceipt:
    function = policy_manager.functions.disablePolicyForFund(
        to_address(comptroller_proxy), to_address(policy)
    )
    return transact(function, signer=signer)


def update_policy_settings_for_fund(
    *,
    policy_manager: Contract,
    comptroller_proxy: Any,
    policy: Any,
    settings_data: bytes | str,
    signer: Any,
) -> TxReceipt:
    function = policy_manager.functions.updatePolicySettingsForFund(
        to_address(comptroller_proxy), to_address(policy), to_bytes(settings_data)
    )
    return transact(function, signer=signer)
