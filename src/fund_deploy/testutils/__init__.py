"""Helpers for tests that drive deployed fund contracts."""

from .assertions import RevertInfo, assert_address_equal, assert_reverted_with
from .encoding import encode_args, function_selector
from .events import assert_event, assert_no_event, extract_event, match_event_args
from .extensions import call_on_extension, transact
from .external_positions import (
    ExternalPositionManagerActionId,
    call_on_external_position,
    call_on_external_position_args,
    create_external_position,
    external_position_reactivate_args,
    external_position_remove_args,
    reactivate_external_position,
    remove_external_position,
)
from .fund import buy_shares, create_new_fund, erc20, get_asset_balances
from .integrations import (
    IntegrationManagerActionId,
    SpendAssetsHandleType,
    aave_lend_args,
    aave_redeem_args,
    aave_v2_lend,
    aave_v2_redeem,
    add_tracked_assets,
    add_tracked_assets_args,
    call_on_integration,
    call_on_integration_args,
    lend_selector,
    redeem_selector,
    remove_tracked_assets_args,
    take_order_selector,
)
from .policies import (
    PolicyHook,
    disable_policy_for_fund,
    enable_policy_for_fund,
    policy_manager_config_args,
    update_policy_settings_for_fund,
    validate_rule_post_buy_shares_args,
    validate_rule_post_coi_args,
)
from .provider import EvmProvider

__all__ = [
    "EvmProvider",
    "ExternalPositionManagerActionId",
    "IntegrationManagerActionId",
    "PolicyHook",
    "RevertInfo",
    "SpendAssetsHandleType",
    "aave_lend_args",
    "aave_redeem_args",
    "aave_v2_lend",
    "aave_v2_redeem",
    "add_tracked_assets",
    "add_tracked_assets_args",
    "assert_address_equal",
    "assert_event",
    "assert_no_event",
    "assert_reverted_with",
    "buy_shares",
    "call_on_extension",
    "call_on_external_position",
    "call_on_external_position_args",
    "call_on_integration",
    "call_on_integration_args",
    "create_external_position",
    "create_new_fund",
    "disable_policy_for_fund",
    "enable_policy_for_fund",
    "encode_args",
    "erc20",
    "external_position_reactivate_args",
    "external_position_remove_args",
    "extract_event",
    "function_selector",
    "get_asset_balances",
    "lend_selector",
    "match_event_args",
    "policy_manager_config_args",
    "reactivate_external_position",
    "redeem_selector",
    "remove_external_position",
    "remove_tracked_assets_args",
    "take_order_selector",
    "transact",
    "update_policy_settings_for_fund",
    "validate_rule_post_buy_shares_args",
    "validate_rule_post_coi_args",
]
