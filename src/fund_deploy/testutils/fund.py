"""Fund creation, share purchases and balance snapshots."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from web3 import Web3
from web3.contract import Contract
from web3.types import TxReceipt

from ..abi import COMPTROLLER_ABI, ERC20_ABI, VAULT_ABI
from ..utils import to_address, to_bytes
from .events import assert_event
from .extensions import transact


def create_new_fund(
    *,
    signer: Any,
    fund_deployer: Contract,
    denomination_asset: Any,
    fund_owner: Any | None = None,
    fund_name: str = "My Fund",
    fund_symbol: str = "",
    shares_action_timelock: int = 0,
    fee_manager_config: bytes | str = b"",
    policy_manager_config: bytes | str = b"",
    comptroller_abi: Sequence[dict[str, Any]] | None = None,
    vault_abi: Sequence[dict[str, Any]] | None = None,
) -> tuple[Contract, Contract, TxReceipt]:
    """Create a fund and return ``(comptroller_proxy, vault_proxy, receipt)``."""

    owner = fund_owner if fund_owner is not None else signer
    function = fund_deployer.functions.createNewFund(
        to_address(owner),
        fund_name,
        fund_symbol,
        to_address(denomination_asset),
        shares_action_timelock,
        to_bytes(fee_manager_config),
        to_bytes(policy_manager_config),
    )
    receipt = transact(function, signer=signer)

    args = assert_event(receipt, fund_deployer, "NewFundCreated")["args"]

    web3 = fund_deployer.w3
    comptroller_proxy = web3.eth.contract(
        address=args["comptrollerProxy"], abi=list(comptroller_abi or COMPTROLLER_ABI)
    )
    vault_proxy = web3.eth.contract(address=args["vaultProxy"], abi=list(vault_abi or VAULT_ABI))
    return comptroller_proxy, vault_proxy, receipt


def erc20(web3: Web3, address: Any) -> Contract:
    return web3.eth.contract(address=to_address(address), abi=ERC20_ABI)


def buy_shares(
    *,
    comptroller_proxy: Contract,
    denomination_asset: Contract,
    buyer: Any,
    investment_amount: int,
    min_shares_quantity: int = 1,
) -> TxReceipt:
    """Approve the comptroller and buy shares with ``investment_amount``."""

    transact(
        denomination_asset.functions.approve(comptroller_proxy.address, investment_amount),
        signer=buyer,
    )
    return transact(
        comptroller_proxy.functions.buyShares(investment_amount, min_shares_quantity),
        signer=buyer,
    )


def get_asset_balances(
    *,
    account: Any,
    assets: Sequence[Any],
    web3: Web3 | None = None,
) -> list[int]:
    """Return ``account``'s balance of each asset, in order."""

    owner = to_address(account)
    balances = []
    for asset in assets:
        if isinstance(asset, Contract):
            token = asset
        else:
            if web3 is None:
                raise TypeError("web3 is required when assets are given as addresses")
            token = erc20(web3, asset)
        balances.append(token.functions.balanceOf(owner).call())
    return balances
