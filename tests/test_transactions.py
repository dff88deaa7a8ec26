from __future__ import annotations

from types import SimpleNamespace
from typing import Any, cast

import pytest
from eth_abi import encode
from hexbytes import HexBytes
from web3 import Web3
from web3.exceptions import ContractLogicError

from fund_deploy.chain.transactions import (
    ERROR_STRING_SELECTOR,
    TransactionDispatcher,
    decode_revert_reason,
)
from fund_deploy.exceptions import NetworkError, TransactionRevertedError

SENDER = "0x1111111111111111111111111111111111111111"
TX_HASH = HexBytes("0x" + "12" * 32)


def _error_data(reason: str) -> str:
    return "0x" + (ERROR_STRING_SELECTOR + encode(["string"], [reason])).hex()


class DummyEth:
    def __init__(self, receipt: dict[str, Any], replay_error: Exception | None = None) -> None:
        self.receipt = receipt
        self.replay_error = replay_error
        self.replayed: list[tuple[dict[str, Any], int]] = []

    def wait_for_transaction_receipt(self, tx_hash: Any, timeout: float) -> dict[str, Any]:
        return self.receipt

    def get_transaction(self, tx_hash: Any) -> dict[str, Any]:
        return {"from": SENDER, "to": SENDER, "input": "0x", "value": 0, "gas": 100_000}

    def call(self, tx: dict[str, Any], block: int) -> bytes:
        self.replayed.append((tx, block))
        if self.replay_error is not None:
            raise self.replay_error
        return b""


class DummyFunction:
    fn_name = "enablePolicyForFund"

    def __init__(self, *, error: Exception | None = None, result: Any = None) -> None:
        self.error = error
        self.result = result
        self.params: list[dict[str, Any]] = []

    def transact(self, params: dict[str, Any]) -> HexBytes:
        self.params.append(params)
        if self.error is not None:
            raise self.error
        return TX_HASH

    def call(self, params: dict[str, Any]) -> Any:
        self.params.append(params)
        if self.error is not None:
            raise self.error
        return self.result


def _dispatcher(eth: DummyEth, **kwargs: Any) -> TransactionDispatcher:
    return TransactionDispatcher(cast(Web3, SimpleNamespace(eth=eth)), **kwargs)


@pytest.mark.parametrize(
    ("error", "expected"),
    [
        (bytes.fromhex(_error_data("Disallowed hook")[2:]), "Disallowed hook"),
        (_error_data("policy already enabled"), "policy already enabled"),
        (
            "VM Exception while processing transaction: reverted with reason string "
            "'Only the fund owner can call this function'",
            "Only the fund owner can call this function",
        ),
        ("execution reverted: Rule evaluated to false", "Rule evaluated to false"),
        ("VM Exception while processing transaction: revert _selector invalid", "_selector invalid"),
        (
            ValueError({"code": -32000, "message": "execution reverted: Policy is not registered"}),
            "Policy is not registered",
        ),
        (
            ValueError({"code": 3, "data": _error_data("_policy cannot be disabled")}),
            "_policy cannot be disabled",
        ),
        ("out of gas", ""),
    ],
)
def test_decode_revert_reason(error: Any, expected: str) -> None:
    assert decode_revert_reason(error) == expected


def test_decode_revert_reason_prefers_error_data() -> None:
    error = ContractLogicError("execution reverted", data=_error_data("policy already registered"))

    assert decode_revert_reason(error) == "policy already registered"


def test_send_returns_successful_receipt() -> None:
    receipt = {"status": 1, "blockNumber": 7, "gasUsed": 21000}
    function = DummyFunction()

    result = _dispatcher(DummyEth(receipt), gas_price=0).send(
        function, sender=SENDER.lower(), value=5, gas=8_000_000
    )

    assert result is receipt
    assert function.params == [{"from": SENDER, "value": 5, "gas": 8_000_000, "gasPrice": 0}]


def test_send_without_gas_price_leaves_pricing_to_the_node() -> None:
    function = DummyFunction()

    _dispatcher(DummyEth({"status": 1, "blockNumber": 7})).send(function, sender=SENDER)

    assert function.params == [{"from": SENDER}]


def test_send_translates_contract_logic_error() -> None:
    function = DummyFunction(
        error=ContractLogicError(
            "execution reverted: Only the IntegrationManager can call this function"
        )
    )

    with pytest.raises(TransactionRevertedError) as exc:
        _dispatcher(DummyEth({})).send(function, sender=SENDER)

    assert exc.value.reason == "Only the IntegrationManager can call this function"
    assert exc.value.details["action"] == "enablePolicyForFund"


def test_send_replays_failed_receipt_for_reason() -> None:
    eth = DummyEth(
        {"status": 0, "blockNumber": 10, "gasUsed": 50_000},
        replay_error=ContractLogicError("execution reverted: Rule evaluated to false"),
    )

    with pytest.raises(TransactionRevertedError) as exc:
        _dispatcher(eth).send(DummyFunction(), sender=SENDER, action="buyShares")

    assert exc.value.reason == "Rule evaluated to false"
    assert exc.value.tx_hash == TX_HASH.to_0x_hex()
    assert eth.replayed[0][1] == 9


def test_send_reports_rpc_failures_as_network_errors() -> None:
    function = DummyFunction(error=ValueError({"code": -32601, "message": "method not found"}))

    with pytest.raises(NetworkError):
        _dispatcher(DummyEth({})).send(function, sender=SENDER)


def test_call_translates_reverts() -> None:
    function = DummyFunction(error=ContractLogicError("execution reverted: policy is not registered"))

    with pytest.raises(TransactionRevertedError) as exc:
        _dispatcher(DummyEth({})).call(function)

    assert exc.value.reason == "policy is not registered"
    assert str(exc.value) == "Transaction reverted: policy is not registered"


def test_call_passes_sender() -> None:
    function = DummyFunction(result=3)

    assert _dispatcher(DummyEth({})).call(function, sender=SENDER) == 3
    assert function.params == [{"from": SENDER}]
