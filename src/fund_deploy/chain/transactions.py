"""Transaction dispatch and revert reason decoding."""

from __future__ import annotations

import logging
import re
from typing import Any

from eth_abi import decode as abi_decode
from eth_abi.exceptions import DecodingError
from web3 import Web3
from web3.exceptions import ContractLogicError, Web3RPCError
from web3.types import TxReceipt

from ..constants import DEFAULT_RECEIPT_TIMEOUT
from ..exceptions import NetworkError, TransactionRevertedError
from ..utils import to_bytes

logger = logging.getLogger(__name__)

ERROR_STRING_SELECTOR = bytes.fromhex("08c379a0")

_REASON_PATTERNS = (
    re.compile(r"reverted with reason string '(?P<reason>.*)'", re.DOTALL),
    re.compile(r"reverted with custom error '(?P<reason>.*)'", re.DOTALL),
    re.compile(r"execution reverted: (?P<reason>.*)", re.DOTALL),
    re.compile(r"revert (?P<reason>.*)", re.DOTALL),
)


def _decode_error_data(data: Any) -> str | None:
    if data is None:
        return None
    if isinstance(data, dict):
        data = data.get("data")
    if not isinstance(data, str | bytes | bytearray):
        return None
    try:
        raw = to_bytes(data)
    except ValueError:
        return None
    if not raw.startswith(ERROR_STRING_SELECTOR):
        return None
    try:
        (reason,) = abi_decode(["string"], raw[4:])
    except (DecodingError, UnicodeDecodeError):
        return None
    return str(reason)


def decode_revert_reason(error: Any) -> str:
    """Extract the revert reason from a web3 error, message or raw return data."""

    if isinstance(error, bytes | bytearray):
        return _decode_error_data(error) or ""

    if isinstance(error, str) and error.startswith("0x"):
        decoded = _decode_error_data(error)
        if decoded is not None:
            return decoded

    # Older providers raise ValueError with the JSON-RPC error object as its argument
    payload = error.args[0] if isinstance(error, Exception) and error.args else None
    if not isinstance(payload, dict):
        payload = {}

    for data in (getattr(error, "data", None), payload.get("data")):
        decoded = _decode_error_data(data)
        if decoded is not None:
            return decoded

    message = str(payload.get("message") or getattr(error, "message", None) or error)
    for pattern in _REASON_PATTERNS:
        match = pattern.search(message)
        if match:
            return match.group("reason").strip()

    return ""


class TransactionDispatcher:
    """Encapsulate transaction submission and receipt handling."""

    def __init__(
        self,
        web3: Web3,
        *,
        receipt_timeout: float = DEFAULT_RECEIPT_TIMEOUT,
        gas_price: int | None = None,
    ) -> None:
        self._web3 = web3
        self._receipt_timeout = receipt_timeout
        self._gas_price = gas_price

    @property
    def web3(self) -> Web3:
        return self._web3

    def send(
        self,
        contract_function: Any,
        *,
        sender: str,
        value: int = 0,
        gas: int | None = None,
        action: str = "",
    ) -> TxReceipt:
        """Transact ``contract_function`` and wait for a successful receipt."""

        tx_params: dict[str, Any] = {"from": Web3.to_checksum_address(sender)}
        if value:
            tx_params["value"] = value
        if gas is not None:
            tx_params["gas"] = gas
        if self._gas_price is not None:
            tx_params["gasPrice"] = self._gas_price

        label = action or getattr(contract_function, "fn_name", "transaction")
        logger.debug("Dispatching %s from %s", label, sender)

        try:
            tx_hash = contract_function.transact(tx_params)
        except ContractLogicError as exc:
            raise TransactionRevertedError(
                decode_revert_reason(exc), details={"action": label, "error": str(exc)}
            ) from exc
        except (Web3RPCError, ValueError) as exc:
            # Some nodes report reverts as plain JSON-RPC errors
            reason = decode_revert_reason(exc)
            if reason:
                raise TransactionRevertedError(reason, details={"action": label}) from exc
            raise NetworkError(
                f"Failed to submit transaction for {label}",
                details={"error": str(exc)},
            ) from exc

        tx_hex = tx_hash.to_0x_hex()
        receipt = self._web3.eth.wait_for_transaction_receipt(
            tx_hash, timeout=self._receipt_timeout
        )
        logger.debug(
            "Transaction for %s mined hash=%s block=%s gas=%s",
            label,
            tx_hex,
            receipt.get("blockNumber"),
            receipt.get("gasUsed"),
        )

        if receipt.get("status", 1) == 0:
            raise TransactionRevertedError(
                self._replay_reason(tx_hash, receipt),
                tx_hash=tx_hex,
                details={"action": label},
            )

        return receipt

    def call(self, contract_function: Any, *, sender: str | None = None) -> Any:
        """Execute ``contract_function`` as an ``eth_call``."""

        tx_params: dict[str, Any] = {}
        if sender is not None:
            tx_params["from"] = Web3.to_checksum_address(sender)

        try:
            return contract_function.call(tx_params)
        except ContractLogicError as exc:
            raise TransactionRevertedError(
                decode_revert_reason(exc), details={"error": str(exc)}
            ) from exc

    def _replay_reason(self, tx_hash: Any, receipt: TxReceipt) -> str:
        """Re-run a failed transaction as a call to recover its revert reason."""

        try:
            tx = self._web3.eth.get_transaction(tx_hash)
            replay = {
                "from": tx["from"],
                "to": tx.get("to"),
                "data": tx.get("input"),
                "value": tx.get("value", 0),
                "gas": tx.get("gas"),
            }
            self._web3.eth.call(replay, receipt["blockNumber"] - 1)  # type: ignore[arg-type]
        except ContractLogicError as exc:
            return decode_revert_reason(exc)
        except (Web3RPCError, ValueError) as exc:
            logger.debug("Unable to replay reverted transaction %s: %s", tx_hash, exc)
        return ""
