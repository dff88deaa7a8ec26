"""Local-node RPC helpers: snapshots, time travel and account impersonation."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, TypeVar

from web3 import Web3
from web3.types import RPCEndpoint

from ..exceptions import NetworkError
from ..utils import to_address

logger = logging.getLogger(__name__)

T = TypeVar("T")


class EvmProvider:
    """Wrap the development-node RPC methods used by the test suites.

    Hardhat exposes ``hardhat_*`` methods and anvil the ``anvil_*`` aliases; the
    prefix is detected from ``web3_clientVersion`` on first use.
    """

    def __init__(self, web3: Web3):
        self._web3 = web3
        self._prefix: str | None = None
        self._fixtures: dict[Callable[..., Any], tuple[str, Any]] = {}

    @property
    def web3(self) -> Web3:
        return self._web3

    # ------------------------------------------------------------------
    # RPC plumbing
    # ------------------------------------------------------------------
    def _rpc(self, method: str, params: list[Any] | None = None) -> Any:
        response = self._web3.provider.make_request(RPCEndpoint(method), params or [])
        if "error" in response:
            error = response["error"]
            message = error.get("message") if isinstance(error, dict) else str(error)
            raise NetworkError(f"{method} failed: {message}", details={"error": error})
        return response.get("result")

    @property
    def node_prefix(self) -> str:
        if self._prefix is None:
            version = str(self._web3.client_version).lower()
            self._prefix = "anvil" if "anvil" in version else "hardhat"
            logger.debug("Detected %s development node (%s)", self._prefix, version)
        return self._prefix

    # ------------------------------------------------------------------
    # Snapshots
    # ------------------------------------------------------------------
    def snapshot(self) -> str:
        return self._rpc("evm_snapshot")

    def revert(self, snapshot_id: str) -> bool:
        """Revert to ``snapshot_id``. Snapshots are single-use on both nodes."""
        return bool(self._rpc("evm_revert", [snapshot_id]))

    def snapshot_fixture(self, setup: Callable[[], T]) -> Callable[[], T]:
        """Return a loader running ``setup`` once and reverting to its end state after.

        Every later call reverts the chain to the state captured right after the
        first run and hands back the cached result.
        """

        def load() -> T:
            cached = self._fixtures.get(setup)
            if cached is None:
                result = setup()
            else:
                snapshot_id, result = cached
                self.revert(snapshot_id)
            self._fixtures[setup] = (self.snapshot(), result)
            return result

        return load

    # ------------------------------------------------------------------
    # Time and blocks
    # ------------------------------------------------------------------
    def increase_time(self, seconds: int) -> None:
        self._rpc("evm_increaseTime", [int(seconds)])
        self.mine()

    def mine(self, blocks: int = 1) -> None:
        for _ in range(blocks):
            self._rpc("evm_mine")

    # ------------------------------------------------------------------
    # Accounts
    # ------------------------------------------------------------------
    def impersonate(self, address: Any) -> str:
        """Let the node sign for ``address`` without its key and return it checksummed."""
        account = to_address(address)
        self._rpc(f"{self.node_prefix}_impersonateAccount", [account])
        return account

    def stop_impersonating(self, address: Any) -> None:
        self._rpc(f"{self.node_prefix}_stopImpersonatingAccount", [to_address(address)])

    def set_balance(self, address: Any, wei: int) -> None:
        self._rpc(f"{self.node_prefix}_setBalance", [to_address(address), hex(int(wei))])
