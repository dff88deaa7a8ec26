"""Connection helpers for the JSON-RPC node used by deployments and tests."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any, cast

from eth_account import Account
from eth_account.signers.local import LocalAccount
from web3 import HTTPProvider, Web3
from web3.contract import Contract
from web3.middleware import SignAndSendRawMiddlewareBuilder
from web3.types import ChecksumAddress

from ..config.network import NetworkSettings
from ..exceptions import ConfigurationError, NetworkError

logger = logging.getLogger(__name__)


def derive_accounts(mnemonic: str, count: int) -> list[LocalAccount]:
    """Derive ``count`` accounts from ``mnemonic`` along the default HD path."""

    Account.enable_unaudited_hdwallet_features()
    return [
        cast(LocalAccount, Account.from_mnemonic(mnemonic, account_path=f"m/44'/60'/0'/0/{index}"))
        for index in range(count)
    ]


class ChainConnection:
    """Manage the Web3 provider, local signers and contract handles."""

    def __init__(self, settings: NetworkSettings):
        self.settings = settings
        self._provider: HTTPProvider | None = None
        self._web3: Web3 | None = None
        self._local_accounts: list[LocalAccount] = []
        self._signers: list[ChecksumAddress] = []
        self._chain_id: int | None = None
        self._connected = False

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def connect(self) -> None:
        """Initialise the provider and signing middleware."""

        provider = HTTPProvider(
            self.settings.url, request_kwargs={"timeout": self.settings.request_timeout}
        )
        web3 = Web3(provider)
        if not web3.is_connected():
            raise NetworkError(
                f"Unable to connect to {self.settings.name} RPC", endpoint=self.settings.url
            )

        chain_id = web3.eth.chain_id
        expected = self.settings.chain_id
        if expected is not None and chain_id != expected:
            logger.warning(
                "Network %s expected chain id %s but node reports %s",
                self.settings.name,
                expected,
                chain_id,
            )

        local_accounts = self._load_local_accounts()
        if local_accounts:
            web3.middleware_onion.add(SignAndSendRawMiddlewareBuilder.build(local_accounts))  # type: ignore[arg-type]
            signers = [account.address for account in local_accounts]
        else:
            signers = [Web3.to_checksum_address(address) for address in web3.eth.accounts]

        if signers:
            web3.eth.default_account = signers[0]

        self._provider = provider
        self._web3 = web3
        self._local_accounts = local_accounts
        self._signers = signers
        self._chain_id = chain_id
        self._connected = True
        logger.info(
            "Connected to %s at %s (chain id %s, %d signers)",
            self.settings.name,
            self.settings.url,
            chain_id,
            len(signers),
        )

    def disconnect(self) -> None:
        self._provider = None
        self._web3 = None
        self._local_accounts = []
        self._signers = []
        self._chain_id = None
        self._connected = False

    def is_connected(self) -> bool:
        return self._connected and self._web3 is not None

    def ensure_connected(self) -> None:
        if not self.is_connected():
            raise NetworkError("Chain connection is not connected", endpoint=self.settings.url)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------
    @property
    def web3(self) -> Web3:
        if self._web3 is None:
            raise NetworkError(
                "RPC provider not connected; call connect() first", endpoint=self.settings.url
            )
        return self._web3

    @property
    def chain_id(self) -> int:
        if self._chain_id is None:
            raise NetworkError(
                "Chain id unknown; call connect() first", endpoint=self.settings.url
            )
        return self._chain_id

    @property
    def signers(self) -> list[ChecksumAddress]:
        self.ensure_connected()
        return list(self._signers)

    @property
    def deployer(self) -> ChecksumAddress:
        signers = self.signers
        if not signers:
            raise ConfigurationError(
                f"No accounts available on network '{self.settings.name}'",
                field="accounts",
            )
        return signers[0]

    def contract(self, abi: Sequence[dict[str, Any]], address: str) -> Contract:
        return self.web3.eth.contract(address=Web3.to_checksum_address(address), abi=list(abi))

    # ------------------------------------------------------------------
    # Internal wiring
    # ------------------------------------------------------------------
    def _load_local_accounts(self) -> list[LocalAccount]:
        if self.settings.accounts:
            loaded = []
            for index, key in enumerate(self.settings.accounts):
                try:
                    loaded.append(cast(LocalAccount, Account.from_key(key)))
                except Exception as exc:
                    raise ConfigurationError(
                        "Failed to derive signer account from configured private key",
                        field="accounts",
                        value=index,
                        details={"error": str(exc)},
                    ) from exc
            return loaded

        if self.settings.mnemonic:
            return derive_accounts(self.settings.mnemonic, self.settings.account_count)

        return []
