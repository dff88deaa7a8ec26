"""Network settings resolved from the environment."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from ..constants import (
    DEFAULT_NODE_URL,
    DEFAULT_REQUEST_TIMEOUT,
    TEST_MNEMONIC,
    Network,
)
from ..exceptions import ConfigurationError
from ..utils import parse_chain_id

logger = logging.getLogger(__name__)

# Mainnet block the local fork is pinned to (Dec 14, 2022)
FORK_BLOCK_NUMBER = 16_185_500
HARDHAT_BLOCK_GAS_LIMIT = 12_450_000


def load_env(path: str | Path | None = None) -> bool:
    """Load a ``.env`` file without overriding variables that are already set."""

    loaded = load_dotenv(dotenv_path=path, override=False)
    if loaded:
        logger.debug("Loaded environment from %s", path or ".env")
    return loaded


def node_url(network_name: str) -> str:
    uppercase = network_name.upper()
    return (
        os.getenv(f"ETHEREUM_NODE_{uppercase}") or os.getenv("ETHEREUM_NODE") or DEFAULT_NODE_URL
    )


def accounts(network_name: str) -> tuple[str, ...]:
    uppercase = network_name.upper()
    raw = os.getenv(f"ETHEREUM_ACCOUNTS_{uppercase}") or os.getenv("ETHEREUM_ACCOUNTS") or ""
    return tuple(account.strip() for account in raw.split(",") if account.strip())


def is_one_of_networks(chain_id: int | str, networks: Iterable[Network | int]) -> bool:
    """Return True when ``chain_id`` matches one of ``networks``."""

    resolved = parse_chain_id(chain_id)
    return any(resolved == int(network) for network in networks)


@dataclass(frozen=True)
class NetworkSettings:
    """Connection settings for one named network."""

    name: str
    url: str
    accounts: tuple[str, ...] = ()
    chain_id: int | None = None
    mnemonic: str | None = None
    account_count: int = 10
    gas_price: int | None = None
    block_gas_limit: int | None = None
    fork_url: str | None = None
    fork_block_number: int | None = None
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT

    @property
    def is_local(self) -> bool:
        return self.mnemonic is not None


def _hardhat() -> NetworkSettings:
    return NetworkSettings(
        name="hardhat",
        url=os.getenv("ETHEREUM_NODE_HARDHAT") or DEFAULT_NODE_URL,
        chain_id=int(Network.HOMESTEAD),
        mnemonic=TEST_MNEMONIC,
        account_count=10,
        gas_price=0,
        block_gas_limit=HARDHAT_BLOCK_GAS_LIMIT,
        fork_url=node_url("mainnet"),
        fork_block_number=FORK_BLOCK_NUMBER,
    )


def _remote(name: str, chain_id: int | None) -> NetworkSettings:
    return NetworkSettings(
        name=name,
        url=node_url(name),
        accounts=accounts(name),
        chain_id=chain_id,
    )


def load_network(name: str) -> NetworkSettings:
    """Resolve the settings of a built-in network from the current environment."""

    key = name.lower()
    if key == "hardhat":
        return _hardhat()
    if key == "mainnet":
        return _remote(key, int(Network.HOMESTEAD))
    if key == "matic":
        return _remote(key, int(Network.MATIC))
    if key == "testnet":
        # Testnet chain id depends on the node it points at
        return _remote(key, None)

    raise ConfigurationError(
        f"Unknown network '{name}'",
        field="network",
        value=name,
        details={"known": ["hardhat", "mainnet", "matic", "testnet"]},
    )
