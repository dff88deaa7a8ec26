"""Runtime environment handed to every deploy script."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from web3 import Web3
from web3.types import ChecksumAddress

from ..chain.artifacts import ArtifactStore
from ..chain.connections import ChainConnection
from ..chain.transactions import TransactionDispatcher
from ..config.network import NetworkSettings, load_network
from ..constants import DEFAULT_RECEIPT_TIMEOUT
from ..exceptions import ConfigurationError
from .deployments import DeploymentsManager, DeploymentsStore

logger = logging.getLogger(__name__)

DEFAULT_DEPLOYMENTS_DIR = "deployments"
DEFAULT_ARTIFACT_DIRS = ("artifacts",)


@dataclass
class DeployEnvironment:
    """Network, signers, artifacts and deployments for one run."""

    network: NetworkSettings
    connection: ChainConnection
    artifacts: ArtifactStore
    deployments: DeploymentsManager

    @classmethod
    def create(
        cls,
        network_name: str,
        *,
        deployments_root: str | Path = DEFAULT_DEPLOYMENTS_DIR,
        artifact_paths: Sequence[str | Path] = DEFAULT_ARTIFACT_DIRS,
        receipt_timeout: float = DEFAULT_RECEIPT_TIMEOUT,
    ) -> DeployEnvironment:
        settings = load_network(network_name)
        connection = ChainConnection(settings)
        connection.connect()

        artifacts = ArtifactStore(artifact_paths)
        dispatcher = TransactionDispatcher(
            connection.web3,
            receipt_timeout=receipt_timeout,
            gas_price=settings.gas_price,
        )
        store = DeploymentsStore(deployments_root, settings.name)
        try:
            store.bind_chain_id(connection.chain_id)
        except ConfigurationError:
            connection.disconnect()
            raise
        deployments = DeploymentsManager(store, connection, artifacts, dispatcher)

        return cls(
            network=settings,
            connection=connection,
            artifacts=artifacts,
            deployments=deployments,
        )

    @property
    def web3(self) -> Web3:
        return self.connection.web3

    @property
    def network_name(self) -> str:
        return self.network.name

    def get_chain_id(self) -> int:
        return self.connection.chain_id

    def get_signers(self) -> list[ChecksumAddress]:
        return self.connection.signers

    @property
    def deployer(self) -> ChecksumAddress:
        return self.connection.deployer

    def close(self) -> None:
        self.connection.disconnect()
