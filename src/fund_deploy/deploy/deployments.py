"""Persisted deployment records and the deploy/get/save primitives."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field, replace
from enum import IntEnum
from pathlib import Path
from typing import Any

from hexbytes import HexBytes
from web3 import Web3
from web3.contract import Contract
from web3.types import TxReceipt

from ..chain.artifacts import ArtifactStore
from ..chain.connections import ChainConnection
from ..chain.transactions import TransactionDispatcher
from ..exceptions import ConfigurationError, DeploymentNotFoundError

logger = logging.getLogger(__name__)


def normalise_args(args: Sequence[Any]) -> list[Any]:
    """Convert constructor args into their JSON form (checksummed addresses, hex bytes)."""

    def _convert(value: Any) -> Any:
        if isinstance(value, Contract):
            return value.address
        if isinstance(value, bytes | bytearray | HexBytes):
            return HexBytes(value).to_0x_hex()
        if isinstance(value, str) and Web3.is_address(value) and not Web3.is_checksum_address(value):
            return Web3.to_checksum_address(value)
        if isinstance(value, Mapping):
            return {key: _convert(item) for key, item in value.items()}
        if isinstance(value, list | tuple):
            return [_convert(item) for item in value]
        if isinstance(value, IntEnum):
            return int(value)
        return value

    return [_convert(arg) for arg in args]


@dataclass(frozen=True)
class Deployment:
    """One saved deployment, stored in hardhat-deploy compatible JSON."""

    name: str
    address: str
    abi: list[dict[str, Any]] = field(default_factory=list)
    transaction_hash: str | None = None
    args: list[Any] = field(default_factory=list)
    bytecode: str | None = None
    deployed_bytecode: str | None = None
    linked_data: dict[str, Any] | None = None
    block_number: int | None = None
    num_deployments: int = 1

    def to_json(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "address": self.address,
            "abi": self.abi,
            "transactionHash": self.transaction_hash,
            "args": self.args,
            "numDeployments": self.num_deployments,
        }
        if self.block_number is not None:
            payload["receipt"] = {"blockNumber": self.block_number}
        if self.bytecode is not None:
            payload["bytecode"] = self.bytecode
        if self.deployed_bytecode is not None:
            payload["deployedBytecode"] = self.deployed_bytecode
        if self.linked_data is not None:
            payload["linkedData"] = self.linked_data
        return payload

    @classmethod
    def from_json(cls, name: str, payload: Mapping[str, Any]) -> Deployment:
        receipt = payload.get("receipt") or {}
        return cls(
            name=name,
            address=Web3.to_checksum_address(payload["address"]),
            abi=list(payload.get("abi") or []),
            transaction_hash=payload.get("transactionHash"),
            args=list(payload.get("args") or []),
            bytecode=payload.get("bytecode"),
            deployed_bytecode=payload.get("deployedBytecode"),
            linked_data=payload.get("linkedData"),
            block_number=receipt.get("blockNumber"),
            num_deployments=int(payload.get("numDeployments", 1)),
        )


@dataclass(frozen=True)
class DeployResult:
    deployment: Deployment
    newly_deployed: bool

    @property
    def address(self) -> str:
        return self.deployment.address


class DeploymentsStore:
    """File backed store: ``<root>/<network>/<Name>.json``."""

    def __init__(self, root: str | Path, network_name: str):
        self.root = Path(root)
        self.network_name = network_name

    @property
    def directory(self) -> Path:
        return self.root / self.network_name

    def _path(self, name: str) -> Path:
        return self.directory / f"{name}.json"

    def get(self, name: str) -> Deployment:
        deployment = self.get_or_none(name)
        if deployment is None:
            raise DeploymentNotFoundError(name, self.network_name)
        return deployment

    def get_or_none(self, name: str) -> Deployment | None:
        path = self._path(name)
        if not path.is_file():
            return None
        return Deployment.from_json(name, json.loads(path.read_text()))

    def save(self, deployment: Deployment) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        self._path(deployment.name).write_text(json.dumps(deployment.to_json(), indent=2) + "\n")

    def delete(self, name: str) -> bool:
        path = self._path(name)
        if not path.is_file():
            return False
        path.unlink()
        return True

    def all(self) -> dict[str, Deployment]:
        if not self.directory.is_dir():
            return {}
        return {
            path.stem: Deployment.from_json(path.stem, json.loads(path.read_text()))
            for path in sorted(self.directory.glob("*.json"))
        }

    def read_chain_id(self) -> int | None:
        path = self.directory / ".chainId"
        if not path.is_file():
            return None
        return int(path.read_text().strip())

    def write_chain_id(self, chain_id: int) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        (self.directory / ".chainId").write_text(str(chain_id))

    def bind_chain_id(self, chain_id: int) -> None:
        """Record ``chain_id``, refusing records that belong to another chain."""

        recorded = self.read_chain_id()
        if recorded is not None and recorded != chain_id:
            raise ConfigurationError(
                f"Deployments in {self.directory} were made on chain {recorded} "
                f"but the node reports chain {chain_id}",
                field="chain_id",
                value=chain_id,
                details={"recorded": recorded, "directory": str(self.directory)},
            )
        self.write_chain_id(chain_id)

    def export(self) -> dict[str, Any]:
        """Summarise all deployments of the network in one document."""

        return {
            "name": self.network_name,
            "chainId": self.read_chain_id(),
            "contracts": {
                name: {
                    "address": deployment.address,
                    "abi": deployment.abi,
                    **({"linkedData": deployment.linked_data} if deployment.linked_data else {}),
                }
                for name, deployment in self.all().items()
            },
        }


class DeploymentsManager:
    """Deploy contracts from artifacts and keep their records up to date."""

    def __init__(
        self,
        store: DeploymentsStore,
        connection: ChainConnection,
        artifacts: ArtifactStore,
        dispatcher: TransactionDispatcher,
    ) -> None:
        self._store = store
        self._connection = connection
        self._artifacts = artifacts
        self._dispatcher = dispatcher

    @property
    def store(self) -> DeploymentsStore:
        return self._store

    def get(self, name: str) -> Deployment:
        return self._store.get(name)

    def get_or_none(self, name: str) -> Deployment | None:
        return self._store.get_or_none(name)

    def save(self, deployment: Deployment) -> Deployment:
        self._store.save(deployment)
        return deployment

    def update_linked_data(self, name: str, linked_data: Mapping[str, Any]) -> Deployment:
        deployment = self.get(name)
        merged = {**(deployment.linked_data or {}), **linked_data}
        return self.save(replace(deployment, linked_data=merged))

    def contract(self, name: str) -> Contract:
        deployment = self.get(name)
        return self._connection.contract(deployment.abi, deployment.address)

    def deploy(
        self,
        name: str,
        *,
        sender: str,
        args: Sequence[Any] = (),
        contract: str | None = None,
        linked_data: Mapping[str, Any] | None = None,
        log: bool = False,
        skip_if_already_deployed: bool = False,
    ) -> DeployResult:
        artifact = self._artifacts.get(contract or name)
        normalised = normalise_args(args)
        existing = self._store.get_or_none(name)

        if existing is not None and not self._has_code(existing.address):
            logger.warning('"%s" has no code at %s; deploying it again', name, existing.address)
        elif existing is not None:
            unchanged = existing.bytecode == artifact.bytecode and existing.args == normalised
            if skip_if_already_deployed or unchanged:
                if log:
                    logger.info('reusing "%s" at %s', name, existing.address)
                return DeployResult(existing, newly_deployed=False)

        if not artifact.is_deployable:
            raise ConfigurationError(
                f"Artifact for '{artifact.contract_name}' has no bytecode",
                field="contract",
                value=artifact.contract_name,
            )

        factory = self._connection.web3.eth.contract(abi=artifact.abi, bytecode=artifact.bytecode)
        receipt = self._dispatcher.send(
            factory.constructor(*args), sender=sender, action=f"deploy {name}"
        )
        address = receipt.get("contractAddress")
        if not address:
            raise ConfigurationError(
                f"Deployment of '{name}' produced no contract address",
                field="contractAddress",
            )

        tx_hash = HexBytes(receipt["transactionHash"]).to_0x_hex()
        deployment = Deployment(
            name=name,
            address=Web3.to_checksum_address(address),
            abi=artifact.abi,
            transaction_hash=tx_hash,
            args=normalised,
            bytecode=artifact.bytecode,
            deployed_bytecode=artifact.deployed_bytecode,
            linked_data=dict(linked_data) if linked_data is not None else None,
            block_number=receipt.get("blockNumber"),
            num_deployments=existing.num_deployments + 1 if existing is not None else 1,
        )
        self._store.save(deployment)

        if log:
            logger.info(
                'deploying "%s" (tx: %s)...: deployed at %s with %s gas',
                name,
                tx_hash,
                deployment.address,
                receipt.get("gasUsed"),
            )
        return DeployResult(deployment, newly_deployed=True)

    def execute(
        self,
        name: str,
        method: str,
        *args: Any,
        sender: str,
        value: int = 0,
        gas: int | None = None,
        log: bool = False,
    ) -> TxReceipt:
        contract = self.contract(name)
        function = getattr(contract.functions, method)(*args)
        receipt = self._dispatcher.send(
            function, sender=sender, value=value, gas=gas, action=f"{name}.{method}"
        )
        if log:
            logger.info(
                'executing %s.%s (tx: %s) with %s gas',
                name,
                method,
                HexBytes(receipt["transactionHash"]).to_0x_hex(),
                receipt.get("gasUsed"),
            )
        return receipt

    def read(self, name: str, method: str, *args: Any) -> Any:
        contract = self.contract(name)
        return self._dispatcher.call(getattr(contract.functions, method)(*args))

    def _has_code(self, address: str) -> bool:
        return len(self._connection.web3.eth.get_code(address)) > 0
