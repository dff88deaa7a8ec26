from __future__ import annotations

import json
from pathlib import Path
from types import SimpleNamespace
from typing import Any, cast

import pytest

from fund_deploy.deploy.deployments import Deployment, DeploymentsStore
from fund_deploy.deploy.environment import DeployEnvironment
from fund_deploy.testutils.provider import EvmProvider

pytest_plugins = ["fund_deploy.testutils.pytest_plugin"]

DEPLOYER = "0x1111111111111111111111111111111111111111"


def address(n: int) -> str:
    """Digits-only test address, identical to its checksum form."""
    return "0x" + f"{n:040d}"


def write_artifact(
    root: Path,
    name: str,
    *,
    abi: list[dict[str, Any]] | None = None,
    bytecode: str = "0x6080",
    deployed_bytecode: str = "0x6080",
    source_name: str | None = None,
) -> Path:
    directory = root / f"{source_name or name + '.sol'}"
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / f"{name}.json"
    path.write_text(
        json.dumps(
            {
                "contractName": name,
                "sourceName": source_name or f"contracts/{name}.sol",
                "abi": abi or [],
                "bytecode": bytecode,
                "deployedBytecode": deployed_bytecode,
            }
        )
    )
    return path


class FakeDeployments:
    """In-memory stand-in for ``DeploymentsManager`` used by deploy script tests."""

    def __init__(self, store: DeploymentsStore, reads: dict[tuple[str, str], Any] | None = None):
        self.store = store
        self.reads = reads or {}
        self.deployed: list[tuple[str, list[Any], dict[str, Any] | None]] = []
        self.executed: list[tuple[str, str, tuple[Any, ...]]] = []
        self._next = 0x100

    def get(self, name: str) -> Deployment:
        return self.store.get(name)

    def get_or_none(self, name: str) -> Deployment | None:
        return self.store.get_or_none(name)

    def save(self, deployment: Deployment) -> Deployment:
        self.store.save(deployment)
        return deployment

    def update_linked_data(self, name: str, linked_data: dict[str, Any]) -> Deployment:
        deployment = self.get(name)
        merged = {**(deployment.linked_data or {}), **linked_data}
        return self.save(
            Deployment(
                name=deployment.name,
                address=deployment.address,
                args=deployment.args,
                linked_data=merged,
            )
        )

    def deploy(self, name: str, *, args: Any = (), linked_data: Any = None, **_: Any) -> Any:
        existing = self.store.get_or_none(name)
        if existing is not None:
            return SimpleNamespace(deployment=existing, newly_deployed=False, address=existing.address)
        self._next += 1
        deployment = Deployment(
            name=name,
            address=address(self._next),
            args=list(args),
            linked_data=dict(linked_data) if linked_data else None,
        )
        self.store.save(deployment)
        self.deployed.append((name, list(args), deployment.linked_data))
        return SimpleNamespace(deployment=deployment, newly_deployed=True, address=deployment.address)

    def read(self, name: str, method: str, *args: Any) -> Any:
        return self.reads[(name, method)]

    def execute(self, name: str, method: str, *args: Any, **_: Any) -> None:
        self.executed.append((name, method, args))


def make_env(
    tmp_path: Path,
    *,
    chain_id: int = 1,
    network_name: str = "mainnet",
    reads: dict[tuple[str, str], Any] | None = None,
) -> DeployEnvironment:
    store = DeploymentsStore(tmp_path / "deployments", network_name)
    deployments = FakeDeployments(store, reads)
    return cast(
        DeployEnvironment,
        SimpleNamespace(
            network_name=network_name,
            deployer=DEPLOYER,
            deployments=deployments,
            get_chain_id=lambda: chain_id,
        ),
    )


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    for key in (
        "ETHEREUM_NODE",
        "ETHEREUM_NODE_MAINNET",
        "ETHEREUM_NODE_MATIC",
        "ETHEREUM_NODE_TESTNET",
        "ETHEREUM_NODE_HARDHAT",
        "ETHEREUM_ACCOUNTS",
        "ETHEREUM_ACCOUNTS_MAINNET",
        "ETHEREUM_ACCOUNTS_MATIC",
        "ETHEREUM_ACCOUNTS_TESTNET",
        "DEPLOY_CONFIG_PATH",
    ):
        monkeypatch.delenv(key, raising=False)
    return monkeypatch


# ---------------------------------------------------------------------------
# Live node fixtures (integration suites)
# ---------------------------------------------------------------------------


@pytest.fixture
def release(protocol_deployment: DeployEnvironment, evm_snapshot: EvmProvider) -> DeployEnvironment:
    return protocol_deployment


@pytest.fixture
def stranger(release: DeployEnvironment) -> str:
    signers = release.get_signers()
    if len(signers) < 2:
        pytest.skip("A second signer is required")
    return signers[1]
