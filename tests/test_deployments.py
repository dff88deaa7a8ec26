from __future__ import annotations

import json
from enum import IntEnum
from pathlib import Path
from types import SimpleNamespace
from typing import Any, cast

import pytest
from conftest import DEPLOYER, address, write_artifact
from hexbytes import HexBytes

from fund_deploy.chain.artifacts import ArtifactStore
from fund_deploy.chain.connections import ChainConnection
from fund_deploy.chain.transactions import TransactionDispatcher
from fund_deploy.deploy.deployments import (
    Deployment,
    DeploymentsManager,
    DeploymentsStore,
    normalise_args,
)
from fund_deploy.exceptions import ConfigurationError, DeploymentNotFoundError

DISPATCHER_ABI = [{"type": "constructor", "inputs": []}]


class Kind(IntEnum):
    ADAPTER = 2


class DummyFunction:
    def __init__(self, name: str, args: tuple[Any, ...]) -> None:
        self.fn_name = name
        self.args = args


class DummyFactory:
    def __init__(self, abi: list[dict[str, Any]], bytecode: str) -> None:
        self.abi = abi
        self.bytecode = bytecode

    def constructor(self, *args: Any) -> DummyFunction:
        return DummyFunction("constructor", args)


class DummyContract:
    def __init__(self, address: str) -> None:
        self.address = address
        self.functions = SimpleNamespace(
            addPositionDeployers=lambda *args: DummyFunction("addPositionDeployers", args),
            getListCount=lambda: DummyFunction("getListCount", ()),
        )


class DummyDispatcher:
    def __init__(self) -> None:
        self.sent: list[tuple[DummyFunction, dict[str, Any]]] = []
        self.calls: list[DummyFunction] = []
        self.next_address = address(0xABC)

    def send(self, function: DummyFunction, **kwargs: Any) -> dict[str, Any]:
        self.sent.append((function, kwargs))
        return {
            "contractAddress": self.next_address if function.fn_name == "constructor" else None,
            "transactionHash": HexBytes("0x" + "ab" * 32),
            "blockNumber": 42,
            "gasUsed": 21000,
            "status": 1,
        }

    def call(self, function: DummyFunction) -> int:
        self.calls.append(function)
        return 3


class DummyEth:
    def __init__(self) -> None:
        self.codeless: set[str] = set()

    def contract(self, abi: list[dict[str, Any]], bytecode: str) -> DummyFactory:
        return DummyFactory(abi, bytecode)

    def get_code(self, account: str) -> HexBytes:
        return HexBytes(b"" if account in self.codeless else b"\x60\x01")


def _manager(
    tmp_path: Path, eth: DummyEth | None = None
) -> tuple[DeploymentsManager, DummyDispatcher]:
    artifacts_dir = tmp_path / "artifacts"
    write_artifact(artifacts_dir, "Dispatcher", abi=DISPATCHER_ABI, bytecode="0x6001")
    write_artifact(artifacts_dir, "IDispatcher", bytecode="0x")
    dispatcher = DummyDispatcher()
    connection = SimpleNamespace(
        web3=SimpleNamespace(eth=eth or DummyEth()),
        contract=lambda abi, address: DummyContract(address),
    )
    manager = DeploymentsManager(
        DeploymentsStore(tmp_path / "deployments", "hardhat"),
        cast(ChainConnection, connection),
        ArtifactStore([artifacts_dir]),
        cast(TransactionDispatcher, dispatcher),
    )
    return manager, dispatcher


def test_normalise_args_converts_to_json_form() -> None:
    contract = SimpleNamespace(address=address(7))

    normalised = normalise_args(
        ["0xc02aaa39b223fe8d0a0e5c4f27ead9083c756cc2", b"\x01\x02", Kind.ADAPTER, [b"\xff"], 5]
    )

    assert normalised == [
        "0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2",
        "0x0102",
        2,
        ["0xff"],
        5,
    ]
    # Plain objects with an address attribute are not web3 contracts
    assert normalise_args([contract]) == [contract]


def test_store_round_trips_hardhat_deploy_json(tmp_path: Path) -> None:
    store = DeploymentsStore(tmp_path, "mainnet")
    deployment = Deployment(
        name="FeeManager",
        address=address(1),
        abi=[{"type": "function", "name": "x"}],
        transaction_hash="0x" + "aa" * 32,
        args=[address(2)],
        linked_data={"listId": 4},
        block_number=16_185_500,
    )

    store.save(deployment)
    raw = json.loads((tmp_path / "mainnet" / "FeeManager.json").read_text())

    assert raw["transactionHash"] == deployment.transaction_hash
    assert raw["linkedData"] == {"listId": 4}
    assert raw["receipt"] == {"blockNumber": 16_185_500}
    assert store.get("FeeManager") == deployment


def test_store_missing_deployment(tmp_path: Path) -> None:
    store = DeploymentsStore(tmp_path, "matic")

    assert store.get_or_none("Vault") is None
    assert not store.delete("Vault")
    with pytest.raises(DeploymentNotFoundError) as exc:
        store.get("Vault")
    assert exc.value.network == "matic"


def test_bind_chain_id_rejects_other_chain(tmp_path: Path) -> None:
    store = DeploymentsStore(tmp_path, "hardhat")
    store.bind_chain_id(31337)
    store.bind_chain_id(31337)

    with pytest.raises(ConfigurationError, match="chain 31337") as exc:
        store.bind_chain_id(1)

    assert exc.value.details["recorded"] == 31337
    assert store.read_chain_id() == 31337


def test_store_export_and_chain_id(tmp_path: Path) -> None:
    store = DeploymentsStore(tmp_path, "hardhat")
    store.write_chain_id(31337)
    store.save(Deployment(name="Dispatcher", address=address(1)))
    store.save(Deployment(name="Config", address=address(0), linked_data={"chainId": 1}))

    exported = store.export()

    assert exported["name"] == "hardhat"
    assert exported["chainId"] == 31337
    assert set(exported["contracts"]) == {"Config", "Dispatcher"}
    assert "linkedData" not in exported["contracts"]["Dispatcher"]
    assert exported["contracts"]["Config"]["linkedData"] == {"chainId": 1}


def test_deploy_saves_new_record(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    manager, dispatcher = _manager(tmp_path)

    with caplog.at_level("INFO"):
        result = manager.deploy("Dispatcher", sender=DEPLOYER, log=True)

    assert result.newly_deployed
    assert result.address == address(0xABC)
    saved = manager.get("Dispatcher")
    assert saved.bytecode == "0x6001"
    assert saved.block_number == 42
    assert saved.num_deployments == 1
    assert dispatcher.sent[0][1]["action"] == "deploy Dispatcher"
    assert 'deploying "Dispatcher"' in caplog.text


def test_deploy_reuses_unchanged_deployment(tmp_path: Path) -> None:
    manager, dispatcher = _manager(tmp_path)
    manager.deploy("Dispatcher", sender=DEPLOYER)

    again = manager.deploy("Dispatcher", sender=DEPLOYER)

    assert not again.newly_deployed
    assert len(dispatcher.sent) == 1


def test_deploy_redeploys_when_args_change(tmp_path: Path) -> None:
    manager, dispatcher = _manager(tmp_path)
    manager.deploy("Dispatcher", sender=DEPLOYER, args=[address(1)])
    dispatcher.next_address = address(0xDEF)

    again = manager.deploy("Dispatcher", sender=DEPLOYER, args=[address(2)])

    assert again.newly_deployed
    assert again.address == address(0xDEF)
    assert manager.get("Dispatcher").num_deployments == 2


def test_skip_if_already_deployed_ignores_changes(tmp_path: Path) -> None:
    manager, dispatcher = _manager(tmp_path)
    manager.deploy("Dispatcher", sender=DEPLOYER, args=[address(1)])

    again = manager.deploy(
        "Dispatcher", sender=DEPLOYER, args=[address(2)], skip_if_already_deployed=True
    )

    assert not again.newly_deployed
    assert len(dispatcher.sent) == 1


def test_record_without_code_is_deployed_again(tmp_path: Path) -> None:
    eth = DummyEth()
    manager, dispatcher = _manager(tmp_path, eth)
    manager.deploy("Dispatcher", sender=DEPLOYER)
    eth.codeless.add(address(0xABC))
    dispatcher.next_address = address(0xDEF)

    again = manager.deploy("Dispatcher", sender=DEPLOYER, skip_if_already_deployed=True)

    assert again.newly_deployed
    assert again.address == address(0xDEF)
    assert manager.get("Dispatcher").num_deployments == 2


def test_deploying_an_interface_fails(tmp_path: Path) -> None:
    manager, _ = _manager(tmp_path)

    with pytest.raises(ConfigurationError):
        manager.deploy("IDispatcher", sender=DEPLOYER)


def test_execute_read_and_linked_data(tmp_path: Path) -> None:
    manager, dispatcher = _manager(tmp_path)
    manager.deploy("Dispatcher", sender=DEPLOYER, linked_data={"type": "CORE"})

    manager.execute("Dispatcher", "addPositionDeployers", [address(5)], sender=DEPLOYER, gas=100)
    count = manager.read("Dispatcher", "getListCount")
    updated = manager.update_linked_data("Dispatcher", {"listId": count - 1})

    function, kwargs = dispatcher.sent[-1]
    assert function.args == ([address(5)],)
    assert kwargs["gas"] == 100
    assert kwargs["action"] == "Dispatcher.addPositionDeployers"
    assert updated.linked_data == {"type": "CORE", "listId": 2}
    assert manager.get("Dispatcher").linked_data == {"type": "CORE", "listId": 2}
