from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest
from conftest import FakeDeployments, address, make_env

from fund_deploy.config.protocol import ProtocolConfig
from fund_deploy.deploy.deployments import Deployment
from fund_deploy.deploy.runner import default_registry, resolve_order, run
from fund_deploy.exceptions import ConfigurationError

WETH = "0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2"
READS: dict[tuple[str, str], Any] = {
    ("ExternalPositionFactory", "isPositionDeployer"): False,
    ("AddressListRegistry", "getListCount"): 5,
}


def _deployed(env: Any) -> dict[str, list[Any]]:
    deployments: FakeDeployments = env.deployments
    return {name: args for name, args, _ in deployments.deployed}


def test_bundled_scripts_respect_their_dependencies() -> None:
    registry = default_registry()
    order = resolve_order(registry, ["Release"])
    position = {script.name: index for index, script in enumerate(order)}

    assert "Config" in position
    for script in order:
        for dependency in script.dependencies:
            for provider in registry.by_tag(dependency):
                if provider is not script:
                    assert position[provider.name] < position[script.name]


def test_release_on_mainnet_wires_core_contracts(
    tmp_path: Path, clean_env: pytest.MonkeyPatch
) -> None:
    env = make_env(tmp_path, reads=READS)

    run(env, ["Release"])

    deployments = env.deployments
    deployed = _deployed(env)
    address_of = {name: deployments.get(name).address for name in deployed}

    assert deployed["Dispatcher"] == []
    assert deployed["FundDeployer"] == [
        address_of["Dispatcher"],
        address_of["GasRelayPaymasterFactory"],
    ]
    assert deployed["ValueInterpreter"] == [address_of["FundDeployer"], WETH, 90000]
    assert deployed["IntegrationManager"] == [
        address_of["FundDeployer"],
        address_of["PolicyManager"],
        address_of["ValueInterpreter"],
    ]
    assert deployed["KilnStakingPositionLib"] == [WETH]
    assert deployed["NotionalV2PositionLib"][1] == WETH


def test_config_script_saves_linked_data(tmp_path: Path, clean_env: pytest.MonkeyPatch) -> None:
    env = make_env(tmp_path)

    run(env, ["Config"])

    config = env.deployments.get("Config")
    assert ProtocolConfig.from_dict(config.linked_data or {}).chain_id == 1


def test_aave_adapter_uses_the_owned_list(tmp_path: Path, clean_env: pytest.MonkeyPatch) -> None:
    env = make_env(tmp_path, reads=READS)

    run(env, ["AaveV2Adapter"])

    deployments = env.deployments
    owner = deployments.get("AaveV2ATokenListOwner")
    assert owner.linked_data == {"listId": 5}
    assert owner.args[1] == "Aave v2: aTokens"

    adapter_args = _deployed(env)["AaveV2Adapter"]
    assert adapter_args[:3] == [
        deployments.get("IntegrationManager").address,
        deployments.get("AddressListRegistry").address,
        5,
    ]
    assert deployments.get("AaveV2Adapter").linked_data == {
        "nonSlippageAdapter": True,
        "type": "ADAPTER",
    }


def test_external_position_manager_is_registered_once(
    tmp_path: Path, clean_env: pytest.MonkeyPatch
) -> None:
    env = make_env(tmp_path, reads=READS)

    run(env, ["ExternalPositionManager"])

    manager = env.deployments.get("ExternalPositionManager").address
    assert env.deployments.executed == [
        ("ExternalPositionFactory", "addPositionDeployers", ([manager],))
    ]


def test_already_registered_position_deployer_is_left_alone(
    tmp_path: Path, clean_env: pytest.MonkeyPatch
) -> None:
    reads = {**READS, ("ExternalPositionFactory", "isPositionDeployer"): True}
    env = make_env(tmp_path, reads=reads)

    run(env, ["ExternalPositionManager"])

    assert env.deployments.executed == []


def test_mainnet_only_scripts_skip_on_matic(tmp_path: Path, clean_env: pytest.MonkeyPatch) -> None:
    env = make_env(tmp_path, chain_id=137, network_name="matic", reads=READS)

    outcomes = run(env, ["Release"])

    skipped = {outcome.name for outcome in outcomes if outcome.skipped}
    assert skipped == {"KilnStakingPositionLib", "NotionalV2PositionLib"}
    assert "AaveV2Adapter" in _deployed(env)


def test_rerun_reuses_existing_deployments(tmp_path: Path, clean_env: pytest.MonkeyPatch) -> None:
    env = make_env(tmp_path, reads=READS)
    run(env, ["Release"])
    first = dict(_deployed(env))

    run(env, ["Release"])

    assert _deployed(env) == first
    assert env.deployments.get("AaveV2ATokenListOwner").linked_data == {"listId": 5}


def test_list_id_is_kept_when_other_lists_are_created(
    tmp_path: Path, clean_env: pytest.MonkeyPatch
) -> None:
    env = make_env(tmp_path, reads=dict(READS))
    run(env, ["AaveV2ATokenListOwner"])
    env.deployments.reads[("AddressListRegistry", "getListCount")] = 9

    run(env, ["AaveV2ATokenListOwner"])

    assert env.deployments.get("AaveV2ATokenListOwner").linked_data == {"listId": 5}


def test_list_owner_without_list_id_is_rejected(
    tmp_path: Path, clean_env: pytest.MonkeyPatch
) -> None:
    env = make_env(tmp_path, reads=READS)
    run(env, ["AddressListRegistry", "Config"])
    env.deployments.save(Deployment(name="AaveV2ATokenListOwner", address=address(77)))

    with pytest.raises(ConfigurationError, match="without recording its list id"):
        run(env, ["AaveV2ATokenListOwner"])
