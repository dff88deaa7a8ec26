from __future__ import annotations

import pytest

from fund_deploy.config.network import (
    FORK_BLOCK_NUMBER,
    HARDHAT_BLOCK_GAS_LIMIT,
    accounts,
    is_one_of_networks,
    load_network,
    node_url,
)
from fund_deploy.constants import DEFAULT_NODE_URL, TEST_MNEMONIC, Network
from fund_deploy.exceptions import ConfigurationError


def test_node_url_prefers_network_specific_variable(clean_env: pytest.MonkeyPatch) -> None:
    clean_env.setenv("ETHEREUM_NODE", "http://generic:8545")
    clean_env.setenv("ETHEREUM_NODE_MAINNET", "http://mainnet:8545")

    assert node_url("mainnet") == "http://mainnet:8545"
    assert node_url("matic") == "http://generic:8545"


def test_node_url_falls_back_to_localhost(clean_env: pytest.MonkeyPatch) -> None:
    assert node_url("testnet") == DEFAULT_NODE_URL


def test_accounts_are_split_and_trimmed(clean_env: pytest.MonkeyPatch) -> None:
    clean_env.setenv("ETHEREUM_ACCOUNTS_MATIC", " 0xaa , 0xbb,,")

    assert accounts("matic") == ("0xaa", "0xbb")
    assert accounts("mainnet") == ()


def test_is_one_of_networks_accepts_hex_and_decimal() -> None:
    assert is_one_of_networks("0x1", [Network.HOMESTEAD])
    assert is_one_of_networks("137", [Network.HOMESTEAD, Network.MATIC])
    assert not is_one_of_networks(5, [Network.HOMESTEAD, Network.MATIC])


def test_is_one_of_networks_rejects_garbage() -> None:
    with pytest.raises(ConfigurationError) as exc:
        is_one_of_networks("mainnet", [Network.HOMESTEAD])

    assert exc.value.field == "chain_id"


def test_hardhat_network_forks_mainnet(clean_env: pytest.MonkeyPatch) -> None:
    clean_env.setenv("ETHEREUM_NODE_MAINNET", "https://archive.example")

    settings = load_network("hardhat")

    assert settings.is_local
    assert settings.chain_id == 1
    assert settings.mnemonic == TEST_MNEMONIC
    assert settings.account_count == 10
    assert settings.gas_price == 0
    assert settings.block_gas_limit == HARDHAT_BLOCK_GAS_LIMIT
    assert settings.fork_url == "https://archive.example"
    assert settings.fork_block_number == FORK_BLOCK_NUMBER


def test_remote_networks_use_configured_accounts(clean_env: pytest.MonkeyPatch) -> None:
    clean_env.setenv("ETHEREUM_NODE_MATIC", "https://polygon.example")
    clean_env.setenv("ETHEREUM_ACCOUNTS_MATIC", "0x01,0x02")

    settings = load_network("MATIC")

    assert settings.name == "matic"
    assert settings.url == "https://polygon.example"
    assert settings.accounts == ("0x01", "0x02")
    assert settings.chain_id == int(Network.MATIC)
    assert not settings.is_local


def test_testnet_chain_id_comes_from_the_node(clean_env: pytest.MonkeyPatch) -> None:
    assert load_network("testnet").chain_id is None


def test_unknown_network_raises() -> None:
    with pytest.raises(ConfigurationError) as exc:
        load_network("sepolia")

    assert exc.value.field == "network"
    assert "hardhat" in exc.value.details["known"]
