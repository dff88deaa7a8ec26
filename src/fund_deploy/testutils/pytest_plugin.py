"""Pytest fixtures for suites that run against a local development node.

Enable with ``pytest_plugins = ["fund_deploy.testutils.pytest_plugin"]``. The
target network comes from ``FUND_DEPLOY_NETWORK`` (default ``hardhat``) and
compiled artifacts from ``FUND_DEPLOY_ARTIFACTS`` (default ``artifacts``).
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from pathlib import Path

import pytest

from ..config.network import load_env
from ..deploy.environment import DeployEnvironment
from ..deploy.runner import run
from ..exceptions import NetworkError
from .provider import EvmProvider

logger = logging.getLogger(__name__)

RELEASE_TAGS = ("Release",)


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line(
        "markers", "integration: requires a running development node and compiled artifacts"
    )


@pytest.fixture(scope="session")
def deploy_env(tmp_path_factory: pytest.TempPathFactory) -> Iterator[DeployEnvironment]:
    load_env()
    network = os.getenv("FUND_DEPLOY_NETWORK", "hardhat")
    artifacts_dir = Path(os.getenv("FUND_DEPLOY_ARTIFACTS", "artifacts"))
    try:
        env = DeployEnvironment.create(
            network,
            deployments_root=tmp_path_factory.mktemp("deployments"),
            artifact_paths=(artifacts_dir,),
        )
    except NetworkError as exc:
        pytest.skip(f"No development node for {network}: {exc.message}")
    yield env
    env.close()


@pytest.fixture(scope="session")
def evm(deploy_env: DeployEnvironment) -> EvmProvider:
    return EvmProvider(deploy_env.web3)


@pytest.fixture(scope="session")
def protocol_deployment(deploy_env: DeployEnvironment) -> DeployEnvironment:
    """Run the release deploy scripts once per session."""

    if not deploy_env.artifacts.names():
        pytest.skip("No compiled contract artifacts available")
    run(deploy_env, RELEASE_TAGS)
    return deploy_env


@pytest.fixture
def evm_snapshot(evm: EvmProvider) -> Iterator[EvmProvider]:
    snapshot_id = evm.snapshot()
    yield evm
    evm.revert(snapshot_id)
