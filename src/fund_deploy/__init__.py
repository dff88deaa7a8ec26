"""Fund protocol deployment automation and test harness.

Deploy scripts wire the protocol contracts together through a tag and
dependency graph; the ``testutils`` package drives the deployed contracts
from pytest suites.
"""

from .chain import ArtifactStore, ChainConnection, TransactionDispatcher
from .config import NetworkSettings, ProtocolConfig, load_config, load_network
from .constants import Network
from .deploy import (
    DeployEnvironment,
    Deployment,
    DeploymentsManager,
    DeploymentsStore,
    deploy_script,
    run,
)
from .exceptions import (
    ArtifactNotFoundError,
    ConfigurationError,
    DependencyError,
    DeploymentNotFoundError,
    FundDeployError,
    NetworkError,
    TransactionRevertedError,
    ValidationError,
    VerificationError,
)

__version__ = "0.1.0"

__all__ = [
    # Chain access
    "ArtifactStore",
    "ChainConnection",
    "TransactionDispatcher",
    # Configuration
    "Network",
    "NetworkSettings",
    "ProtocolConfig",
    "load_config",
    "load_network",
    # Deployments
    "DeployEnvironment",
    "Deployment",
    "DeploymentsManager",
    "DeploymentsStore",
    "deploy_script",
    "run",
    # Exceptions
    "ArtifactNotFoundError",
    "ConfigurationError",
    "DependencyError",
    "DeploymentNotFoundError",
    "FundDeployError",
    "NetworkError",
    "TransactionRevertedError",
    "ValidationError",
    "VerificationError",
]
