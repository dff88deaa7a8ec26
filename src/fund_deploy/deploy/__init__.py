"""Deployment records, environment, script registry and runner."""

from .deployments import (
    Deployment,
    DeploymentsManager,
    DeploymentsStore,
    DeployResult,
    normalise_args,
)
from .environment import DeployEnvironment
from .runner import ScriptOutcome, default_registry, resolve_order, run
from .script import (
    REGISTRY,
    DeployScript,
    ScriptRegistry,
    deploy_script,
    skip_unless_networks,
)

__all__ = [
    "REGISTRY",
    "DeployEnvironment",
    "DeployResult",
    "DeployScript",
    "Deployment",
    "DeploymentsManager",
    "DeploymentsStore",
    "ScriptOutcome",
    "ScriptRegistry",
    "default_registry",
    "deploy_script",
    "normalise_args",
    "resolve_order",
    "run",
    "skip_unless_networks",
]
