"""Run deploy scripts in dependency order."""

from __future__ import annotations

import importlib
import logging
from collections.abc import Iterable
from dataclasses import dataclass

from ..exceptions import DependencyError
from .environment import DeployEnvironment
from .script import REGISTRY, DeployScript, ScriptRegistry

logger = logging.getLogger(__name__)

SCRIPTS_PACKAGE = "fund_deploy.deploy.scripts"


@dataclass(frozen=True)
class ScriptOutcome:
    name: str
    skipped: bool


def default_registry() -> ScriptRegistry:
    """Return the global registry with the bundled scripts imported."""

    importlib.import_module(SCRIPTS_PACKAGE)
    return REGISTRY


def resolve_order(registry: ScriptRegistry, tags: Iterable[str] | None = None) -> list[DeployScript]:
    """Return the scripts selected by ``tags`` preceded by everything they depend on."""

    if tags is None:
        selected = registry.all()
    else:
        selected = []
        for tag in tags:
            tagged = registry.by_tag(tag)
            if not tagged:
                raise DependencyError(f"No deploy script carries tag '{tag}'", tag=tag)
            selected.extend(script for script in tagged if script not in selected)
        # Keep registration order among the requested scripts
        position = {script.name: index for index, script in enumerate(registry.all())}
        selected.sort(key=lambda script: position[script.name])

    ordered: list[DeployScript] = []
    done: set[str] = set()
    visiting: list[str] = []

    def visit(script: DeployScript) -> None:
        if script.name in done:
            return
        if script.name in visiting:
            cycle = visiting[visiting.index(script.name) :] + [script.name]
            raise DependencyError(
                "Dependency cycle between deploy scripts",
                details={"cycle": cycle},
            )

        visiting.append(script.name)
        for dependency in script.dependencies:
            providers = [other for other in registry.by_tag(dependency) if other is not script]
            if not providers:
                raise DependencyError(
                    f"Deploy script '{script.name}' depends on unknown tag '{dependency}'",
                    tag=dependency,
                )
            for provider in providers:
                visit(provider)
        visiting.pop()

        done.add(script.name)
        ordered.append(script)

    for script in selected:
        visit(script)

    return ordered


def run(
    env: DeployEnvironment,
    tags: Iterable[str] | None = None,
    *,
    registry: ScriptRegistry | None = None,
) -> list[ScriptOutcome]:
    """Execute the selected scripts against ``env``."""

    scripts = resolve_order(registry if registry is not None else default_registry(), tags)
    logger.info(
        "Running %d deploy scripts on %s (chain id %s)",
        len(scripts),
        env.network_name,
        env.get_chain_id(),
    )

    outcomes = []
    for script in scripts:
        if script.should_skip(env):
            logger.info("Skipping %s on chain %s", script.name, env.get_chain_id())
            outcomes.append(ScriptOutcome(script.name, skipped=True))
            continue

        logger.debug("Running deploy script %s", script.name)
        script(env)
        outcomes.append(ScriptOutcome(script.name, skipped=False))

    return outcomes
