"""Declarative deploy script metadata: tags, dependencies and skip predicates."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from ..config.network import is_one_of_networks
from ..constants import Network
from ..exceptions import DependencyError

if TYPE_CHECKING:  # pragma: no cover - typing helper
    from .environment import DeployEnvironment

DeployFunction = Callable[["DeployEnvironment"], None]
SkipPredicate = Callable[["DeployEnvironment"], bool]


def never_skip(env: DeployEnvironment) -> bool:
    return False


@dataclass(frozen=True)
class DeployScript:
    """A single deploy step and the metadata the runner orders it by."""

    name: str
    func: DeployFunction
    tags: tuple[str, ...]
    dependencies: tuple[str, ...] = ()
    skip: SkipPredicate = field(default=never_skip)

    def __call__(self, env: DeployEnvironment) -> None:
        self.func(env)

    def should_skip(self, env: DeployEnvironment) -> bool:
        return bool(self.skip(env))


class ScriptRegistry:
    """Ordered collection of deploy scripts indexed by name and tag."""

    def __init__(self) -> None:
        self._scripts: dict[str, DeployScript] = {}

    def register(self, script: DeployScript) -> DeployScript:
        if script.name in self._scripts:
            raise DependencyError(f"Deploy script '{script.name}' is already registered")
        self._scripts[script.name] = script
        return script

    def by_name(self, name: str) -> DeployScript:
        try:
            return self._scripts[name]
        except KeyError:
            raise DependencyError(f"Unknown deploy script '{name}'") from None

    def by_tag(self, tag: str) -> list[DeployScript]:
        return [script for script in self._scripts.values() if tag in script.tags]

    def tags(self) -> set[str]:
        return {tag for script in self._scripts.values() for tag in script.tags}

    def all(self) -> list[DeployScript]:
        return list(self._scripts.values())

    def __len__(self) -> int:
        return len(self._scripts)

    def __contains__(self, name: object) -> bool:
        return name in self._scripts


REGISTRY = ScriptRegistry()


def deploy_script(
    *,
    tags: Sequence[str],
    dependencies: Sequence[str] = (),
    skip: SkipPredicate | None = None,
    name: str | None = None,
    registry: ScriptRegistry | None = None,
) -> Callable[[DeployFunction], DeployScript]:
    """Register the decorated function as a deploy script.

    The script name defaults to the last tag, which by convention is the
    contract the script deploys.
    """

    if not tags:
        raise DependencyError("Deploy scripts need at least one tag")

    def decorator(func: DeployFunction) -> DeployScript:
        script = DeployScript(
            name=name or tags[-1],
            func=func,
            tags=tuple(tags),
            dependencies=tuple(dependencies),
            skip=skip or never_skip,
        )
        return (registry if registry is not None else REGISTRY).register(script)

    return decorator


def skip_unless_networks(*networks: Network | int) -> SkipPredicate:
    """Build a skip predicate that only runs on the given chains."""

    allowed: Iterable[Network | int] = tuple(networks)

    def skip(env: DeployEnvironment) -> bool:
        return not is_one_of_networks(env.get_chain_id(), allowed)

    return skip
