"""Compiled contract artifact lookup (Hardhat and Foundry layouts)."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from ..exceptions import ArtifactNotFoundError, ConfigurationError
from ..utils import strip_0x

logger = logging.getLogger(__name__)

_SKIPPED_DIRS = {"build-info", "cache"}


@dataclass(frozen=True)
class Artifact:
    """ABI and bytecode of one compiled contract."""

    contract_name: str
    abi: list[dict[str, Any]]
    bytecode: str = "0x"
    deployed_bytecode: str = "0x"
    source_name: str | None = None
    path: Path | None = field(default=None, compare=False)

    @property
    def is_deployable(self) -> bool:
        return len(self.bytecode) > 2

    @property
    def deployed_size(self) -> int:
        """Size in bytes of the runtime bytecode."""
        return len(strip_0x(self.deployed_bytecode)) // 2

    @classmethod
    def from_json(cls, payload: Mapping[str, Any], *, path: Path | None = None) -> Artifact:
        name = payload.get("contractName")
        if not name and path is not None:
            name = path.stem
        if "abi" not in payload:
            raise ConfigurationError(f"Artifact {path} has no ABI", field="abi", value=str(path))

        return cls(
            contract_name=str(name),
            abi=list(payload["abi"]),
            bytecode=_bytecode(payload.get("bytecode")),
            deployed_bytecode=_bytecode(payload.get("deployedBytecode")),
            source_name=payload.get("sourceName") or _foundry_source(payload),
            path=path,
        )


def _bytecode(value: Any) -> str:
    # Foundry nests the hex string under "object"
    if isinstance(value, Mapping):
        value = value.get("object")
    if not value:
        return "0x"
    text = str(value)
    return text if text.startswith("0x") else f"0x{text}"


def _foundry_source(payload: Mapping[str, Any]) -> str | None:
    metadata = payload.get("metadata")
    if isinstance(metadata, Mapping):
        target = metadata.get("settings", {}).get("compilationTarget")
        if isinstance(target, Mapping) and target:
            return next(iter(target))
    return None


class ArtifactStore:
    """Find artifacts by contract name under one or more directories."""

    def __init__(self, paths: Sequence[str | Path]):
        self._paths = [Path(path) for path in paths]
        self._cache: dict[str, Artifact] = {}
        self._index: dict[str, Path] | None = None

    @property
    def paths(self) -> list[Path]:
        return list(self._paths)

    def get(self, contract_name: str) -> Artifact:
        if contract_name in self._cache:
            return self._cache[contract_name]

        path = self._build_index().get(contract_name)
        if path is None:
            raise ArtifactNotFoundError(contract_name, [str(p) for p in self._paths])

        artifact = Artifact.from_json(json.loads(path.read_text()), path=path)
        self._cache[contract_name] = artifact
        return artifact

    def has(self, contract_name: str) -> bool:
        return contract_name in self._build_index()

    def names(self) -> list[str]:
        return sorted(self._build_index())

    def build_info_for(self, artifact: Artifact) -> dict[str, Any] | None:
        """Return the Hardhat build-info holding ``artifact``'s compilation, if any."""

        if artifact.source_name is None:
            return None

        for root in self._paths:
            build_dir = root / "build-info"
            if not build_dir.is_dir():
                continue
            for candidate in sorted(build_dir.glob("*.json")):
                payload = json.loads(candidate.read_text())
                contracts = payload.get("output", {}).get("contracts", {})
                if artifact.contract_name in contracts.get(artifact.source_name, {}):
                    return payload
        return None

    def _build_index(self) -> dict[str, Path]:
        if self._index is not None:
            return self._index

        index: dict[str, Path] = {}
        for root in self._paths:
            if not root.is_dir():
                logger.debug("Artifact directory %s does not exist", root)
                continue
            for candidate in sorted(root.rglob("*.json")):
                if candidate.name.endswith(".dbg.json"):
                    continue
                if _SKIPPED_DIRS.intersection(candidate.relative_to(root).parts):
                    continue
                # First match wins so earlier directories take precedence
                index.setdefault(candidate.stem, candidate)

        self._index = index
        return index
