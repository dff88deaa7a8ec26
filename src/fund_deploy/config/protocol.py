"""Per-chain protocol configuration consumed by the deploy scripts."""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

from web3 import Web3
from web3.types import ChecksumAddress

from ..constants import CONFIG_DEPLOYMENT_NAME, ZERO_ADDRESS
from ..exceptions import ConfigurationError

if TYPE_CHECKING:  # pragma: no cover - typing helper
    from ..deploy.environment import DeployEnvironment

logger = logging.getLogger(__name__)

CONFIG_DATA_DIR = Path(__file__).parent / "data"

# Ten years, effectively disables staleness checks on forks
DEFAULT_STALE_RATE_THRESHOLD = 3650 * 24 * 3600
DEFAULT_POSITIONS_LIMIT = 20


def _address(data: Mapping[str, Any], key: str, *, prefix: str = "") -> ChecksumAddress:
    value = data.get(key)
    field_name = f"{prefix}{key}"
    if value is None:
        raise ConfigurationError(f"Missing config value '{field_name}'", field=field_name)
    try:
        return Web3.to_checksum_address(value)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(
            f"Config value '{field_name}' is not an address",
            field=field_name,
            value=value,
            details={"error": str(exc)},
        ) from exc


def _section(data: Mapping[str, Any], key: str) -> Mapping[str, Any] | None:
    section = data.get(key)
    if section is None:
        return None
    if not isinstance(section, Mapping):
        raise ConfigurationError(f"Config section '{key}' must be an object", field=key, value=section)
    return section


@dataclass(frozen=True)
class AaveV2Config:
    lending_pool: ChecksumAddress
    lending_pool_address_provider: ChecksumAddress

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> AaveV2Config:
        return cls(
            lending_pool=_address(data, "lendingPool", prefix="aaveV2."),
            lending_pool_address_provider=_address(
                data, "lendingPoolAddressProvider", prefix="aaveV2."
            ),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "lendingPool": self.lending_pool,
            "lendingPoolAddressProvider": self.lending_pool_address_provider,
        }


@dataclass(frozen=True)
class NotionalConfig:
    notional_contract: ChecksumAddress

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> NotionalConfig:
        return cls(notional_contract=_address(data, "notionalContract", prefix="notional."))

    def to_dict(self) -> dict[str, Any]:
        return {"notionalContract": self.notional_contract}


@dataclass(frozen=True)
class ChainlinkConfig:
    eth_usd_aggregator: ChecksumAddress
    stale_rate_threshold: int = DEFAULT_STALE_RATE_THRESHOLD

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ChainlinkConfig:
        return cls(
            eth_usd_aggregator=_address(data, "ethusd", prefix="chainlink."),
            stale_rate_threshold=int(data.get("staleRateThreshold", DEFAULT_STALE_RATE_THRESHOLD)),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"ethusd": self.eth_usd_aggregator, "staleRateThreshold": self.stale_rate_threshold}


@dataclass(frozen=True)
class GsnConfig:
    relay_hub: ChecksumAddress
    trusted_forwarder: ChecksumAddress

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> GsnConfig:
        return cls(
            relay_hub=_address(data, "relayHub", prefix="gsn."),
            trusted_forwarder=_address(data, "trustedForwarder", prefix="gsn."),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"relayHub": self.relay_hub, "trustedForwarder": self.trusted_forwarder}

    @classmethod
    def disabled(cls) -> GsnConfig:
        zero = Web3.to_checksum_address(ZERO_ADDRESS)
        return cls(relay_hub=zero, trusted_forwarder=zero)


@dataclass(frozen=True)
class ProtocolConfig:
    """Addresses and parameters the release contracts are constructed with."""

    chain_id: int
    weth: ChecksumAddress
    fee_token: ChecksumAddress
    wrapped_native_asset: ChecksumAddress
    positions_limit: int = DEFAULT_POSITIONS_LIMIT
    vault_mln_burner: ChecksumAddress = field(
        default_factory=lambda: Web3.to_checksum_address(ZERO_ADDRESS)
    )
    aave_v2: AaveV2Config | None = None
    notional: NotionalConfig | None = None
    chainlink: ChainlinkConfig | None = None
    gsn: GsnConfig = field(default_factory=GsnConfig.disabled)
    extra: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ProtocolConfig:
        if "chainId" not in data:
            raise ConfigurationError("Missing config value 'chainId'", field="chainId")

        aave_v2 = _section(data, "aaveV2")
        notional = _section(data, "notional")
        chainlink = _section(data, "chainlink")
        gsn = _section(data, "gsn")
        known = {
            "chainId",
            "weth",
            "feeToken",
            "wrappedNativeAsset",
            "positionsLimit",
            "vaultMlnBurner",
            "aaveV2",
            "notional",
            "chainlink",
            "gsn",
        }

        return cls(
            chain_id=int(data["chainId"]),
            weth=_address(data, "weth"),
            fee_token=_address(data, "feeToken"),
            wrapped_native_asset=_address(data, "wrappedNativeAsset"),
            positions_limit=int(data.get("positionsLimit", DEFAULT_POSITIONS_LIMIT)),
            vault_mln_burner=Web3.to_checksum_address(data.get("vaultMlnBurner") or ZERO_ADDRESS),
            aave_v2=AaveV2Config.from_dict(aave_v2) if aave_v2 is not None else None,
            notional=NotionalConfig.from_dict(notional) if notional is not None else None,
            chainlink=ChainlinkConfig.from_dict(chainlink) if chainlink is not None else None,
            gsn=GsnConfig.from_dict(gsn) if gsn is not None else GsnConfig.disabled(),
            extra={key: value for key, value in data.items() if key not in known},
        )

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "chainId": self.chain_id,
            "weth": self.weth,
            "feeToken": self.fee_token,
            "wrappedNativeAsset": self.wrapped_native_asset,
            "positionsLimit": self.positions_limit,
            "vaultMlnBurner": self.vault_mln_burner,
            "gsn": self.gsn.to_dict(),
        }
        if self.aave_v2 is not None:
            data["aaveV2"] = self.aave_v2.to_dict()
        if self.notional is not None:
            data["notional"] = self.notional.to_dict()
        if self.chainlink is not None:
            data["chainlink"] = self.chainlink.to_dict()
        data.update(self.extra)
        return data

    def require_aave_v2(self) -> AaveV2Config:
        if self.aave_v2 is None:
            raise ConfigurationError("Aave V2 is not configured for this chain", field="aaveV2")
        return self.aave_v2

    def require_notional(self) -> NotionalConfig:
        if self.notional is None:
            raise ConfigurationError("Notional is not configured for this chain", field="notional")
        return self.notional

    @property
    def stale_rate_threshold(self) -> int:
        if self.chainlink is None:
            return DEFAULT_STALE_RATE_THRESHOLD
        return self.chainlink.stale_rate_threshold


def config_path_for(network_name: str) -> Path:
    override = os.getenv("DEPLOY_CONFIG_PATH")
    if override:
        return Path(override)
    return CONFIG_DATA_DIR / f"{network_name.lower()}.json"


def load_protocol_config(network_name: str, path: str | Path | None = None) -> ProtocolConfig:
    """Read the protocol config JSON for ``network_name``."""

    config_path = Path(path) if path is not None else config_path_for(network_name)
    if not config_path.is_file():
        raise ConfigurationError(
            f"No protocol config found for network '{network_name}'",
            field="path",
            value=str(config_path),
        )

    try:
        payload = json.loads(config_path.read_text())
    except json.JSONDecodeError as exc:
        raise ConfigurationError(
            "Protocol config is not valid JSON",
            field="path",
            value=str(config_path),
            details={"error": str(exc)},
        ) from exc

    if not isinstance(payload, Mapping):
        raise ConfigurationError("Protocol config must be a JSON object", field="path", value=str(config_path))

    logger.debug("Loaded protocol config for %s from %s", network_name, config_path)
    return ProtocolConfig.from_dict(payload)


def load_config(env: DeployEnvironment) -> ProtocolConfig:
    """Return the config saved by the ``Config`` deploy script."""

    deployment = env.deployments.get(CONFIG_DEPLOYMENT_NAME)
    return ProtocolConfig.from_dict(deployment.linked_data or {})
