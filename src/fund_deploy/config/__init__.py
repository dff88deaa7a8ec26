"""Network and protocol configuration."""

from .network import (
    NetworkSettings,
    accounts,
    is_one_of_networks,
    load_env,
    load_network,
    node_url,
)
from .protocol import (
    AaveV2Config,
    ChainlinkConfig,
    GsnConfig,
    NotionalConfig,
    ProtocolConfig,
    load_config,
    load_protocol_config,
)

__all__ = [
    "AaveV2Config",
    "ChainlinkConfig",
    "GsnConfig",
    "NetworkSettings",
    "NotionalConfig",
    "ProtocolConfig",
    "accounts",
    "is_one_of_networks",
    "load_config",
    "load_env",
    "load_network",
    "load_protocol_config",
    "node_url",
]
