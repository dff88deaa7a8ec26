"""Bundled deploy scripts.

Importing this package registers every script with the global registry in
the order below, which is also the tie-break order of the runner.
"""

from . import config  # noqa: F401
from .persistent import (  # noqa: F401
    address_list_registry,
    dispatcher,
    external_position_factory,
    gas_relay_paymaster_factory,
    gas_relay_paymaster_lib,
)
from .release.core import (  # noqa: F401
    external_position_manager,
    fee_manager,
    fund_deployer,
    integration_manager,
    policy_manager,
    value_interpreter,
)
from .release.extensions.adapters import (  # noqa: F401
    aave_v2_adapter,
    aave_v2_atoken_list_owner,
)
from .release.extensions.external_positions import (  # noqa: F401
    kiln_staking_position_lib,
    notional_v2_position_lib,
)
