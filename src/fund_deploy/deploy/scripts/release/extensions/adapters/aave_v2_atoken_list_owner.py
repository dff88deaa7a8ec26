"""Deploy the owner of the Aave V2 aToken address list.

The owner creates its list in the AddressListRegistry on construction, so
the new list takes the id equal to the registry's list count read just before
the deployment. That id is recorded as linked data for the adapter to pick up.
"""

import logging

from fund_deploy.config import load_config
from fund_deploy.constants import Network
from fund_deploy.deploy.environment import DeployEnvironment
from fund_deploy.deploy.script import deploy_script, skip_unless_networks
from fund_deploy.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

LIST_DESCRIPTION = "Aave v2: aTokens"


@deploy_script(
    tags=["Release", "AaveV2ATokenListOwner"],
    dependencies=["AddressListRegistry", "Config"],
    skip=skip_unless_networks(Network.HOMESTEAD, Network.MATIC),
)
def deploy_aave_v2_atoken_list_owner(env: DeployEnvironment) -> None:
    deployments = env.deployments
    config = load_config(env)
    address_list_registry = deployments.get("AddressListRegistry")
    list_id = deployments.read("AddressListRegistry", "getListCount")

    result = deployments.deploy(
        "AaveV2ATokenListOwner",
        args=[
            address_list_registry.address,
            LIST_DESCRIPTION,
            config.require_aave_v2().lending_pool_address_provider,
        ],
        sender=env.deployer,
        log=True,
        skip_if_already_deployed=True,
    )

    if not result.newly_deployed:
        if "listId" not in (result.deployment.linked_data or {}):
            raise ConfigurationError(
                "AaveV2ATokenListOwner was deployed without recording its list id",
                field="listId",
                value=result.address,
            )
        return

    deployments.update_linked_data("AaveV2ATokenListOwner", {"listId": list_id})
    logger.info("AaveV2ATokenListOwner owns address list %s", list_id)
