"""Save the chain's protocol config as the ``Config`` pseudo-deployment."""

import logging

from fund_deploy.config import load_protocol_config
from fund_deploy.constants import CONFIG_DEPLOYMENT_NAME, ZERO_ADDRESS
from fund_deploy.deploy.deployments import Deployment
from fund_deploy.deploy.environment import DeployEnvironment
from fund_deploy.deploy.script import deploy_script

logger = logging.getLogger(__name__)


@deploy_script(tags=["Config"])
def save_config(env: DeployEnvironment) -> None:
    config = load_protocol_config(env.network_name)
    chain_id = env.get_chain_id()
    if config.chain_id != chain_id:
        logger.warning(
            "Config for %s targets chain %s but the node reports %s",
            env.network_name,
            config.chain_id,
            chain_id,
        )

    env.deployments.save(
        Deployment(
            name=CONFIG_DEPLOYMENT_NAME,
            address=ZERO_ADDRESS,
            linked_data=config.to_dict(),
        )
    )
