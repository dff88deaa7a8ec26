from fund_deploy.config import load_config
from fund_deploy.constants import Network
from fund_deploy.deploy.environment import DeployEnvironment
from fund_deploy.deploy.script import deploy_script, skip_unless_networks


@deploy_script(
    tags=["Release", "KilnStakingPositionLib"],
    dependencies=["Config"],
    skip=skip_unless_networks(Network.HOMESTEAD),
)
def deploy_kiln_staking_position_lib(env: DeployEnvironment) -> None:
    config = load_config(env)

    env.deployments.deploy(
        "KilnStakingPositionLib",
        args=[config.weth],
        sender=env.deployer,
        log=True,
        skip_if_already_deployed=True,
    )
