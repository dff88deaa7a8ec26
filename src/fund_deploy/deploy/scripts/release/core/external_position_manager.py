"""Deploy the ExternalPositionManager and allow it to deploy position proxies."""

from fund_deploy.deploy.environment import DeployEnvironment
from fund_deploy.deploy.script import deploy_script


@deploy_script(
    tags=["Release", "ExternalPositionManager"],
    dependencies=["ExternalPositionFactory", "FundDeployer", "PolicyManager"],
)
def deploy_external_position_manager(env: DeployEnvironment) -> None:
    deployments = env.deployments
    external_position_factory = deployments.get("ExternalPositionFactory")
    fund_deployer = deployments.get("FundDeployer")
    policy_manager = deployments.get("PolicyManager")

    result = deployments.deploy(
        "ExternalPositionManager",
        args=[fund_deployer.address, external_position_factory.address, policy_manager.address],
        sender=env.deployer,
        log=True,
        skip_if_already_deployed=True,
    )

    if deployments.read("ExternalPositionFactory", "isPositionDeployer", result.address):
        return

    deployments.execute(
        "ExternalPositionFactory",
        "addPositionDeployers",
        [result.address],
        sender=env.deployer,
        log=True,
    )
