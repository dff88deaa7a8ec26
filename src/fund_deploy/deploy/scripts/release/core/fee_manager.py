from fund_deploy.deploy.environment import DeployEnvironment
from fund_deploy.deploy.script import deploy_script


@deploy_script(tags=["Release", "FeeManager"], dependencies=["FundDeployer"])
def deploy_fee_manager(env: DeployEnvironment) -> None:
    fund_deployer = env.deployments.get("FundDeployer")

    env.deployments.deploy(
        "FeeManager",
        args=[fund_deployer.address],
        sender=env.deployer,
        log=True,
        skip_if_already_deployed=True,
    )
