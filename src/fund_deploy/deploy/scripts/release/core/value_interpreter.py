from fund_deploy.config import load_config
from fund_deploy.deploy.environment import DeployEnvironment
from fund_deploy.deploy.script import deploy_script


@deploy_script(tags=["Release", "ValueInterpreter"], dependencies=["Config", "FundDeployer"])
def deploy_value_interpreter(env: DeployEnvironment) -> None:
    config = load_config(env)
    fund_deployer = env.deployments.get("FundDeployer")

    env.deployments.deploy(
        "ValueInterpreter",
        args=[fund_deployer.address, config.weth, config.stale_rate_threshold],
        sender=env.deployer,
        log=True,
        skip_if_already_deployed=True,
    )
