from fund_deploy.deploy.environment import DeployEnvironment
from fund_deploy.deploy.script import deploy_script


@deploy_script(
    tags=["Release", "IntegrationManager"],
    dependencies=["FundDeployer", "PolicyManager", "ValueInterpreter"],
)
def deploy_integration_manager(env: DeployEnvironment) -> None:
    fund_deployer = env.deployments.get("FundDeployer")
    policy_manager = env.deployments.get("PolicyManager")
    value_interpreter = env.deployments.get("ValueInterpreter")

    env.deployments.deploy(
        "IntegrationManager",
        args=[fund_deployer.address, policy_manager.address, value_interpreter.address],
        sender=env.deployer,
        log=True,
        skip_if_already_deployed=True,
    )
