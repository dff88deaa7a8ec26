from fund_deploy.deploy.environment import DeployEnvironment
from fund_deploy.deploy.script import deploy_script


@deploy_script(
    tags=["Release", "PolicyManager"],
    dependencies=["FundDeployer", "GasRelayPaymasterFactory"],
)
def deploy_policy_manager(env: DeployEnvironment) -> None:
    fund_deployer = env.deployments.get("FundDeployer")
    gas_relay_paymaster_factory = env.deployments.get("GasRelayPaymasterFactory")

    env.deployments.deploy(
        "PolicyManager",
        args=[fund_deployer.address, gas_relay_paymaster_factory.address],
        sender=env.deployer,
        log=True,
        skip_if_already_deployed=True,
    )
