from fund_deploy.deploy.environment import DeployEnvironment
from fund_deploy.deploy.script import deploy_script


@deploy_script(
    tags=["Release", "FundDeployer"],
    dependencies=["Dispatcher", "GasRelayPaymasterFactory"],
)
def deploy_fund_deployer(env: DeployEnvironment) -> None:
    dispatcher = env.deployments.get("Dispatcher")
    gas_relay_paymaster_factory = env.deployments.get("GasRelayPaymasterFactory")

    env.deployments.deploy(
        "FundDeployer",
        args=[dispatcher.address, gas_relay_paymaster_factory.address],
        sender=env.deployer,
        log=True,
        skip_if_already_deployed=True,
    )
