from fund_deploy.deploy.environment import DeployEnvironment
from fund_deploy.deploy.script import deploy_script


@deploy_script(
    tags=["Persistent", "GasRelayPaymasterFactory"],
    dependencies=["Dispatcher", "GasRelayPaymasterLib"],
)
def deploy_gas_relay_paymaster_factory(env: DeployEnvironment) -> None:
    dispatcher = env.deployments.get("Dispatcher")
    gas_relay_paymaster_lib = env.deployments.get("GasRelayPaymasterLib")

    env.deployments.deploy(
        "GasRelayPaymasterFactory",
        args=[dispatcher.address, gas_relay_paymaster_lib.address],
        sender=env.deployer,
        log=True,
        skip_if_already_deployed=True,
    )
