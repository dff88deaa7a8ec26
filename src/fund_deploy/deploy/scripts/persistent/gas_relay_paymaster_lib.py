from fund_deploy.config import load_config
from fund_deploy.deploy.environment import DeployEnvironment
from fund_deploy.deploy.script import deploy_script


@deploy_script(tags=["Persistent", "GasRelayPaymasterLib"], dependencies=["Config"])
def deploy_gas_relay_paymaster_lib(env: DeployEnvironment) -> None:
    config = load_config(env)

    env.deployments.deploy(
        "GasRelayPaymasterLib",
        args=[config.weth, config.gsn.relay_hub, config.gsn.trusted_forwarder],
        sender=env.deployer,
        log=True,
        skip_if_already_deployed=True,
    )
