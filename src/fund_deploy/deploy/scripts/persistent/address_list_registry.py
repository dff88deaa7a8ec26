from fund_deploy.deploy.environment import DeployEnvironment
from fund_deploy.deploy.script import deploy_script


@deploy_script(tags=["Persistent", "AddressListRegistry"], dependencies=["Dispatcher"])
def deploy_address_list_registry(env: DeployEnvironment) -> None:
    dispatcher = env.deployments.get("Dispatcher")

    env.deployments.deploy(
        "AddressListRegistry",
        args=[dispatcher.address],
        sender=env.deployer,
        log=True,
        skip_if_already_deployed=True,
    )
