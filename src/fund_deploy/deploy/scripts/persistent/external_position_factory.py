from fund_deploy.deploy.environment import DeployEnvironment
from fund_deploy.deploy.script import deploy_script


@deploy_script(tags=["Persistent", "ExternalPositionFactory"], dependencies=["Dispatcher"])
def deploy_external_position_factory(env: DeployEnvironment) -> None:
    dispatcher = env.deployments.get("Dispatcher")

    env.deployments.deploy(
        "ExternalPositionFactory",
        args=[dispatcher.address],
        sender=env.deployer,
        log=True,
        skip_if_already_deployed=True,
    )
