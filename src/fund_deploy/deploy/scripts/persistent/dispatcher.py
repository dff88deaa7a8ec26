from fund_deploy.deploy.environment import DeployEnvironment
from fund_deploy.deploy.script import deploy_script


@deploy_script(tags=["Persistent", "Dispatcher"])
def deploy_dispatcher(env: DeployEnvironment) -> None:
    env.deployments.deploy(
        "Dispatcher",
        sender=env.deployer,
        log=True,
        skip_if_already_deployed=True,
    )
