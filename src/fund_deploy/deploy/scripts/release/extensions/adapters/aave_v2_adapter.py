from fund_deploy.config import load_config
from fund_deploy.constants import Network
from fund_deploy.deploy.environment import DeployEnvironment
from fund_deploy.deploy.script import deploy_script, skip_unless_networks


@deploy_script(
    tags=["Release", "Adapters", "AaveV2Adapter"],
    dependencies=["AaveV2ATokenListOwner", "AddressListRegistry", "Config", "IntegrationManager"],
    skip=skip_unless_networks(Network.HOMESTEAD, Network.MATIC),
)
def deploy_aave_v2_adapter(env: DeployEnvironment) -> None:
    deployments = env.deployments
    config = load_config(env)

    aave_v2_atoken_list_owner = deployments.get("AaveV2ATokenListOwner")
    address_list_registry = deployments.get("AddressListRegistry")
    integration_manager = deployments.get("IntegrationManager")

    deployments.deploy(
        "AaveV2Adapter",
        args=[
            integration_manager.address,
            address_list_registry.address,
            (aave_v2_atoken_list_owner.linked_data or {})["listId"],
            config.require_aave_v2().lending_pool,
        ],
        sender=env.deployer,
        linked_data={
            "nonSlippageAdapter": True,
            "type": "ADAPTER",
        },
        log=True,
        skip_if_already_deployed=True,
    )
