"""Example: Read back how a deployed release is wired together."""

from __future__ import annotations

import logging
import os

from dotenv import load_dotenv

from fund_deploy import DeployEnvironment

load_dotenv()

logging.basicConfig(
    level=os.getenv("LOGLEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

NETWORK = os.getenv("FUND_DEPLOY_NETWORK", "hardhat")


def main() -> None:
    env = DeployEnvironment.create(NETWORK)
    try:
        deployments = env.deployments

        print("PolicyManager")
        print(f"  fund deployer:  {deployments.read('PolicyManager', 'getFundDeployer')}")
        print(f"  paymaster:      {deployments.read('PolicyManager', 'getGasRelayPaymasterFactory')}")

        print("IntegrationManager")
        print(f"  policy manager: {deployments.read('IntegrationManager', 'getPolicyManager')}")
        print(f"  interpreter:    {deployments.read('IntegrationManager', 'getValueInterpreter')}")

        manager = deployments.get("ExternalPositionManager")
        is_deployer = deployments.read("ExternalPositionFactory", "isPositionDeployer", manager.address)
        print(f"ExternalPositionManager can deploy positions: {is_deployer}")

        list_owner = deployments.get_or_none("AaveV2ATokenListOwner")
        if list_owner is not None:
            print(f"Aave V2 aToken list id: {(list_owner.linked_data or {}).get('listId')}")
    finally:
        env.close()


if __name__ == "__main__":
    main()
