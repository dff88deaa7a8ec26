"""Example: Deploy the release contracts to a local hardhat node."""

from __future__ import annotations

import logging
import os

from dotenv import load_dotenv

from fund_deploy import DeployEnvironment, load_config, run

load_dotenv()

logging.basicConfig(
    level=os.getenv("LOGLEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

NETWORK = os.getenv("FUND_DEPLOY_NETWORK", "hardhat")
ARTIFACTS_DIR = os.getenv("FUND_DEPLOY_ARTIFACTS", "artifacts")


def main() -> None:
    """Run every script tagged ``Release`` and print the resulting addresses."""

    env = DeployEnvironment.create(NETWORK, artifact_paths=[ARTIFACTS_DIR])
    try:
        outcomes = run(env, ["Release"])
        print(f"Ran {sum(not outcome.skipped for outcome in outcomes)} of {len(outcomes)} scripts")

        config = load_config(env)
        print(f"Config chain id: {config.chain_id} (node reports {env.get_chain_id()})")

        for name, deployment in sorted(env.deployments.store.all().items()):
            print(f"  {name:32} {deployment.address}")
    finally:
        env.close()


if __name__ == "__main__":
    main()
