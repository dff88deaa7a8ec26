"""Command line entry point: ``fund-deploy``."""

from __future__ import annotations

import json
import logging
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, NoReturn

import click

from .chain.artifacts import ArtifactStore
from .config.network import load_env
from .constants import CONFIG_DEPLOYMENT_NAME, MAX_CONTRACT_SIZE
from .deploy.deployments import DeploymentsStore
from .deploy.environment import DEFAULT_ARTIFACT_DIRS, DEFAULT_DEPLOYMENTS_DIR, DeployEnvironment
from .deploy.runner import run
from .deploy.verify import EtherscanVerifier, api_url_for_chain
from .exceptions import ConfigurationError, FundDeployError

logger = logging.getLogger(__name__)


@dataclass
class CliContext:
    network: str
    deployments_dir: Path
    artifacts_dirs: tuple[Path, ...]

    def store(self) -> DeploymentsStore:
        return DeploymentsStore(self.deployments_dir, self.network)

    def artifacts(self) -> ArtifactStore:
        return ArtifactStore(self.artifacts_dirs)


def _echo_json(data: Any) -> None:
    click.echo(json.dumps(data, indent=2, default=str))


def _fail(exc: FundDeployError) -> NoReturn:
    click.echo(f"Error: {exc.message}", err=True)
    if exc.details:
        click.echo(json.dumps(exc.details, indent=2, default=str), err=True)
    sys.exit(1)


@click.group(name="fund-deploy", help="Deploy and verify the fund protocol contracts.")
@click.option("--network", default="hardhat", show_default=True, help="Target network name.")
@click.option(
    "--deployments-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=DEFAULT_DEPLOYMENTS_DIR,
    show_default=True,
)
@click.option(
    "--artifacts-dir",
    "artifacts_dirs",
    type=click.Path(file_okay=False, path_type=Path),
    multiple=True,
    help="Compiled artifact directory; may be given more than once.",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Defaults to $LOGLEVEL or INFO.",
)
@click.pass_context
def main(
    ctx: click.Context,
    network: str,
    deployments_dir: Path,
    artifacts_dirs: tuple[Path, ...],
    log_level: str | None,
) -> None:
    load_env()
    logging.basicConfig(
        level=(log_level or os.getenv("LOGLEVEL", "INFO")).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ctx.obj = CliContext(
        network=network,
        deployments_dir=deployments_dir,
        artifacts_dirs=artifacts_dirs or tuple(Path(path) for path in DEFAULT_ARTIFACT_DIRS),
    )


@main.command(name="deploy", help="Run the deploy scripts selected by --tags (all by default).")
@click.option("--tags", multiple=True, help="Deploy script tag; may be given more than once.")
@click.pass_obj
def deploy_cmd(obj: CliContext, tags: tuple[str, ...]) -> None:
    try:
        env = DeployEnvironment.create(
            obj.network,
            deployments_root=obj.deployments_dir,
            artifact_paths=obj.artifacts_dirs,
        )
    except FundDeployError as exc:
        _fail(exc)

    try:
        outcomes = run(env, list(tags) or None)
    except FundDeployError as exc:
        _fail(exc)
    finally:
        env.close()

    for outcome in outcomes:
        click.echo(f"{'skipped' if outcome.skipped else 'ran':8} {outcome.name}")


@main.command(name="export", help="Write every deployment of the network to one JSON document.")
@click.option("--output", type=click.Path(dir_okay=False, path_type=Path), default=None)
@click.pass_obj
def export_cmd(obj: CliContext, output: Path | None) -> None:
    document = obj.store().export()
    if output is None:
        _echo_json(document)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(json.dumps(document, indent=2) + "\n")
    click.echo(f"Exported {len(document['contracts'])} deployments to {output}")


@main.command(name="verify", help="Verify deployments on the network's block explorer.")
@click.argument("names", nargs=-1)
@click.option("--api-key", envvar="ETHERSCAN_API_KEY", default="", show_envvar=True)
@click.pass_obj
def verify_cmd(obj: CliContext, names: tuple[str, ...], api_key: str) -> None:
    store = obj.store()
    artifacts = obj.artifacts()
    try:
        chain_id = store.read_chain_id()
        if chain_id is None:
            raise ConfigurationError(
                f"No chain id recorded for network '{obj.network}'; deploy first",
                field="network",
                value=obj.network,
            )
        verifier = EtherscanVerifier(api_key, api_url=api_url_for_chain(chain_id))

        deployments = store.all()
        selected = list(names) or [name for name in deployments if name != CONFIG_DEPLOYMENT_NAME]
        for name in selected:
            deployment = store.get(name)
            artifact = artifacts.get(name)
            build_info = artifacts.build_info_for(artifact)
            if build_info is None:
                click.echo(f"{name}: no build info, skipped")
                continue
            verified = verifier.verify(deployment, artifact, build_info)
            click.echo(f"{name}: {'verified' if verified else 'already verified'}")
    except FundDeployError as exc:
        _fail(exc)


@main.command(name="size", help="Report deployed bytecode sizes against the EIP-170 limit.")
@click.pass_obj
def size_cmd(obj: CliContext) -> None:
    artifacts = obj.artifacts()
    oversized = 0
    try:
        for name in artifacts.names():
            artifact = artifacts.get(name)
            if not artifact.is_deployable:
                continue
            size = artifact.deployed_size
            marker = ""
            if size > MAX_CONTRACT_SIZE:
                oversized += 1
                marker = "  (exceeds limit)"
            click.echo(f"{name:48} {size / 1024:8.3f} KiB{marker}")
    except FundDeployError as exc:
        _fail(exc)

    if oversized:
        click.echo(f"{oversized} contract(s) exceed {MAX_CONTRACT_SIZE} bytes", err=True)
        sys.exit(1)


if __name__ == "__main__":  # pragma: no cover
    main()
