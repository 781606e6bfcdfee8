"""Metadata commands for the datasetsync CLI.

Commands:
- sync-metadata: Restore or sync a dataset's metadata once
- status: Show a dataset's metadata status
"""

from __future__ import annotations

import sys
from dataclasses import replace

import click

from datasetsync.cachefs import GooseFSFileUtils, PodExecutor, ScanError
from datasetsync.cli.config import ConfigError, get_cluster_config, get_kubectl, load_config
from datasetsync.cluster import APIError, HTTPClusterClient
from datasetsync.core import EngineConfig, NamespacedName
from datasetsync.metadata import EngineContext, MetadataEngine, start_background_scan


def read_config() -> dict[str, str]:
    """Load the saved configuration, exiting on a broken config file."""
    try:
        return load_config()
    except ConfigError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


def build_cluster_client(config: dict[str, str]) -> HTTPClusterClient:
    """Create the cluster client from the CLI configuration."""
    try:
        cluster_config = get_cluster_config(config)
    except ConfigError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    return HTTPClusterClient(cluster_config)


def build_file_utils(
    key: NamespacedName, engine_config: EngineConfig, config: dict[str, str]
) -> GooseFSFileUtils:
    """Create the cache filesystem utilities bound to the dataset's master pod."""
    executor = PodExecutor(
        pod_name=engine_config.master_pod_name(key.name),
        container=engine_config.master_container,
        namespace=key.namespace,
        kubectl=get_kubectl(config),
    )
    return GooseFSFileUtils(executor, root=engine_config.metadata_root)


@click.command("sync-metadata")
@click.argument("namespace")
@click.argument("name")
@click.option(
    "--wait-timeout",
    type=float,
    default=EngineConfig.metadata_sync_wait_timeout,
    show_default=True,
    help="Seconds to wait for the background scan before scanning directly.",
)
@click.option("--background", is_flag=True, help="Start a background scan first.")
@click.option(
    "--metadata-info-dir",
    default=EngineConfig.metadata_info_dir,
    show_default=True,
    help="Directory of backed up metadata-info files in the master pod.",
)
def sync_metadata(
    namespace: str,
    name: str,
    wait_timeout: float,
    background: bool,
    metadata_info_dir: str,
) -> None:
    """Restore or sync the metadata of dataset NAMESPACE/NAME."""
    config = read_config()
    key = NamespacedName(namespace=namespace, name=name)
    engine_config = EngineConfig(
        metadata_sync_wait_timeout=wait_timeout,
        metadata_info_dir=metadata_info_dir,
    )

    client = build_cluster_client(config)
    with client:
        ctx = EngineContext(
            key=key,
            client=client,
            file_utils=build_file_utils(key, engine_config, config),
            config=engine_config,
        )
        try:
            # The scan only runs for datasets the engine is going to sync
            if background and MetadataEngine(ctx).should_sync_metadata():
                ctx = replace(ctx, result_channel=start_background_scan(ctx))
            MetadataEngine(ctx).sync_metadata()
            dataset = ctx.get_dataset()
        except (APIError, ScanError) as e:
            click.echo(f"Error: {e}", err=True)
            sys.exit(1)

    click.echo(
        f"{key}: UfsTotal={dataset.status.ufs_total or '-'} "
        f"FileNum={dataset.status.file_num or '-'}"
    )


@click.command()
@click.argument("namespace")
@click.argument("name")
def status(namespace: str, name: str) -> None:
    """Show the metadata status of dataset NAMESPACE/NAME."""
    key = NamespacedName(namespace=namespace, name=name)
    with build_cluster_client(read_config()) as client:
        try:
            dataset = client.get(key)
        except APIError as e:
            click.echo(f"Error: {e}", err=True)
            sys.exit(1)

    click.echo(f"Dataset:  {key}")
    click.echo(f"UfsTotal: {dataset.status.ufs_total or '-'}")
    click.echo(f"FileNum:  {dataset.status.file_num or '-'}")
    if dataset.spec.data_restore_location is not None:
        click.echo(f"Restore:  {dataset.spec.data_restore_location.path}")
