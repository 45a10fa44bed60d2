"""mediamover CLI application entry point.

This module provides the main Click CLI interface for mediamover, which
inspects the media buckets in Supabase Storage and migrates them into a
Cloudflare R2 bucket. It handles configuration loading from options,
environment variables and a .env file, validation, logging setup, and
command registration.

Example:
    $ mediamover inspect --bucket play-images
    $ mediamover --source-config migration.toml migrate --dry-run
    $ mediamover migrate -b play-images -b actor-images --yes
"""
import importlib.metadata
from typing import Optional

import click
from dotenv import find_dotenv, load_dotenv
from pydantic import ValidationError

from mediamover.commands.inspect_buckets import inspect_buckets
from mediamover.commands.migrate_buckets import migrate_buckets
from mediamover.commands.presign_upload import presign_upload
from mediamover.exceptions import ConfigurationError
from mediamover.logging_config import setup_logging
from mediamover.objects.app_config import (
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
    AppConfig,
    DestinationSettings,
    SourceSettings,
)
from mediamover.objects.source_config import SourceConfig


@click.group()
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose logging (DEBUG level)",
)
@click.option(
    "--log-file",
    type=click.Path(),
    help="Write logs to file",
)
@click.option(
    "--supabase-url",
    type=str,
    help="Supabase project URL",
    envvar="SUPABASE_URL",
)
@click.option(
    "--supabase-service-key",
    type=str,
    help="Supabase service_role key",
    envvar="SUPABASE_SERVICE_KEY",
)
@click.option(
    "--r2-endpoint",
    type=str,
    help="R2 account endpoint URL",
    envvar="R2_ENDPOINT",
)
@click.option(
    "--r2-access-key-id",
    type=str,
    help="R2 access key id",
    envvar="R2_ACCESS_KEY_ID",
)
@click.option(
    "--r2-secret-access-key",
    type=str,
    help="R2 secret access key",
    envvar="R2_SECRET_ACCESS_KEY",
)
@click.option(
    "--r2-bucket",
    type=str,
    help="Destination R2 bucket",
    envvar="R2_BUCKET_NAME",
)
@click.option(
    "--r2-public-domain",
    type=str,
    help="Public base URL of the R2 bucket",
    envvar="R2_PUBLIC_DOMAIN",
)
@click.option(
    "--r2-connect-timeout",
    type=float,
    default=10.0,
    help="Seconds to wait for an R2 connection (default: 10)",
    envvar="R2_CONNECT_TIMEOUT",
)
@click.option(
    "--r2-read-timeout",
    type=float,
    default=60.0,
    help="Seconds to wait for an R2 response (default: 60)",
    envvar="R2_READ_TIMEOUT",
)
@click.option(
    "--page-size",
    type=click.IntRange(1, MAX_PAGE_SIZE),
    default=DEFAULT_PAGE_SIZE,
    help=f"Entries per listing page (default: {DEFAULT_PAGE_SIZE})",
    envvar="MM_PAGE_SIZE",
)
@click.option(
    "--source-config",
    type=click.Path(exists=True, file_okay=True, dir_okay=False, readable=True),
    help="Location of migration.toml",
    envvar="MM_SOURCE_CONFIG",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    log_file: Optional[str],
    supabase_url: Optional[str],
    supabase_service_key: Optional[str],
    r2_endpoint: Optional[str],
    r2_access_key_id: Optional[str],
    r2_secret_access_key: Optional[str],
    r2_bucket: Optional[str],
    r2_public_domain: Optional[str],
    r2_connect_timeout: float,
    r2_read_timeout: float,
    page_size: int,
    source_config: Optional[str],
) -> None:
    """Inspect Supabase Storage buckets and migrate them to Cloudflare R2.

    Builds the AppConfig and SourceConfig for the subcommands. Source and
    destination settings are each optional here; every command checks for
    the side it needs.

    Raises:
        click.UsageError: If a settings group is only partly given or invalid
        click.UsageError: If migration.toml is invalid
    """
    logger = setup_logging(verbose=verbose, log_file=log_file)
    ctx.ensure_object(dict)
    ctx.obj["logger"] = logger

    source_values = [supabase_url, supabase_service_key]
    destination_values = [r2_endpoint, r2_access_key_id, r2_secret_access_key, r2_bucket]

    if any(source_values) and not all(source_values):
        raise click.UsageError("SUPABASE_URL and SUPABASE_SERVICE_KEY must be set together")
    if any(destination_values) and not all(destination_values):
        raise click.UsageError(
            "R2_ENDPOINT, R2_ACCESS_KEY_ID, R2_SECRET_ACCESS_KEY and R2_BUCKET_NAME must be set together"
        )

    try:
        source = (
            SourceSettings(supabase_url=supabase_url, supabase_service_key=supabase_service_key)
            if all(source_values)
            else None
        )
        destination = (
            DestinationSettings(
                endpoint_url=r2_endpoint,
                access_key_id=r2_access_key_id,
                secret_access_key=r2_secret_access_key,
                bucket_name=r2_bucket,
                public_domain=r2_public_domain,
                connect_timeout=r2_connect_timeout,
                read_timeout=r2_read_timeout,
            )
            if all(destination_values)
            else None
        )
    except ValidationError as e:
        raise click.UsageError(f"Invalid settings\n{e}")

    if source_config:
        logger.info(f"source_config: {source_config}")
        try:
            valid_config = SourceConfig.from_toml(source_config)
        except ConfigurationError as e:
            raise click.UsageError(str(e))
    else:
        valid_config = SourceConfig()

    ctx.obj["SOURCE_CONFIG"] = valid_config
    ctx.obj["CONFIG"] = AppConfig(
        source=source,
        destination=destination,
        page_size=page_size,
    )


cli.add_command(inspect_buckets)
cli.add_command(migrate_buckets)
cli.add_command(presign_upload)


def start_cli() -> None:
    """Load .env, display the banner, and run the CLI.

    A .env file is optional; settings can come from the environment or
    options instead.
    """
    env_file = find_dotenv(usecwd=True)
    if env_file:
        load_dotenv(env_file)

    click.secho("mediamover", fg="magenta", bold=True, err=True)
    click.echo(f"Version: {importlib.metadata.version('mediamover')}", err=True)
    if env_file:
        click.echo(f"Configuration loaded from: {env_file}", err=True)
    click.echo(err=True)

    cli(obj={})


if __name__ == "__main__":
    start_cli()
