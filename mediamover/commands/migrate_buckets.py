from typing import Dict, List, Optional, Tuple

import click
from rich.markup import escape

from mediamover.bucket.r2_manager import R2Manager
from mediamover.commands.inspect_buckets import get_bucket_names, get_source_manager
from mediamover.console import (
    confirm,
    error,
    header,
    info,
    newline,
    panel,
    success,
    transfer_counts,
    transfer_marker,
    warning,
)
from mediamover.exceptions import ListingError, StorageOperationError
from mediamover.objects.app_config import AppConfig
from mediamover.objects.bucket_migrator import BucketMigrator, derive_destination_key
from mediamover.objects.content_type import infer_content_type
from mediamover.objects.source_config import SourceConfig
from mediamover.objects.storage_object import (
    BucketReport,
    MigrationReport,
    StorageObject,
    TransferOutcome,
    TransferStatus,
)


def get_destination_manager(ctx: click.Context) -> R2Manager:
    """Return the R2 manager from the context, creating it on first use."""
    destination_manager = ctx.obj.get("DESTINATION_MANAGER")
    if destination_manager:
        return destination_manager

    app_config: AppConfig = ctx.obj["CONFIG"]
    if app_config.destination is None:
        raise click.UsageError(
            "R2_ENDPOINT, R2_ACCESS_KEY_ID, R2_SECRET_ACCESS_KEY and R2_BUCKET_NAME must be set"
        )

    destination_manager = R2Manager(app_config.destination)
    if destination_manager.has_error:
        error("Unable to connect to R2. Check the endpoint, keys and bucket name.")
        ctx.abort()
    ctx.obj["DESTINATION_MANAGER"] = destination_manager
    return destination_manager


def display_migration_plan(migrator: BucketMigrator, bucket_names: List[str]) -> Dict[str, List[StorageObject]]:
    """List every bucket and show what would be uploaded, without transferring.

    Returns:
        Planned entries per readable bucket
    """
    plans: Dict[str, List[StorageObject]] = {}

    newline()
    header("MIGRATION PLAN (dry run)", style="cyan")

    for bucket in bucket_names:
        newline()
        try:
            planned = migrator.plan_bucket(bucket)
        except ListingError as e:
            error(f"Error listing {bucket}: {escape(str(e))}")
            continue

        plans[bucket] = planned
        info(f"{bucket}: {len(planned)} files to upload", bold=True)
        for entry in planned:
            info(f"  {entry.name} -> {derive_destination_key(bucket, entry.name)} ({infer_content_type(entry.name)})")

    newline()
    total = sum(len(planned) for planned in plans.values())
    info(f"Total files to upload: {total}", bold=True)
    return plans


def show_bucket_listed(report: BucketReport) -> None:
    newline()
    header(f"Bucket: {report.bucket}")
    if report.listing_error is not None:
        error(f"Error listing {report.bucket}: {escape(report.listing_error)}")
    elif report.listed_count == 0:
        warning("This bucket is empty.")
    else:
        info(f"Found {report.listed_count} entries. Starting upload...")


def show_outcome(outcome: TransferOutcome) -> None:
    if outcome.status == TransferStatus.UPLOADED:
        transfer_marker(outcome.object_name, outcome.status, outcome.destination_key)
    else:
        transfer_marker(outcome.object_name, outcome.status, outcome.error_message or "")


def display_migration_summary(report: MigrationReport, destination_bucket: str) -> None:
    newline()
    header("MIGRATION COMPLETE", style="cyan")
    newline()

    info(f"Entries listed: {report.listed_count}, destination bucket: {destination_bucket}")
    transfer_counts(report.uploaded_count, report.skipped_count, report.failed_count)

    if report.failed_buckets:
        error(f"Buckets that could not be listed: {', '.join(report.failed_buckets)}")
    if report.failed_count > 0:
        error(f"Objects failed: {report.failed_count}")
        for outcome in report.failures():
            error(f"  {outcome.source_bucket}/{outcome.object_name}: {escape(outcome.error_message or '')}")


def verify_destination(destination_manager: R2Manager, report: MigrationReport) -> None:
    """Count destination keys under each migrated bucket prefix."""
    newline()
    header("DESTINATION CHECK", style="cyan")
    for bucket_report in report.buckets:
        if bucket_report.listing_error is not None:
            continue
        prefix = derive_destination_key(bucket_report.bucket, "")
        try:
            key_count = len(destination_manager.list_all_keys_with_prefix(prefix))
        except StorageOperationError as e:
            error(f"Unable to list {prefix} in destination: {escape(str(e))}")
            continue
        expected = bucket_report.uploaded_count
        if key_count >= expected:
            success(f"{prefix}: {key_count} objects in destination")
        else:
            warning(f"{prefix}: {key_count} objects in destination, expected at least {expected}")


@click.command(name="migrate")
@click.option("--bucket", "-b", "buckets", multiple=True, help="Source bucket to migrate (repeatable)")
@click.option(
    "--dry-run/--execute",
    default=False,
    help="Show the plan without transferring anything (default: execute)",
)
@click.option("--yes", "-y", "assume_yes", is_flag=True, help="Do not ask for confirmation")
@click.option("--verify", is_flag=True, help="Count destination objects per bucket after the run")
@click.pass_context
def migrate_buckets(
    ctx: click.Context,
    buckets: Tuple[str, ...],
    dry_run: bool,
    assume_yes: bool,
    verify: bool,
) -> Optional[MigrationReport]:
    """Copy every file in the source buckets into the R2 bucket."""

    app_config: AppConfig = ctx.obj["CONFIG"]
    source_config: SourceConfig = ctx.obj["SOURCE_CONFIG"]
    bucket_names = get_bucket_names(ctx, buckets)
    source_manager = get_source_manager(ctx)

    if dry_run:
        planner = BucketMigrator(
            source_manager,
            None,
            skip_names=source_config.source.skip_names,
            page_size=app_config.page_size,
        )
        display_migration_plan(planner, bucket_names)
        return None

    destination_manager = get_destination_manager(ctx)

    newline()
    info(f"Destination R2 bucket: {destination_manager.bucket_name}", bold=True)
    info(f"Source buckets: {', '.join(bucket_names)}")
    if not assume_yes:
        confirm(f"Migrate {len(bucket_names)} buckets into {destination_manager.bucket_name}?", default=False, abort=True)

    migrator = BucketMigrator(
        source_manager,
        destination_manager,
        skip_names=source_config.source.skip_names,
        page_size=app_config.page_size,
        on_outcome=show_outcome,
        on_bucket_listed=show_bucket_listed,
    )
    report = migrator.run(bucket_names)

    display_migration_summary(report, destination_manager.bucket_name)

    if verify:
        verify_destination(destination_manager, report)

    if report.has_failures:
        newline()
        panel(
            "Some objects were not migrated. Source buckets were not modified,\n"
            "so the migration can be re-run; existing keys are overwritten.",
            title="Partial failure",
            style="red",
            border_style="red",
        )
        ctx.exit(1)

    newline()
    panel(
        "1. Check the objects in R2 (or re-run with --verify)\n"
        "2. Point the site's image URLs at the R2 public domain\n"
        "3. Once verified, remove the Supabase buckets manually",
        title="Next Steps",
        style="cyan",
        border_style="cyan",
    )
    return report
