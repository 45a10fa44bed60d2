from typing import List, Tuple

import click
from rich.markup import escape

from mediamover.bucket.supabase_manager import SupabaseStorageManager
from mediamover.console import error, header, info, newline, success, table, warning
from mediamover.exceptions import ListingError
from mediamover.objects.app_config import AppConfig
from mediamover.objects.source_config import SourceConfig, resolve_bucket_names
from mediamover.objects.storage_object import StorageObject
from mediamover.security import SecurityError


def get_source_manager(ctx: click.Context) -> SupabaseStorageManager:
    """Return the Supabase manager from the context, creating it on first use."""
    source_manager = ctx.obj.get("SOURCE_MANAGER")
    if source_manager:
        return source_manager

    app_config: AppConfig = ctx.obj["CONFIG"]
    if app_config.source is None:
        raise click.UsageError("SUPABASE_URL and SUPABASE_SERVICE_KEY must be set")

    source_manager = SupabaseStorageManager(app_config.source)
    if source_manager.has_error:
        error("Unable to connect to Supabase Storage. Check the URL and service key.")
        ctx.abort()
    ctx.obj["SOURCE_MANAGER"] = source_manager
    return source_manager


def get_bucket_names(ctx: click.Context, cli_buckets: Tuple[str, ...]) -> List[str]:
    """Resolve the buckets for this command, failing if none were given."""
    source_config: SourceConfig = ctx.obj["SOURCE_CONFIG"]
    try:
        bucket_names = resolve_bucket_names(list(cli_buckets), source_config)
    except SecurityError as e:
        raise click.BadParameter(str(e), param_hint="--bucket")
    if not bucket_names:
        raise click.UsageError("No source buckets given. Use --bucket or [source].buckets in the source config.")
    return bucket_names


def describe_entries(entries: List[StorageObject]) -> List[List[str]]:
    rows = []
    for entry in entries:
        kind = "file" if entry.is_file else "folder"
        size = str(entry.size) if entry.size is not None else "-"
        rows.append([entry.name, kind, size, entry.mimetype or "-"])
    return rows


@click.command(name="inspect")
@click.option("--bucket", "-b", "buckets", multiple=True, help="Source bucket to inspect (repeatable)")
@click.option("--probe-folder", "probe_folders", multiple=True, help="Folder to look inside (repeatable)")
@click.pass_context
def inspect_buckets(ctx: click.Context, buckets: Tuple[str, ...], probe_folders: Tuple[str, ...]) -> None:
    """Show what each source bucket contains, without changing anything."""

    app_config: AppConfig = ctx.obj["CONFIG"]
    source_config: SourceConfig = ctx.obj["SOURCE_CONFIG"]

    bucket_names = get_bucket_names(ctx, buckets)
    source_manager = get_source_manager(ctx)
    folders = list(probe_folders) or source_config.source.probe_folders

    for bucket in bucket_names:
        newline()
        header(f"Inspecting {bucket}")

        try:
            root_entries = source_manager.list_all_objects(bucket, path="", page_size=app_config.page_size)
        except ListingError as e:
            error(f"Error reading root of {bucket}: {escape(str(e))}")
            continue

        info(f"{len(root_entries)} entries at the root", bold=True)
        if root_entries:
            table(describe_entries(root_entries), ["Name", "Kind", "Size", "Mimetype"])
        else:
            warning("The root looks empty.")

        # Files can hide in folders that only show up as placeholders at the root
        for folder in folders:
            try:
                folder_entries = source_manager.list_objects(bucket, path=folder, limit=app_config.page_size)
            except ListingError:
                info(f"  (nothing in {folder}/)")
                continue

            if folder_entries:
                suffix = "+" if len(folder_entries) == app_config.page_size else ""
                success(f"Found {len(folder_entries)}{suffix} entries in {folder}/")
                info(f"  e.g. {folder_entries[0].name}")
            else:
                info(f"  (nothing in {folder}/)")
