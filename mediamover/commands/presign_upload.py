import time
from typing import Optional

import click
from rich.markup import escape

from mediamover.commands.migrate_buckets import get_destination_manager
from mediamover.console import error, info, newline, success
from mediamover.exceptions import StorageOperationError
from mediamover.objects.app_config import AppConfig
from mediamover.objects.content_type import infer_content_type


def build_unique_key(file_name: str, now_ms: Optional[int] = None) -> str:
    """Prefix a file name with the current epoch milliseconds so uploads never overwrite.

    Example:
        >>> build_unique_key("poster.png", now_ms=1700000000000)
        '1700000000000-poster.png'
    """
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    return f"{now_ms}-{file_name}"


@click.command(name="presign-upload")
@click.argument("file_name")
@click.option("--content-type", type=str, help="Content type of the upload (default: inferred)")
@click.option(
    "--expires",
    type=click.IntRange(1, 7 * 24 * 3600),
    default=600,
    show_default=True,
    help="URL lifetime in seconds",
)
@click.pass_context
def presign_upload(ctx: click.Context, file_name: str, content_type: Optional[str], expires: int) -> dict:
    """Print a presigned URL for uploading FILE_NAME straight to R2."""

    if "/" in file_name or not file_name.strip():
        raise click.BadParameter("must be a plain file name", param_hint="FILE_NAME")

    destination_manager = get_destination_manager(ctx)
    app_config: AppConfig = ctx.obj["CONFIG"]

    object_key = build_unique_key(file_name)
    content_type = content_type or infer_content_type(file_name)

    try:
        upload_url = destination_manager.generate_presigned_upload(object_key, content_type, expires_in=expires)
    except StorageOperationError as e:
        error(f"Unable to create upload URL: {escape(str(e))}")
        ctx.exit(1)

    final_url = app_config.destination.public_url(object_key) if app_config.destination else None

    newline()
    success(f"Upload URL for {object_key} (valid {expires}s, Content-Type: {content_type}):")
    click.echo(upload_url)
    if final_url:
        info(f"Final URL: {final_url}", bold=True)

    return {"key": object_key, "upload_url": upload_url, "final_url": final_url}
