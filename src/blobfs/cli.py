"""Command-line interface for blobfs.

This module exposes the storage operations on a bucket from the shell.

Commands:
    - ls: List the entries of a directory
    - stat: Show the attributes of a file or directory
    - get: Download a file
    - put: Upload a local file
    - mkdir: Create a directory and its parents
    - mv: Move a file or directory
    - rm: Delete a file or directory
    - rm-prefix: Delete every object under a prefix

Connection options are given once, before the command:

    blobfs --bucket files --tenant acme ls /reports
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Annotated, Callable, Optional, TypeVar

import typer

from . import __version__
from .schemas import S3StorageConfig
from .storage import BlobStorage, FileAttributes, FileType

T = TypeVar("T")

app = typer.Typer(
    name="blobfs",
    help="Filesystem-like storage on top of S3-compatible object stores.",
    no_args_is_help=True,
)


@dataclass
class CLIState:
    """Options shared by every command."""

    bucket: str
    tenant: Optional[str]
    connection: dict[str, Optional[str]]


def version_callback(value: bool) -> None:
    """Display version information."""
    if value:
        typer.echo(f"blobfs {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    bucket: Annotated[
        str,
        typer.Option("--bucket", "-b", envvar="BLOBFS_BUCKET", help="S3 bucket name"),
    ] = "",
    tenant: Annotated[
        Optional[str],
        typer.Option("--tenant", envvar="BLOBFS_TENANT", help="Tenant namespace"),
    ] = None,
    access_key_id: Annotated[
        Optional[str],
        typer.Option("--access-key-id", help="AWS access key ID"),
    ] = None,
    secret_access_key: Annotated[
        Optional[str],
        typer.Option("--secret-access-key", help="AWS secret access key"),
    ] = None,
    session_token: Annotated[
        Optional[str],
        typer.Option("--session-token", help="AWS session token"),
    ] = None,
    region_name: Annotated[
        str, typer.Option("--region", help="AWS region name")
    ] = "us-east-1",
    endpoint_url: Annotated[
        Optional[str], typer.Option("--endpoint-url", help="Custom S3 endpoint URL")
    ] = None,
    aws_profile: Annotated[
        Optional[str],
        typer.Option("--aws-profile", help="AWS CLI profile name"),
    ] = None,
    path_style: Annotated[
        bool,
        typer.Option("--path-style", help="Path-style bucket addressing (MinIO)"),
    ] = False,
    version: Annotated[
        Optional[bool],
        typer.Option("--version", callback=version_callback, help="Show version."),
    ] = None,
) -> None:
    """
    blobfs: directories, moves and prefix deletes on an S3 bucket.
    """
    ctx.obj = CLIState(
        bucket=bucket,
        tenant=tenant,
        connection={
            "access_key_id": access_key_id,
            "secret_access_key": secret_access_key,
            "session_token": session_token,
            "region_name": region_name,
            "endpoint_url": endpoint_url,
            "aws_profile": aws_profile,
            "addressing_style": "path" if path_style else "auto",
        },
    )


def _format_time(epoch_millis: int) -> str:
    if not epoch_millis:
        return "-"
    moment = datetime.fromtimestamp(epoch_millis / 1000, tz=timezone.utc)
    return moment.isoformat(timespec="seconds")


def _format_entry(entry: FileAttributes) -> str:
    if entry.type == FileType.DIRECTORY:
        return f"DIR  {'-':>12}  {entry.file_name}/"
    return f"FILE {entry.size:>12,}  {entry.file_name}"


def _run(ctx: typer.Context, action: Callable[[BlobStorage, Optional[str]], T]) -> T:
    """Run action against a storage built from the shared options."""
    state: CLIState = ctx.obj
    if not state.bucket:
        typer.echo("Error: --bucket (or BLOBFS_BUCKET) is required", err=True)
        raise typer.Exit(1)

    storage = None
    try:
        config = S3StorageConfig(bucket=state.bucket, **state.connection)
        storage = BlobStorage.from_config(config)
        return action(storage, state.tenant)
    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)
    finally:
        if storage is not None:
            storage.close()


@app.command("ls")
def ls_cmd(
    ctx: typer.Context,
    path: Annotated[str, typer.Argument(help="Directory to list")] = "/",
) -> None:
    """
    List the immediate children of a directory.

    Example:
        blobfs --bucket files --tenant acme ls /reports
    """
    entries = _run(ctx, lambda storage, tenant: storage.list(tenant, path))

    if not entries:
        typer.echo("Directory is empty.")
        return
    entries.sort(key=lambda e: (e.type != FileType.DIRECTORY, e.file_name))
    for entry in entries:
        typer.echo(_format_entry(entry))


@app.command("stat")
def stat_cmd(
    ctx: typer.Context,
    path: Annotated[str, typer.Argument(help="File or directory")],
) -> None:
    """
    Show the attributes of a file or directory.
    """
    attributes = _run(ctx, lambda storage, tenant: storage.get_attributes(tenant, path))

    typer.echo(f"Name: {attributes.file_name}")
    typer.echo(f"Type: {attributes.type.value}")
    typer.echo(f"Size: {attributes.size:,} bytes")
    typer.echo(f"Modified: {_format_time(attributes.last_modified_time)}")
    typer.echo(f"Created: {_format_time(attributes.creation_time)}")
    for name, value in sorted(attributes.metadata.items()):
        typer.echo(f"Metadata {name}: {value}")


@app.command("get")
def get_cmd(
    ctx: typer.Context,
    path: Annotated[str, typer.Argument(help="File to download")],
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Write to this file instead of stdout"),
    ] = None,
) -> None:
    """
    Download a file.
    """
    content = _run(ctx, lambda storage, tenant: storage.get(tenant, path).read())

    if output is None:
        typer.echo(content, nl=False)
    else:
        output.write_bytes(content)
        typer.echo(f"Downloaded {len(content):,} bytes to {output}")


@app.command("put")
def put_cmd(
    ctx: typer.Context,
    source: Annotated[
        Path,
        typer.Argument(help="Local file to upload", exists=True, dir_okay=False),
    ],
    path: Annotated[str, typer.Argument(help="Destination path")],
) -> None:
    """
    Upload a local file, creating its parent directories.

    Example:
        blobfs --bucket files put ./summary.yml /reports/2024/summary.yml
    """

    def upload(storage: BlobStorage, tenant: Optional[str]) -> str:
        with source.open("rb") as data:
            return storage.put(tenant, path, data)

    typer.echo(f"Stored {_run(ctx, upload)}")


@app.command("mkdir")
def mkdir_cmd(
    ctx: typer.Context,
    path: Annotated[str, typer.Argument(help="Directory to create")],
) -> None:
    """
    Create a directory and all of its missing parents.
    """
    uri = _run(ctx, lambda storage, tenant: storage.create_directory(tenant, path))
    typer.echo(f"Created {uri}")


@app.command("mv")
def mv_cmd(
    ctx: typer.Context,
    source: Annotated[str, typer.Argument(help="File or directory to move")],
    target: Annotated[str, typer.Argument(help="New location")],
) -> None:
    """
    Move a file or a directory tree.

    Objects are copied then deleted; a failed copy leaves the move partial.
    """
    uri = _run(ctx, lambda storage, tenant: storage.move(tenant, source, target))
    typer.echo(f"Moved to {uri}")


@app.command("rm")
def rm_cmd(
    ctx: typer.Context,
    path: Annotated[str, typer.Argument(help="File or directory to delete")],
) -> None:
    """
    Delete a file, or a directory with everything under it.
    """
    deleted = _run(ctx, lambda storage, tenant: storage.delete(tenant, path))

    if not deleted:
        typer.echo(f"Nothing to delete at {path}", err=True)
        raise typer.Exit(1)
    typer.echo(f"Deleted {path}")


@app.command("rm-prefix")
def rm_prefix_cmd(
    ctx: typer.Context,
    prefix: Annotated[str, typer.Argument(help="Prefix to delete")],
) -> None:
    """
    Delete every object under a prefix, directory markers included.
    """
    deleted = _run(
        ctx, lambda storage, tenant: storage.delete_by_prefix(tenant, prefix)
    )

    if deleted:
        typer.echo(f"Deleted {len(deleted)} objects:")
        for uri in sorted(deleted):
            typer.echo(f"  {uri}")
    else:
        typer.echo("No objects found.")


if __name__ == "__main__":
    app()
