"""The cp command."""

from __future__ import annotations

import click

from ..copy import CopyOperation, copy, copy_dry_run
from ..exceptions import CopyError
from ..fs import ContainerFS, LocalFS
from ._helpers import (
    main,
    _container_options,
    _copy_error,
    _dry_run_option,
    _ignore_errors_option,
    _parse_cp_path,
    _status,
)


@main.command()
@click.argument("src")
@click.argument("dst")
@_container_options
@click.option("--follow-symlinks/--no-follow-symlinks", "-L/-P", default=True,
              help="Follow a symlink given as SRC (default) or copy the link itself.")
@_dry_run_option
@_ignore_errors_option
@click.pass_context
def cp(ctx, src, dst, container, workdir, follow_symlinks, dry_run, ignore_errors):
    """Copy a file or directory between the container and the host.

    Exactly one of SRC and DST must be a container path.

    \b
    SRC is a file:
      DST missing          create DST as a file
      DST missing, ends /  error: directory does not exist
      DST is a file        overwrite it
      DST is a directory   copy into DST/<name>
    \b
    SRC is a directory (SRC/. copies its contents instead):
      DST missing          create DST and copy the tree under it
      DST is a file        error: cannot copy a directory to a file
      DST is a directory   copy to DST/<name> (contents: into DST)

    A symlink at DST is written through to its target; the link itself
    is left untouched.

    \b
    Examples:
        boxcp cp :/etc/hosts ./hosts       # container → host
        boxcp cp ./conf/ :/etc/app         # host → container
        boxcp cp :/var/log/. ./logs        # contents of a directory
    """
    src_is_ctr, src_path = _parse_cp_path(src)
    dst_is_ctr, dst_path = _parse_cp_path(dst)

    if src_is_ctr and dst_is_ctr:
        raise click.ClickException("Copying between container paths is not supported")
    if not src_is_ctr and not dst_is_ctr:
        raise click.ClickException(
            "Neither SRC nor DST is a container path; prefix container paths with ':'"
        )
    if container is None:
        raise click.ClickException(
            "No container specified. Use --container or set BOXCP_CONTAINER."
        )

    ctr_fs = ContainerFS(container, workdir=workdir)
    src_fs = ctr_fs if src_is_ctr else LocalFS()
    dst_fs = ctr_fs if dst_is_ctr else LocalFS()

    try:
        if dry_run:
            report = copy_dry_run(src_path, dst_path, src_fs=src_fs, dst_fs=dst_fs,
                                  follow_symlinks=follow_symlinks)
        else:
            report = copy(src_path, dst_path, src_fs=src_fs, dst_fs=dst_fs,
                          follow_symlinks=follow_symlinks, ignore_errors=ignore_errors)
    except CopyError as exc:
        raise _copy_error(exc)
    except (OSError, RuntimeError) as exc:
        raise click.ClickException(str(exc))

    plan = report.plan
    _status(ctx, f"{plan.operation}: {src_fs.display(plan.source)} -> "
                 f"{dst_fs.display(plan.destination)}")

    if dry_run:
        click.echo(f"{plan.operation} {dst_fs.display(plan.destination)}")
        for e in report.add:
            click.echo(f"+ {dst_fs.display(e.path)}")
        for e in report.update:
            click.echo(f"~ {dst_fs.display(e.path)}")
        return

    for err in report.errors:
        click.echo(f"WARNING: {err.path}: {err.error}", err=True)
    kind = "entry" if report.total == 1 else "entries"
    if plan.operation is CopyOperation.COPY_CONTENTS_INTO_DIR:
        _status(ctx, f"Copied contents: {report.total} {kind}")
    else:
        _status(ctx, f"Copied {report.total} {kind}")
