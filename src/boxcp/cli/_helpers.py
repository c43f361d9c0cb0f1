"""Shared helpers, option decorators, and the main CLI group."""

from __future__ import annotations

import click

from .._logging import configure_logging
from ..exceptions import CopyError, ErrorKind


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _parse_cp_path(raw: str) -> tuple[bool, str]:
    """Split a cp argument into ``(is_container, path)``.

    Container-side paths are prefixed with ':' (``:/etc/hosts``).
    """
    if raw.startswith(":"):
        return True, raw[1:]
    return False, raw


def _status(ctx, msg):
    """Emit a status message to stderr when verbose mode (-v) is on."""
    if ctx.obj.get("verbose"):
        click.echo(msg, err=True)


_HINTS = {
    ErrorKind.DIR_NOT_EXISTS: "a destination ending in '/' must be an existing directory",
    ErrorKind.CANNOT_COPY_DIR: "remove the file or choose a directory destination",
    ErrorKind.SOURCE_NOT_DIRECTORY: "drop the trailing '/' to copy a single file",
    ErrorKind.DESTINATION_NOT_DIRECTORY: "drop the trailing '/' to overwrite the file",
}


def _copy_error(exc: CopyError) -> click.ClickException:
    """Turn a :class:`CopyError` into a ClickException with a hint."""
    hint = _HINTS.get(exc.kind)
    msg = f"{exc} ({hint})" if hint else str(exc)
    return click.ClickException(msg)


def _dry_run_option(f):
    """Shared --dry-run/-n flag."""
    return click.option("-n", "--dry-run", is_flag=True, default=False,
                        help="Show what would change without writing.")(f)


def _ignore_errors_option(f):
    """Shared --ignore-errors flag."""
    return click.option("--ignore-errors", is_flag=True, default=False,
                        help="Skip entries that fail and continue.")(f)


def _container_options(f):
    """Shared --container / --workdir options."""
    f = click.option(
        "--workdir", "-w", default="/", envvar="BOXCP_WORKDIR", show_default=True,
        help="Container directory relative ':paths' start from (or set BOXCP_WORKDIR).",
    )(f)
    f = click.option(
        "--container", "-c", type=click.Path(exists=True, file_okay=False),
        envvar="BOXCP_CONTAINER", default=None,
        help="Host path of the container's root filesystem (or set BOXCP_CONTAINER).",
    )(f)
    return f


# ---------------------------------------------------------------------------
# Main group
# ---------------------------------------------------------------------------

@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Verbose output on stderr.")
@click.pass_context
def main(ctx, verbose):
    """boxcp — copy files between a container and the host.

    \b
    Quick start:
      boxcp cp -c /var/lib/rootfs :/etc/hosts ./hosts
      boxcp cp -c /var/lib/rootfs ./build/ :/app
      boxcp cp -c /var/lib/rootfs :/app/. ./out

    \b
    Container paths are prefixed with ':' (e.g. :/path/to/file).
    Set BOXCP_CONTAINER to avoid passing --container on every call.
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    configure_logging(verbose=verbose)
