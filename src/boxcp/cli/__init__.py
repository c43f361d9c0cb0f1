"""boxcp CLI — copy files between a container and the host."""

from ._helpers import main  # noqa: F401 — entry point

# Import command modules to register Click commands with the main group.
from . import _cp  # noqa: F401
