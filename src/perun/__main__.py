"""Allow ``python -m perun`` invocation.

This module simply delegates to the CLI error-boundary entry point so
that ``python -m perun`` behaves identically to the ``perun`` console
script.
"""

from __future__ import annotations

from perun.cli.app import cli

if __name__ == "__main__":
    cli()
