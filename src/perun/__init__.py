"""perun — Swiss army knife for AWS CloudFormation templates.

This distribution ships the command interpretation layer: the mode and
flag grammar, cross-field validation, mode dispatch, and the interactive
``configure`` wizard.
"""

from perun.version import __version__

__all__: list[str] = ["__version__"]
