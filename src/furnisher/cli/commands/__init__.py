"""CLI command implementations for the furnisher application.

This package contains subcommands for the furnisher CLI, including:
- validate: Validate a fitting database file
"""

from furnisher.cli.commands.validate import display_load_error, validate_command

__all__ = ["display_load_error", "validate_command"]
