"""
fml CLI package.

Commands live in ``fml/cli/commands/*.py`` and are auto-discovered; each
module exposes ``SUMMARY``, ``register_args(parser)`` and ``main(args)``.

Framework utilities for building CLI commands:
- _output: Output formatting (JSON/text modes)
- _args: Common argument registration helpers
- _utils: Shared CLI utilities
"""
from ._args import (
    add_base_dir_flag,
    add_document_arg,
    add_json_flag,
    add_project_root_flag,
    add_standard_flags,
    add_variable_args,
    add_verbose_flag,
)
from ._output import OutputFormatter
from ._utils import (
    configure_logging,
    get_base_dir,
    get_project_root,
    get_resolver,
    parse_variables,
)

__all__ = [
    # Output formatting
    "OutputFormatter",
    # Argument helpers
    "add_json_flag",
    "add_document_arg",
    "add_base_dir_flag",
    "add_project_root_flag",
    "add_variable_args",
    "add_verbose_flag",
    "add_standard_flags",
    # Utilities
    "configure_logging",
    "get_base_dir",
    "get_project_root",
    "get_resolver",
    "parse_variables",
]
