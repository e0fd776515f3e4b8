"""Common CLI argument registration utilities."""
from __future__ import annotations

import argparse


def add_json_flag(parser: argparse.ArgumentParser) -> None:
    """Add --json flag for JSON output mode."""
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output as JSON",
    )


def add_document_arg(parser: argparse.ArgumentParser) -> None:
    """Add the positional document path."""
    parser.add_argument(
        "path",
        help="FML document to resolve (relative paths use --base-dir, default: cwd)",
    )


def add_base_dir_flag(parser: argparse.ArgumentParser) -> None:
    """Add --base-dir flag for the root document's base directory."""
    parser.add_argument(
        "--base-dir",
        type=str,
        help="Directory relative document paths are resolved against (default: current directory)",
    )


def add_project_root_flag(parser: argparse.ArgumentParser) -> None:
    """Add --project-root flag (where fml.yaml is looked up)."""
    parser.add_argument(
        "--project-root",
        type=str,
        help="Directory containing fml.yaml (default: current directory)",
    )


def add_variable_args(parser: argparse.ArgumentParser) -> None:
    """Add --var and --vars-file."""
    parser.add_argument(
        "--var",
        dest="vars",
        action="append",
        default=[],
        metavar="NAME=VALUE",
        help="Variable to substitute; VALUE is parsed as JSON when possible (repeatable)",
    )
    parser.add_argument(
        "--vars-file",
        type=str,
        help="YAML or JSON file with a mapping of variables (--var entries win)",
    )


def add_verbose_flag(parser: argparse.ArgumentParser) -> None:
    """Add --verbose flag."""
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging on stderr",
    )


def add_standard_flags(parser: argparse.ArgumentParser) -> None:
    """Flags shared by every resolving command."""
    add_document_arg(parser)
    add_base_dir_flag(parser)
    add_project_root_flag(parser)
    add_json_flag(parser)


__all__ = [
    "add_json_flag",
    "add_document_arg",
    "add_base_dir_flag",
    "add_project_root_flag",
    "add_variable_args",
    "add_verbose_flag",
    "add_standard_flags",
]
