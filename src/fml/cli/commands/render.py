"""
fml render command.

SUMMARY: Resolve includes and variables and print the prompt text

Prints the fully expanded document. Non-include tags, role blocks and
<comment> blocks are kept verbatim.
"""

from __future__ import annotations

import argparse
import sys

from fml.cli import (
    OutputFormatter,
    add_standard_flags,
    add_variable_args,
    get_base_dir,
    get_resolver,
    parse_variables,
)
from fml.core.exceptions import FmlError

SUMMARY = "Resolve includes and variables and print the prompt text"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    add_standard_flags(parser)
    add_variable_args(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        variables = parse_variables(args)
        resolver = get_resolver(args)
        result = resolver.resolve_document(
            args.path, variables or None, base_dir=get_base_dir(args, resolver)
        )
    except (FmlError, OSError) as e:
        formatter.error(e, error_code="render_error")
        return 1

    if formatter.json_mode:
        formatter.json_output(
            {
                "path": str(result.path),
                "content": result.content,
                "dependencies": [str(p) for p in result.dependencies],
                "missingVariables": result.missing_variables,
            }
        )
    else:
        formatter.text(result.content)
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    sys.exit(main(parser.parse_args()))
