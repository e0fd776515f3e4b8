"""
fml deps command.

SUMMARY: List the documents a document includes (transitively)

Resolves includes only (no variables) and prints every included file once,
in first-visit order.
"""

from __future__ import annotations

import argparse
import sys

from fml.cli import OutputFormatter, add_standard_flags, get_base_dir, get_resolver
from fml.core.exceptions import FmlError

SUMMARY = "List the documents a document includes (transitively)"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    add_standard_flags(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        resolver = get_resolver(args)
        result = resolver.resolve_document(args.path, base_dir=get_base_dir(args, resolver))
    except (FmlError, OSError) as e:
        formatter.error(e, error_code="deps_error")
        return 1

    if formatter.json_mode:
        formatter.json_output(
            {
                "path": str(result.path),
                "dependencies": [str(p) for p in result.dependencies],
            }
        )
    else:
        for dep in result.dependencies:
            formatter.text(str(dep))
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    sys.exit(main(parser.parse_args()))
