"""
fml messages command.

SUMMARY: Resolve a document and print its role-tagged messages

Extracts <system>/<user>/<assistant> blocks from the resolved text. With
--chat the messages are printed as a provider chat payload (JSON).
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
from fml.core.composition import to_chat_format
from fml.core.composition.chat import PROVIDERS
from fml.core.exceptions import FmlError

SUMMARY = "Resolve a document and print its role-tagged messages"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    add_standard_flags(parser)
    add_variable_args(parser)
    parser.add_argument(
        "--chat",
        choices=list(PROVIDERS),
        help="Print a chat-completion payload for the given provider",
    )
    parser.add_argument(
        "--strip-comments",
        action="store_true",
        help="Remove <comment> blocks from message contents",
    )


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        variables = parse_variables(args)
        resolver = get_resolver(args)
        messages = resolver.parse(
            args.path, variables or None, base_dir=get_base_dir(args, resolver)
        )
        provider = args.chat or "openai"
        payload = to_chat_format(messages, provider=provider, strip_comments=args.strip_comments)
    except (FmlError, OSError) as e:
        formatter.error(e, error_code="messages_error")
        return 1

    if args.chat or formatter.json_mode:
        formatter.json_output(payload)
        return 0

    for i, turn in enumerate(payload):
        if i:
            formatter.text("")
        formatter.text(f"[{turn['role']}]")
        formatter.text(turn["content"])
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    sys.exit(main(parser.parse_args()))
