"""Variable transformer.

Substitutes ``{{ name }}`` placeholders (``{{{ name }}}`` is accepted as an
alias, output is never escaped). Dotted names walk nested mappings and list
indices: ``{{ user.name }}``, ``{{ items.0 }}``.

Rendering:
- str / numbers      -> ``str(value)``
- bool               -> ``true`` / ``false``
- None               -> empty string
- dict / list / tuple -> pretty-printed JSON
- missing name       -> empty string (recorded, not an error)

Mustache section tags (``{{#x}}``, ``{{/x}}``, ``{{^x}}``) are not part of the
dialect and are left untouched.
"""
from __future__ import annotations

import json
import logging
import re
from typing import Any, Mapping, Tuple

from .base import ContentTransformer, TransformContext

logger = logging.getLogger(__name__)


def lookup_variable(variables: Mapping[str, Any], name: str) -> Tuple[bool, Any]:
    """Look up ``name`` (possibly dotted) in ``variables``.

    Returns:
        (found, value)
    """
    if name in variables:
        return True, variables[name]

    current: Any = variables
    for part in name.split("."):
        if isinstance(current, Mapping) and part in current:
            current = current[part]
        elif isinstance(current, (list, tuple)) and part.isdigit() and int(part) < len(current):
            current = current[int(part)]
        else:
            return False, None
    return True, current


def _plain(value: Any) -> Any:
    """Convert any Mapping / sequence nesting into dicts and lists for json.dumps."""
    if isinstance(value, Mapping):
        return {key: _plain(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(item) for item in value]
    return value


def render_value(value: Any, *, json_indent: int = 2) -> str:
    """Render a variable value as prompt text."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (Mapping, list, tuple)):
        return json.dumps(_plain(value), indent=json_indent, ensure_ascii=False, default=str)
    return str(value)


class VariableTransformer(ContentTransformer):
    """Substitute ``{{ name }}`` placeholders from ``context.variables``.

    Runs exactly once over the fully include-expanded text. When variables is
    None the text is returned unchanged, placeholders included; an empty
    mapping still renders every placeholder as an empty string.
    """

    VARIABLE_PATTERN = re.compile(
        r"\{\{(\{)?\s*([A-Za-z_][A-Za-z0-9_]*(?:\.[A-Za-z0-9_]+)*)\s*(?(1)\})\}\}"
    )

    def transform(self, content: str, context: TransformContext) -> str:
        variables = context.variables
        if variables is None:
            logger.debug("No variables supplied; interpolation skipped")
            return content

        def replacer(match: re.Match[str]) -> str:
            name = match.group(2)
            found, value = lookup_variable(variables, name)
            context.record_variable(name, resolved=found)
            if not found:
                logger.debug("Variable '%s' not supplied; rendering empty string", name)
                return ""
            return render_value(value, json_indent=context.json_indent)

        return self.VARIABLE_PATTERN.sub(replacer, content)


__all__ = ["VariableTransformer", "lookup_variable", "render_value"]
