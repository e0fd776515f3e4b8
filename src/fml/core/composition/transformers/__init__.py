"""Content transformers for the resolution pipeline.

Processing order: includes first, then variables.
"""

from .base import ContentTransformer, TransformContext, TransformerPipeline
from .includes import IncludeResolver
from .variables import VariableTransformer, lookup_variable, render_value

__all__ = [
    "ContentTransformer",
    "TransformContext",
    "TransformerPipeline",
    "IncludeResolver",
    "VariableTransformer",
    "lookup_variable",
    "render_value",
]
