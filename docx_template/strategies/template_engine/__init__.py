"""Template engine strategies.

Implements placeholder normalization and substitution for Word packages.
"""

from docx_template.strategies.template_engine.docx import DocxTemplate
from docx_template.strategies.template_engine.models import DocumentState, TextPart
from docx_template.strategies.template_engine.normalizer import (
    find_placeholders,
    join_placeholders,
)
from docx_template.strategies.template_engine.substitution import (
    escape_value,
    prepare_multiline,
    substitute,
    substitute_many,
    substitute_multiline,
)

__all__ = [
    "DocxTemplate",
    "DocumentState",
    "TextPart",
    "join_placeholders",
    "find_placeholders",
    "escape_value",
    "substitute",
    "substitute_many",
    "prepare_multiline",
    "substitute_multiline",
]
