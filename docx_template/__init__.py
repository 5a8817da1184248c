"""Placeholder substitution for Word document templates."""

from docx_template.interfaces import (
    SaveError,
    ScratchCopyError,
    SourceNotFoundError,
    TemplateError,
    TemplateStateError,
    TempDirInvalidError,
    UnpackError,
)
from docx_template.strategies.template_engine import DocxTemplate

__version__ = "0.1.0"

__all__ = [
    "DocxTemplate",
    "TemplateError",
    "SourceNotFoundError",
    "ScratchCopyError",
    "UnpackError",
    "SaveError",
    "TempDirInvalidError",
    "TemplateStateError",
]
