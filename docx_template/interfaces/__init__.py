"""Abstract base classes and exceptions for document templates."""

from docx_template.interfaces.template import (
    BaseDocumentTemplate,
    SaveError,
    ScratchCopyError,
    SourceNotFoundError,
    TemplateError,
    TemplateStateError,
    TempDirInvalidError,
    UnpackError,
)

__all__ = [
    "BaseDocumentTemplate",
    "TemplateError",
    "SourceNotFoundError",
    "ScratchCopyError",
    "UnpackError",
    "SaveError",
    "TempDirInvalidError",
    "TemplateStateError",
]
