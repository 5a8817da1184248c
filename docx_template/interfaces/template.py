"""Document template interfaces.

Defines the abstract base class for placeholder templates and the
exceptions raised across the document lifecycle.
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from pathlib import Path
from typing import Any, BinaryIO


class TemplateError(Exception):
    """Base exception for template processing failures."""

    pass


class SourceNotFoundError(TemplateError, FileNotFoundError):
    """Raised when the template file to open does not exist."""

    pass


class ScratchCopyError(TemplateError, OSError):
    """Raised when the template cannot be copied to scratch storage."""

    pass


class UnpackError(TemplateError):
    """Raised when the template archive cannot be opened."""

    pass


class SaveError(TemplateError, OSError):
    """Raised when the rendered document cannot be moved to its destination."""

    pass


class TempDirInvalidError(TemplateError, NotADirectoryError):
    """Raised when a scratch directory override does not exist."""

    pass


class TemplateStateError(TemplateError, RuntimeError):
    """Raised when an operation is called out of lifecycle order."""

    pass


class BaseDocumentTemplate(ABC):
    """Abstract base class for placeholder document templates.

    A template is opened from a source file, receives any number of
    substitutions, then is built once and either saved or downloaded.
    """

    @abstractmethod
    def open(self, file_path: str | Path) -> "BaseDocumentTemplate":
        """Open a template file for substitution.

        Raises:
            SourceNotFoundError: If the file doesn't exist.
            ScratchCopyError: If the scratch copy cannot be made.
            UnpackError: If the archive cannot be opened.
        """

    @abstractmethod
    def set_temp_directory(self, directory: str | Path) -> "BaseDocumentTemplate":
        """Set the directory that holds scratch copies.

        Raises:
            TempDirInvalidError: If the directory doesn't exist.
        """

    @abstractmethod
    def replace(
        self,
        name: str | Mapping[str, Any],
        value: Any = "",
        escape: bool = True,
    ) -> "BaseDocumentTemplate":
        """Replace every `{name}` placeholder with a value."""

    @abstractmethod
    def replace_multiline(
        self,
        name: str,
        value: Any,
        escape: bool = True,
    ) -> "BaseDocumentTemplate":
        """Replace a placeholder with a value whose lines become line breaks."""

    @abstractmethod
    def save(self, destination: str | Path) -> Path:
        """Build the document and move it to the destination.

        Raises:
            SaveError: If the move fails.
        """

    @abstractmethod
    def download(
        self,
        sink: BinaryIO,
        overrides: Mapping[str, str] | None = None,
    ) -> dict[str, str]:
        """Build the document, stream it into sink and return its headers."""

    @abstractmethod
    def placeholders(self) -> list[str]:
        """Return the placeholder names present in the template."""

    @abstractmethod
    def discard(self) -> None:
        """Release the archive and delete any scratch copy."""

    @property
    @abstractmethod
    def supported_extensions(self) -> set[str]:
        """Return supported file extensions."""

    def supports_file(self, file_path: str | Path) -> bool:
        """Check if this template type supports the given file.

        Args:
            file_path: The path to the file to check.

        Returns:
            True if the file extension is supported, False otherwise.
        """
        return Path(file_path).suffix.lower() in self.supported_extensions
