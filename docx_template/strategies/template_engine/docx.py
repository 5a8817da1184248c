"""Word package template.

Opens a scratch copy of a .docx package, substitutes `{placeholder}`
tokens in its body and footer XML, and writes the result back into the
scratch copy for saving or streaming.
"""

import logging
import os
import shutil
import tempfile
import zipfile
from collections.abc import Mapping
from pathlib import Path
from typing import Any, BinaryIO

from docx_template.core.config import Settings, get_settings
from docx_template.interfaces.template import (
    BaseDocumentTemplate,
    SaveError,
    ScratchCopyError,
    SourceNotFoundError,
    TemplateStateError,
    TempDirInvalidError,
    UnpackError,
)
from docx_template.strategies.template_engine.models import DocumentState, TextPart
from docx_template.strategies.template_engine.normalizer import (
    find_placeholders,
    join_placeholders,
)
from docx_template.strategies.template_engine.substitution import (
    substitute,
    substitute_many,
    substitute_multiline,
)

logger = logging.getLogger(__name__)


class DocxTemplate(BaseDocumentTemplate):
    """Placeholder template backed by a scratch copy of a .docx package.

    Text parts are read and normalized on first use, then every
    substitution works on the cached text. Nothing is written to the
    archive until build().

    Example:
        ```python
        with DocxTemplate().open("letter.docx") as template:
            template.replace({"name": "Ada", "city": "London"})
            template.replace_multiline("address", "1 Main St\\nLondon")
            template.save("letter_ada.docx")
        ```

    Instances are not thread-safe; use one per document.
    """

    def __init__(self, settings: Settings | None = None) -> None:
        """Initialize the template.

        Args:
            settings: Application settings. If None, uses global settings.
        """
        self._settings = settings or get_settings()
        self._temp_dir: Path | None = self._settings.scratch_dir
        self._part_names: list[str] = list(self._settings.text_parts)
        self._header: dict[str, str] = dict(self._settings.download_headers)
        self._zip: zipfile.ZipFile | None = None
        self._temp_filename: Path | None = None
        self._parts: dict[str, TextPart | None] = {}
        self._state = DocumentState.UNOPENED

    def __enter__(self) -> "DocxTemplate":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.discard()

    @property
    def state(self) -> DocumentState:
        """Current lifecycle state."""
        return self._state

    @property
    def temp_filename(self) -> Path | None:
        """Path of the scratch copy, or None when there is none."""
        return self._temp_filename

    @property
    def supported_extensions(self) -> set[str]:
        """Return supported file extensions."""
        return {".docx"}

    # =========================================================================
    # Configuration
    # =========================================================================

    def set_temp_directory(self, directory: str | Path) -> "DocxTemplate":
        """Set the directory that holds the scratch copy.

        Raises:
            TempDirInvalidError: If the directory doesn't exist.
        """
        path = Path(directory)
        if not path.is_dir():
            raise TempDirInvalidError(f"Directory {directory} not found")

        self._temp_dir = path
        return self

    def get_temp_dir(self) -> Path:
        if self._temp_dir is None:
            self._temp_dir = Path(tempfile.gettempdir())
        return self._temp_dir

    def modify_header(self, header: Mapping[str, str]) -> "DocxTemplate":
        """Add or replace download headers for this template."""
        self._header.update(header)
        return self

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def open(self, file_path: str | Path) -> "DocxTemplate":
        """Copy the package to scratch storage and open it.

        Args:
            file_path: Path to the .docx template.

        Returns:
            The template, for chaining.

        Raises:
            SourceNotFoundError: If the file doesn't exist.
            ScratchCopyError: If the copy to the scratch directory fails.
            UnpackError: If the copy is not a readable zip archive.
        """
        self._require("open", DocumentState.UNOPENED)

        source = Path(file_path)
        if not source.is_file():
            self._state = DocumentState.FAILED
            raise SourceNotFoundError(f"File {file_path} not found")

        logger.info(f"Opening template: {file_path}")

        try:
            fd, name = tempfile.mkstemp(prefix="docx", dir=self.get_temp_dir())
            os.close(fd)
            self._temp_filename = Path(name)
            shutil.copyfile(source, self._temp_filename)
        except OSError as e:
            logger.error(f"Scratch copy of {file_path} failed: {e}", exc_info=True)
            self._fail()
            raise ScratchCopyError("Cannot copy file to temporary directory") from e

        try:
            self._zip = zipfile.ZipFile(self._temp_filename, "r")
        except (zipfile.BadZipFile, OSError) as e:
            logger.error(f"Unable to unpack {file_path}: {e}")
            self._fail()
            raise UnpackError("Unable to unpack docx file") from e

        self._state = DocumentState.OPENED
        logger.debug(f"Scratch copy created: {self._temp_filename}")
        return self

    def replace(
        self,
        name: str | Mapping[str, Any],
        value: Any = "",
        escape: bool = True,
    ) -> "DocxTemplate":
        """Replace every `{name}` in the body and footer.

        Args:
            name: Placeholder name, or a mapping of names to values which
                are replaced one after another in mapping order.
            value: Replacement value. Ignored when name is a mapping.
            escape: Escape XML special characters in the value.

        Returns:
            The template, for chaining.
        """
        self._require("replace in", DocumentState.OPENED)

        for part in self._text_parts():
            if isinstance(name, Mapping):
                part.text = substitute_many(part.text, name, escape)
            else:
                part.text = substitute(part.text, name, value, escape)

        return self

    def replace_multiline(
        self,
        name: str,
        value: Any,
        escape: bool = True,
    ) -> "DocxTemplate":
        """Replace `{name}` with a value whose lines become line breaks."""
        self._require("replace in", DocumentState.OPENED)

        for part in self._text_parts():
            part.text = substitute_multiline(part.text, name, value, escape)

        return self

    def placeholders(self) -> list[str]:
        """Return placeholder names found in the text parts, in order."""
        self._require("inspect", DocumentState.OPENED)

        names: list[str] = []
        for part in self._text_parts():
            for found in find_placeholders(part.text):
                if found not in names:
                    names.append(found)
        return names

    def build(self) -> Path:
        """Write the loaded text parts back and finalize the archive.

        Entries that were never loaded are copied unchanged, keeping
        their original zip metadata.

        Returns:
            Path to the finished scratch copy.
        """
        self._require("build", DocumentState.OPENED)

        parts = {name: part for name, part in self._parts.items() if part is not None}
        logger.info(
            f"Building {self._temp_filename} "
            f"({sum(part.changed for part in parts.values())} of {len(parts)} parts changed)"
        )

        fd, name = tempfile.mkstemp(
            prefix="docx", suffix=".build", dir=self._temp_filename.parent
        )
        os.close(fd)
        built = Path(name)

        try:
            with zipfile.ZipFile(built, "w") as out:
                out.comment = self._zip.comment
                for info in self._zip.infolist():
                    part = parts.get(info.filename)
                    data = part.data if part is not None else self._zip.read(info)
                    out.writestr(info, data)

            self._zip.close()
            self._zip = None
            os.replace(built, self._temp_filename)
        except Exception as e:
            logger.error(f"Build of {self._temp_filename} failed: {e}", exc_info=True)
            built.unlink(missing_ok=True)
            self._fail()
            raise

        self._state = DocumentState.BUILT
        return self._temp_filename

    def headers(self, overrides: Mapping[str, str] | None = None) -> dict[str, str]:
        """Return download headers for the built document.

        Args:
            overrides: Headers that replace or extend the defaults.

        Returns:
            The header mapping including Content-Length.
        """
        self._require("describe", DocumentState.BUILT)

        header = dict(self._header)
        header["Content-Length"] = str(self._temp_filename.stat().st_size)
        if overrides:
            header.update(overrides)
        return header

    def download(
        self,
        sink: BinaryIO,
        overrides: Mapping[str, str] | None = None,
    ) -> dict[str, str]:
        """Build the document and stream it into sink.

        The scratch copy is removed afterwards.

        Args:
            sink: Writable binary stream.
            overrides: Headers that replace or extend the defaults.

        Returns:
            Headers describing the streamed document.
        """
        if self._state is DocumentState.OPENED:
            self.build()
        header = self.headers(overrides)

        with open(self._temp_filename, "rb") as f:
            shutil.copyfileobj(f, sink)

        logger.info(f"Streamed {header['Content-Length']} bytes")
        self._remove_scratch()
        self._state = DocumentState.FINALIZED
        return header

    def save(self, destination: str | Path) -> Path:
        """Build the document and move it to destination.

        Raises:
            SaveError: If the move fails. The scratch copy is kept.
        """
        if self._state is DocumentState.OPENED:
            self.build()
        self._require("save", DocumentState.BUILT)

        target = Path(destination)
        if target.is_dir():
            logger.error(f"Unable to save {self._temp_filename}: {target} is a directory")
            raise SaveError(f"Unable to save file: {target} is a directory")

        try:
            shutil.move(str(self._temp_filename), str(target))
        except OSError as e:
            logger.error(
                f"Unable to save {self._temp_filename} to {target}: {e}", exc_info=True
            )
            raise SaveError("Unable to save file") from e

        logger.info(f"Saved document: {target}")
        self._temp_filename = None
        self._state = DocumentState.FINALIZED
        return target

    def discard(self) -> None:
        """Close the archive and delete the scratch copy.

        Safe to call at any point, including after save() or download().
        """
        if self._zip is not None:
            self._zip.close()
            self._zip = None
        self._remove_scratch()

        if self._state is DocumentState.OPENED:
            self._state = DocumentState.FAILED
        elif self._state is DocumentState.BUILT:
            self._state = DocumentState.FINALIZED

    # =========================================================================
    # Helpers
    # =========================================================================

    def _text_parts(self) -> list[TextPart]:
        """Return the configured parts present in the archive, loading lazily."""
        parts = []
        for name in self._part_names:
            if name not in self._parts:
                self._parts[name] = self._load_part(name)
            part = self._parts[name]
            if part is not None:
                parts.append(part)
        return parts

    def _load_part(self, name: str) -> TextPart | None:
        try:
            raw = self._zip.read(name)
        except KeyError:
            logger.debug(f"Part {name} not present, skipping")
            return None

        try:
            text = raw.decode("utf-8")
        except UnicodeDecodeError as e:
            logger.error(f"Part {name} is not UTF-8: {e}")
            raise UnpackError(f"Unable to read {name}: part is not UTF-8 encoded") from e

        return TextPart(name=name, raw=raw, text=join_placeholders(text))

    def _require(self, action: str, *states: DocumentState) -> None:
        if self._state not in states:
            raise TemplateStateError(
                f"Cannot {action} a template in state '{self._state.value}'"
            )

    def _remove_scratch(self) -> None:
        if self._temp_filename is not None:
            self._temp_filename.unlink(missing_ok=True)
            self._temp_filename = None

    def _fail(self) -> None:
        if self._zip is not None:
            self._zip.close()
            self._zip = None
        self._remove_scratch()
        self._state = DocumentState.FAILED
