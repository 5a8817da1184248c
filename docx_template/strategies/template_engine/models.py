"""Template engine domain models.

In-memory state owned by an opened document template.
"""

import enum
from dataclasses import dataclass


class DocumentState(str, enum.Enum):
    """Lifecycle of an opened template.

    UNOPENED -> OPENED -> BUILT -> FINALIZED
        |__________|
              v
            FAILED
    """

    UNOPENED = "unopened"
    OPENED = "opened"
    BUILT = "built"
    FINALIZED = "finalized"
    FAILED = "failed"


@dataclass
class TextPart:
    """One XML entry of the package that receives substitutions.

    Attributes:
        name: Entry name inside the archive (e.g. word/document.xml).
        raw: Entry bytes as read from the archive.
        text: Normalized text with substitutions applied so far.
    """

    name: str
    raw: bytes
    text: str

    @property
    def data(self) -> bytes:
        """Encoded text to write back into the archive."""
        return self.text.encode("utf-8")

    @property
    def changed(self) -> bool:
        """Whether normalization or substitution altered the entry."""
        return self.data != self.raw
