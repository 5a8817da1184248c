"""Placeholder substitution on normalized XML text.

All functions are pure: they take text and return new text. Callers
keep the result as the new state of the part they are editing.
"""

import html
import logging
import re
from collections.abc import Mapping
from typing import Any

logger = logging.getLogger(__name__)

# WordprocessingML line break between two text runs
LINE_BREAK = "</w:t><w:br/><w:t>"

NEWLINE = re.compile(r"\r\n|\r|\n")


def placeholder(name: str) -> str:
    """Return the literal form of a placeholder name."""
    return "{" + name + "}"


def escape_value(value: Any) -> str:
    """Escape `&`, `<`, `>`, `"` and `'` for insertion into XML text."""
    return html.escape(str(value), quote=True)


def substitute(text: str, name: str, value: Any, escape: bool = True) -> str:
    """Replace every `{name}` in text with value.

    The replacement is literal; the inserted value is never scanned for
    further placeholders.

    Args:
        text: Normalized XML text.
        name: Bare placeholder name, without braces.
        value: Replacement value. Non-strings are converted with str().
        escape: Escape XML special characters in value first.

    Returns:
        The text with all occurrences replaced.
    """
    search = placeholder(name)
    replacement = escape_value(value) if escape else str(value)

    count = text.count(search)
    if not count:
        return text

    logger.debug(f"Replacing {count} occurrence(s) of {search}")
    return text.replace(search, replacement)


def substitute_many(
    text: str,
    values: Mapping[str, Any],
    escape: bool = True,
) -> str:
    """Apply substitute() for each name/value pair in mapping order."""
    for name, value in values.items():
        text = substitute(text, name, value, escape)
    return text


def prepare_multiline(value: Any, escape: bool = True) -> str:
    """Turn a multi-line value into text joined by run line breaks.

    Escaping happens before the break markup is inserted so the markup
    itself survives.
    """
    value = escape_value(value) if escape else str(value)
    return LINE_BREAK.join(NEWLINE.split(value))


def substitute_multiline(
    text: str,
    name: str,
    value: Any,
    escape: bool = True,
) -> str:
    """Replace `{name}` with a value whose lines become line breaks."""
    return substitute(text, name, prepare_multiline(value, escape), escape=False)
