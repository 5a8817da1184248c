"""Placeholder normalization.

Word splits what the author typed as one `{placeholder}` across several
runs whenever spell-check, language detection or a formatting change
lands inside it, so the raw XML reads like
`{First</w:t></w:r><w:r><w:t>Name}`. Joining strips the markup inside
each brace span so a plain substring search finds `{FirstName}`.
"""

import re

# Shortest span from a `{` to the next `}`
PLACEHOLDER_SPAN = re.compile(r"\{[^}]+\}")
MARKUP_TAG = re.compile(r"<[^>]*>")
PLACEHOLDER_NAME = re.compile(r"\{([^{}<>]+)\}")


def _strip_tags(match: re.Match[str]) -> str:
    return MARKUP_TAG.sub("", match.group(0))


def join_placeholders(text: str) -> str:
    """Collapse markup embedded inside `{...}` spans.

    Running it twice gives the same result as running it once. A `{`
    with no closing `}` is left as is.

    Args:
        text: Raw XML text of a document part.

    Returns:
        The text with every brace span reduced to its text content.
    """
    return PLACEHOLDER_SPAN.sub(_strip_tags, text)


def find_placeholders(text: str) -> list[str]:
    """Return distinct placeholder names in order of first appearance.

    Expects normalized text; split placeholders are not detected otherwise.
    """
    names: list[str] = []
    for match in PLACEHOLDER_NAME.finditer(text):
        name = match.group(1)
        if name.strip() and name not in names:
            names.append(name)
    return names
