"""Core configuration components."""

from docx_template.core.config import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
]
