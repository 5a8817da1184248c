"""Concrete strategy implementations."""

from docx_template.strategies.template_engine import DocxTemplate

__all__ = [
    "DocxTemplate",
]
