"""Shared fixtures."""

import pytest

from docx_template.core.config import Settings
from tests.docx_factory import paragraph, wrap_body, wrap_footer, write_docx


@pytest.fixture
def scratch_dir(tmp_path):
    directory = tmp_path / "scratch"
    directory.mkdir()
    return directory


@pytest.fixture
def settings(scratch_dir):
    return Settings(scratch_dir=scratch_dir)


@pytest.fixture
def letter(tmp_path):
    """Package with a greeting in the body and a page reference in the footer."""
    return write_docx(
        tmp_path / "letter.docx",
        wrap_body(paragraph("Dear {name},") + paragraph("Welcome to {city}.")),
        footer=wrap_footer(paragraph("Page {page} for {name}")),
    )
