"""FastAPI routers and dependencies."""

from docx_template.api.deps import get_factory
from docx_template.api.templates import router as templates_router

__all__ = [
    "get_factory",
    "templates_router",
]
