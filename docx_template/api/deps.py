"""FastAPI dependencies for dependency injection."""

from fastapi import Depends

from docx_template.core.config import Settings, get_settings
from docx_template.core.factory import ComponentFactory


def get_factory(settings: Settings = Depends(get_settings)) -> ComponentFactory:
    """Dependency providing a template factory bound to the settings.

    Args:
        settings: Application settings.

    Returns:
        A ComponentFactory instance.
    """
    return ComponentFactory(settings)
