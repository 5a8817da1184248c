"""Component Factory for template instantiation.

The Factory Pattern allows the application to instantiate
different template implementations at runtime based on
configuration or environment variables.
"""

import logging

from docx_template.core.config import Settings, get_settings
from docx_template.interfaces.template import BaseDocumentTemplate
from docx_template.strategies.template_engine import DocxTemplate

logger = logging.getLogger(__name__)


class ComponentFactory:
    """Factory for creating template instances based on configuration.

    Templates hold per-document state, so unlike stateless strategies a
    new instance is returned on every call.

    Example:
        ```python
        factory = ComponentFactory(get_settings())

        template = factory.get_template()
        template.open("letter.docx").replace("name", "Ada").save("out.docx")
        ```
    """

    def __init__(self, settings: Settings | None = None) -> None:
        """Initialize the factory with optional settings.

        Args:
            settings: Application settings. If None, uses global settings.
        """
        self._settings = settings or get_settings()

    @property
    def settings(self) -> Settings:
        return self._settings

    def get_template(self, template_type: str | None = None) -> BaseDocumentTemplate:
        """Get a fresh template instance based on the specified type.

        Args:
            template_type: The template type to instantiate. If None, uses settings.

        Returns:
            A BaseDocumentTemplate implementation instance.

        Raises:
            ValueError: If the template type is unknown.
        """
        template_type = template_type or self._settings.template_type

        logger.debug(f"Instantiating template: {template_type}")

        match template_type:
            case "docx":
                return DocxTemplate(settings=self._settings)
            case _:
                raise ValueError(
                    f"Unknown template type: {template_type}. "
                    f"Valid options: 'docx'"
                )
