"""Source domain exceptions."""

from src.core.domain.exceptions import ConfigurationError


class SourceCatalogError(ConfigurationError):
    """Raised when the source catalog cannot be loaded."""

    error_code = "SOURCE_CATALOG_ERROR"

    def __init__(self, message: str):
        super().__init__(f"Invalid source catalog: {message}")
