"""Application exception classes."""


class ConfigError(Exception):
    """Raised when configuration is invalid or incomplete."""


class NotFoundError(Exception):
    """Raised when a place-name query has no geocoding match."""


class ProviderError(Exception):
    """Raised when a remote provider request fails or returns malformed data."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class AnalysisError(Exception):
    """Raised when a deep-analysis response cannot be parsed as the expected schema."""


class GeolocationDenied(Exception):
    """Raised when the device location is unavailable or access is refused."""


class FavoritesStoreError(Exception):
    """Raised when the favorites list cannot be read or written."""
