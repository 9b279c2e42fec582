class LocalShortenerError(Exception):
    """Base exception for all application-specific errors."""

    error_code = 'app:localshortener_error'


class ValidationError(LocalShortenerError):
    """Raised when a long URL, shortcode or validity period is rejected."""

    error_code = 'app:validation_error'


class NotFoundError(LocalShortenerError):
    """Raised when an id or shortcode doesn't map to any entry."""

    error_code = 'app:not_found_error'


class ExpiredError(LocalShortenerError):
    """Raised when a shortcode exists but its entry is past expiry."""

    error_code = 'app:expired_error'


class GenerationExhaustedError(LocalShortenerError):
    """Raised when no unused shortcode could be drawn within the attempt budget."""

    error_code = 'app:generation_exhausted_error'


class ConfigurationError(LocalShortenerError):
    """Base exception for all configuration errors."""

    error_code = 'config:configuration_error'


class BadConfigurationError(ConfigurationError):
    """Raised when the application is configured with invalid parameters."""

    error_code = 'config:bad_configuration_error'
