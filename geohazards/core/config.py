"""Configuration models - Pure data structures.

These are domain models for configuration. The actual loading
(I/O) is handled by the shell layer.
"""

from dataclasses import dataclass, field

from geohazards.core.catalog import OPERATION_KEYS, default_prices


# USGS FDSN Event Web Service
DEFAULT_EARTHQUAKE_API_URL = "https://earthquake.usgs.gov/fdsnws/event/1/query"

# USGS Volcano Hazards Program list of GVP volcanoes
DEFAULT_VOLCANO_API_URL = "https://volcanoes.usgs.gov/vsc/api/volcanoApi/volcanoesGVP"

# Timeout for each upstream request (seconds)
DEFAULT_TIMEOUT_SECONDS = 30.0

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class Config:
    """Application configuration.

    This is a pure data structure - no I/O or side effects.

    Attributes:
        service_name: Name advertised by the service
        service_version: Version advertised by the service
        earthquake_api_url: USGS event query endpoint
        volcano_api_url: USGS volcano list endpoint
        request_timeout_seconds: Timeout for each upstream request
        log_level: Root logging level
        allowed_origins: Origins allowed by CORS
        prices: Advertised price per operation key, in base units
        port: Port the HTTP server listens on
    """
    service_name: str = "geohazards-agent"
    service_version: str = "1.0.0"
    earthquake_api_url: str = DEFAULT_EARTHQUAKE_API_URL
    volcano_api_url: str = DEFAULT_VOLCANO_API_URL
    request_timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    log_level: str = "INFO"
    allowed_origins: list[str] = field(default_factory=lambda: ["*"])
    prices: dict[str, int] = field(default_factory=default_prices)
    port: int = 3000


@dataclass
class ValidationError:
    """A configuration validation error.

    Attributes:
        field: The field that has an error
        message: Human-readable error description
        severity: 'error' or 'warning'
    """
    field: str
    message: str
    severity: str = "error"


@dataclass
class ValidationResult:
    """Result of validating configuration.

    Attributes:
        valid: True if no errors (warnings are OK)
        errors: List of validation errors/warnings
    """
    valid: bool
    errors: list[ValidationError] = field(default_factory=list)

    @property
    def warnings(self) -> list[ValidationError]:
        """Get only warnings."""
        return [e for e in self.errors if e.severity == "warning"]

    @property
    def critical_errors(self) -> list[ValidationError]:
        """Get only critical errors."""
        return [e for e in self.errors if e.severity == "error"]


def validate_url(url: str, field_name: str) -> list[ValidationError]:
    """Validate that a URL is an http(s) URL.

    Pure function.
    """
    if not url or not url.startswith(("http://", "https://")):
        return [ValidationError(
            field=field_name,
            message=f"Expected an http(s) URL, got {url!r}",
        )]
    if url.startswith("http://"):
        return [ValidationError(
            field=field_name,
            message="URL is not using https",
            severity="warning",
        )]
    return []


def validate_prices(prices: dict[str, int]) -> list[ValidationError]:
    """Validate advertised prices.

    Pure function. Unknown operation keys are warnings, negative
    prices are errors.
    """
    errors = []

    for key, price in sorted(prices.items()):
        if key not in OPERATION_KEYS:
            errors.append(ValidationError(
                field=f"prices.{key}",
                message=f"Unknown operation '{key}'",
                severity="warning",
            ))
        if price < 0:
            errors.append(ValidationError(
                field=f"prices.{key}",
                message=f"Price must not be negative, got {price}",
            ))

    return errors


def validate_config(config: Config) -> ValidationResult:
    """Validate configuration for errors and warnings.

    Pure function.

    Args:
        config: Configuration to validate

    Returns:
        ValidationResult with any errors/warnings found
    """
    errors: list[ValidationError] = []

    errors.extend(validate_url(config.earthquake_api_url, "earthquake_api_url"))
    errors.extend(validate_url(config.volcano_api_url, "volcano_api_url"))

    if config.request_timeout_seconds <= 0:
        errors.append(ValidationError(
            field="request_timeout_seconds",
            message=f"Timeout must be positive, got {config.request_timeout_seconds}",
        ))

    if config.log_level.upper() not in LOG_LEVELS:
        errors.append(ValidationError(
            field="log_level",
            message=f"Unknown log level {config.log_level!r}",
        ))

    if not 1 <= config.port <= 65535:
        errors.append(ValidationError(
            field="port",
            message=f"Port {config.port} out of range [1, 65535]",
        ))

    errors.extend(validate_prices(config.prices))

    if not config.allowed_origins:
        errors.append(ValidationError(
            field="allowed_origins",
            message="No CORS origins configured, browsers will be rejected",
            severity="warning",
        ))

    has_critical = any(e.severity == "error" for e in errors)

    return ValidationResult(
        valid=not has_critical,
        errors=errors,
    )
