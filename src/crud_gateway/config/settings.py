"""
Configuration settings for the CRUD gateway
"""

import logging
import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

from crud_gateway.dialects import Dialect

# Load environment variables
load_dotenv()

TRUE_VALUES = ("1", "true", "yes", "on")


@dataclass
class GatewaySettings:
    """Environment-driven gateway configuration"""

    dialect: str = field(default_factory=lambda: os.getenv("CRUD_GATEWAY_DIALECT", Dialect.SQLITE.value).lower())
    database: str = field(default_factory=lambda: os.getenv("CRUD_GATEWAY_DATABASE", ":memory:"))
    log_level: str = field(default_factory=lambda: os.getenv("CRUD_GATEWAY_LOG_LEVEL", "INFO").upper())
    log_parameters: bool = field(
        default_factory=lambda: os.getenv("CRUD_GATEWAY_LOG_PARAMETERS", "false").lower() in TRUE_VALUES
    )

    def validate(self) -> list[str]:
        """Validate configuration and return list of errors"""
        errors = []

        if self.dialect not in [d.value for d in Dialect]:
            errors.append(f"CRUD_GATEWAY_DIALECT must be one of {[d.value for d in Dialect]}, got: {self.dialect}")
        if not isinstance(logging.getLevelName(self.log_level), int):
            errors.append(f"CRUD_GATEWAY_LOG_LEVEL is not a logging level: {self.log_level}")
        if not self.database:
            errors.append("CRUD_GATEWAY_DATABASE must not be empty")

        return errors

    @property
    def sql_dialect(self) -> Dialect:
        return Dialect(self.dialect)


def get_settings() -> GatewaySettings:
    """Get validated gateway configuration"""
    settings = GatewaySettings()
    errors = settings.validate()

    if errors:
        raise ValueError(f"Configuration errors: {', '.join(errors)}")

    return settings


def configure_logging(settings: GatewaySettings) -> None:
    """Configure root logging at the configured level"""
    logging.basicConfig(level=settings.log_level)
