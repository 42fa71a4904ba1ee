"""
Application Configuration Module

Centralizes all configuration using environment variables with Pydantic Settings.
The PRINT_METHOD variable selects which print channel receives kitchen
tickets:
    - printnode: PrintNode cloud printing API
    - cloudprnt: Star CloudPRNT (placeholder, not implemented yet)
    - webhook:   per-business HTTP webhook
    - unset:     printing disabled

Usage:
    from phone_orders.core.config import get_settings

    settings = get_settings()
    if settings.print_method is None:
        # Printing disabled
"""

import logging
import sys
from enum import Enum
from typing import Optional, Union
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class PrintMethod(str, Enum):
    """
    Supported print channels.

    Attributes:
        PRINTNODE: Submit raw jobs through the PrintNode API
        CLOUDPRNT: Star CloudPRNT (pending implementation)
        WEBHOOK: POST the ticket to a per-business URL
    """
    PRINTNODE = "printnode"
    CLOUDPRNT = "cloudprnt"
    WEBHOOK = "webhook"


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings can be overridden via environment variables or .env file.
    Sensitive values (API keys) should NEVER be committed to version control.

    Attributes:
        debug: Enable verbose logging and error details

        # Server
        host: Host to bind the API server
        port: Port for the API server

        # Database
        database_url: SQLAlchemy async connection string

        # Printing
        print_method: Active print channel (None disables printing)
        printnode_api_key: PrintNode API key
        printer_ids: businessId -> PrintNode printer id
        print_webhooks: businessId -> webhook URL
        print_timeout_seconds: Timeout for every outbound print call

        # Orders
        strict_status_updates: Reject unknown ids/statuses on PATCH
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ==========================================================================
    # APPLICATION
    # ==========================================================================

    debug: bool = Field(
        default=False,
        description="Enable debug mode with verbose logging"
    )
    app_name: str = Field(
        default="Phone Order Relay",
        description="Application display name"
    )
    app_version: str = Field(
        default="1.0.0",
        description="Application version"
    )
    host: str = Field(
        default="0.0.0.0",
        description="API server host"
    )
    port: int = Field(
        default=3000,
        description="API server port"
    )
    cors_origins: str = Field(
        default="*",
        description="Comma-separated list of allowed CORS origins"
    )

    # ==========================================================================
    # DATABASE
    # ==========================================================================

    database_url: str = Field(
        default="sqlite+aiosqlite:///./orders.db",
        description="SQLAlchemy async connection URL"
    )

    # ==========================================================================
    # PRINTING
    # ==========================================================================

    print_method: Optional[PrintMethod] = Field(
        default=None,
        description="Print channel: printnode, cloudprnt, webhook or unset"
    )
    printnode_api_key: Optional[str] = Field(
        default=None,
        description="PrintNode API key"
    )
    printnode_api_url: str = Field(
        default="https://api.printnode.com/printjobs",
        description="PrintNode job submission endpoint"
    )
    printer_ids: dict[str, Union[int, str]] = Field(
        default_factory=dict,
        description="JSON mapping of businessId to PrintNode printer id"
    )
    print_webhooks: dict[str, str] = Field(
        default_factory=dict,
        description="JSON mapping of businessId to print webhook URL"
    )
    print_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        description="Timeout for outbound print requests"
    )

    # ==========================================================================
    # ORDERS
    # ==========================================================================

    strict_status_updates: bool = Field(
        default=False,
        description="Return 404/422 for unknown order ids or statuses on PATCH"
    )

    # ==========================================================================
    # VALIDATORS
    # ==========================================================================

    @field_validator("print_method", mode="before")
    @classmethod
    def validate_print_method(cls, v: Optional[str]) -> Optional[PrintMethod]:
        """Convert string to PrintMethod enum; empty means disabled."""
        if v is None or isinstance(v, PrintMethod):
            return v
        v = v.strip().lower()
        if not v:
            return None
        try:
            return PrintMethod(v)
        except ValueError:
            valid = [m.value for m in PrintMethod]
            raise ValueError(f"Invalid print_method. Must be one of: {valid}")

    # ==========================================================================
    # COMPUTED PROPERTIES
    # ==========================================================================

    @property
    def cors_origins_list(self) -> list[str]:
        """Get allowed CORS origins as a list."""
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    # ==========================================================================
    # VALIDATION METHODS
    # ==========================================================================

    def validate_print_config(self) -> list[str]:
        """
        Check that the selected print channel has what it needs.

        Returns:
            List of missing configuration keys (empty if all present)
        """
        missing = []

        if self.print_method == PrintMethod.PRINTNODE:
            if not self.printnode_api_key:
                missing.append("PRINTNODE_API_KEY")
            if not self.printer_ids:
                missing.append("PRINTER_IDS")
        elif self.print_method == PrintMethod.WEBHOOK:
            if not self.print_webhooks:
                missing.append("PRINT_WEBHOOKS")

        return missing


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached application settings.

    Settings are loaded only once per process; call
    ``get_settings.cache_clear()`` after changing the environment.

    Returns:
        Settings: Configured application settings
    """
    return Settings()


# =============================================================================
# LOGGING CONFIGURATION
# =============================================================================

def setup_logging(level: int = logging.INFO) -> logging.Logger:
    """
    Configure application-wide logging.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)

    Returns:
        Configured package logger
    """
    settings = get_settings()

    if settings.debug:
        level = logging.DEBUG

    log_format = "%(asctime)s │ %(levelname)-8s │ %(name)-25s │ %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"

    logging.basicConfig(
        level=level,
        format=log_format,
        datefmt=date_format,
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    # Reduce noise from third-party libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)

    return logging.getLogger("phone_orders")
