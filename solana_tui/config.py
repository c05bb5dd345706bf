"""Configuration module for the Solana TUI explorer."""

# Standard library imports
import os
import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Callable, Optional

# Third-party library imports
from dotenv import load_dotenv

# Internal imports
from solana_tui.constants import (
    DEFAULT_DEVNET_URL,
    DEFAULT_MAINNET_URL,
    DEFAULT_TESTNET_URL,
)
from solana_tui.models.network import Network
from solana_tui.utils.errors import ConfigurationError

# Load environment variables from .env file
load_dotenv()

ENV_PREFIX = "SOLANA_TUI_"


def get_env_var(key: str, default: Any = None, required: bool = False,
                validator: Optional[Callable[[str], Any]] = None) -> Any:
    """Get and validate environment variable.

    Args:
        key: Environment variable name
        default: Default value if not present
        required: If True, raises ConfigurationError when not found
        validator: Optional validation function

    Returns:
        The environment variable value or default

    Raises:
        ConfigurationError: If required and not found, or fails validation
    """
    value = os.environ.get(key)

    if value is None or value == "":
        if required:
            raise ConfigurationError(
                f"Required environment variable '{key}' not found",
                details={"setting": key}
            )
        return default

    if validator is not None:
        try:
            return validator(value)
        except ValueError as e:
            raise ConfigurationError(
                f"Invalid value for environment variable '{key}': {str(e)}",
                details={"setting": key, "value": value}
            )

    return value


def positive_int_validator(value: str) -> int:
    """Validate and convert string to a positive integer.

    Args:
        value: String value to convert

    Returns:
        Integer value

    Raises:
        ValueError: If not a positive integer
    """
    try:
        number = int(value)
    except ValueError:
        raise ValueError(f"'{value}' is not a valid integer")
    if number <= 0:
        raise ValueError(f"'{value}' must be greater than zero")
    return number


def url_validator(value: str) -> str:
    """Validate URL format.

    Args:
        value: URL to validate

    Returns:
        The validated URL

    Raises:
        ValueError: If not a valid URL format
    """
    url_pattern = re.compile(
        r'^(https?):\/\/'  # http:// or https://
        r'(?:(?:[A-Z0-9](?:[A-Z0-9-]{0,61}[A-Z0-9])?\.)+(?:[A-Z]{2,6}\.?|[A-Z0-9-]{2,}\.?)|'  # domain
        r'localhost|'  # localhost
        r'\d{1,3}\.\d{1,3}\.\d{1,3}\.\d{1,3})'  # or IPv4
        r'(?::\d+)?'  # optional port
        r'(?:/?|[/?]\S+)$', re.IGNORECASE)

    if not url_pattern.match(value):
        raise ValueError(f"'{value}' is not a valid URL")
    return value


def commitment_validator(value: str) -> str:
    """Validate Solana commitment level.

    Args:
        value: Commitment level to validate

    Returns:
        The validated commitment level

    Raises:
        ValueError: If not a valid commitment level
    """
    valid_commitments = ("processed", "confirmed", "finalized")
    if value.lower() not in valid_commitments:
        raise ValueError(f"Commitment must be one of: {', '.join(valid_commitments)}")
    return value.lower()


def log_level_validator(value: str) -> str:
    """Validate log level.

    Args:
        value: Log level to validate

    Returns:
        The validated log level

    Raises:
        ValueError: If not a valid log level
    """
    valid_levels = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
    upper_value = value.upper()
    if upper_value not in valid_levels:
        raise ValueError(f"Log level must be one of: {', '.join(valid_levels)}")
    return upper_value


@dataclass(frozen=True)
class SolanaConfig:
    """Configuration for Solana RPC connections."""

    mainnet_url: str = DEFAULT_MAINNET_URL
    devnet_url: str = DEFAULT_DEVNET_URL
    testnet_url: str = DEFAULT_TESTNET_URL
    commitment: str = "confirmed"
    timeout: int = 30  # seconds
    signature_limit: int = 10

    def rpc_url(self, network: Network) -> str:
        """Get the RPC endpoint for a network.

        Args:
            network: The selected cluster

        Returns:
            The configured endpoint URL
        """
        return {
            Network.MAINNET: self.mainnet_url,
            Network.DEVNET: self.devnet_url,
            Network.TESTNET: self.testnet_url,
        }[network]


@lru_cache()
def get_solana_config() -> SolanaConfig:
    """Get Solana configuration from environment variables.

    Uses cached values for efficiency.

    Returns:
        SolanaConfig instance

    Raises:
        ConfigurationError: If environment variables fail validation
    """
    return SolanaConfig(
        mainnet_url=get_env_var(f"{ENV_PREFIX}MAINNET_URL", DEFAULT_MAINNET_URL,
                                validator=url_validator),
        devnet_url=get_env_var(f"{ENV_PREFIX}DEVNET_URL", DEFAULT_DEVNET_URL,
                               validator=url_validator),
        testnet_url=get_env_var(f"{ENV_PREFIX}TESTNET_URL", DEFAULT_TESTNET_URL,
                                validator=url_validator),
        commitment=get_env_var(f"{ENV_PREFIX}COMMITMENT", "confirmed",
                               validator=commitment_validator),
        timeout=get_env_var(f"{ENV_PREFIX}TIMEOUT", 30, validator=positive_int_validator),
        signature_limit=get_env_var(f"{ENV_PREFIX}SIGNATURE_LIMIT", 10,
                                    validator=positive_int_validator),
    )


@dataclass(frozen=True)
class LoggingConfig:
    """Configuration for application logging."""

    log_level: str = "WARNING"
    log_file: Optional[str] = None


@lru_cache()
def get_logging_config() -> LoggingConfig:
    """Get logging configuration from environment variables.

    Returns:
        LoggingConfig instance
    """
    return LoggingConfig(
        log_level=get_env_var(f"{ENV_PREFIX}LOG_LEVEL", "WARNING", validator=log_level_validator),
        log_file=get_env_var(f"{ENV_PREFIX}LOG_FILE"),
    )
