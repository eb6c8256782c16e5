"""Configuration management for meshdecode using Pydantic."""

from pathlib import Path
from typing import Literal, Optional

import tomli
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from meshdecode.core.exceptions import ConfigurationError


class DecoderConfig(BaseModel):
    """Configuration for the mesh decoders."""

    model_config = ConfigDict(frozen=True)

    max_file_size: int = Field(
        1_000_000_000, gt=0, description="Largest file the loader will read (bytes)"
    )
    size_tolerance: int = Field(
        1, ge=0, description="Bytes a binary STL may fall short of its declared size"
    )
    default_color: tuple[float, float, float] = Field(
        (0.8, 0.8, 0.8), description="Color of OFF faces that declare none"
    )

    @field_validator("default_color")
    @classmethod
    def validate_default_color(cls, v: tuple[float, float, float]) -> tuple[float, float, float]:
        """Ensure the default color is already normalized."""
        if any(c < 0 or c > 1 for c in v):
            raise ValueError("default_color components must be within [0, 1]")
        return v


class LoggingConfig(BaseModel):
    """Configuration for logging."""

    model_config = ConfigDict(frozen=True)

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        "INFO", description="Logging level"
    )
    format: Literal["json", "console", "plain"] = Field(
        "console", description="Log format"
    )
    colorize: bool = Field(True, description="Colorize console output on a TTY")
    add_caller_info: bool = Field(False, description="Add file/line/function to records")
    timestamp_format: str = Field("iso", description="structlog TimeStamper format")
    log_dir: Optional[Path] = Field(None, description="Directory for log files")
    log_to_file: bool = Field(False, description="Enable file logging")


class Config(BaseModel):
    """Main configuration for meshdecode."""

    model_config = ConfigDict(frozen=True)

    decoder: DecoderConfig = Field(
        default_factory=DecoderConfig, description="Decoder configuration"
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )

    @classmethod
    def from_toml(cls, path: Path | str) -> "Config":
        """Load configuration from TOML file.

        Args:
            path: Path to TOML configuration file

        Returns:
            Config instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ConfigurationError: If the TOML or its values are invalid
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        with open(path, "rb") as f:
            try:
                data = tomli.load(f)
            except tomli.TOMLDecodeError as e:
                raise ConfigurationError(f"Invalid TOML in {path}: {e}")

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict) -> "Config":
        """Create configuration from dictionary.

        Args:
            data: Configuration dictionary

        Returns:
            Config instance
        """
        try:
            return cls(**data)
        except ValidationError as e:
            raise ConfigurationError(str(e), {"errors": e.errors()})

    def to_dict(self) -> dict:
        """Convert configuration to dictionary.

        Returns:
            Configuration as dictionary
        """
        return self.model_dump(mode="json", exclude_none=True)

    def save_toml(self, path: Path | str) -> None:
        """Save configuration to TOML file.

        Args:
            path: Path to save TOML file
        """
        import tomli_w

        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        with open(path, "wb") as f:
            tomli_w.dump(self.to_dict(), f)


def get_default_config() -> Config:
    """Get default configuration.

    Returns:
        Default Config instance
    """
    return Config()


def load_config(path: Optional[Path | str] = None) -> Config:
    """Load configuration from file or return defaults.

    Args:
        path: Optional path to configuration file

    Returns:
        Config instance
    """
    if path:
        return Config.from_toml(path)
    return get_default_config()
