"""
Configuration management using Pydantic models and YAML files.
"""

import logging
from datetime import date, datetime
from pathlib import Path
from typing import Any, Dict, Mapping

import pendulum
import pydantic
import yaml
from pendulum.tz.exceptions import InvalidTimezone
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .domain.exceptions import ValidationError


class DataSourceConfig(BaseModel):
    """Where and how to fetch provider timeslots."""
    base_url: str = "http://localhost:8000"
    timeslots_path: str = "/service/timeslots"
    timeout_seconds: float = 30

    @field_validator("timeout_seconds")
    @classmethod
    def validate_timeout(cls, value: float) -> float:
        """Ensure request timeout is positive."""
        if value <= 0:
            raise ValueError("timeout_seconds must be greater than zero")
        return value

    def get_timeslots_url(self) -> str:
        """Get the full timeslots endpoint URL."""
        return f"{self.base_url.rstrip('/')}/{self.timeslots_path.lstrip('/')}"


class DefaultsConfig(BaseModel):
    """Default settings for calendar requests."""
    days_to_return: int = 7
    transportation_option: str = ""
    timezone: str = "UTC"

    @field_validator("days_to_return")
    @classmethod
    def validate_days(cls, value: int) -> int:
        """Ensure at least one day is requested."""
        if value <= 0:
            raise ValueError("days_to_return must be greater than zero")
        return value

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, value: str) -> str:
        """Ensure the timezone is a known IANA name."""
        try:
            pendulum.timezone(value)
        except InvalidTimezone as exc:
            raise ValueError(f"Unknown timezone: {value}") from exc
        return value


class AppConfig(BaseModel):
    """Application configuration."""
    data_source: DataSourceConfig = Field(default_factory=DataSourceConfig)
    defaults: DefaultsConfig = Field(default_factory=DefaultsConfig)
    log_level: str = "WARNING"

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Ensure the log level is one the logging module knows."""
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value}")
        return level

    @classmethod
    def load_from_yaml(cls, config_path: Path) -> "AppConfig":
        """
        Load configuration from YAML file.

        Args:
            config_path: Path to the YAML config file

        Returns:
            AppConfig instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If config is invalid
        """
        if not config_path.exists():
            raise FileNotFoundError(
                f"Config file not found: {config_path}\n"
                f"Please create a config.yaml file. See config.example.yaml for reference."
            )

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid YAML in {config_path}: {exc}") from exc

        if not isinstance(data, dict):
            raise ValueError("Config file must contain a mapping at the root level.")

        return cls(**data)


class CalendarOptions(BaseModel):
    """
    Options for a single calendar request.

    Accepts both snake_case names and the camelCase keys used by the
    timeslots service (``daysToReturn``, ``deliveryDate``, ...).
    """
    model_config = ConfigDict(
        populate_by_name=True,
        extra="forbid",
        frozen=True,
    )

    days_to_return: int = Field(alias="daysToReturn")
    transportation_option: str = Field(alias="transportationOption")
    start_date: date = Field(alias="startDate")
    delivery_date: datetime = Field(alias="deliveryDate")
    make: str
    model: str
    year: int

    @field_validator("days_to_return")
    @classmethod
    def validate_days(cls, value: int) -> int:
        """Ensure at least one day is requested."""
        if value <= 0:
            raise ValueError("days_to_return must be greater than zero")
        return value

    @field_validator("start_date", mode="before")
    @classmethod
    def validate_start_date(cls, value: Any) -> Any:
        """Reduce datetimes to their calendar date."""
        if isinstance(value, datetime):
            return value.date()
        return value

    @field_validator("delivery_date")
    @classmethod
    def validate_delivery_date(cls, value: datetime) -> datetime:
        """Read naive delivery dates as UTC."""
        return pendulum.instance(value, tz="UTC")

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "CalendarOptions":
        """
        Build options from a plain mapping.

        Raises:
            ValidationError: If a field is missing or invalid
        """
        try:
            return cls.model_validate(dict(data))
        except pydantic.ValidationError as exc:
            raise ValidationError(f"Invalid calendar options: {exc}") from exc

    def to_request_params(self) -> Dict[str, Any]:
        """Query parameters for the timeslots service."""
        return {
            "daysToReturn": self.days_to_return,
            "transportationOption": self.transportation_option,
            "startDate": self.start_date.strftime("%Y-%m-%d"),
            "year": self.year,
            "make": self.make,
            "model": self.model,
        }


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    # Look for config.yaml in current directory
    current_dir = Path.cwd()
    config_path = current_dir / "config.yaml"

    if not config_path.exists():
        # Try in the project root (parent of the package)
        project_root = Path(__file__).parent.parent
        config_path = project_root / "config.yaml"

    return config_path
