"""
Configuration management using Pydantic models loaded from YAML.
"""

import re
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

from .domain.clock import to_minutes
from .domain.exceptions import InvalidInputError
from .domain.models import BusinessCalendar
from .domain.weekday import get_timezone


class ClockSafeLoader(yaml.SafeLoader):
    """
    SafeLoader that reads unquoted clock values such as 12:00 as strings.

    YAML 1.1 treats them as base-60 integers (12:00 -> 720) unless the
    hour has a leading zero.
    """


_CLOCK_VALUE = re.compile(r"^\d{1,2}:\d{2}(?::\d{2})?$")

ClockSafeLoader.yaml_implicit_resolvers = {
    first: list(resolvers) for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}
for _digit in "0123456789":
    ClockSafeLoader.yaml_implicit_resolvers.setdefault(_digit, []).insert(
        0, ("tag:yaml.org,2002:str", _CLOCK_VALUE)
    )


class BusinessConfig(BaseModel):
    """Opening hours and the slot grid of the business."""
    open_time: str = "09:00"
    close_time: str = "17:00"
    slot_duration: int = 30
    service_duration: int = 30

    @field_validator("open_time", "close_time")
    @classmethod
    def validate_clock(cls, value: str) -> str:
        """Validate the value is a well-formed "HH:MM" time."""
        try:
            to_minutes(value)
        except InvalidInputError as exc:
            raise ValueError(str(exc)) from exc
        return value

    @field_validator("slot_duration", "service_duration")
    @classmethod
    def validate_duration(cls, value: int) -> int:
        """Ensure durations are positive."""
        if value <= 0:
            raise ValueError("durations must be greater than zero")
        return value

    @model_validator(mode="after")
    def validate_hours_order(self) -> "BusinessConfig":
        """Ensure the business opens before it closes."""
        if to_minutes(self.close_time) <= to_minutes(self.open_time):
            raise ValueError("close_time must be later than open_time")
        return self

    def to_calendar(self, service_duration: Optional[int] = None) -> BusinessCalendar:
        """
        Build the domain calendar, optionally for a different service length.

        Raises:
            InvalidBusinessHoursError: If ``service_duration`` is not positive
        """
        return BusinessCalendar.from_clock(
            self.open_time,
            self.close_time,
            slot_duration=self.slot_duration,
            service_duration=service_duration if service_duration is not None else self.service_duration,
        )


class AppConfig(BaseModel):
    """Application configuration."""
    business: BusinessConfig = Field(default_factory=BusinessConfig)
    timezone: str = "UTC"
    schedule_file: Optional[Path] = None

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, value: str) -> str:
        """Ensure the time zone exists in the zone database."""
        try:
            get_timezone(value)
        except InvalidInputError as exc:
            raise ValueError(str(exc)) from exc
        return value

    @classmethod
    def load_from_yaml(cls, config_path: Path) -> "AppConfig":
        """
        Load configuration from YAML file.

        A relative ``schedule_file`` is resolved against the config file's
        directory.

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
                data = yaml.load(f, Loader=ClockSafeLoader) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid YAML in {config_path}: {exc}") from exc

        if not isinstance(data, dict):
            raise ValueError("Config file must contain a mapping at the root level.")

        config = cls(**data)
        if config.schedule_file is not None and not config.schedule_file.is_absolute():
            config.schedule_file = config_path.parent / config.schedule_file
        return config


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
