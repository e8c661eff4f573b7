"""
Formatter Configuration Schema

Options accepted by the console formatter, with their defaults.
"""

from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

SIMPLE_FORMAT = "%datetime% %start_tag%%level_name%%end_tag% <comment>[%channel%]</> %message%%context%%extra%\n"
SIMPLE_DATE = "%H:%M:%S"


class FormatterConfig(BaseModel):
    """Immutable console formatter options."""
    model_config = ConfigDict(frozen=True, extra="forbid")

    format: str = Field(
        default=SIMPLE_FORMAT,
        description="Line template; supports %datetime%, %start_tag%, %level_name%, %end_tag%, "
                    "%channel%, %message%, %context% and %extra%"
    )
    date_format: str = Field(default=SIMPLE_DATE, description="strftime pattern for %datetime%")
    colors: bool = Field(default=True, description="Emit ANSI colors in dumped values")
    multiline: bool = Field(default=False, description="Dump context and extra over several lines")
    level_name_format: str = Field(default="%-9s", description="printf-style pattern for the level name")
    ignore_empty_context_and_extra: bool = Field(
        default=True, description="Drop the context/extra segment when the map is empty"
    )
    dump_values: bool = Field(default=True, description="Render context and extra through the value dumper")

    @field_validator("level_name_format")
    @classmethod
    def validate_level_name_format(cls, value: str) -> str:
        """Reject patterns that do not take exactly one string argument."""
        try:
            value % "X"
        except (TypeError, ValueError) as e:
            raise ValueError(f"level_name_format must take one string argument: {e}") from e
        return value

    @classmethod
    def from_options(cls, options: Optional[Mapping[str, Any]] = None) -> "FormatterConfig":
        """
        Merge user supplied options over the defaults.

        Args:
            options: Option name to value mapping; missing options keep their default

        Returns:
            Validated configuration

        Raises:
            pydantic.ValidationError: On unknown options or values of the wrong type
        """
        return cls(**dict(options or {}))
