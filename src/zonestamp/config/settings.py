"""
Typed configuration models using Pydantic.

A ZonePolicy is the whole difference between the base timestamp and a
zone-specialized one: the zone assumed for zone-naive input, the zone used
for output, and the output layout. Policies are immutable and validated on
construction, so an unknown zone name fails at startup.
"""

from datetime import tzinfo

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from zonestamp.layout import CANONICAL_LAYOUT
from zonestamp.zones import resolve_zone


class ZonePolicy(BaseModel):
    """Input zone, output zone and layout applied by every codec."""

    model_config = ConfigDict(frozen=True)

    input_zone: str = Field(
        default="UTC", description="Zone assumed for zone-naive input"
    )
    output_zone: str = Field(default="UTC", description="Zone used for encoding")
    layout: str = Field(
        default=CANONICAL_LAYOUT, description="strftime layout used for encoding"
    )

    @field_validator("input_zone", "output_zone")
    @classmethod
    def validate_zone(cls, v: str) -> str:
        """Ensure the zone exists in the timezone database."""
        resolve_zone(v)
        return v

    @field_validator("layout")
    @classmethod
    def validate_layout(cls, v: str) -> str:
        """Ensure the layout is not empty."""
        if not v:
            msg = "layout must not be empty"
            raise ValueError(msg)
        return v

    @property
    def input_tz(self) -> tzinfo:
        """Loaded input zone."""
        return resolve_zone(self.input_zone)

    @property
    def output_tz(self) -> tzinfo:
        """Loaded output zone."""
        return resolve_zone(self.output_zone)


UTC_POLICY = ZonePolicy()
MOSCOW_POLICY = ZonePolicy(input_zone="Europe/Moscow")


def builtin_policies() -> dict[str, ZonePolicy]:
    """Policies every configuration starts with."""
    return {"utc": UTC_POLICY, "moscow": MOSCOW_POLICY}


class LoggingConfig(BaseModel):
    """Logging configuration."""

    model_config = ConfigDict(frozen=True)

    level: str = Field(default="INFO", description="Log level name")
    json_output: bool = Field(default=False, description="Render logs as JSON")

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Ensure the level is a standard logging level name."""
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            msg = f"Unknown log level: {v!r}"
            raise ValueError(msg)
        return level


class ZonestampConfig(BaseModel):
    """Complete configuration: named policies plus logging."""

    model_config = ConfigDict(frozen=True)

    policies: dict[str, ZonePolicy] = Field(default_factory=builtin_policies)
    default_policy: str = Field(
        default="utc", description="Name of the policy used when none is given"
    )
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @model_validator(mode="after")
    def validate_default_policy(self) -> "ZonestampConfig":
        """Ensure default_policy names a configured policy."""
        if self.default_policy not in self.policies:
            msg = (
                f"default_policy {self.default_policy!r} is not one of "
                f"{sorted(self.policies)}"
            )
            raise ValueError(msg)
        return self

    def policy(self, name: str | None = None) -> ZonePolicy:
        """
        Look up a policy by name.

        Args:
            name: Policy name; the default policy when None.

        Returns:
            The policy.

        Raises:
            ValueError: If no policy has that name.
        """
        key = self.default_policy if name is None else name
        if key not in self.policies:
            msg = f"Unknown policy {key!r}, known: {', '.join(sorted(self.policies))}"
            raise ValueError(msg)
        return self.policies[key]
