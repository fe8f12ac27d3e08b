"""Configuration for a harness run."""

from collections.abc import Sequence

from pydantic import BaseModel, ConfigDict, Field, field_validator


class HarnessConfig(BaseModel):
    """Configuration for a harness run.

    The wait durations are coupled to the orchestrator's own timing: a 60s
    session TTL swept every 5s, and a 5s worker health check with a 1s
    restart delay. The harness cannot discover these, so change them here
    if the orchestrator is started with different values.

    Unknown keys are rejected so a misspelled setting cannot fall back to
    its default unnoticed.
    """

    model_config = ConfigDict(extra="forbid")

    base_url: str = "http://localhost:8080/"
    request_timeout: float = Field(default=300.0, gt=0)
    fanout_timeout: float = Field(default=35.0, gt=0)
    concurrent_sessions: int = Field(default=10, ge=1)
    ttl_wait: float = Field(default=67.0, ge=0)
    settle_delay: float = Field(default=0.5, ge=0)
    recovery_sessions: int = Field(default=3, ge=1)
    crash_grace_period: float = Field(default=10.0, ge=0)
    groups: Sequence[str] = ()

    @field_validator("base_url")
    @classmethod
    def _trailing_slash(cls, value: str) -> str:
        return value.rstrip("/") + "/"
