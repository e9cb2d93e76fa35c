# Copyright 2026 Canonical Ltd.
# See LICENSE file for licensing details.

"""Docstring for blackbox-target-discovery.src.models.

This models module holds the pydantic classes used by the pipeline for data validation:
the runtime settings, the DNS records read from Route53 and the scrape config template.
"""
from enum import Enum
from pathlib import Path
from typing import Any, Dict, FrozenSet, Iterator, List, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, RootModel, ValidationError, field_validator

from constants import DEFAULT_TEMPLATE_PATH
from errors import ConfigValidationError

# Settings field -> environment variable, in validation order.
REQUIRED_ENV_VARS: Dict[str, str] = {
    "public_hosted_zone_id": "PUBLIC_HOSTED_ZONE_ID",
    "private_hosted_zone_id": "PRIVATE_HOSTED_ZONE_ID",
    "prometheus_namespace": "PROMETHEUS_NAMESPACE",
    "prometheus_secret_name": "PROMETHEUS_SECRET_NAME",
    "mattermost_alerts_hook": "MATTERMOST_ALERTS_HOOK",
}

OPTIONAL_ENV_VARS: Dict[str, str] = {
    "excluded_targets": "EXCLUDED_TARGETS",
    "additional_targets": "ADDITIONAL_TARGETS",
    "bind_servers": "BIND_SERVERS",
    "developer_mode": "DEVELOPER_MODE",
    "template_path": "SCRAPE_CONFIG_TEMPLATE",
    "targets_job": "TARGETS_JOB_NAME",
    "bind_server_jobs": "BIND_SERVER_JOBS",
    "log_level": "LOG_LEVEL",
}


def split_list(value: Any) -> List[str]:
    """Split a comma separated environment value, dropping blank items."""
    if value is None:
        return []
    if isinstance(value, str):
        value = value.split(",")
    return [item.strip() for item in value if item and item.strip()]


class Settings(BaseModel):
    """Immutable run configuration, built once from the process environment."""

    model_config = ConfigDict(frozen=True)

    public_hosted_zone_id: str
    private_hosted_zone_id: str
    prometheus_namespace: str
    prometheus_secret_name: str
    mattermost_alerts_hook: str
    excluded_targets: FrozenSet[str] = frozenset()
    additional_targets: Tuple[str, ...] = ()
    bind_servers: Tuple[str, ...] = ()
    developer_mode: bool = False
    template_path: Path = DEFAULT_TEMPLATE_PATH
    targets_job: Optional[str] = None
    bind_server_jobs: Tuple[str, ...] = ()
    log_level: str = "INFO"

    @field_validator(
        "excluded_targets", "additional_targets", "bind_servers", "bind_server_jobs", mode="before"
    )
    @classmethod
    def _split_lists(cls, v):
        return split_list(v)

    @field_validator("developer_mode", mode="before")
    @classmethod
    def developer_mode_is_exact_true(cls, v):
        """Only the exact string "true" selects the local kubeconfig."""
        if isinstance(v, str):
            return v == "true"
        return v

    @field_validator("log_level")
    @classmethod
    def log_level_is_known(cls, v):
        """Ensure log_level names a standard logging level."""
        v = v.upper()
        if v not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"unknown log level {v}")
        return v

    @classmethod
    def from_environ(cls, environ: Mapping[str, str]) -> "Settings":
        """Build the settings from environment variables.

        Raises:
            ConfigValidationError: if a required variable is unset or a value is invalid.
        """
        values: Dict[str, Any] = {}
        for field, var in REQUIRED_ENV_VARS.items():
            value = environ.get(var, "")
            if not value:
                raise ConfigValidationError(f"{var} environment variable is not set")
            values[field] = value

        for field, var in OPTIONAL_ENV_VARS.items():
            if environ.get(var):
                values[field] = environ[var]

        try:
            return cls(**values)
        except ValidationError as e:
            raise ConfigValidationError(f"Invalid environment configuration: {e}") from e


class ZoneVisibility(str, Enum):
    """Which hosted zone a record was read from."""

    PUBLIC = "public"
    PRIVATE = "private"


class RecordSet(BaseModel):
    """A DNS record as listed by Route53."""

    model_config = ConfigDict(frozen=True)

    name: str
    type: str
    visibility: ZoneVisibility

    @classmethod
    def from_route53(cls, record: Mapping[str, Any], visibility: ZoneVisibility) -> "RecordSet":
        """Build a record from a boto3 ``ResourceRecordSet`` dict."""
        return cls(name=record["Name"], type=record["Type"], visibility=visibility)


class RelabelConfig(BaseModel):
    """A Prometheus relabeling rule; unknown keys are kept as-is."""

    model_config = ConfigDict(extra="allow")

    source_labels: Optional[List[str]] = None
    target_label: Optional[str] = None
    replacement: Optional[str] = None


class Params(BaseModel):
    """URL parameters sent to the blackbox exporter."""

    model_config = ConfigDict(extra="allow")

    module: Optional[List[str]] = None  # e.g., ["http_2xx"]


class StaticConfig(BaseModel):
    """Configuration for static scrape targets."""

    targets: List[str] = Field(default_factory=list)
    labels: Optional[Dict[str, str]] = None  # e.g., {"module": "http_2xx"}


class ScrapeJob(BaseModel):
    """Represents a single scrape job configuration."""

    model_config = ConfigDict(extra="allow")

    honor_timestamps: Optional[bool] = None
    job_name: str
    metrics_path: Optional[str] = None
    params: Optional[Params] = None
    relabel_configs: Optional[List[RelabelConfig]] = None
    scheme: Optional[str] = None
    scrape_interval: Optional[str] = None
    scrape_timeout: Optional[str] = None
    static_configs: List[StaticConfig] = Field(default_factory=list)

    @field_validator("job_name")
    @classmethod
    def job_name_not_empty(cls, v):
        """Ensure job_name is not empty or whitespace."""
        if not v.strip():
            raise ValueError("job_name cannot be empty")
        return v


class ScrapeConfiguration(RootModel[List[ScrapeJob]]):
    """Top-level model representing the scrape config template: an ordered list of jobs."""

    root: List[ScrapeJob] = Field(..., min_length=1)

    def __iter__(self) -> Iterator[ScrapeJob]:  # type: ignore[override]
        return iter(self.root)

    def __len__(self) -> int:
        return len(self.root)

    def __getitem__(self, index: int) -> ScrapeJob:
        return self.root[index]
