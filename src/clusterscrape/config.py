"""Configuration file loading and CLI overrides."""

import tomllib
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .core import DEFAULT_CONFIG_PATH, DEFAULT_LOG_PATH
from .errors import ConfigurationError


class GlobalConfig(BaseModel):
    log_path: str = DEFAULT_LOG_PATH
    log_level: str = "INFO"


class GCPConfig(BaseModel):
    project_id: str = ""
    project_name: str = Field(default="", description="Informational only")
    region_name: str = ""
    gke_cluster_name: str = ""


class ScrapeSettings(BaseModel):
    retry_attempts: int = Field(default=1, ge=1)
    request_timeout: float | None = Field(default=None, gt=0)
    check_between_pages: bool = False


class ScrapeConfig(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    global_: GlobalConfig = Field(default_factory=GlobalConfig, alias="global")
    gcp: GCPConfig = Field(default_factory=GCPConfig)
    scrape: ScrapeSettings = Field(default_factory=ScrapeSettings)


def load_config(path: str | Path | None = None) -> ScrapeConfig:
    """
    Loads the TOML config file. A missing file yields the defaults;
    an unreadable or invalid one is a ConfigurationError.
    """
    config_path = Path(path or DEFAULT_CONFIG_PATH).expanduser()
    if not config_path.exists():
        return ScrapeConfig()

    try:
        with config_path.open("rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigurationError(f"unable to decode config toml {config_path}: {e}") from e

    try:
        return ScrapeConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(f"invalid config {config_path}: {e}") from e


def apply_overrides(
    config: ScrapeConfig,
    project: str | None = None,
    region: str | None = None,
    cluster: str | None = None,
) -> ScrapeConfig:
    """Applies non-empty CLI values and checks the mandatory GCP parameters."""
    if project:
        config.gcp.project_id = project
    if region:
        config.gcp.region_name = region
    if cluster:
        config.gcp.gke_cluster_name = cluster

    if not config.gcp.project_id:
        raise ConfigurationError(
            "--project is empty. it should be specified as target gcp project id"
        )
    if not config.gcp.region_name:
        raise ConfigurationError(
            "--region is empty. it should be specified as target region name"
        )
    if not config.gcp.gke_cluster_name:
        raise ConfigurationError(
            "--cluster-name is empty. it should be specified as target gke cluster name"
        )
    return config
