from pydantic import BaseModel, ConfigDict, Field


class Zone(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str = Field(description="e.g., asia-northeast1-a")
    reference: str = Field(description="Canonical zone URL as returned by the API")


class Region(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    zones: list[Zone] = Field(default_factory=list)


class ComputeInstance(BaseModel):
    name: str
    id: str = ""
    zone: str
    status: str
    machine_type: str = Field(
        default="unknown", description="Cleaned machine type (e.g., n1-standard-1)"
    )
    labels: dict[str, str] = Field(default_factory=dict)
    internal_ip: str | None = None
    external_ip: str | None = None
