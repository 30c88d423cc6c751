from datetime import datetime

from pydantic import BaseModel, Field

from ..core import STATUS_OK
from .compute import ComputeInstance, Region
from .gke import ClusterTopology, NodeGroup


class OutputNode(BaseModel):
    name: str
    ip: str = ""
    cluster: str = Field(default="", description="Cluster the node belongs to")
    region: str = ""
    zone: str = ""


class Report(BaseModel):
    code: int = STATUS_OK
    nodes: list[OutputNode] = Field(default_factory=list)
    error: str = ""

    def to_json(self, indent: int | None = None) -> str:
        return self.model_dump_json(indent=indent)


class ScrapeResult(BaseModel):
    """Everything a successful scrape collected, before reporting."""

    scrape_id: str
    started_at: datetime
    region: Region
    instances: list[ComputeInstance] = Field(default_factory=list)
    topology: ClusterTopology
    node_groups: list[NodeGroup] = Field(default_factory=list)
