from pydantic import BaseModel, ConfigDict, Field


class Node(BaseModel):
    name: str
    status: str


class NodeGroup(BaseModel):
    """An instance group backing a GKE node pool."""

    model_config = ConfigDict(frozen=True)

    project: str
    zone: str
    name: str
    nodes: list[Node] = Field(default_factory=list)


class ClusterTopology(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    location: str = ""
    node_group_references: list[str] = Field(default_factory=list)
