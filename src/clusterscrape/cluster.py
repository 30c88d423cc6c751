import re

from .core import NODE_GROUP_URL_PATTERN
from .errors import (
    MalformedReferenceError,
    NotFoundError,
    ResourceLookupError,
    ScrapeError,
)
from .fetcher import InventoryFetcher
from .schemas.gke import ClusterTopology, NodeGroup

_NODE_GROUP_URL = re.compile(NODE_GROUP_URL_PATTERN)


def cluster_path(project_id: str, location: str, name: str) -> str:
    return f"projects/{project_id}/locations/{location}/clusters/{name}"


def resolve_cluster(
    fetcher: InventoryFetcher, project_id: str, location: str, name: str
) -> ClusterTopology:
    """Looks up a GKE cluster by its fully-qualified path."""
    path = cluster_path(project_id, location, name)
    try:
        topology = fetcher.get_cluster(path)
    except ScrapeError:
        raise
    except Exception as e:
        raise ResourceLookupError(f"unable to obtain gke cluster {path}: {e}") from e

    if topology is None:
        raise NotFoundError(f"no cluster with specified param: {path}")
    return topology


def parse_node_group_reference(reference: str) -> NodeGroup:
    match = _NODE_GROUP_URL.match(reference)
    if match is None:
        raise MalformedReferenceError(
            f"instance group url didn't match expected shape: {reference!r}"
        )
    project, zone, name = match.groups()
    return NodeGroup(project=project, zone=zone, name=name)


def node_groups(topology: ClusterTopology) -> list[NodeGroup]:
    """Parses every node-group reference of a cluster; any mismatch aborts."""
    return [parse_node_group_reference(r) for r in topology.node_group_references]
