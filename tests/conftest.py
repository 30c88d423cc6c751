import threading
from collections.abc import Callable

import pytest

from clusterscrape.config import ScrapeConfig
from clusterscrape.schemas.compute import ComputeInstance
from clusterscrape.schemas.gke import ClusterTopology, Node

ZONE_URL = "https://www.googleapis.com/compute/v1/projects/{project}/zones/{zone}"
GROUP_URL = (
    "https://www.googleapis.com/compute/v1/projects/{project}"
    "/zones/{zone}/instanceGroupManagers/{name}"
)


def make_instances(zone: str, count: int, prefix: str = "vm") -> list[ComputeInstance]:
    return [
        ComputeInstance(
            name=f"{prefix}-{zone}-{i}",
            id=str(i),
            zone=zone,
            status="RUNNING",
            internal_ip=f"10.0.0.{i}",
        )
        for i in range(count)
    ]


class FakeInventory:
    """In-memory InventoryFetcher; records every call it receives."""

    def __init__(
        self,
        zones: dict[str, list[str]] | None = None,
        instance_pages: dict[str, list[list[ComputeInstance]]] | None = None,
        cluster: ClusterTopology | None = None,
        group_pages: dict[str, list[list[Node]]] | None = None,
        failures: dict[tuple[str, str], Exception] | None = None,
        hooks: dict[tuple[str, str], Callable[[], None]] | None = None,
    ):
        self.zones = zones or {}
        self.instance_pages = instance_pages or {}
        self.cluster = cluster
        self.group_pages = group_pages or {}
        self.failures = failures or {}
        self.hooks = hooks or {}
        self.calls: list[tuple] = []
        self._lock = threading.Lock()

    def _enter(self, kind: str, key: str, *call) -> None:
        with self._lock:
            self.calls.append((kind, key, *call))
        hook = self.hooks.get((kind, key))
        if hook:
            hook()
        if (kind, key) in self.failures:
            raise self.failures[(kind, key)]

    def calls_of(self, kind: str) -> list[tuple]:
        return [c for c in self.calls if c[0] == kind]

    def get_region_zones(self, project_id, region):
        self._enter("region", region, project_id)
        return self.zones[region]

    def list_instance_pages(self, project_id, zone):
        self._enter("zone", zone, project_id)
        return iter(self.instance_pages.get(zone, []))

    def get_cluster(self, path):
        self._enter("cluster", path)
        return self.cluster

    def list_group_member_pages(self, project_id, zone, group, state="ALL"):
        self._enter("group", group, project_id, zone, state)
        return iter(self.group_pages.get(group, []))


@pytest.fixture
def config():
    cfg = ScrapeConfig()
    cfg.gcp.project_id = "test-project"
    cfg.gcp.region_name = "asia-northeast1"
    cfg.gcp.gke_cluster_name = "test-cluster"
    return cfg


@pytest.fixture
def inventory(config):
    """A small healthy project: two zones, one cluster with two node groups."""
    project = config.gcp.project_id
    zones = ["asia-northeast1-a", "asia-northeast1-b"]
    groups = [("asia-northeast1-a", "gke-pool-a-grp"), ("asia-northeast1-b", "gke-pool-b-grp")]
    return FakeInventory(
        zones={
            "asia-northeast1": [ZONE_URL.format(project=project, zone=z) for z in zones]
        },
        instance_pages={
            "asia-northeast1-a": [make_instances("asia-northeast1-a", 2)],
            "asia-northeast1-b": [
                make_instances("asia-northeast1-b", 2),
                make_instances("asia-northeast1-b", 1, prefix="extra"),
            ],
        },
        cluster=ClusterTopology(
            name="test-cluster",
            location="asia-northeast1",
            node_group_references=[
                GROUP_URL.format(project=project, zone=z, name=n) for z, n in groups
            ],
        ),
        group_pages={
            "gke-pool-a-grp": [[Node(name="vm-asia-northeast1-a-0", status="RUNNING")]],
            "gke-pool-b-grp": [
                [Node(name="vm-asia-northeast1-b-0", status="RUNNING")],
                [Node(name="vm-asia-northeast1-b-1", status="TERMINATED")],
            ],
        },
    )
