"""The inventory capability the scrape core depends on."""

from collections.abc import Iterable
from typing import Protocol

from tenacity import Retrying

from .core import INSTANCE_STATE_ALL, retry_config
from .schemas.compute import ComputeInstance
from .schemas.gke import ClusterTopology, Node
from .walkers import compute, gke


class InventoryFetcher(Protocol):
    def get_region_zones(self, project_id: str, region: str) -> list[str]:
        """Returns the zone URLs of a region."""
        ...

    def list_instance_pages(
        self, project_id: str, zone: str
    ) -> Iterable[list[ComputeInstance]]:
        """Yields instances in a zone, one list per API page."""
        ...

    def get_cluster(self, path: str) -> ClusterTopology | None:
        """Looks up a cluster by `projects/*/locations/*/clusters/*` path."""
        ...

    def list_group_member_pages(
        self,
        project_id: str,
        zone: str,
        group: str,
        state: str = INSTANCE_STATE_ALL,
    ) -> Iterable[list[Node]]:
        """Yields the members of an instance group, one list per API page."""
        ...


class GoogleInventory:
    """InventoryFetcher backed by the Compute Engine and GKE client libraries."""

    def __init__(self, retry_attempts: int = 1, request_timeout: float | None = None):
        self.retrying = Retrying(**retry_config(retry_attempts))
        self.request_timeout = request_timeout

    def get_region_zones(self, project_id: str, region: str) -> list[str]:
        return compute.get_region_zones(
            project_id, region, timeout=self.request_timeout, retrying=self.retrying
        )

    def list_instance_pages(
        self, project_id: str, zone: str
    ) -> Iterable[list[ComputeInstance]]:
        return compute.list_instance_pages(
            project_id, zone, timeout=self.request_timeout, retrying=self.retrying
        )

    def get_cluster(self, path: str) -> ClusterTopology | None:
        return gke.get_cluster(
            path, timeout=self.request_timeout, retrying=self.retrying
        )

    def list_group_member_pages(
        self,
        project_id: str,
        zone: str,
        group: str,
        state: str = INSTANCE_STATE_ALL,
    ) -> Iterable[list[Node]]:
        return compute.list_group_member_pages(
            project_id,
            zone,
            group,
            state=state,
            timeout=self.request_timeout,
            retrying=self.retrying,
        )
