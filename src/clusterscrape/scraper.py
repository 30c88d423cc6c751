"""
Scrape orchestration.

The topology phase runs two tasks in parallel on one scope: region/zones
followed by per-zone instance listing, and the GKE cluster lookup with its
node-group references. Only when both succeed does the node phase list the
members of every node group. Any failure aborts the scrape.
"""

import logging
import time
import uuid
from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any

from .cluster import node_groups, resolve_cluster
from .config import ScrapeConfig
from .fanout import fan_out, raise_first_error
from .fetcher import InventoryFetcher
from .instances import InstanceEnumerator
from .nodes import NodeEnumerator
from .report import Correlator, build_report
from .schemas.report import Report, ScrapeResult
from .scope import CancelScope
from .zones import resolve_region

PhaseTask = tuple[str, Callable[[CancelScope], Any]]


class Scraper:
    def __init__(
        self,
        config: ScrapeConfig,
        fetcher: InventoryFetcher,
        logger: logging.Logger | None = None,
        max_workers: int | None = None,
    ):
        self.config = config
        self.fetcher = fetcher
        self.logger = logger or logging.getLogger(__name__)
        self.max_workers = max_workers
        self.scrape_id = ""
        self._started = time.monotonic()

    def _elapsed(self) -> str:
        return f"{time.monotonic() - self._started:.6f}s"

    def _stanza(self, status: str, process: str) -> None:
        elapsed = self._elapsed()
        self.logger.info(
            f"{process} ({status}, elapsed {elapsed})",
            extra={"scrape_id": self.scrape_id, "status": status, "elapsed": elapsed},
        )

    def _compute_phase(self, scope: CancelScope) -> Any:
        gcp = self.config.gcp
        self._stanza("processing", "obtain region and zones")
        region = resolve_region(self.fetcher, gcp.project_id, gcp.region_name)

        self._stanza("processing", "list instances in each zone")
        enumerator = InstanceEnumerator(
            self.fetcher,
            gcp.project_id,
            check_between_pages=self.config.scrape.check_between_pages,
            max_workers=self.max_workers,
        )
        return region, enumerator.enumerate(region, scope)

    def _cluster_phase(self, scope: CancelScope) -> Any:
        gcp = self.config.gcp
        self._stanza("processing", "obtain GKE cluster")
        topology = resolve_cluster(
            self.fetcher, gcp.project_id, gcp.region_name, gcp.gke_cluster_name
        )

        self._stanza("processing", "list instance-groups in the GKE cluster")
        return topology, node_groups(topology)

    def run(self, scope: CancelScope | None = None) -> ScrapeResult:
        started_at = datetime.now(timezone.utc)
        self.scrape_id = str(uuid.uuid4())
        self._started = time.monotonic()
        scope = scope or CancelScope()
        self.logger.info(
            "Scraping Starts",
            extra={"scrape_id": self.scrape_id, "status": "start"},
        )

        topology_scope = scope.child()
        phases: list[PhaseTask] = [
            ("compute", self._compute_phase),
            ("cluster", self._cluster_phase),
        ]
        outcomes = fan_out(
            phases,
            lambda phase: phase[1](topology_scope),
            topology_scope,
            describe=lambda phase: f"{phase[0]} phase",
        )
        raise_first_error(outcomes)
        (region, instances), (topology, groups) = (o.value for o in outcomes)

        self._stanza("processing", "list instances in each instance-group")
        filled = NodeEnumerator(
            self.fetcher,
            check_between_pages=self.config.scrape.check_between_pages,
            max_workers=self.max_workers,
        ).enumerate(groups, scope)

        self.logger.info(
            "Scraping Complete",
            extra={
                "scrape_id": self.scrape_id,
                "status": "end",
                "total_elapsed": self._elapsed(),
            },
        )
        return ScrapeResult(
            scrape_id=self.scrape_id,
            started_at=started_at,
            region=region,
            instances=instances,
            topology=topology,
            node_groups=filled,
        )


def scrape(
    config: ScrapeConfig,
    fetcher: InventoryFetcher,
    logger: logging.Logger | None = None,
    correlator: Correlator | None = None,
) -> Report:
    """Runs a full scrape and builds its report. Raises on any failure."""
    result = Scraper(config, fetcher, logger=logger).run()
    return build_report(result, correlator)
