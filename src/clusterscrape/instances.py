from .errors import PageFetchError, ScrapeError
from .fanout import collect_pages, fan_out, raise_first_error
from .fetcher import InventoryFetcher
from .schemas.compute import ComputeInstance, Region, Zone
from .scope import CancelScope


class InstanceEnumerator:
    """Lists the compute instances of every zone in a region, one task per zone."""

    def __init__(
        self,
        fetcher: InventoryFetcher,
        project_id: str,
        check_between_pages: bool = False,
        max_workers: int | None = None,
    ):
        self.fetcher = fetcher
        self.project_id = project_id
        self.check_between_pages = check_between_pages
        self.max_workers = max_workers

    def _describe(self, zone: Zone) -> str:
        return f"get instance in the zone({zone.name})"

    def _list_zone(self, zone: Zone, scope: CancelScope) -> list[ComputeInstance]:
        try:
            pages = self.fetcher.list_instance_pages(self.project_id, zone.name)
            return collect_pages(
                pages, scope, self._describe(zone), self.check_between_pages
            )
        except ScrapeError:
            raise
        except Exception as e:
            raise PageFetchError(
                f"unable to obtain compute instances in zone {zone.name}: {e}"
            ) from e

    def enumerate(
        self, region: Region, scope: CancelScope | None = None
    ) -> list[ComputeInstance]:
        stage = (scope or CancelScope()).child()
        outcomes = fan_out(
            region.zones,
            lambda zone: self._list_zone(zone, stage),
            stage,
            describe=self._describe,
            max_workers=self.max_workers,
        )
        raise_first_error(outcomes)

        instances: list[ComputeInstance] = []
        for outcome in outcomes:
            instances.extend(outcome.value or [])
        return instances
