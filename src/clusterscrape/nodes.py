from .core import INSTANCE_STATE_ALL
from .errors import PageFetchError, ScrapeError
from .fanout import collect_pages, fan_out, raise_first_error
from .fetcher import InventoryFetcher
from .schemas.gke import Node, NodeGroup
from .scope import CancelScope


class NodeEnumerator:
    """Lists the member instances of each node group, one task per group."""

    def __init__(
        self,
        fetcher: InventoryFetcher,
        check_between_pages: bool = False,
        max_workers: int | None = None,
    ):
        self.fetcher = fetcher
        self.check_between_pages = check_between_pages
        self.max_workers = max_workers

    def _describe(self, group: NodeGroup) -> str:
        return f"get instance in instance-group({group.name})"

    def _list_group(self, group: NodeGroup, scope: CancelScope) -> list[Node]:
        try:
            pages = self.fetcher.list_group_member_pages(
                group.project, group.zone, group.name, state=INSTANCE_STATE_ALL
            )
            return collect_pages(
                pages, scope, self._describe(group), self.check_between_pages
            )
        except ScrapeError:
            raise
        except Exception as e:
            raise PageFetchError(
                f"InstanceGroups.ListInstances({group.name}) got error: {e}"
            ) from e

    def enumerate(
        self, groups: list[NodeGroup], scope: CancelScope | None = None
    ) -> list[NodeGroup]:
        """Returns copies of `groups` with their nodes filled in."""
        if not groups:
            return []

        stage = (scope or CancelScope()).child()
        outcomes = fan_out(
            groups,
            lambda group: self._list_group(group, stage),
            stage,
            describe=self._describe,
            max_workers=self.max_workers,
        )
        raise_first_error(outcomes)

        return [
            o.item.model_copy(update={"nodes": list(o.value or [])}) for o in outcomes
        ]
