"""
Report building.

Correlating compute instances with cluster nodes is a separate, pluggable
step. A Correlator receives the whole ScrapeResult and returns the rows of
the report; the default emits none.
"""

from collections.abc import Callable

from .core import STATUS_OK
from .schemas.report import OutputNode, Report, ScrapeResult

Correlator = Callable[[ScrapeResult], list[OutputNode]]


def no_correlation(result: ScrapeResult) -> list[OutputNode]:
    return []


def correlate_by_name(result: ScrapeResult) -> list[OutputNode]:
    """
    Pairs every node-group member with the compute instance of the same
    name. Members without a matching instance are reported without an IP.
    """
    by_name = {inst.name: inst for inst in result.instances}
    nodes = []
    for group in result.node_groups:
        for node in group.nodes:
            inst = by_name.get(node.name)
            nodes.append(
                OutputNode(
                    name=node.name,
                    ip=(inst.internal_ip or "") if inst else "",
                    cluster=result.topology.name,
                    region=result.region.name,
                    zone=inst.zone if inst else group.zone,
                )
            )
    return nodes


CORRELATORS: dict[str, Correlator] = {
    "none": no_correlation,
    "name": correlate_by_name,
}


def build_report(result: ScrapeResult, correlator: Correlator | None = None) -> Report:
    correlate = correlator or no_correlation
    return Report(code=STATUS_OK, nodes=correlate(result), error="")
