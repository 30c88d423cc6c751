from collections.abc import Iterator
from typing import Any

from google.cloud import compute_v1
from tenacity import Retrying

from ..clients import (
    get_compute_instances_client,
    get_instance_groups_client,
    get_regions_client,
)
from ..core import INSTANCE_STATE_ALL, retry_config
from ..schemas.compute import ComputeInstance
from ..schemas.gke import Node


def _call_options(timeout: float | None) -> dict[str, Any]:
    return {"timeout": timeout} if timeout else {}


def to_compute_instance(instance: Any, zone: str) -> ComputeInstance:
    """Flattens a compute_v1.Instance into a ComputeInstance."""
    m_type = instance.machine_type
    machine_type_clean = m_type.split("/")[-1] if m_type else "unknown"

    internal_ip = None
    external_ip = None
    if instance.network_interfaces:
        nic = instance.network_interfaces[0]
        internal_ip = nic.network_i_p or None
        if nic.access_configs:
            external_ip = nic.access_configs[0].nat_i_p or None

    return ComputeInstance(
        name=instance.name,
        id=str(instance.id),
        zone=zone,
        status=instance.status,
        machine_type=machine_type_clean,
        labels=dict(instance.labels) if instance.labels else {},
        internal_ip=internal_ip,
        external_ip=external_ip,
    )


def get_region_zones(
    project_id: str,
    region: str,
    timeout: float | None = None,
    retrying: Retrying | None = None,
) -> list[str]:
    """
    Returns the zone URLs of a region, e.g.
    https://www.googleapis.com/compute/v1/projects/p/zones/us-west1-a
    """
    retrying = retrying or Retrying(**retry_config())
    client = get_regions_client()
    request = compute_v1.GetRegionRequest(project=project_id, region=region)
    response = retrying(client.get, request=request, **_call_options(timeout))
    return list(response.zones)


def list_instance_pages(
    project_id: str,
    zone: str,
    timeout: float | None = None,
    retrying: Retrying | None = None,
) -> Iterator[list[ComputeInstance]]:
    """
    Yields the instances of a zone one API page at a time.
    Only the first request is retried; later pages are fetched lazily.
    """
    retrying = retrying or Retrying(**retry_config())
    client = get_compute_instances_client()
    request = compute_v1.ListInstancesRequest(project=project_id, zone=zone)
    pager = retrying(client.list, request=request, **_call_options(timeout))

    for page in pager.pages:
        yield [to_compute_instance(i, zone) for i in page.items]


def list_group_member_pages(
    project_id: str,
    zone: str,
    group: str,
    state: str = INSTANCE_STATE_ALL,
    timeout: float | None = None,
    retrying: Retrying | None = None,
) -> Iterator[list[Node]]:
    """Yields the members of an instance group one API page at a time."""
    retrying = retrying or Retrying(**retry_config())
    client = get_instance_groups_client()
    request = compute_v1.ListInstancesInstanceGroupsRequest(
        project=project_id,
        zone=zone,
        instance_group=group,
        instance_groups_list_instances_request_resource=(
            compute_v1.InstanceGroupsListInstancesRequest(instance_state=state)
        ),
    )
    pager = retrying(client.list_instances, request=request, **_call_options(timeout))

    for page in pager.pages:
        # Member instances come back as full URLs; keep the trailing name.
        yield [
            Node(name=member.instance.split("/")[-1], status=member.status)
            for member in page.items
        ]
