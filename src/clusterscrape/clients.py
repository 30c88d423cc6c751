from __future__ import annotations

from collections.abc import Callable
from functools import lru_cache
from typing import Any

from google.auth.exceptions import GoogleAuthError
from google.cloud import compute_v1, container_v1

from .errors import ServiceInitError

# Shared Client Registry (Lazy-loaded and cached)


def _build(factory: Callable[[], Any], label: str) -> Any:
    try:
        return factory()
    except GoogleAuthError as e:
        raise ServiceInitError(f"unable to create {label} client: {e}") from e


@lru_cache(maxsize=1)
def get_regions_client() -> Any:
    return _build(compute_v1.RegionsClient, "compute regions")


@lru_cache(maxsize=1)
def get_compute_instances_client() -> Any:
    return _build(compute_v1.InstancesClient, "compute instances")


@lru_cache(maxsize=1)
def get_instance_groups_client() -> Any:
    return _build(compute_v1.InstanceGroupsClient, "compute instance groups")


@lru_cache(maxsize=1)
def get_gke_client() -> Any:
    return _build(container_v1.ClusterManagerClient, "google container")
