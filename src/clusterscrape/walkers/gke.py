from google.api_core import exceptions
from google.cloud import container_v1
from tenacity import Retrying

from ..clients import get_gke_client
from ..core import retry_config
from ..logger import logger
from ..schemas.gke import ClusterTopology


def get_cluster(
    path: str,
    timeout: float | None = None,
    retrying: Retrying | None = None,
) -> ClusterTopology | None:
    """
    Looks up a GKE cluster by `projects/*/locations/*/clusters/*`.
    Returns None when the cluster does not exist.
    """
    retrying = retrying or Retrying(**retry_config())
    client = get_gke_client()
    request = container_v1.GetClusterRequest(name=path)
    options = {"timeout": timeout} if timeout else {}

    try:
        cluster = retrying(client.get_cluster, request=request, **options)
    except exceptions.NotFound:
        logger.debug(f"Cluster {path} not found")
        return None
    if cluster is None:
        return None

    # The cluster-level list is deprecated in favour of per-pool URLs.
    urls = list(cluster.instance_group_urls)
    if not urls:
        urls = [url for np in cluster.node_pools for url in np.instance_group_urls]

    return ClusterTopology(
        name=cluster.name,
        location=cluster.location,
        node_group_references=urls,
    )
