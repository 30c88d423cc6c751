from google.api_core import exceptions
from tenacity import Retrying

from clusterscrape.core import retry_config
from clusterscrape.walkers.gke import get_cluster

PATH = "projects/test-project/locations/us-west1/clusters/test-cluster"
IG_URL = "https://www.googleapis.com/compute/v1/projects/p/zones/us-west1-a/instanceGroupManagers/gke-pool-grp"


def test_get_cluster_mock(mocker):
    mock_get = mocker.patch("clusterscrape.walkers.gke.get_gke_client")
    mock_client = mock_get.return_value

    mock_cluster = mocker.Mock()
    mock_cluster.name = "test-cluster"
    mock_cluster.location = "us-west1"
    mock_cluster.instance_group_urls = [IG_URL]
    mock_client.get_cluster.return_value = mock_cluster

    topology = get_cluster(PATH)

    assert topology.name == "test-cluster"
    assert topology.location == "us-west1"
    assert topology.node_group_references == [IG_URL]
    assert mock_client.get_cluster.call_args.kwargs["request"].name == PATH


def test_get_cluster_falls_back_to_node_pool_urls(mocker):
    mock_get = mocker.patch("clusterscrape.walkers.gke.get_gke_client")
    mock_client = mock_get.return_value

    mock_np = mocker.Mock()
    mock_np.instance_group_urls = [IG_URL]
    mock_cluster = mocker.Mock()
    mock_cluster.name = "test-cluster"
    mock_cluster.location = "us-west1"
    mock_cluster.instance_group_urls = []
    mock_cluster.node_pools = [mock_np]
    mock_client.get_cluster.return_value = mock_cluster

    assert get_cluster(PATH).node_group_references == [IG_URL]


def test_get_cluster_not_found(mocker):
    mock_get = mocker.patch("clusterscrape.walkers.gke.get_gke_client")
    mock_get.return_value.get_cluster.side_effect = exceptions.NotFound("no such cluster")

    assert get_cluster(PATH) is None


def test_get_cluster_not_found_is_not_retried(mocker):
    mock_get = mocker.patch("clusterscrape.walkers.gke.get_gke_client")
    mock_client = mock_get.return_value
    mock_client.get_cluster.side_effect = exceptions.NotFound("no such cluster")

    retrying = Retrying(**retry_config(3), sleep=lambda seconds: None)

    assert get_cluster(PATH, retrying=retrying) is None
    mock_client.get_cluster.assert_called_once()
