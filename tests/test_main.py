import json

import pytest

from clusterscrape.errors import PageFetchError
from clusterscrape.main import main
from clusterscrape.report import correlate_by_name
from clusterscrape.schemas.report import OutputNode, Report


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text(f'[global]\nlog_path = "{tmp_path / "scrape.log"}"\n')
    return path


@pytest.fixture
def mock_scrape(mocker):
    mocker.patch("clusterscrape.main.GoogleInventory")
    return mocker.patch("clusterscrape.main.scrape")


def scrape_args(config_file, *extra):
    return [
        "scrape",
        "--exec",
        "--config",
        str(config_file),
        "--project",
        "p",
        "--region",
        "asia-northeast1",
        "--cluster-name",
        "c",
        *extra,
    ]


def test_scrape_prints_report(mock_scrape, config_file, capsys):
    mock_scrape.return_value = Report(nodes=[OutputNode(name="n1")])

    assert main(scrape_args(config_file)) == 0

    out = json.loads(capsys.readouterr().out)
    assert out["code"] == 200
    assert out["nodes"][0]["name"] == "n1"

    config = mock_scrape.call_args.args[0]
    assert config.gcp.project_id == "p"
    assert config.gcp.gke_cluster_name == "c"


def test_scrape_writes_output_file(mock_scrape, config_file, tmp_path):
    mock_scrape.return_value = Report()
    output = tmp_path / "report.json"

    assert main(scrape_args(config_file, "--output", str(output), "--correlate", "name")) == 0

    assert json.loads(output.read_text()) == {"code": 200, "nodes": [], "error": ""}
    assert mock_scrape.call_args.kwargs["correlator"] is correlate_by_name


def test_scrape_failure_exits_non_zero_without_report(mock_scrape, config_file, capsys):
    mock_scrape.side_effect = PageFetchError("unable to obtain compute instances in zone a")

    assert main(scrape_args(config_file)) == 1
    assert capsys.readouterr().out == ""


def test_missing_parameter_exits_before_scraping(mock_scrape, config_file):
    assert main(["scrape", "--exec", "--config", str(config_file), "--project", "p"]) == 1
    mock_scrape.assert_not_called()


def test_scrape_without_exec_prints_help(mock_scrape, capsys):
    assert main(["scrape"]) == 0
    assert "--exec" in capsys.readouterr().out
    mock_scrape.assert_not_called()


def test_version(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(["--version"])
    assert excinfo.value.code == 0
    assert "version:" in capsys.readouterr().out
