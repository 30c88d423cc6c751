import argparse
import logging
import sys
from importlib.metadata import version
from pathlib import Path

from rich.console import Console

from .config import apply_overrides, load_config
from .core import DEFAULT_CONFIG_PATH
from .errors import ConfigurationError, ScrapeError
from .fetcher import GoogleInventory
from .logger import setup_logger
from .report import CORRELATORS
from .scraper import scrape


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="clusterscrape",
        description="Scrape Compute Engine instances and GKE node pools in parallel",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Scrape a region and a regional GKE cluster
  clusterscrape scrape --exec --project my-project --region asia-northeast1 \\
      --cluster-name my-cluster

  # Pair node-pool members with their VM and write the report to a file
  clusterscrape scrape --exec --correlate name --output report.json
""",
    )
    try:
        ver = version("clusterscrape")
    except Exception:
        ver = "unknown"
    parser.add_argument("--version", action="version", version=f"version: {ver}")

    subparsers = parser.add_subparsers(dest="command")
    scrape_parser = subparsers.add_parser(
        "scrape", help="Scrape data for compute & gke cluster"
    )
    scrape_parser.add_argument(
        "--exec",
        action="store_true",
        help="always required to perform scraping",
    )
    scrape_parser.add_argument("--project", default="", help="gcp project id")
    scrape_parser.add_argument("--region", default="", help="region name")
    scrape_parser.add_argument(
        "--cluster-name", default="", help="target GKE cluster name"
    )
    scrape_parser.add_argument(
        "--config",
        default=DEFAULT_CONFIG_PATH,
        help=f"TOML config file (default: {DEFAULT_CONFIG_PATH})",
    )
    scrape_parser.add_argument("--output", help="Also write the JSON report to a file")
    scrape_parser.add_argument(
        "--correlate",
        choices=sorted(CORRELATORS),
        default="none",
        help="How to build report rows from instances and nodes (default: none)",
    )
    scrape_parser.add_argument(
        "-v", "--verbose", action="store_true", help="Show debug logs"
    )
    scrape_parser.set_defaults(print_help=scrape_parser.print_help)
    return parser


def run_scrape(args: argparse.Namespace, log_console: Console) -> int:
    try:
        config = load_config(args.config)
    except ConfigurationError as e:
        log_console.print(f"[bold red]Initializing config failed:[/bold red] {e}")
        return 1

    level = logging.getLevelName(config.global_.log_level.upper())
    if args.verbose:
        level = logging.DEBUG
    elif not isinstance(level, int):
        level = logging.INFO
    try:
        logger = setup_logger(level=level, log_path=config.global_.log_path)
    except OSError as e:
        log_console.print(f"[bold red]Initializing log failed:[/bold red] {e}")
        return 1

    try:
        apply_overrides(config, args.project, args.region, args.cluster_name)
    except ConfigurationError as e:
        logger.error(
            f"abort due to parameter validation error: {e}",
            extra={"error_message": e},
        )
        return 1

    fetcher = GoogleInventory(
        retry_attempts=config.scrape.retry_attempts,
        request_timeout=config.scrape.request_timeout,
    )
    try:
        report = scrape(
            config, fetcher, logger=logger, correlator=CORRELATORS[args.correlate]
        )
    except ScrapeError as e:
        logger.error(f"scraping ended with error: {e}", extra={"error_message": e})
        return 1

    payload = report.to_json()
    print(payload)
    if args.output:
        with Path(args.output).open("w") as f:
            f.write(payload)
        log_console.print(f"Report saved to [bold]{args.output}[/bold]")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command != "scrape":
        parser.print_help()
        return 0
    if not args.exec:
        args.print_help()
        return 0

    log_console = Console(stderr=True)
    return run_scrape(args, log_console)


def cli() -> None:
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        console = Console(stderr=True)
        console.print("\n[bold red]Operation cancelled by user.[/bold red]")
        sys.exit(130)


if __name__ == "__main__":
    cli()
