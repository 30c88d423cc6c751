import posixpath
from urllib.parse import urlparse

from .errors import ResourceLookupError, ScrapeError
from .fetcher import InventoryFetcher
from .logger import logger
from .schemas.compute import Region, Zone


def zone_from_reference(reference: str) -> Zone:
    """
    Builds a Zone from its canonical URL, e.g.
    https://www.googleapis.com/compute/v1/projects/p/zones/asia-northeast1-a
    -> asia-northeast1-a

    Unparseable references are tolerated and produce an empty name.
    """
    try:
        name = posixpath.basename(urlparse(reference).path.rstrip("/"))
    except ValueError as e:
        logger.warning(f"Unable to parse zone reference {reference!r}: {e}")
        name = ""
    return Zone(name=name, reference=reference)


def resolve_region(fetcher: InventoryFetcher, project_id: str, region: str) -> Region:
    """Looks up a region and derives its zones."""
    try:
        references = fetcher.get_region_zones(project_id, region)
    except ScrapeError:
        raise
    except Exception as e:
        raise ResourceLookupError(
            f"unable to get region {region} in project {project_id}: {e}"
        ) from e

    return Region(name=region, zones=[zone_from_reference(r) for r in references])
