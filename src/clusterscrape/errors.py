class ScrapeError(Exception):
    """Base class for every error raised while scraping."""


class ConfigurationError(ScrapeError):
    """A mandatory parameter is missing or the config file is unreadable."""


class ServiceInitError(ScrapeError):
    """A Google Cloud client could not be constructed."""


class ResourceLookupError(ScrapeError, LookupError):
    """A region or cluster could not be looked up."""


class NotFoundError(ResourceLookupError):
    """The lookup succeeded but returned no object."""


class MalformedReferenceError(ScrapeError):
    """A node-group reference URL does not have the expected shape."""


class PageFetchError(ScrapeError):
    """A paginated listing call failed."""


class CancelledError(ScrapeError):
    """A task found its scope cancelled before doing any work."""

    def __init__(self, target: str):
        super().__init__(f"canceled: {target}")
        self.target = target
