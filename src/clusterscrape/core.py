from typing import Any

from google.api_core import exceptions
from tenacity import retry_if_not_exception_type, stop_after_attempt, wait_exponential

DEFAULT_CONFIG_PATH = "~/.clusterscrape.toml"
DEFAULT_LOG_PATH = "/tmp/clusterscrape.log"

STATUS_OK = 200

# Instance-group member state filter; ALL includes stopped and provisioning VMs.
INSTANCE_STATE_ALL = "ALL"

# e.g. https://www.googleapis.com/compute/v1/projects/p/zones/z/instanceGroupManagers/g
NODE_GROUP_URL_PATTERN = (
    r"^.*/projects/([^/]+)/zones/([^/]+)/instanceGroupManagers/([^/]+)"
)

# Answers that will not change on a second request.
NON_RETRYABLE_ERRORS = (exceptions.NotFound, exceptions.PermissionDenied)


def retry_config(attempts: int = 1) -> dict[str, Any]:
    """
    Builds tenacity retry kwargs.
    usage: Retrying(**retry_config(n))
    A single attempt disables retrying; the original exception is re-raised.
    """
    return {
        "stop": stop_after_attempt(max(attempts, 1)),
        "wait": wait_exponential(multiplier=1, min=4, max=10),
        "retry": retry_if_not_exception_type(NON_RETRYABLE_ERRORS),
        "reraise": True,
    }
