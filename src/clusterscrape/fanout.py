"""
Fan-out/fan-in over a thread pool.

Every item gets its own task. A task checks the shared scope once, before
doing any work; the first task to fail cancels the scope so that tasks which
have not started yet short-circuit. Tasks that are already running are never
interrupted. All tasks are joined before results are returned.
"""

from collections.abc import Callable, Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Generic, TypeVar

from .errors import CancelledError
from .logger import logger
from .scope import CancelScope

T = TypeVar("T")
R = TypeVar("R")


@dataclass
class Outcome(Generic[T, R]):
    item: T
    value: R | None = None
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def fan_out(
    items: Sequence[T],
    task: Callable[[T], R],
    scope: CancelScope,
    describe: Callable[[T], str] = str,
    max_workers: int | None = None,
) -> list[Outcome[T, R]]:
    """Runs `task` once per item in parallel and returns outcomes in item order."""
    if not items:
        return []

    def run(item: T) -> Outcome[T, R]:
        if scope.cancelled:
            return Outcome(item=item, error=CancelledError(describe(item)))
        try:
            return Outcome(item=item, value=task(item))
        except Exception as e:
            scope.cancel()
            logger.debug(f"{describe(item)} failed, scope cancelled: {e}")
            return Outcome(item=item, error=e)

    with ThreadPoolExecutor(max_workers=max_workers or len(items)) as executor:
        futures = [executor.submit(run, item) for item in items]
        return [f.result() for f in futures]


def first_error(outcomes: Sequence[Outcome[T, R]]) -> Exception | None:
    """
    The error to report for a fan-out: the first real failure if any,
    else the first cancellation. Ordering between concurrent failures
    is not meaningful.
    """
    errors = [o.error for o in outcomes if o.error is not None]
    for err in errors:
        if not isinstance(err, CancelledError):
            return err
    return errors[0] if errors else None


def raise_first_error(outcomes: Sequence[Outcome[T, R]]) -> None:
    err = first_error(outcomes)
    if err is not None:
        raise err


def collect_pages(
    pages: Iterable[list[R]],
    scope: CancelScope,
    target: str,
    check_between_pages: bool = False,
) -> list[R]:
    """
    Consumes every page of a paginated listing into a local list.
    With `check_between_pages`, a cancelled scope stops the listing before
    the next page is requested.
    """
    items: list[R] = []
    for page in pages:
        items.extend(page)
        if check_between_pages and scope.cancelled:
            raise CancelledError(target)
    return items
