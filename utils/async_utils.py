import asyncio
from typing import Any, Awaitable, Callable, List, Sequence, TypeVar

from utils.logger_utils import get_logger

logger = get_logger("Async Utils")

T = TypeVar("T")
R = TypeVar("R")


class TaskGroupError(Exception):
    """
    Raised by gather_ordered_or_cancel when one of the tasks fails.
    Carries the failing item and the original exception.
    """

    def __init__(self, item: Any, error: BaseException):
        self.item = item
        self.error = error
        super().__init__(str(error))


def _consume_result(task: asyncio.Task) -> None:
    # Retrieve late exceptions so the loop doesn't report them as never retrieved
    if not task.cancelled():
        task.exception()


async def gather_ordered_or_cancel(
    items: Sequence[T],
    worker: Callable[[T], Awaitable[R]],
) -> List[R]:
    """
    Runs worker(item) for every item concurrently, one task per item, with no concurrency cap.

    Results are returned in the order of `items`, regardless of completion order.
    On the first failure every outstanding task is cancelled and TaskGroupError is raised
    without waiting for the cancelled tasks to unwind.
    """
    if not items:
        return []

    tasks: List[asyncio.Task] = []
    item_by_task = {}
    pending = set()

    try:
        for item in items:
            task = asyncio.create_task(worker(item))
            tasks.append(task)
            item_by_task[task] = item
            pending.add(task)

        while pending:
            done, pending = await asyncio.wait(pending, return_when=asyncio.FIRST_EXCEPTION)
            failed = [task for task in tasks if task in done and not task.cancelled() and task.exception() is not None]
            if failed:
                first = failed[0]
                logger.debug(f"Task for {item_by_task[first]} failed, cancelling {len(pending)} outstanding task(s)")
                raise TaskGroupError(item_by_task[first], first.exception())
    finally:
        for task in pending:
            task.cancel()
            task.add_done_callback(_consume_result)

    return [task.result() for task in tasks]
