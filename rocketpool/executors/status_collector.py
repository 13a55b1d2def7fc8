from typing import List, Sequence

from rocketpool.exceptions import StatusFetchError
from rocketpool.models.minipool_status import MinipoolStatus
from rocketpool.service.minipool_service import MinipoolService
from utils.async_utils import TaskGroupError, gather_ordered_or_cancel
from utils.logger_utils import get_logger

logger = get_logger("Status Collector")


class StatusCollector:
    """
    Queries the status of every minipool concurrently, one task per address.

    Statuses come back in the order of the input addresses. The first failed query
    cancels the rest and fails the whole collection; there are no partial results.
    """

    def __init__(self, minipool_service: MinipoolService):
        self._minipool_service = minipool_service

    async def collect(self, addresses: Sequence[str]) -> List[MinipoolStatus]:
        if not addresses:
            return []

        logger.info(f"Querying status of {len(addresses)} minipool(s)")
        try:
            return await gather_ordered_or_cancel(addresses, self._minipool_service.query_minipool_status)
        except TaskGroupError as e:
            raise StatusFetchError(e.item, e.error) from e.error
