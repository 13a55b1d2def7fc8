from rocketpool.exceptions import NetworkQueryError
from rocketpool.service.node_service import NodeService
from utils.logger_utils import get_logger

logger = get_logger("Eligibility Gate")


class EligibilityGate:
    def __init__(self, node_service: NodeService):
        self._node_service = node_service

    async def check(self) -> bool:
        """Returns whether node withdrawals are currently permitted by the network settings."""
        try:
            allowed = await self._node_service.query_withdrawals_enabled()
        except Exception as e:
            raise NetworkQueryError(f"Error checking node withdrawals enabled status: {e}") from e

        logger.debug(f"Node withdrawals allowed: {allowed}")
        return bool(allowed)
