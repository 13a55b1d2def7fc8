from constants.rocketpool_contracts import ROCKET_MINIPOOL
from rocketpool.mappers.minipool_status_mapper import MinipoolStatusMapper
from rocketpool.models.minipool_status import MinipoolStatus
from rocketpool.service.contract_manager import ContractManager
from utils.async_utils import TaskGroupError, gather_ordered_or_cancel
from utils.logger_utils import get_logger

logger = get_logger("Minipool Service")


class MinipoolService:
    def __init__(self, contract_manager: ContractManager):
        self._contract_manager = contract_manager
        self._status_mapper = MinipoolStatusMapper()

    async def query_minipool_status(self, address: str) -> MinipoolStatus:
        """Reads the lifecycle status and node deposit flag of one minipool."""
        minipool = self._contract_manager.new_contract(address, ROCKET_MINIPOOL)
        contract_calls = [minipool.functions.getStatus(), minipool.functions.getNodeDepositExists()]
        try:
            status_code, deposit_exists = await gather_ordered_or_cancel(contract_calls, lambda fn: fn.call())
        except TaskGroupError as e:
            # The other call has been cancelled; surface the contract error itself
            raise e.error

        status = self._status_mapper.contract_values_to_status(minipool.address, status_code, deposit_exists)
        logger.debug(f"Minipool {status.address}: {status.display_label}, deposit exists: {status.deposit_exists}")
        return status
