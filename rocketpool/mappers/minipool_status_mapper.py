from rocketpool.exceptions import NetworkQueryError
from rocketpool.models.minipool_status import MinipoolLifecycleState, MinipoolStatus


class MinipoolStatusMapper(object):
    @staticmethod
    def contract_values_to_status(address: str, status_code: int, deposit_exists: bool) -> MinipoolStatus:
        try:
            lifecycle_state = MinipoolLifecycleState(status_code)
        except ValueError:
            raise NetworkQueryError(f"Minipool {address} reported unknown status code {status_code}")

        return MinipoolStatus(
            address=address,
            lifecycle_state=lifecycle_state,
            deposit_exists=bool(deposit_exists),
        )
