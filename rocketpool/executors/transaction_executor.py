from typing import Sequence

from rocketpool.exceptions import EventDecodeError, SignerAcquisitionError, TransactionError, WithdrawalError
from rocketpool.models.withdrawal_outcome import WithdrawalOutcome
from rocketpool.service.account_manager import AccountManager
from rocketpool.service.node_service import NodeService
from rocketpool.service.result_aggregator import ResultAggregator
from utils.formatter_utils import format_token_amount
from utils.logger_utils import get_logger

logger = get_logger("Transaction Executor")


class TransactionExecutor:
    """
    Withdraws the node deposit from each selected minipool, strictly one after another.

    Transactions share the node account nonce sequence, so they are never submitted concurrently.
    A failure for one minipool is recorded and the next minipool is still attempted.
    """

    def __init__(
        self,
        account_manager: AccountManager,
        node_service: NodeService,
        node_contract_address: str,
        aggregator: ResultAggregator,
        output,
    ):
        self._account_manager = account_manager
        self._node_service = node_service
        self._node_contract_address = node_contract_address
        self._aggregator = aggregator
        self._output = output

    async def execute(self, addresses: Sequence[str]) -> None:
        for address in addresses:
            self._aggregator.add(await self._withdraw(address))

    async def _withdraw(self, address: str) -> WithdrawalOutcome:
        try:
            transactor = await self._account_manager.get_transactor()
        except Exception as e:
            return self._failed(SignerAcquisitionError(address, f"Error creating transactor for minipool {address}: {e}"))

        self._output.write_line(f"Withdrawing deposit from minipool {address}...")
        try:
            receipt = await self._node_service.submit_withdrawal(transactor, self._node_contract_address, address)
        except TransactionError as e:
            return self._failed(e)
        except Exception as e:
            return self._failed(TransactionError(address, f"Error withdrawing deposit from minipool {address}: {e}"))

        # The deposit has been withdrawn on chain from here on; only the report can still fail
        try:
            event = self._node_service.decode_withdrawal_event(receipt, address)
        except Exception as e:
            return self._failed(
                EventDecodeError(address, f"Error retrieving node deposit withdrawal event for minipool {address}: {e}")
            )
        if event is None:
            return self._failed(
                EventDecodeError(address, f"Could not retrieve node deposit withdrawal event for minipool {address}")
            )

        self._output.write_line(
            f"Successfully withdrew deposit of {format_token_amount(event.ether_amount)} ETH, "
            f"{format_token_amount(event.reth_amount)} rETH and {format_token_amount(event.rpl_amount)} RPL "
            f"from minipool {address}"
        )
        return WithdrawalOutcome(
            address=address,
            ether_amount=event.ether_amount,
            staked_token_amount=event.reth_amount,
            reward_token_amount=event.rpl_amount,
            created_at=event.created,
        )

    @staticmethod
    def _failed(error: WithdrawalError) -> WithdrawalOutcome:
        return WithdrawalOutcome(address=error.address, error=error)
