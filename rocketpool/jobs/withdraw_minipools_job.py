from rocketpool.context import RocketPoolContext
from rocketpool.executors.status_collector import StatusCollector
from rocketpool.executors.transaction_executor import TransactionExecutor
from rocketpool.jobs.async_base_job import AsyncBaseJob
from rocketpool.models.withdrawal_outcome import AggregateResult
from rocketpool.service.eligibility_gate import EligibilityGate
from rocketpool.service.result_aggregator import ResultAggregator
from rocketpool.service.withdrawal_selector import WithdrawalSelector
from utils.logger_utils import get_logger
from utils.prompt_utils import ClickPrompter

logger = get_logger("Withdraw Minipools Job")

WITHDRAWALS_DISABLED_MESSAGE = "Node withdrawals are currently disabled in Rocket Pool"
NO_MINIPOOLS_AVAILABLE_MESSAGE = "No minipools are currently available for withdrawal"
NO_MINIPOOLS_SELECTED_MESSAGE = "No minipools to withdraw"


# Withdraws node deposits from the node's minipools
class WithdrawMinipoolsJob(AsyncBaseJob):
    def __init__(self, context: RocketPoolContext, prompter: ClickPrompter, output):
        self.context = context
        self.output = output

        self.eligibility_gate = EligibilityGate(context.node_service)
        self.status_collector = StatusCollector(context.minipool_service)
        self.withdrawal_selector = WithdrawalSelector(prompter, output)
        self.result_aggregator = ResultAggregator()
        self.transaction_executor = TransactionExecutor(
            context.account_manager,
            context.node_service,
            context.node_contract_address,
            self.result_aggregator,
            output,
        )

    async def _start(self) -> None:
        logger.info(f"Starting minipool withdrawal for node {self.context.node_address}")

    async def _execute(self) -> AggregateResult:
        # Discovery phase: any failure here aborts the whole operation
        if not await self.eligibility_gate.check():
            return self._finish_early(WITHDRAWALS_DISABLED_MESSAGE)

        addresses = await self.context.node_service.fetch_minipool_addresses(self.context.node_address)
        statuses = await self.status_collector.collect(addresses)

        eligible = self.withdrawal_selector.filter_eligible(statuses)
        if not eligible:
            return self._finish_early(NO_MINIPOOLS_AVAILABLE_MESSAGE)

        selected = self.withdrawal_selector.select(eligible)
        if not selected:
            return self._finish_early(NO_MINIPOOLS_SELECTED_MESSAGE)

        # Action phase: failures are recorded per minipool
        await self.transaction_executor.execute(selected)
        return self.result_aggregator.result()

    async def _end(self) -> None:
        outcomes = self.result_aggregator.outcomes
        failed = sum(1 for outcome in outcomes if not outcome.success)
        logger.info(f"Minipool withdrawal finished: {len(outcomes) - failed} succeeded, {failed} failed")

    def _finish_early(self, message: str) -> AggregateResult:
        self.output.write_line(message)
        return self.result_aggregator.result(message=message)
