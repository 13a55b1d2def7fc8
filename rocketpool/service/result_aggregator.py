from typing import List, Optional

from rocketpool.models.withdrawal_outcome import AggregateResult, WithdrawalOutcome
from utils.logger_utils import get_logger

logger = get_logger("Result Aggregator")


class ResultAggregator:
    """Accumulates per-minipool outcomes in processing order without stopping on failures."""

    def __init__(self):
        self._outcomes: List[WithdrawalOutcome] = []

    def add(self, outcome: WithdrawalOutcome) -> None:
        if outcome.error is not None:
            logger.warning(f"Withdrawal from minipool {outcome.address} failed: {outcome.error}")
        self._outcomes.append(outcome)

    @property
    def outcomes(self) -> List[WithdrawalOutcome]:
        return list(self._outcomes)

    def result(self, message: Optional[str] = None) -> AggregateResult:
        return AggregateResult(outcomes=self._outcomes, message=message)
