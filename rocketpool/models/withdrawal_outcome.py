from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from rocketpool.exceptions import WithdrawalError

ERROR_REPORT_HEADER = "Error withdrawing deposits from one or more minipools:"


class WithdrawalOutcome(BaseModel):
    """Result of withdrawing the node deposit from one minipool.

    Either all four event values are set (success) or `error` is set (failure), never both.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    address: str
    ether_amount: Optional[int] = None
    staked_token_amount: Optional[int] = None
    reward_token_amount: Optional[int] = None
    created_at: Optional[datetime] = None
    error: Optional[WithdrawalError] = None

    @model_validator(mode="after")
    def _check_exclusive(self) -> "WithdrawalOutcome":
        amounts = (self.ether_amount, self.staked_token_amount, self.reward_token_amount, self.created_at)
        if self.error is not None:
            if any(value is not None for value in amounts):
                raise ValueError("A failed withdrawal outcome cannot carry event amounts")
        elif any(value is None for value in amounts):
            raise ValueError("A successful withdrawal outcome requires all event amounts")
        return self

    @property
    def success(self) -> bool:
        return self.error is None


class AggregateResult(BaseModel):
    """Combined outcome of one withdraw invocation, in processing order."""

    model_config = ConfigDict(frozen=True)

    outcomes: List[WithdrawalOutcome] = Field(default_factory=list)
    # Informational line for early exits that attempted nothing
    message: Optional[str] = None

    @property
    def success(self) -> bool:
        return all(outcome.success for outcome in self.outcomes)

    @property
    def failures(self) -> List[WithdrawalOutcome]:
        return [outcome for outcome in self.outcomes if not outcome.success]

    def error_report(self) -> Optional[str]:
        """All failures joined into one multi-line report, or None when nothing failed."""
        failures = self.failures
        if not failures:
            return None
        return "\n".join([ERROR_REPORT_HEADER] + [str(outcome.error) for outcome in failures])
