from datetime import datetime

from pydantic import BaseModel, ConfigDict


class NodeWithdrawalEvent(BaseModel):
    """Decoded NodeWithdrawal event emitted by a minipool. Amounts are in wei."""

    model_config = ConfigDict(frozen=True)

    to: str
    ether_amount: int
    reth_amount: int
    rpl_amount: int
    created: datetime
