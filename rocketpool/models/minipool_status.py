from enum import IntEnum

from pydantic import BaseModel, ConfigDict, computed_field


class MinipoolLifecycleState(IntEnum):
    INITIALIZED = 0     # Node deposit made, awaiting user deposits
    PRELAUNCH = 1       # Fully funded, awaiting validator launch
    STAKING = 2         # Validator active on the beacon chain
    LOGGED_OUT = 3      # Validator exited, awaiting withdrawal
    WITHDRAWN = 4       # Balance returned from the beacon chain
    CLOSED = 5          # All deposits withdrawn, contract closed
    TIMED_OUT = 6       # Never fully funded within the staking window


# States from which a remaining node deposit can be reclaimed
WITHDRAWABLE_STATES = frozenset(
    {
        MinipoolLifecycleState.INITIALIZED,
        MinipoolLifecycleState.WITHDRAWN,
        MinipoolLifecycleState.TIMED_OUT,
    }
)


class MinipoolStatus(BaseModel):
    model_config = ConfigDict(frozen=True)

    address: str
    lifecycle_state: MinipoolLifecycleState
    deposit_exists: bool

    @computed_field
    @property
    def display_label(self) -> str:
        return self.lifecycle_state.name.replace("_", " ").title()

    @property
    def is_withdrawal_eligible(self) -> bool:
        return self.deposit_exists and self.lifecycle_state in WITHDRAWABLE_STATES
