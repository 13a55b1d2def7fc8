"""Exceptions raised while withdrawing node deposits from minipools."""


class RocketPoolError(Exception):
    """Base class for all Rocket Pool command errors."""

    pass


class NetworkQueryError(RocketPoolError):
    """A read-only chain query failed. Fatal to the whole operation."""

    pass


class StatusFetchError(NetworkQueryError):
    """Raised when the status of one minipool could not be fetched.

    Wraps the first error observed; statuses of other minipools are discarded.
    """

    def __init__(self, address: str, cause: BaseException):
        self.address = address
        self.cause = cause
        super().__init__(f"Error retrieving status of minipool {address}: {cause}")


class InvalidSelectionError(RocketPoolError):
    """Operator input matched neither a menu index nor the 'all' token."""

    def __init__(self, response: str, message: str):
        self.response = response
        super().__init__(message)


class NodeAccountError(RocketPoolError):
    """The node account keystore is missing or unreadable."""

    pass


class NodeNotRegisteredError(RocketPoolError):
    """The node account has no registered node contract."""

    def __init__(self, node_address: str):
        self.node_address = node_address
        super().__init__(f"Node {node_address} is not registered with Rocket Pool")


class WithdrawalError(RocketPoolError):
    """A per-minipool failure during the withdrawal phase.

    These are recorded on the outcome for the minipool and never abort the remaining withdrawals.
    """

    def __init__(self, address: str, message: str):
        self.address = address
        super().__init__(message)


class SignerAcquisitionError(WithdrawalError):
    """The node account transactor could not be created."""

    pass


class TransactionError(WithdrawalError):
    """The withdrawal transaction was rejected, reverted or never confirmed."""

    pass


class EventDecodeError(WithdrawalError):
    """The withdrawal transaction was mined but its NodeWithdrawal event could not be read."""

    pass
