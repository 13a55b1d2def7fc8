import re
from typing import List, Sequence, Tuple

from rocketpool.exceptions import InvalidSelectionError
from rocketpool.models.minipool_status import MinipoolLifecycleState, MinipoolStatus
from utils.logger_utils import get_logger
from utils.prompt_utils import ClickPrompter

logger = get_logger("Withdrawal Selector")

SELECTION_PROMPT = (
    "Please select a minipool to withdraw from by entering a number, "
    "or enter 'A' for all (excluding initialized):"
)
SELECTION_ERROR = "Please enter a minipool number or 'A' for all (excluding initialized)"
ALL_TOKENS = ("a", "all")


class WithdrawalSelector:
    """
    Narrows collected statuses to the withdrawable minipools and asks the operator which to withdraw.

    Initialized minipools are listed and can be picked by number, but the 'all' option skips them.
    """

    def __init__(self, prompter: ClickPrompter, output):
        self._prompter = prompter
        self._output = output

    @staticmethod
    def filter_eligible(statuses: Sequence[MinipoolStatus]) -> List[MinipoolStatus]:
        return [status for status in statuses if status.is_withdrawal_eligible]

    @staticmethod
    def build_menu(eligible: Sequence[MinipoolStatus]) -> Tuple[str, str]:
        """Returns the numbered menu text and the validation pattern accepting its options."""
        lines = [SELECTION_PROMPT]
        options = []
        for index, status in enumerate(eligible, start=1):
            lines.append(f"{index}: {status.address} ({status.display_label})")
            options.append(str(index))
        pattern = "(?i)^({})$".format("|".join(options + list(ALL_TOKENS)))
        return "\n".join(lines), pattern

    @staticmethod
    def parse_selection(response: str, eligible: Sequence[MinipoolStatus]) -> List[str]:
        """Resolves operator input to the addresses to withdraw from, in menu order."""
        _, pattern = WithdrawalSelector.build_menu(eligible)
        choice = response.strip()
        if not re.fullmatch(pattern, choice):
            raise InvalidSelectionError(choice, SELECTION_ERROR)

        if choice.lower() in ALL_TOKENS:
            return [
                status.address
                for status in eligible
                if status.lifecycle_state != MinipoolLifecycleState.INITIALIZED
            ]
        return [eligible[int(choice) - 1].address]

    def select(self, eligible: Sequence[MinipoolStatus]) -> List[str]:
        """Prompts until the operator enters a valid selection. `eligible` must not be empty."""
        text, pattern = self.build_menu(eligible)
        while True:
            response = self._prompter.prompt(text, pattern, SELECTION_ERROR)
            try:
                selected = self.parse_selection(response, eligible)
            except InvalidSelectionError as e:
                logger.debug(f"Invalid selection {e.response!r}")
                self._output.write_line(str(e))
                continue
            logger.info(f"Operator selected {len(selected)} minipool(s)")
            return selected
