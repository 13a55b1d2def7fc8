import re

import click

from utils.logger_utils import get_logger

logger = get_logger("Prompt Utils")


class ClickPrompter(object):
    """
    Blocking operator prompt on top of click.prompt.
    Input that does not fully match the validation pattern is rejected and the prompt repeats.
    """

    def prompt(self, text: str, pattern: str, error_message: str) -> str:
        expression = re.compile(pattern)

        def validate(value: str) -> str:
            value = value.strip()
            if not expression.fullmatch(value):
                logger.debug(f"Rejected operator input: {value!r}")
                raise click.BadParameter(error_message)
            return value

        return click.prompt(text, value_proc=validate, prompt_suffix="\n")
