import asyncio

import click

from config.settings import Settings, settings
from rocketpool.context import RocketPoolContext
from rocketpool.exceptions import RocketPoolError
from rocketpool.exporters.console_output import ConsoleOutput
from rocketpool.jobs.withdraw_minipools_job import WithdrawMinipoolsJob
from rocketpool.models.withdrawal_outcome import AggregateResult
from utils.formatter_utils import to_normalized_address
from utils.logger_utils import configure_logging, get_logger
from utils.prompt_utils import ClickPrompter

logger = get_logger("Minipool Withdraw CLI")


async def withdraw_minipools(run_settings: Settings, prompter: ClickPrompter, output) -> AggregateResult:
    async with await RocketPoolContext.create(run_settings) as context:
        return await WithdrawMinipoolsJob(context, prompter, output).run()


@click.command(context_settings=dict(help_option_names=["-h", "--help"]))
@click.option(
    "-p",
    "--provider-uri",
    default=settings.ethereum.provider_uri,
    show_default=True,
    type=str,
    help="The URI of the Ethereum client JSON-RPC endpoint e.g. http://localhost:8545",
)
@click.option(
    "-s",
    "--storage-address",
    default=settings.rocketpool.storage_address,
    show_default=True,
    type=str,
    help="Address of the RocketStorage contract.",
)
@click.option("--keystore", default=settings.node.keystore_path, show_default=True, type=str, help="Path to the node account keystore file.")
@click.option("--password-file", default=settings.node.password_path, show_default=True, type=str, help="Path to the node account password file.")
@click.option("--log-file", default=settings.app.log_file, show_default=True, type=str, help="Path to the log file.")
@click.option(
    "--log-level",
    default=settings.app.log_level,
    show_default=True,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Logging level for diagnostics written to stderr.",
)
def withdraw(provider_uri: str, storage_address: str, keystore: str, password_file: str, log_file: str, log_level: str):
    """
    Withdraw the node deposit from one or more minipools.
    Only minipools that are initialized, withdrawn or timed out with a remaining node deposit can be selected.
    """
    configure_logging(log_file, log_level)

    if to_normalized_address(storage_address) is None:
        raise click.UsageError("A valid RocketStorage address is required (--storage-address or ROCKET_STORAGE_ADDRESS)")

    run_settings = settings.model_copy(deep=True)
    run_settings.ethereum.provider_uri = provider_uri
    run_settings.rocketpool.storage_address = storage_address
    run_settings.node.keystore_path = keystore
    run_settings.node.password_path = password_file

    try:
        result = asyncio.run(withdraw_minipools(run_settings, ClickPrompter(), ConsoleOutput()))
    except RocketPoolError as e:
        raise click.ClickException(str(e))
    except KeyboardInterrupt:
        logger.info("Withdrawal interrupted by user.")
        raise click.Abort()
    except Exception as e:
        logger.exception("An error occurred during minipool withdrawal:")
        raise e

    if not result.success:
        raise click.ClickException(result.error_report())
