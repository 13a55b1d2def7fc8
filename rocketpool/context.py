import asyncio
from types import TracebackType
from typing import Optional, Type

from web3 import AsyncWeb3

from config.settings import Settings
from rocketpool.providers.provider_factory import get_async_web3
from rocketpool.service.account_manager import AccountManager
from rocketpool.service.contract_manager import ContractManager
from rocketpool.service.minipool_service import MinipoolService
from rocketpool.service.node_service import NodeService
from utils.logger_utils import get_logger

logger = get_logger("Rocket Pool Context")


class RocketPoolContext(object):
    """
    Everything one command invocation needs to talk to Rocket Pool.

    Use as an async context manager so the provider session is released on every exit path:

        async with await RocketPoolContext.create(settings) as context:
            ...
    """

    def __init__(
        self,
        web3: AsyncWeb3,
        account_manager: AccountManager,
        node_service: NodeService,
        minipool_service: MinipoolService,
        node_address: str,
        node_contract_address: str,
    ):
        self.web3 = web3
        self.account_manager = account_manager
        self.node_service = node_service
        self.minipool_service = minipool_service
        self.node_address = node_address
        self.node_contract_address = node_contract_address

    @classmethod
    async def create(cls, settings: Settings) -> "RocketPoolContext":
        """
        Connects to the client, waits for it to sync and for RocketStorage to be deployed,
        then resolves the node account and node contract.
        Raises NodeAccountError for an uninitialized node and NodeNotRegisteredError for an unregistered one.
        """
        account_manager = AccountManager(settings.node.keystore_path, settings.node.password_path)
        node_address = account_manager.get_node_address()

        web3 = get_async_web3(settings.ethereum.provider_uri, timeout=settings.ethereum.rpc_timeout)
        try:
            await wait_for_client_sync(web3, settings.ethereum.sync_poll_seconds)

            contract_manager = ContractManager(web3, settings.rocketpool.storage_address)
            await wait_for_rocket_storage(web3, contract_manager.storage_address, settings.ethereum.sync_poll_seconds)

            node_service = NodeService(
                web3,
                contract_manager,
                receipt_timeout=settings.transaction.receipt_timeout,
                poll_latency=settings.transaction.poll_latency,
            )
            node_contract_address = await node_service.get_node_contract_address(node_address)
        except BaseException:
            await close_web3(web3)
            raise

        return cls(
            web3=web3,
            account_manager=account_manager,
            node_service=node_service,
            minipool_service=MinipoolService(contract_manager),
            node_address=node_address,
            node_contract_address=node_contract_address,
        )

    async def close(self) -> None:
        await close_web3(self.web3)

    async def __aenter__(self) -> "RocketPoolContext":
        return self

    async def __aexit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_value: Optional[BaseException],
        traceback: Optional[TracebackType],
    ) -> None:
        await self.close()


async def wait_for_client_sync(web3: AsyncWeb3, poll_seconds: float) -> None:
    while True:
        syncing = await web3.eth.syncing
        if not syncing:
            return
        logger.info(
            f"Waiting for Ethereum client to sync (block {syncing['currentBlock']} of {syncing['highestBlock']})..."
        )
        await asyncio.sleep(poll_seconds)


async def close_web3(web3: AsyncWeb3) -> None:
    try:
        await web3.provider.disconnect()
    except NotImplementedError:
        logger.debug("Provider has no persistent session to close")


async def wait_for_rocket_storage(web3: AsyncWeb3, storage_address: str, poll_seconds: float) -> None:
    """Polls until contract code exists at the RocketStorage address."""
    while True:
        code = await web3.eth.get_code(storage_address)
        if code:
            return
        logger.info(f"Waiting for RocketStorage contract at {storage_address} to be deployed...")
        await asyncio.sleep(poll_seconds)
