from typing import List, Optional

from eth_utils import event_abi_to_log_topic, keccak, to_bytes
from web3 import AsyncWeb3
from web3.logs import STRICT
from web3.types import TxReceipt

from constants.rocketpool_contracts import (
    NODE_MINIPOOLS_KEY_NAME,
    NODE_MINIPOOLS_KEY_PREFIX,
    NODE_WITHDRAWAL_EVENT,
    ROCKET_MINIPOOL_DELEGATE_NODE,
    ROCKET_NODE_API,
    ROCKET_NODE_CONTRACT,
    ROCKET_NODE_SETTINGS,
    UTIL_ADDRESS_SET_STORAGE,
)
from rocketpool.exceptions import NetworkQueryError, NodeNotRegisteredError, TransactionError
from rocketpool.mappers.node_withdrawal_mapper import NodeWithdrawalMapper
from rocketpool.models.node_withdrawal import NodeWithdrawalEvent
from rocketpool.service.account_manager import NodeTransactor
from rocketpool.service.contract_manager import ContractManager
from utils.async_utils import TaskGroupError, gather_ordered_or_cancel
from utils.formatter_utils import is_zero_address, to_normalized_address
from utils.logger_utils import get_logger

logger = get_logger("Node Service")


class NodeService:
    """
    Node-level Rocket Pool calls: network settings, the node's minipool set,
    and transactions sent through the node contract.
    """

    def __init__(
        self,
        web3: AsyncWeb3,
        contract_manager: ContractManager,
        receipt_timeout: int = 300,
        poll_latency: float = 1.0,
    ):
        self._web3 = web3
        self._contract_manager = contract_manager
        self._receipt_timeout = receipt_timeout
        self._poll_latency = poll_latency
        self._node_withdrawal_mapper = NodeWithdrawalMapper()

    async def query_withdrawals_enabled(self) -> bool:
        node_settings = await self._contract_manager.get_contract(ROCKET_NODE_SETTINGS)
        return await node_settings.functions.getWithdrawalAllowed().call()

    async def get_node_contract_address(self, node_address: str) -> str:
        node_api = await self._contract_manager.get_contract(ROCKET_NODE_API)
        try:
            node_contract_address = await node_api.functions.getContract(node_address).call()
        except Exception as e:
            raise NetworkQueryError(f"Error retrieving node contract address: {e}") from e
        if is_zero_address(node_contract_address):
            raise NodeNotRegisteredError(node_address)
        return node_contract_address

    @staticmethod
    def node_minipools_key(node_address: str) -> bytes:
        return keccak(NODE_MINIPOOLS_KEY_PREFIX + NODE_MINIPOOLS_KEY_NAME + to_bytes(hexstr=node_address))

    async def fetch_minipool_addresses(self, node_address: str) -> List[str]:
        """Lists the addresses of every minipool created by the node, in registration order."""
        address_set_storage = await self._contract_manager.get_contract(UTIL_ADDRESS_SET_STORAGE)
        key = self.node_minipools_key(node_address)

        try:
            count = await address_set_storage.functions.getCount(key).call()
            addresses = await gather_ordered_or_cancel(
                list(range(count)),
                lambda index: address_set_storage.functions.getItem(key, index).call(),
            )
        except TaskGroupError as e:
            raise NetworkQueryError(f"Error retrieving node minipool address {e.item}: {e.error}") from e.error
        except Exception as e:
            raise NetworkQueryError(f"Error retrieving node minipool addresses: {e}") from e

        logger.info(f"Node {node_address} has {len(addresses)} minipool(s)")
        return [to_normalized_address(address) for address in addresses]

    async def submit_withdrawal(
        self, transactor: NodeTransactor, node_contract_address: str, minipool_address: str
    ) -> TxReceipt:
        """
        Sends withdrawMinipoolDeposit(minipool) from the node account and waits for it to be mined.
        Gas and fee fields are filled in by the web3 transport.
        """
        node_contract = self._contract_manager.new_contract(node_contract_address, ROCKET_NODE_CONTRACT)
        nonce = await self._web3.eth.get_transaction_count(transactor.address, "pending")
        transaction = await node_contract.functions.withdrawMinipoolDeposit(minipool_address).build_transaction(
            {"from": transactor.address, "nonce": nonce}
        )

        tx_hash = await self._web3.eth.send_raw_transaction(transactor.sign_transaction(transaction))
        logger.info(f"Sent withdrawal transaction {tx_hash.hex()} for minipool {minipool_address}")

        receipt = await self._web3.eth.wait_for_transaction_receipt(
            tx_hash, timeout=self._receipt_timeout, poll_latency=self._poll_latency
        )
        if receipt["status"] == 0:
            raise TransactionError(
                minipool_address,
                f"Error withdrawing deposit from minipool {minipool_address}: transaction {tx_hash.hex()} reverted",
            )
        return receipt

    def decode_withdrawal_event(self, receipt: TxReceipt, minipool_address: str) -> Optional[NodeWithdrawalEvent]:
        """
        Returns the first NodeWithdrawal event emitted by the minipool in `receipt`, or None.
        A NodeWithdrawal log from the minipool that cannot be decoded raises.
        """
        minipool = self._contract_manager.new_contract(minipool_address, ROCKET_MINIPOOL_DELEGATE_NODE)
        node_withdrawal = minipool.events[NODE_WITHDRAWAL_EVENT]()
        topic = event_abi_to_log_topic(node_withdrawal.abi)

        logs = [
            log
            for log in receipt["logs"]
            if to_normalized_address(log["address"]) == minipool.address
            and log["topics"]
            and bytes(log["topics"][0]) == topic
        ]
        if not logs:
            return None

        events = node_withdrawal.process_receipt({**receipt, "logs": logs[:1]}, errors=STRICT)
        return self._node_withdrawal_mapper.web3_event_to_node_withdrawal(events[0])
