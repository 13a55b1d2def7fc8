from datetime import datetime, timezone

import pytest
from eth_abi import encode
from eth_utils import keccak
from hexbytes import HexBytes
from unittest.mock import AsyncMock, MagicMock
from web3 import Web3
from web3.exceptions import LogTopicError

from rocketpool.exceptions import NetworkQueryError, NodeNotRegisteredError, TransactionError
from rocketpool.providers.provider_factory import get_async_web3
from rocketpool.service.contract_manager import ContractManager
from rocketpool.service.node_service import NodeService

NODE = "0x8888888888888888888888888888888888888888"
NODE_CONTRACT = "0x9999999999999999999999999999999999999999"
STORAGE = "0x7777777777777777777777777777777777777777"
MINIPOOL = "0x1111111111111111111111111111111111111111"
OTHER_MINIPOOL = "0x2222222222222222222222222222222222222222"
NODE_WITHDRAWAL_TOPIC = Web3.keccak(text="NodeWithdrawal(address,uint256,uint256,uint256,uint256)")
CREATED_TS = 1577836800


def node_withdrawal_log(address, ether, reth, rpl, log_index=0):
    return {
        "address": address,
        "topics": [NODE_WITHDRAWAL_TOPIC, HexBytes(b"\x00" * 12 + bytes.fromhex(NODE_CONTRACT[2:]))],
        "data": HexBytes(encode(["uint256", "uint256", "uint256", "uint256"], [ether, reth, rpl, CREATED_TS])),
        "logIndex": log_index,
        "transactionIndex": 0,
        "transactionHash": HexBytes("0x" + "ab" * 32),
        "blockHash": HexBytes("0x" + "cd" * 32),
        "blockNumber": 100,
    }


@pytest.fixture
def mock_web3():
    web3 = MagicMock()
    web3.eth.get_transaction_count = AsyncMock(return_value=7)
    web3.eth.send_raw_transaction = AsyncMock(return_value=HexBytes("0x" + "ab" * 32))
    web3.eth.wait_for_transaction_receipt = AsyncMock(return_value={"status": 1, "logs": []})
    return web3


@pytest.fixture
def mock_contract_manager():
    contract_manager = MagicMock()
    contract_manager.get_contract = AsyncMock()
    return contract_manager


@pytest.fixture
def node_service(mock_web3, mock_contract_manager):
    return NodeService(mock_web3, mock_contract_manager, receipt_timeout=30, poll_latency=0.5)


def contract_call(value):
    return MagicMock(call=AsyncMock(return_value=value))


@pytest.mark.asyncio
async def test_query_withdrawals_enabled(node_service, mock_contract_manager):
    node_settings = MagicMock()
    node_settings.functions.getWithdrawalAllowed.return_value = contract_call(True)
    mock_contract_manager.get_contract.return_value = node_settings

    assert await node_service.query_withdrawals_enabled() is True
    mock_contract_manager.get_contract.assert_awaited_once_with("rocketNodeSettings")


@pytest.mark.asyncio
async def test_unregistered_node(node_service, mock_contract_manager):
    node_api = MagicMock()
    node_api.functions.getContract.return_value = contract_call("0x0000000000000000000000000000000000000000")
    mock_contract_manager.get_contract.return_value = node_api

    with pytest.raises(NodeNotRegisteredError):
        await node_service.get_node_contract_address(NODE)


@pytest.mark.asyncio
async def test_registered_node_contract_address(node_service, mock_contract_manager):
    node_api = MagicMock()
    node_api.functions.getContract.return_value = contract_call(NODE_CONTRACT)
    mock_contract_manager.get_contract.return_value = node_api

    assert await node_service.get_node_contract_address(NODE) == NODE_CONTRACT
    node_api.functions.getContract.assert_called_once_with(NODE)


def test_node_minipools_key():
    expected = keccak(b"minipools" + b"node.minipools" + bytes.fromhex(NODE[2:]))

    assert NodeService.node_minipools_key(NODE) == expected


@pytest.mark.asyncio
async def test_fetch_minipool_addresses(node_service, mock_contract_manager):
    items = [MINIPOOL, OTHER_MINIPOOL]
    address_set_storage = MagicMock()
    address_set_storage.functions.getCount.return_value = contract_call(2)
    address_set_storage.functions.getItem.side_effect = lambda key, index: contract_call(items[index])
    mock_contract_manager.get_contract.return_value = address_set_storage

    addresses = await node_service.fetch_minipool_addresses(NODE)

    assert addresses == items
    address_set_storage.functions.getCount.assert_called_once_with(NodeService.node_minipools_key(NODE))


@pytest.mark.asyncio
async def test_fetch_minipool_addresses_failure(node_service, mock_contract_manager):
    address_set_storage = MagicMock()
    address_set_storage.functions.getCount.return_value = contract_call(2)
    failing = MagicMock(call=AsyncMock(side_effect=ConnectionError("rpc down")))
    address_set_storage.functions.getItem.return_value = failing
    mock_contract_manager.get_contract.return_value = address_set_storage

    with pytest.raises(NetworkQueryError, match="rpc down"):
        await node_service.fetch_minipool_addresses(NODE)


@pytest.mark.asyncio
async def test_submit_withdrawal(node_service, mock_web3, mock_contract_manager):
    node_contract = MagicMock()
    built = {"to": NODE_CONTRACT, "data": "0x", "gas": 100000}
    node_contract.functions.withdrawMinipoolDeposit.return_value.build_transaction = AsyncMock(return_value=built)
    mock_contract_manager.new_contract.return_value = node_contract
    transactor = MagicMock(address=NODE)
    transactor.sign_transaction.return_value = b"signed"

    receipt = await node_service.submit_withdrawal(transactor, NODE_CONTRACT, MINIPOOL)

    assert receipt == {"status": 1, "logs": []}
    mock_contract_manager.new_contract.assert_called_once_with(NODE_CONTRACT, "rocketNodeContract")
    node_contract.functions.withdrawMinipoolDeposit.assert_called_once_with(MINIPOOL)
    node_contract.functions.withdrawMinipoolDeposit.return_value.build_transaction.assert_awaited_once_with(
        {"from": NODE, "nonce": 7}
    )
    transactor.sign_transaction.assert_called_once_with(built)
    mock_web3.eth.send_raw_transaction.assert_awaited_once_with(b"signed")
    mock_web3.eth.wait_for_transaction_receipt.assert_awaited_once_with(
        HexBytes("0x" + "ab" * 32), timeout=30, poll_latency=0.5
    )


@pytest.mark.asyncio
async def test_submit_withdrawal_reverted(node_service, mock_web3, mock_contract_manager):
    node_contract = MagicMock()
    node_contract.functions.withdrawMinipoolDeposit.return_value.build_transaction = AsyncMock(return_value={})
    mock_contract_manager.new_contract.return_value = node_contract
    mock_web3.eth.wait_for_transaction_receipt.return_value = {"status": 0, "logs": []}

    with pytest.raises(TransactionError, match="reverted") as exc_info:
        await node_service.submit_withdrawal(MagicMock(address=NODE), NODE_CONTRACT, MINIPOOL)

    assert exc_info.value.address == MINIPOOL


@pytest.fixture
def decoding_node_service():
    web3 = get_async_web3("http://localhost:8545")
    return NodeService(web3, ContractManager(web3, STORAGE))


def test_decode_withdrawal_event(decoding_node_service):
    receipt = {
        "logs": [
            node_withdrawal_log(OTHER_MINIPOOL, 1, 1, 1, log_index=0),
            node_withdrawal_log(MINIPOOL, 16 * 10**18, 2 * 10**18, 3 * 10**18, log_index=1),
        ]
    }

    event = decoding_node_service.decode_withdrawal_event(receipt, MINIPOOL)

    assert event.to == NODE_CONTRACT
    assert event.ether_amount == 16 * 10**18
    assert event.reth_amount == 2 * 10**18
    assert event.rpl_amount == 3 * 10**18
    assert event.created == datetime.fromtimestamp(CREATED_TS, tz=timezone.utc)


def test_decode_withdrawal_event_missing(decoding_node_service):
    receipt = {"logs": [node_withdrawal_log(OTHER_MINIPOOL, 1, 1, 1)]}

    assert decoding_node_service.decode_withdrawal_event(receipt, MINIPOOL) is None


def test_decode_withdrawal_event_malformed_log_raises(decoding_node_service):
    log = node_withdrawal_log(MINIPOOL, 16 * 10**18, 0, 0)
    # Drop the indexed recipient topic
    log["topics"] = log["topics"][:1]

    with pytest.raises(LogTopicError):
        decoding_node_service.decode_withdrawal_event({"logs": [log]}, MINIPOOL)


def test_decode_withdrawal_event_ignores_other_events(decoding_node_service):
    transfer_log = dict(node_withdrawal_log(MINIPOOL, 1, 1, 1), topics=[keccak(text="Transfer(address,address,uint256)")])
    receipt = {"logs": [transfer_log, node_withdrawal_log(MINIPOOL, 16 * 10**18, 0, 0, log_index=1)]}

    event = decoding_node_service.decode_withdrawal_event(receipt, MINIPOOL)

    assert event.ether_amount == 16 * 10**18
