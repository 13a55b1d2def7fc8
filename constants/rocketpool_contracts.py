# constants/rocketpool_contracts.py

from abi.rocket_minipool_abi import ROCKET_MINIPOOL_ABI, ROCKET_MINIPOOL_DELEGATE_NODE_ABI
from abi.rocket_node_abi import ROCKET_NODE_API_ABI, ROCKET_NODE_CONTRACT_ABI, ROCKET_NODE_SETTINGS_ABI
from abi.util_address_set_storage_abi import UTIL_ADDRESS_SET_STORAGE_ABI

# Network contracts registered in RocketStorage under keccak256("contract.name", <name>)
ROCKET_NODE_API = "rocketNodeAPI"
ROCKET_NODE_SETTINGS = "rocketNodeSettings"
UTIL_ADDRESS_SET_STORAGE = "utilAddressSetStorage"

# RocketStorage key prefix for contract address lookups
CONTRACT_NAME_KEY_PREFIX = "contract.name"

# utilAddressSetStorage key parts for a node's minipool set: keccak256("minipools" ++ "node.minipools" ++ node)
NODE_MINIPOOLS_KEY_PREFIX = b"minipools"
NODE_MINIPOOLS_KEY_NAME = b"node.minipools"

NETWORK_CONTRACT_ABIS = {
    ROCKET_NODE_API: ROCKET_NODE_API_ABI,
    ROCKET_NODE_SETTINGS: ROCKET_NODE_SETTINGS_ABI,
    UTIL_ADDRESS_SET_STORAGE: UTIL_ADDRESS_SET_STORAGE_ABI,
}

# ABIs for contracts deployed per node / per minipool
ROCKET_MINIPOOL = "rocketMinipool"
ROCKET_MINIPOOL_DELEGATE_NODE = "rocketMinipoolDelegateNode"
ROCKET_NODE_CONTRACT = "rocketNodeContract"

INSTANCE_CONTRACT_ABIS = {
    ROCKET_MINIPOOL: ROCKET_MINIPOOL_ABI,
    ROCKET_MINIPOOL_DELEGATE_NODE: ROCKET_MINIPOOL_DELEGATE_NODE_ABI,
    ROCKET_NODE_CONTRACT: ROCKET_NODE_CONTRACT_ABI,
}

NODE_WITHDRAWAL_EVENT = "NodeWithdrawal"
