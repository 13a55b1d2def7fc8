# --- rocketNodeSettings ---
ROCKET_NODE_SETTINGS_ABI = [
    {
        "inputs": [],
        "name": "getWithdrawalAllowed",
        "outputs": [{"internalType": "bool", "name": "", "type": "bool"}],
        "stateMutability": "view",
        "type": "function"
    }
]

# --- rocketNodeAPI ---
ROCKET_NODE_API_ABI = [
    {
        "inputs": [{"internalType": "address", "name": "_owner", "type": "address"}],
        "name": "getContract",
        "outputs": [{"internalType": "address", "name": "", "type": "address"}],
        "stateMutability": "view",
        "type": "function"
    }
]

# --- rocketNodeContract (per-node contract owned by the node account) ---
ROCKET_NODE_CONTRACT_ABI = [
    {
        "inputs": [{"internalType": "address", "name": "_minipool", "type": "address"}],
        "name": "withdrawMinipoolDeposit",
        "outputs": [{"internalType": "bool", "name": "", "type": "bool"}],
        "stateMutability": "nonpayable",
        "type": "function"
    }
]
