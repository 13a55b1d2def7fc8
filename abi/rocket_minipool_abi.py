# --- rocketMinipool (status getters) ---
ROCKET_MINIPOOL_ABI = [
    {
        "inputs": [],
        "name": "getStatus",
        "outputs": [{"internalType": "uint8", "name": "", "type": "uint8"}],
        "stateMutability": "view",
        "type": "function"
    },
    {
        "inputs": [],
        "name": "getNodeDepositExists",
        "outputs": [{"internalType": "bool", "name": "", "type": "bool"}],
        "stateMutability": "view",
        "type": "function"
    }
]

# --- rocketMinipoolDelegateNode (events emitted through the minipool) ---
ROCKET_MINIPOOL_DELEGATE_NODE_ABI = [
    {
        "anonymous": False,
        "inputs": [
            {"indexed": True, "internalType": "address", "name": "_to", "type": "address"},
            {"indexed": False, "internalType": "uint256", "name": "_etherAmount", "type": "uint256"},
            {"indexed": False, "internalType": "uint256", "name": "_rethAmount", "type": "uint256"},
            {"indexed": False, "internalType": "uint256", "name": "_rplAmount", "type": "uint256"},
            {"indexed": False, "internalType": "uint256", "name": "created", "type": "uint256"}
        ],
        "name": "NodeWithdrawal",
        "type": "event"
    }
]
