# --- RocketStorage (network contract registry) ---
ROCKET_STORAGE_ABI = [
    {
        "inputs": [{"internalType": "bytes32", "name": "_key", "type": "bytes32"}],
        "name": "getAddress",
        "outputs": [{"internalType": "address", "name": "", "type": "address"}],
        "stateMutability": "view",
        "type": "function"
    }
]
