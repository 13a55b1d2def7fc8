# --- utilAddressSetStorage (indexed address sets keyed by bytes32) ---
UTIL_ADDRESS_SET_STORAGE_ABI = [
    {
        "inputs": [{"internalType": "bytes32", "name": "_key", "type": "bytes32"}],
        "name": "getCount",
        "outputs": [{"internalType": "uint256", "name": "", "type": "uint256"}],
        "stateMutability": "view",
        "type": "function"
    },
    {
        "inputs": [
            {"internalType": "bytes32", "name": "_key", "type": "bytes32"},
            {"internalType": "uint256", "name": "_index", "type": "uint256"}
        ],
        "name": "getItem",
        "outputs": [{"internalType": "address", "name": "", "type": "address"}],
        "stateMutability": "view",
        "type": "function"
    }
]
