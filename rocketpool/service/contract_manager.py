from typing import Any, Dict, List

from async_lru import alru_cache
from web3 import AsyncWeb3, Web3
from web3.contract import AsyncContract

from abi.rocket_storage_abi import ROCKET_STORAGE_ABI
from constants.rocketpool_contracts import CONTRACT_NAME_KEY_PREFIX, INSTANCE_CONTRACT_ABIS, NETWORK_CONTRACT_ABIS
from rocketpool.exceptions import NetworkQueryError
from utils.formatter_utils import is_zero_address, to_normalized_address
from utils.logger_utils import get_logger

logger = get_logger("Contract Manager")


class ContractManager:
    """
    Resolves Rocket Pool network contracts through RocketStorage and builds
    contract objects for per-node and per-minipool instances from bundled ABIs.
    """

    def __init__(self, web3: AsyncWeb3, storage_address: str):
        normalized = to_normalized_address(storage_address)
        if normalized is None:
            raise ValueError(f"Invalid RocketStorage address: {storage_address}")
        self._web3 = web3
        self._storage = web3.eth.contract(address=normalized, abi=ROCKET_STORAGE_ABI)

    @property
    def storage_address(self) -> str:
        return self._storage.address

    @staticmethod
    def contract_name_key(name: str) -> bytes:
        return Web3.solidity_keccak(["string", "string"], [CONTRACT_NAME_KEY_PREFIX, name])

    @alru_cache(maxsize=32)
    async def get_address(self, name: str) -> str:
        """Looks up a network contract address by name. Addresses don't change within a run."""
        try:
            address = await self._storage.functions.getAddress(self.contract_name_key(name)).call()
        except Exception as e:
            raise NetworkQueryError(f"Error loading {name} contract address: {e}") from e
        if is_zero_address(address):
            raise NetworkQueryError(f"Contract {name} is not registered in RocketStorage")
        logger.debug(f"Resolved {name} at {address}")
        return address

    async def get_contract(self, name: str) -> AsyncContract:
        address = await self.get_address(name)
        return self._web3.eth.contract(address=address, abi=self._network_abi(name))

    def new_contract(self, address: str, abi_name: str) -> AsyncContract:
        """Builds a contract object for an instance contract (minipool, node contract) at `address`."""
        return self._web3.eth.contract(address=to_normalized_address(address), abi=self._instance_abi(abi_name))

    @staticmethod
    def _network_abi(name: str) -> List[Dict[str, Any]]:
        if name not in NETWORK_CONTRACT_ABIS:
            raise ValueError(f"No ABI bundled for network contract {name}")
        return NETWORK_CONTRACT_ABIS[name]

    @staticmethod
    def _instance_abi(name: str) -> List[Dict[str, Any]]:
        if name not in INSTANCE_CONTRACT_ABIS:
            raise ValueError(f"No ABI bundled for contract {name}")
        return INSTANCE_CONTRACT_ABIS[name]
