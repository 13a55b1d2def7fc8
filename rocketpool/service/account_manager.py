import asyncio
import json
from pathlib import Path
from typing import Any, Dict

from eth_account import Account
from eth_account.signers.local import LocalAccount

from rocketpool.exceptions import NodeAccountError
from utils.formatter_utils import to_normalized_address
from utils.logger_utils import get_logger

logger = get_logger("Account Manager")


class NodeTransactor(object):
    """Signs transactions on behalf of the node account. Not safe for concurrent submissions."""

    def __init__(self, account: LocalAccount):
        self._account = account

    @property
    def address(self) -> str:
        return self._account.address

    def sign_transaction(self, transaction: Dict[str, Any]) -> bytes:
        return self._account.sign_transaction(transaction).raw_transaction


class AccountManager(object):
    """
    Reads the node account from an encrypted keystore file.
    The key is only decrypted when a transactor is requested.
    """

    def __init__(self, keystore_path: str, password_path: str):
        self.keystore_path = Path(keystore_path).expanduser()
        self.password_path = Path(password_path).expanduser()

    def _read_keystore(self) -> Dict[str, Any]:
        try:
            return json.loads(self.keystore_path.read_text())
        except FileNotFoundError:
            raise NodeAccountError(f"Node account does not exist, please initialize it first ({self.keystore_path})")
        except (OSError, ValueError) as e:
            raise NodeAccountError(f"Could not read node account keystore {self.keystore_path}: {e}") from e

    def get_node_address(self) -> str:
        raw_address = str(self._read_keystore().get("address", ""))
        # Keystore files store the address without the 0x prefix
        if not raw_address.startswith("0x"):
            raw_address = "0x" + raw_address
        address = to_normalized_address(raw_address)
        if address is None:
            raise NodeAccountError(f"Node account keystore {self.keystore_path} has no valid address")
        return address

    def _unlock(self) -> LocalAccount:
        keystore = self._read_keystore()
        try:
            password = self.password_path.read_text().strip()
        except OSError as e:
            raise NodeAccountError(f"Could not read node password file {self.password_path}: {e}") from e
        try:
            private_key = Account.decrypt(keystore, password)
        except ValueError as e:
            raise NodeAccountError(f"Could not unlock node account: {e}") from e
        return Account.from_key(private_key)

    async def get_transactor(self) -> NodeTransactor:
        # Keystore decryption is CPU bound (scrypt/pbkdf2); keep it off the event loop
        account = await asyncio.to_thread(self._unlock)
        logger.debug(f"Unlocked node account {account.address}")
        return NodeTransactor(account)
