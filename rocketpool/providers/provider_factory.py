from urllib.parse import urlparse

from aiohttp import ClientTimeout
from web3 import AsyncHTTPProvider, AsyncWeb3

HTTP_SCHEMES = ("http", "https")
DEFAULT_RPC_TIMEOUT = 60


def get_async_web3(provider_uri: str, timeout: int = DEFAULT_RPC_TIMEOUT) -> AsyncWeb3:
    """Builds an AsyncWeb3 client for a JSON-RPC endpoint. Each request gets `timeout` seconds in total."""
    scheme = urlparse(provider_uri).scheme
    if scheme not in HTTP_SCHEMES:
        raise ValueError(f"Unsupported provider URI {provider_uri!r}, expected an http:// or https:// endpoint")

    provider = AsyncHTTPProvider(provider_uri, request_kwargs={"timeout": ClientTimeout(total=timeout)})
    return AsyncWeb3(provider)
