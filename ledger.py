# ledger.py — thin account reader over solana-py's AsyncClient
import base64
from typing import Optional, Union

from solana.rpc.async_api import AsyncClient
from solana.rpc.commitment import Commitment
from solders.pubkey import Pubkey

from config import COMMITMENT_LEVEL, RPC_RETRIES, RPC_RETRY_DELAY_SECS, SOLANA_RPC_URL
from retry_utils import retry_async


def make_client(rpc_url: Optional[str] = None, commitment: Optional[str] = None) -> AsyncClient:
    return AsyncClient(rpc_url or SOLANA_RPC_URL, commitment=Commitment(commitment or COMMITMENT_LEVEL))


def _raw_bytes(data) -> bytes:
    if isinstance(data, (bytes, bytearray, memoryview)):
        return bytes(data)
    # some providers hand back ["<base64>", "base64"]
    if isinstance(data, (list, tuple)) and data and isinstance(data[0], str):
        return base64.b64decode(data[0])
    raise TypeError(f"Unexpected account data type: {type(data)}")


async def fetch_account_data(
    client: AsyncClient,
    address: Pubkey,
    commitment: Optional[Union[str, Commitment]] = None,
    *,
    retries: int = RPC_RETRIES,
    delay: float = RPC_RETRY_DELAY_SECS,
) -> Optional[bytes]:
    """
    Returns the raw data stored at `address`, or None when the account is
    missing or carries no data. RPC errors are retried here and re-raised
    once retries are exhausted.
    """
    kwargs = {}
    if commitment is not None:
        kwargs["commitment"] = Commitment(str(commitment))
    resp = await retry_async(client.get_account_info, address, retries=retries, delay=delay, **kwargs)
    account = resp.value
    if account is None or not account.data:
        return None
    return _raw_bytes(account.data)
