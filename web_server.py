from collections import OrderedDict
from contextlib import asynccontextmanager
from dataclasses import asdict

import uvicorn
from fastapi import FastAPI, HTTPException
from fastapi.responses import JSONResponse
from solders.pubkey import Pubkey

from config import COMMITMENT_LEVEL, SOLANA_RPC_URL, WEB_HOST, WEB_MAX_FILTERS, WEB_PORT, FilterSettings
from ledger import make_client
from mutable_filter import MutableFilter
from pool_filters import PoolKeys

settings = FilterSettings()

# one filter per mint, least recently used evicted past WEB_MAX_FILTERS
_filters: "OrderedDict[str, MutableFilter]" = OrderedDict()
_client = None


def get_filter(mint: str) -> MutableFilter:
    global _client
    f = _filters.get(mint)
    if f is not None:
        _filters.move_to_end(mint)
        return f

    if _client is None:
        _client = make_client()
    f = _filters[mint] = MutableFilter(_client, settings)
    while len(_filters) > WEB_MAX_FILTERS:
        _filters.popitem(last=False)
    return f


@asynccontextmanager
async def lifespan(_app: FastAPI):
    global _client
    yield
    if _client is not None:
        await _client.close()
        _client = None
    _filters.clear()


app = FastAPI(title="Membot Trust Filter", version="0.1.0", lifespan=lifespan)


@app.get("/health")
async def health():
    return JSONResponse({"ok": True})


@app.get("/config")
async def config_state():
    return JSONResponse({
        "rpc_url": SOLANA_RPC_URL,
        "commitment": COMMITMENT_LEVEL,
        "filters": asdict(settings),
    })


@app.get("/check/{mint}")
async def check(mint: str):
    try:
        base_mint = Pubkey.from_string(mint)
    except ValueError:
        raise HTTPException(status_code=400, detail=f"invalid mint: {mint}")

    result = await get_filter(mint).execute(PoolKeys(base_mint=base_mint))
    return JSONResponse({"mint": mint, "ok": result.ok, "message": result.message})


if __name__ == "__main__":
    uvicorn.run(app, host=WEB_HOST, port=WEB_PORT)
