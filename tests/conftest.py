import asyncio
import struct

import pytest
from solders.pubkey import Pubkey

from config import FilterSettings
from constants import METADATA_V1_KEY
from socials import SocialsChecker


def _borsh_string(value: str, width: int) -> bytes:
    raw = value.encode("utf-8")
    raw = raw + b"\x00" * max(0, width - len(raw))
    return struct.pack("<I", len(raw)) + raw


def build_metadata(
    *,
    is_mutable: bool = False,
    uri: str = "https://arweave.net/meta.json",
    name: str = "Towel",
    symbol: str = "TWL",
    creators=None,
    tail: bytes = b"",
) -> bytes:
    out = bytes([METADATA_V1_KEY]) + bytes(Pubkey.new_unique()) + bytes(Pubkey.new_unique())
    out += _borsh_string(name, 32) + _borsh_string(symbol, 10) + _borsh_string(uri, 200)
    out += struct.pack("<H", 500)
    if creators is None:
        out += b"\x00"
    else:
        out += b"\x01" + struct.pack("<I", len(creators))
        for address, verified, share in creators:
            out += bytes(address) + bytes([int(verified), share])
    out += b"\x00"  # primary_sale_happened
    out += b"\x01" if is_mutable else b"\x00"
    return out + tail


class FakeAccount:
    def __init__(self, data: bytes):
        self.data = data


class FakeResp:
    def __init__(self, value):
        self.value = value


class FakeClient:
    """Stands in for AsyncClient.get_account_info."""

    def __init__(self, data=None, error=None, fail_times=0):
        self.data = data
        self.error = error
        self.fail_times = fail_times
        self.calls = []

    async def get_account_info(self, pubkey, commitment=None):
        self.calls.append((pubkey, commitment))
        await asyncio.sleep(0)  # let concurrent callers interleave
        if self.error is not None and (self.fail_times == 0 or len(self.calls) <= self.fail_times):
            raise self.error
        if self.data is None:
            return FakeResp(None)
        return FakeResp(FakeAccount(self.data))

    async def close(self):
        pass


class FakeSocials(SocialsChecker):
    """SocialsChecker with the network fetch replaced by a canned document."""

    def __init__(self, settings: FilterSettings, document=None, error=None):
        super().__init__(settings)
        self.document = document
        self.error = error
        self.fetched = []

    async def fetch_document(self, uri: str):
        self.fetched.append(uri)
        if self.error is not None:
            raise self.error
        return self.document


@pytest.fixture
def metadata_bytes():
    return build_metadata


@pytest.fixture
def fake_client():
    return FakeClient


@pytest.fixture
def fake_socials():
    return FakeSocials


@pytest.fixture
def instant_sleep(monkeypatch):
    """Makes asyncio.sleep return immediately and records the requested delays."""
    delays = []

    async def _instant(delay, *args, **kwargs):
        delays.append(delay)

    monkeypatch.setattr("asyncio.sleep", _instant)
    return delays
