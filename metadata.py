# metadata.py — Metaplex metadata PDA derivation + account decoding
from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import List, Optional, Union

from solders.pubkey import Pubkey

from constants import METADATA_PROGRAM_ID, METADATA_SEED, METADATA_V1_KEY

METADATA_PROGRAM = Pubkey.from_string(METADATA_PROGRAM_ID)


class MalformedMetadata(ValueError):
    """Raised when account bytes don't match the metadata layout."""


@dataclass(frozen=True)
class Creator:
    address: Pubkey
    verified: bool
    share: int


@dataclass(frozen=True)
class Collection:
    verified: bool
    key: Pubkey


@dataclass(frozen=True)
class MetadataAccountData:
    key: int
    update_authority: Pubkey
    mint: Pubkey
    name: str
    symbol: str
    uri: str
    seller_fee_basis_points: int
    creators: Optional[List[Creator]]
    primary_sale_happened: bool
    is_mutable: bool
    edition_nonce: Optional[int] = None
    token_standard: Optional[int] = None
    collection: Optional[Collection] = None


def _coerce_pubkey(x: Union[str, Pubkey]) -> Pubkey:
    """Accept str (base58) or Pubkey."""
    if isinstance(x, Pubkey):
        return x
    if isinstance(x, str):
        return Pubkey.from_string(x)
    raise TypeError(f"Unsupported pubkey-like type: {type(x)}")


def get_pda_metadata_key(mint: Union[str, Pubkey]) -> Pubkey:
    """Derive the metadata PDA for a mint."""
    seeds = [METADATA_SEED, bytes(METADATA_PROGRAM), bytes(_coerce_pubkey(mint))]
    pda, _ = Pubkey.find_program_address(seeds, METADATA_PROGRAM)
    return pda


# ------------ Borsh reader ------------
class _Reader:
    def __init__(self, data: bytes) -> None:
        self.data = data
        self.offset = 0

    @property
    def remaining(self) -> int:
        return len(self.data) - self.offset

    def take(self, n: int, what: str) -> bytes:
        if n < 0 or self.remaining < n:
            raise MalformedMetadata(f"buffer ends before {what} (offset={self.offset}, need={n})")
        chunk = self.data[self.offset:self.offset + n]
        self.offset += n
        return chunk

    def u8(self, what: str) -> int:
        return self.take(1, what)[0]

    def u16(self, what: str) -> int:
        return struct.unpack("<H", self.take(2, what))[0]

    def u32(self, what: str) -> int:
        return struct.unpack("<I", self.take(4, what))[0]

    def flag(self, what: str) -> bool:
        v = self.u8(what)
        if v not in (0, 1):
            raise MalformedMetadata(f"invalid bool {v} for {what}")
        return v == 1

    def option(self, what: str) -> bool:
        """Reads an Option tag; True when Some."""
        return self.flag(f"{what} option tag")

    def pubkey(self, what: str) -> Pubkey:
        return Pubkey.from_bytes(self.take(32, what))

    def string(self, what: str) -> str:
        n = self.u32(f"{what} length")
        raw = self.take(n, what)
        try:
            # on-chain name/symbol/uri are NUL-padded to fixed widths
            return raw.decode("utf-8").rstrip("\x00")
        except UnicodeDecodeError as e:
            raise MalformedMetadata(f"{what} is not valid utf-8") from e


def _read_creators(r: _Reader) -> Optional[List[Creator]]:
    if not r.option("creators"):
        return None
    count = r.u32("creators length")
    # 34 bytes per creator; reject absurd counts before looping
    if count * 34 > r.remaining:
        raise MalformedMetadata(f"creators length {count} overruns buffer")
    return [
        Creator(address=r.pubkey("creator address"), verified=r.flag("creator verified"), share=r.u8("creator share"))
        for _ in range(count)
    ]


def decode_metadata(data: bytes) -> MetadataAccountData:
    """
    Decode a Metaplex metadata account.

    Trailing optional fields (edition nonce, token standard, collection) are
    only read while bytes remain; older accounts stop after is_mutable.
    """
    r = _Reader(bytes(data))
    key = r.u8("key")
    if key != METADATA_V1_KEY:
        raise MalformedMetadata(f"unexpected account key {key}")

    update_authority = r.pubkey("update_authority")
    mint = r.pubkey("mint")
    name = r.string("name")
    symbol = r.string("symbol")
    uri = r.string("uri")
    seller_fee_basis_points = r.u16("seller_fee_basis_points")
    creators = _read_creators(r)
    primary_sale_happened = r.flag("primary_sale_happened")
    is_mutable = r.flag("is_mutable")

    edition_nonce: Optional[int] = None
    token_standard: Optional[int] = None
    collection: Optional[Collection] = None
    if r.remaining and r.option("edition_nonce"):
        edition_nonce = r.u8("edition_nonce")
    if r.remaining and r.option("token_standard"):
        token_standard = r.u8("token_standard")
    if r.remaining and r.option("collection"):
        collection = Collection(verified=r.flag("collection verified"), key=r.pubkey("collection key"))

    return MetadataAccountData(
        key=key,
        update_authority=update_authority,
        mint=mint,
        name=name,
        symbol=symbol,
        uri=uri,
        seller_fee_basis_points=seller_fee_basis_points,
        creators=creators,
        primary_sale_happened=primary_sale_happened,
        is_mutable=is_mutable,
        edition_nonce=edition_nonce,
        token_standard=token_standard,
        collection=collection,
    )

