import struct

import pytest
from solders.pubkey import Pubkey

from metadata import MalformedMetadata, decode_metadata, get_pda_metadata_key


def test_pda_is_deterministic_and_off_curve():
    mint = Pubkey.new_unique()
    first = get_pda_metadata_key(mint)
    assert first == get_pda_metadata_key(str(mint))
    assert not first.is_on_curve()
    assert first != get_pda_metadata_key(Pubkey.new_unique())


def test_decode_reads_flags_and_strips_padding(metadata_bytes):
    record = decode_metadata(metadata_bytes(is_mutable=True, uri="https://ipfs.io/ipfs/abc"))
    assert record.is_mutable is True
    assert record.primary_sale_happened is False
    assert record.uri == "https://ipfs.io/ipfs/abc"
    assert record.name == "Towel"
    assert record.symbol == "TWL"
    assert record.seller_fee_basis_points == 500
    assert record.creators is None
    assert record.edition_nonce is None and record.collection is None


def test_decode_creators(metadata_bytes):
    creator = Pubkey.new_unique()
    record = decode_metadata(metadata_bytes(creators=[(creator, True, 100)]))
    assert len(record.creators) == 1
    assert record.creators[0].address == creator
    assert record.creators[0].verified is True
    assert record.creators[0].share == 100


def test_decode_optional_tail(metadata_bytes):
    collection_key = Pubkey.new_unique()
    tail = b"\x01\xfe" + b"\x01\x02" + b"\x01\x01" + bytes(collection_key)
    record = decode_metadata(metadata_bytes(tail=tail))
    assert record.edition_nonce == 254
    assert record.token_standard == 2
    assert record.collection.verified is True
    assert record.collection.key == collection_key


def test_zero_padding_after_flags_reads_as_none(metadata_bytes):
    record = decode_metadata(metadata_bytes(tail=b"\x00" * 64))
    assert record.edition_nonce is None
    assert record.token_standard is None
    assert record.collection is None


def test_garbage_of_valid_length_is_rejected():
    with pytest.raises(MalformedMetadata):
        decode_metadata(b"\xff" * 679)


def test_truncated_account_is_rejected(metadata_bytes):
    data = metadata_bytes()
    with pytest.raises(MalformedMetadata):
        decode_metadata(data[:-1])


def test_string_length_overrun_is_rejected(metadata_bytes):
    data = bytearray(metadata_bytes())
    # name length prefix sits right after key + two pubkeys
    data[65:69] = struct.pack("<I", 10_000)
    with pytest.raises(MalformedMetadata):
        decode_metadata(bytes(data))


def test_invalid_bool_is_rejected(metadata_bytes):
    data = bytearray(metadata_bytes())
    data[-1] = 7
    with pytest.raises(MalformedMetadata):
        decode_metadata(bytes(data))


def test_malformed_metadata_is_a_value_error():
    assert issubclass(MalformedMetadata, ValueError)
