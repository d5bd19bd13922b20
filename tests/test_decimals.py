"""Tests for mint decoding and decimals resolution."""

import asyncio

import pytest
from solana.rpc.commitment import Confirmed
from solders.pubkey import Pubkey

from conftest import FakeClient, make_mint_data
from solmint.decimals import MINT_ACCOUNT_SIZE, decode_mint, fetch_mint, resolve_decimals
from solmint.errors import AccountNotFound, DecodeError


class TestDecodeMint:
    def test_decodes_fields(self):
        authority = Pubkey.new_unique()
        info = decode_mint(make_mint_data(decimals=9, authority=authority))
        assert info.decimals == 9
        assert info.supply == 1_000_000
        assert info.mint_authority == authority
        assert info.freeze_authority is None
        assert info.is_initialized

    def test_account_size(self):
        assert MINT_ACCOUNT_SIZE == 82

    @pytest.mark.parametrize("size", [0, 81, 83, 165])
    def test_wrong_size(self, size):
        with pytest.raises(DecodeError, match="82 bytes"):
            decode_mint(bytes(size))

    def test_uninitialized(self):
        with pytest.raises(DecodeError, match="not initialized"):
            decode_mint(make_mint_data(initialized=0))

    def test_invalid_bool_flag(self):
        with pytest.raises(DecodeError, match="is_initialized"):
            decode_mint(make_mint_data(initialized=2))

    def test_invalid_option_tag(self):
        data = bytearray(make_mint_data())
        data[0] = 7
        with pytest.raises(DecodeError, match="option tag"):
            decode_mint(bytes(data))


class TestResolveDecimals:
    def test_explicit_skips_query(self, mint_account):
        client = FakeClient(data=make_mint_data(decimals=6))
        assert asyncio.run(resolve_decimals(client, mint_account, 2)) == 2
        assert client.calls == []

    def test_explicit_zero_is_used(self, mint_account):
        client = FakeClient()
        assert asyncio.run(resolve_decimals(client, mint_account, 0)) == 0
        assert client.calls == []

    def test_fetches_with_confirmed_commitment(self, mint_account):
        client = FakeClient(data=make_mint_data(decimals=6))
        assert asyncio.run(resolve_decimals(client, mint_account)) == 6
        assert client.calls == [(mint_account, Confirmed)]

    def test_missing_account(self, mint_account):
        client = FakeClient(data=None)
        with pytest.raises(AccountNotFound) as excinfo:
            asyncio.run(resolve_decimals(client, mint_account))
        assert excinfo.value.address == mint_account
        assert excinfo.value.cause is None
        assert len(client.calls) == 1

    def test_query_error_becomes_account_not_found(self, mint_account, caplog):
        error = ConnectionError("rpc down")
        client = FakeClient(error=error)
        with caplog.at_level("ERROR", logger="solmint.decimals"):
            with pytest.raises(AccountNotFound) as excinfo:
                asyncio.run(resolve_decimals(client, mint_account))
        assert excinfo.value.cause is error
        assert "rpc down" in caplog.text
        assert len(client.calls) == 1

    def test_malformed_payload(self, mint_account):
        client = FakeClient(data=b"\x01\x02\x03")
        with pytest.raises(DecodeError):
            asyncio.run(resolve_decimals(client, mint_account))

    def test_fetch_mint_returns_info(self, mint_account):
        client = FakeClient(data=make_mint_data(decimals=3))
        info = asyncio.run(fetch_mint(client, mint_account))
        assert info.decimals == 3
