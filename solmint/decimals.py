"""Mint decimals resolution.

Either trusts an explicit precision supplied by the caller or reads the mint
account from the ledger and decodes its SPL ``Mint`` record.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from solana.rpc.commitment import Confirmed
from solders.pubkey import Pubkey  # type: ignore[import-untyped]
from spl.token._layouts import MINT_LAYOUT

from solmint.errors import AccountNotFound, DecodeError

logger = logging.getLogger("solmint.decimals")

MINT_ACCOUNT_SIZE = MINT_LAYOUT.sizeof()


@dataclass(frozen=True)
class MintInfo:
    """Decoded SPL token mint account."""

    mint_authority: Pubkey | None
    supply: int
    decimals: int
    is_initialized: bool
    freeze_authority: Pubkey | None


def _coption_pubkey(tag: int, raw: bytes, field: str) -> Pubkey | None:
    if tag == 0:
        return None
    if tag == 1:
        return Pubkey.from_bytes(raw)
    raise DecodeError(f"Invalid option tag {tag} for {field}")


def decode_mint(data: bytes) -> MintInfo:
    """Decode raw account data into a MintInfo.

    Raises DecodeError for a payload of the wrong size, invalid option or
    boolean flags, or a mint that was never initialized.
    """
    data = bytes(data)
    if len(data) != MINT_ACCOUNT_SIZE:
        raise DecodeError(
            f"Mint account data must be {MINT_ACCOUNT_SIZE} bytes, got {len(data)}"
        )

    decoded = MINT_LAYOUT.parse(data)
    if decoded.is_initialized not in (0, 1):
        raise DecodeError(f"Invalid is_initialized flag {decoded.is_initialized}")
    if not decoded.is_initialized:
        raise DecodeError("Mint account is not initialized")

    return MintInfo(
        mint_authority=_coption_pubkey(
            decoded.mint_authority_option, decoded.mint_authority, "mint_authority"
        ),
        supply=decoded.supply,
        decimals=decoded.decimals,
        is_initialized=True,
        freeze_authority=_coption_pubkey(
            decoded.freeze_authority_option, decoded.freeze_authority, "freeze_authority"
        ),
    )


async def fetch_mint(client: Any, mint_account: Pubkey) -> MintInfo:
    """Read and decode the mint account at ``confirmed`` commitment.

    A failed query and a missing account both raise AccountNotFound; the
    query error is logged and kept as the exception's cause.
    """
    logger.debug("Fetching mint %s (commitment=%s)", mint_account, Confirmed)
    try:
        response = await client.get_account_info(mint_account, commitment=Confirmed)
    except Exception as exc:
        logger.error("Mint account query failed for %s: %r", mint_account, exc)
        raise AccountNotFound(mint_account, cause=exc) from exc

    account = response.value
    if account is None:
        raise AccountNotFound(mint_account)
    return decode_mint(account.data)


async def resolve_decimals(
    client: Any,
    mint_account: Pubkey,
    explicit: int | None = None,
) -> int:
    """Return the mint's decimal precision.

    An explicit value is returned unchanged without touching the network.
    """
    if explicit is not None:
        return explicit
    mint = await fetch_mint(client, mint_account)
    logger.info("Resolved decimals for %s: %d", mint_account, mint.decimals)
    return mint.decimals
