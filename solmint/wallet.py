"""Solana key material - keypair and address parsing.

Private keys are NEVER returned, logged, or included in any output; only the
derived public key is ever shown.
"""

from __future__ import annotations

import json

import base58
from solders.keypair import Keypair  # type: ignore[import-untyped]
from solders.pubkey import Pubkey  # type: ignore[import-untyped]


def parse_keypair(raw: str | bytes | list[int] | Keypair) -> Keypair:
    """Parse a keypair from base58, JSON byte array, or hex format.

    Already-built ``Keypair`` objects and raw 64-byte sequences are accepted
    as-is.
    """
    if isinstance(raw, Keypair):
        return raw
    if isinstance(raw, (bytes, bytearray, list)):
        try:
            return Keypair.from_bytes(bytes(raw))
        except (ValueError, TypeError) as exc:
            raise ValueError(f"Invalid keypair bytes: {exc}") from exc

    raw = raw.strip()

    # JSON byte array: [1, 2, 3, ...]
    if raw.startswith("["):
        try:
            byte_list = json.loads(raw)
            return Keypair.from_bytes(bytes(byte_list))
        except (json.JSONDecodeError, ValueError, TypeError) as exc:
            raise ValueError(f"Invalid JSON byte array for private key: {exc}") from exc

    # Hex: 128 hex chars (64-byte secret)
    if len(raw) == 128 and all(c in "0123456789abcdefABCDEF" for c in raw):
        try:
            return Keypair.from_bytes(bytes.fromhex(raw))
        except ValueError as exc:
            raise ValueError(f"Invalid hex private key: {exc}") from exc

    # Base58 (default)
    try:
        decoded = base58.b58decode(raw)
        return Keypair.from_bytes(decoded)
    except ValueError as exc:
        raise ValueError(
            f"Could not decode private key (tried base58, JSON array, hex): {exc}"
        ) from exc


def parse_pubkey(raw: str | Pubkey) -> Pubkey:
    """Parse a base58 account address."""
    if isinstance(raw, Pubkey):
        return raw
    try:
        return Pubkey.from_string(raw.strip())
    except ValueError as exc:
        raise ValueError(f"Invalid address '{raw}': {exc}") from exc


def short_address(address: Pubkey | str) -> str:
    """Truncated address for display, e.g. ``7xKXtg...sgAsU``."""
    text = str(address)
    return f"{text[:6]}...{text[-4:]}" if len(text) > 10 else text
