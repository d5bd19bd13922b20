"""Mint token node - mint a fungible SPL token amount to a recipient.

Flow: resolve decimals (explicit or from the mint account), convert the UI
amount to base units, build a ``MintToChecked`` instruction signed by the fee
payer and the mint authority, then either hand it to the executor or, when
``submit`` is false, drop it and return no signature.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from solders.keypair import Keypair  # type: ignore[import-untyped]
from solders.pubkey import Pubkey  # type: ignore[import-untyped]
from solders.signature import Signature  # type: ignore[import-untyped]
from spl.token.constants import TOKEN_PROGRAM_ID

from solmint.amounts import parse_decimal, to_base_units
from solmint.config import MAX_DECIMALS
from solmint.decimals import resolve_decimals
from solmint.errors import ConversionError, InputValidationError
from solmint.instructions import Instructions, build_mint_instruction
from solmint.nodes.base import BaseNode, NodeContext
from solmint.wallet import parse_keypair, parse_pubkey, short_address

logger = logging.getLogger("solmint.nodes.mint_token")

NODE_NAME = "mint_token"


@dataclass(frozen=True)
class MintTokenInput:
    fee_payer: Keypair
    mint_authority: Keypair
    mint_account: Pubkey
    recipient: Pubkey
    amount: Decimal
    decimals: int | None = None
    submit: bool = True

    def __post_init__(self) -> None:
        if not self.amount.is_finite() or self.amount < 0:
            raise InputValidationError("amount", f"must be a non-negative number, got {self.amount}")
        if self.decimals is not None and not 0 <= self.decimals <= MAX_DECIMALS:
            raise InputValidationError(
                "decimals", f"must be between 0 and {MAX_DECIMALS}, got {self.decimals}"
            )


@dataclass(frozen=True)
class MintTokenOutput:
    signature: Signature | None = None

    def to_dict(self) -> dict:
        return {"signature": str(self.signature) if self.signature is not None else None}


def _require(raw: dict, key: str) -> Any:
    value = raw.get(key)
    if value is None or value == "":
        raise InputValidationError(key, "is required")
    return value


def _parse_amount(value: Any) -> Decimal:
    try:
        return parse_decimal(value)
    except ConversionError as exc:
        raise InputValidationError("amount", str(exc)) from exc


def _parse_decimals(value: Any) -> int | None:
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise InputValidationError("decimals", f"not an integer: {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError as exc:
            raise InputValidationError("decimals", f"not an integer: {value!r}") from exc
    raise InputValidationError("decimals", f"not an integer: {value!r}")


def _parse_submit(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in ("true", "1", "yes"):
        return True
    if isinstance(value, str) and value.strip().lower() in ("false", "0", "no"):
        return False
    raise InputValidationError("submit", f"not a boolean: {value!r}")


def parse_mint_input(raw: dict) -> MintTokenInput:
    """Validate raw node inputs into a MintTokenInput.

    Keypairs may be base58, JSON byte arrays or hex; addresses are base58;
    ``amount`` may be a string, int, float or Decimal. ``submit`` defaults to
    true.
    """
    keypairs = {}
    for key in ("fee_payer", "mint_authority"):
        value = _require(raw, key)
        try:
            keypairs[key] = parse_keypair(value)
        except (ValueError, AttributeError) as exc:
            raise InputValidationError(key, str(exc)) from exc

    addresses = {}
    for key in ("mint_account", "recipient"):
        value = _require(raw, key)
        try:
            addresses[key] = parse_pubkey(value)
        except (ValueError, AttributeError) as exc:
            raise InputValidationError(key, str(exc)) from exc

    return MintTokenInput(
        fee_payer=keypairs["fee_payer"],
        mint_authority=keypairs["mint_authority"],
        mint_account=addresses["mint_account"],
        recipient=addresses["recipient"],
        amount=_parse_amount(_require(raw, "amount")),
        decimals=_parse_decimals(raw.get("decimals")),
        submit=_parse_submit(raw.get("submit")),
    )


async def mint_token(
    ctx: NodeContext,
    request: MintTokenInput,
    program_id: Pubkey = TOKEN_PROGRAM_ID,
) -> MintTokenOutput:
    """Mint ``request.amount`` tokens of ``request.mint_account`` to ``request.recipient``."""
    decimals = await resolve_decimals(ctx.client, request.mint_account, request.decimals)
    amount = to_base_units(request.amount, decimals)
    ins = build_mint_instruction(request, amount, decimals, program_id=program_id)

    if not request.submit:
        ins = Instructions.empty(ins.fee_payer)
    if ins.is_empty():
        logger.info("Submit disabled, skipping mint of %s", short_address(request.mint_account))
        return MintTokenOutput()

    result = await ctx.executor.execute(ins)
    return MintTokenOutput(signature=result.signature)


class MintTokenNode(BaseNode):
    """Mint a fungible token amount to a token account."""

    def __init__(self, program_id: Pubkey = TOKEN_PROGRAM_ID) -> None:
        self._program_id = program_id

    @property
    def name(self) -> str:
        return NODE_NAME

    @property
    def description(self) -> str:
        return (
            "Mint an amount of a fungible SPL token to a recipient token account. "
            "Decimals are read from the mint account unless given explicitly."
        )

    @property
    def inputs(self) -> dict:
        return {
            "type": "object",
            "properties": {
                "fee_payer": {"type": "string", "description": "Fee payer keypair."},
                "mint_authority": {"type": "string", "description": "Mint authority keypair."},
                "mint_account": {"type": "string", "description": "Mint account address."},
                "recipient": {"type": "string", "description": "Recipient token account address."},
                "amount": {
                    "type": ["string", "number"],
                    "description": "UI amount to mint, e.g. '1.5'.",
                },
                "decimals": {
                    "type": ["integer", "null"],
                    "minimum": 0,
                    "maximum": MAX_DECIMALS,
                    "description": "Mint decimals. Fetched from the mint account when omitted.",
                },
                "submit": {
                    "type": "boolean",
                    "default": True,
                    "description": "Submit the transaction. When false nothing is sent.",
                },
            },
            "required": ["fee_payer", "mint_authority", "mint_account", "recipient", "amount"],
        }

    @property
    def outputs(self) -> dict:
        return {
            "type": "object",
            "properties": {
                "signature": {
                    "type": ["string", "null"],
                    "description": "Transaction signature, absent when not submitted.",
                },
            },
            "required": [],
        }

    async def run(self, ctx: NodeContext, **kwargs: Any) -> dict:
        request = parse_mint_input(kwargs)
        output = await mint_token(ctx, request, program_id=self._program_id)
        return output.to_dict()


def build(program_id: Pubkey = TOKEN_PROGRAM_ID) -> MintTokenNode:
    """Factory used by the node registry."""
    return MintTokenNode(program_id=program_id)
