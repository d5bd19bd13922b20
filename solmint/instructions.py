"""Instruction assembly for SPL token minting."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from solders.instruction import Instruction  # type: ignore[import-untyped]
from solders.keypair import Keypair  # type: ignore[import-untyped]
from solders.pubkey import Pubkey  # type: ignore[import-untyped]
from spl.token.constants import TOKEN_2022_PROGRAM_ID, TOKEN_PROGRAM_ID
from spl.token.instructions import MintToCheckedParams, mint_to_checked

from solmint.errors import InstructionBuildError

if TYPE_CHECKING:
    from solmint.nodes.mint_token import MintTokenInput

TOKEN_PROGRAM_IDS = (TOKEN_PROGRAM_ID, TOKEN_2022_PROGRAM_ID)


@dataclass(frozen=True)
class Instructions:
    """A fee payer, the keypairs that must sign, and the instructions to run."""

    fee_payer: Pubkey
    signers: tuple[Keypair, ...] = field(default_factory=tuple)
    instructions: tuple[Instruction, ...] = field(default_factory=tuple)

    @classmethod
    def empty(cls, fee_payer: Pubkey) -> "Instructions":
        """The no-op instruction set."""
        return cls(fee_payer=fee_payer)

    def is_empty(self) -> bool:
        return not self.instructions

    def signer_pubkeys(self) -> list[Pubkey]:
        return [kp.pubkey() for kp in self.signers]


def build_mint_instruction(
    request: MintTokenInput,
    amount: int,
    decimals: int,
    program_id: Pubkey = TOKEN_PROGRAM_ID,
) -> Instructions:
    """Assemble a ``MintToChecked`` instruction for ``request``.

    Both the fee payer and the mint authority are listed as signers of the
    instruction, and ``decimals`` is embedded so the token program rejects a
    precision that does not match the mint.
    """
    if program_id not in TOKEN_PROGRAM_IDS:
        raise InstructionBuildError(f"Incorrect token program id: {program_id}")

    fee_payer = request.fee_payer.pubkey()
    authority = request.mint_authority.pubkey()
    try:
        ix = mint_to_checked(
            MintToCheckedParams(
                program_id=program_id,
                mint=request.mint_account,
                dest=request.recipient,
                mint_authority=authority,
                amount=amount,
                decimals=decimals,
                signers=[fee_payer, authority],
            )
        )
    except Exception as exc:
        raise InstructionBuildError(f"Could not build mint instruction: {exc}") from exc

    return Instructions(
        fee_payer=fee_payer,
        signers=(request.fee_payer, request.mint_authority),
        instructions=(ix,),
    )
