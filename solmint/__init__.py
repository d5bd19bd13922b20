"""Mint fungible SPL tokens with exact amount handling."""

from solmint.amounts import from_base_units, to_base_units
from solmint.decimals import MintInfo, decode_mint, resolve_decimals
from solmint.errors import (
    AccountNotFound,
    ConversionError,
    DecodeError,
    ExecutionError,
    InputValidationError,
    InstructionBuildError,
    SolmintError,
    UnknownNodeError,
)
from solmint.execution import ExecutionResult, Executor, SolanaExecutor
from solmint.instructions import Instructions, build_mint_instruction

__version__ = "0.1.0"

__all__ = [
    "AccountNotFound",
    "ConversionError",
    "DecodeError",
    "ExecutionError",
    "ExecutionResult",
    "Executor",
    "InputValidationError",
    "InstructionBuildError",
    "Instructions",
    "MintInfo",
    "SolanaExecutor",
    "SolmintError",
    "UnknownNodeError",
    "build_mint_instruction",
    "decode_mint",
    "from_base_units",
    "resolve_decimals",
    "to_base_units",
]
