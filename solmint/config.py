"""Configuration constants and AppConfig dataclass."""

from __future__ import annotations

import os
from dataclasses import dataclass, fields
from pathlib import Path

# Base directory for all solmint data
DATA_DIR = Path.home() / ".solmint"
LOGS_DIR = DATA_DIR / "logs"
CONFIG_FILE = DATA_DIR / "config.toml"

# Solana settings
DEFAULT_RPC_URL = "https://api.mainnet-beta.solana.com"
SOLANA_RPC_URL = os.environ.get("SOLANA_RPC_URL", DEFAULT_RPC_URL)

# Key material for the CLI (base58, JSON byte array or hex)
SOLMINT_FEE_PAYER_KEY = os.environ.get("SOLMINT_FEE_PAYER_KEY", "")
SOLMINT_MINT_AUTHORITY_KEY = os.environ.get("SOLMINT_MINT_AUTHORITY_KEY", "")

# SPL token limits
MAX_DECIMALS = 255
U64_MAX = 2**64 - 1

# Retry settings (execution engine only)
MAX_RETRIES = 3
RETRY_BASE_DELAY = 1.0

# Seconds between signature status polls while confirming
CONFIRM_POLL_INTERVAL = 0.5


def load_config_file() -> dict:
    """Load settings from ~/.solmint/config.toml. Returns empty dict if not found."""
    if not CONFIG_FILE.exists():
        return {}
    try:
        import tomllib
        return tomllib.loads(CONFIG_FILE.read_text())
    except (OSError, ValueError):
        return {}


@dataclass
class AppConfig:
    """Runtime configuration for the command line."""

    rpc_url: str = SOLANA_RPC_URL
    fee_payer_key: str = SOLMINT_FEE_PAYER_KEY
    mint_authority_key: str = SOLMINT_MINT_AUTHORITY_KEY
    max_retries: int = MAX_RETRIES
    retry_base_delay: float = RETRY_BASE_DELAY
    token_2022: bool = False
    verbose: bool = False

    @classmethod
    def from_file_and_cli(cls, cli_overrides: dict) -> "AppConfig":
        """Create AppConfig by merging config file defaults with CLI overrides.

        Priority: CLI flags > config.toml > dataclass defaults
        """
        file_config = load_config_file()
        known = {f.name for f in fields(cls)}

        merged: dict = {}
        for key, value in file_config.items():
            if key in known:
                merged[key] = value

        # CLI overrides (only non-None values)
        for key, value in cli_overrides.items():
            if value is not None and key in known:
                merged[key] = value

        return cls(**merged)
