"""Shared fixtures for solmint tests."""

import logging
from types import SimpleNamespace

import pytest
from solders.keypair import Keypair
from solders.pubkey import Pubkey
from solders.signature import Signature
from spl.token._layouts import MINT_LAYOUT

from solmint.execution import ExecutionResult
from solmint.nodes.base import NodeContext


class FakeClient:
    """Stands in for AsyncClient.get_account_info."""

    def __init__(self, data: bytes | None = None, error: Exception | None = None):
        self.data = data
        self.error = error
        self.calls = []

    async def get_account_info(self, pubkey, commitment=None):
        self.calls.append((pubkey, commitment))
        if self.error is not None:
            raise self.error
        if self.data is None:
            return SimpleNamespace(value=None)
        return SimpleNamespace(value=SimpleNamespace(data=self.data))


class FakeExecutor:
    """Records instruction sets instead of sending them."""

    def __init__(self, signature: Signature | None = None, error: Exception | None = None):
        self.signature = signature or Signature.new_unique()
        self.error = error
        self.calls = []

    async def execute(self, instructions):
        self.calls.append(instructions)
        if self.error is not None:
            raise self.error
        return ExecutionResult(signature=self.signature)


def make_mint_data(decimals: int = 6, authority: Pubkey | None = None, initialized: int = 1) -> bytes:
    return MINT_LAYOUT.build(dict(
        mint_authority_option=1 if authority else 0,
        mint_authority=bytes(authority) if authority else bytes(32),
        supply=1_000_000,
        decimals=decimals,
        is_initialized=initialized,
        freeze_authority_option=0,
        freeze_authority=bytes(32),
    ))


@pytest.fixture(autouse=True)
def isolated_logs(tmp_path, monkeypatch):
    """Keep audit and app logs out of the home directory."""
    import solmint.logging_config as logging_config

    logs = tmp_path / "logs"
    monkeypatch.setattr(logging_config, "LOGS_DIR", logs)
    monkeypatch.setattr(logging_config, "AUDIT_LOG_FILE", logs / "audit.jsonl")
    monkeypatch.setattr(logging_config, "APP_LOG_FILE", logs / "solmint.log")
    yield logs
    for name in ("solmint", "solmint.audit"):
        logger = logging.getLogger(name)
        for handler in list(logger.handlers):
            handler.close()
        logger.handlers.clear()


@pytest.fixture
def fee_payer() -> Keypair:
    return Keypair()


@pytest.fixture
def mint_authority() -> Keypair:
    return Keypair()


@pytest.fixture
def mint_account() -> Pubkey:
    return Pubkey.new_unique()


@pytest.fixture
def recipient() -> Pubkey:
    return Pubkey.new_unique()


@pytest.fixture
def executor() -> FakeExecutor:
    return FakeExecutor()


@pytest.fixture
def client() -> FakeClient:
    return FakeClient(data=make_mint_data(decimals=6))


@pytest.fixture
def ctx(client, executor) -> NodeContext:
    return NodeContext(client=client, executor=executor)
