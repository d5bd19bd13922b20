"""Transaction execution engine.

Nodes hand an ``Instructions`` set to an ``Executor``; the executor owns
signing, blockhash resolution, submission, retries and confirmation.
``SolanaExecutor`` is the default implementation over a solana-py
``AsyncClient``.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Protocol

import httpx
from solana.exceptions import SolanaRpcException
from solana.rpc.async_api import AsyncClient
from solana.rpc.commitment import Commitment, Confirmed
from solana.rpc.types import TxOpts
from solders.keypair import Keypair  # type: ignore[import-untyped]
from solders.message import Message  # type: ignore[import-untyped]
from solders.signature import Signature  # type: ignore[import-untyped]
from solders.transaction import Transaction  # type: ignore[import-untyped]

from solmint.config import CONFIRM_POLL_INTERVAL, MAX_RETRIES, RETRY_BASE_DELAY
from solmint.errors import ExecutionError
from solmint.instructions import Instructions

logger = logging.getLogger("solmint.execution")

# Errors worth resending the same signed transaction for
RETRYABLE_ERRORS = (SolanaRpcException, httpx.TransportError, ConnectionError, TimeoutError, OSError)


@dataclass(frozen=True)
class ExecutionResult:
    """Outcome of an execution; ``signature`` is None when nothing was sent."""

    signature: Signature | None = None


class Executor(Protocol):
    async def execute(self, instructions: Instructions) -> ExecutionResult:
        ...


def unique_signers(signers: tuple[Keypair, ...]) -> list[Keypair]:
    """Drop repeated keypairs, keeping first-seen order."""
    seen = set()
    result = []
    for kp in signers:
        pk = kp.pubkey()
        if pk not in seen:
            seen.add(pk)
            result.append(kp)
    return result


class SolanaExecutor:
    """Sign, send and confirm instruction sets against a Solana RPC node."""

    def __init__(
        self,
        client: AsyncClient,
        commitment: Commitment = Confirmed,
        max_retries: int = MAX_RETRIES,
        retry_base_delay: float = RETRY_BASE_DELAY,
    ) -> None:
        self._client = client
        self._commitment = commitment
        self._max_retries = max(1, max_retries)
        self._retry_base_delay = retry_base_delay

    async def execute(self, instructions: Instructions) -> ExecutionResult:
        if instructions.is_empty():
            return ExecutionResult()

        try:
            blockhash_resp = await self._client.get_latest_blockhash(self._commitment)
        except Exception as exc:
            raise ExecutionError(f"Failed to fetch latest blockhash: {exc}", cause=exc) from exc
        blockhash = blockhash_resp.value.blockhash
        last_valid_height = blockhash_resp.value.last_valid_block_height

        logger.debug("Signing with %s", ", ".join(map(str, instructions.signer_pubkeys())))
        try:
            message = Message(list(instructions.instructions), instructions.fee_payer)
            tx = Transaction(unique_signers(instructions.signers), message, blockhash)
        except Exception as exc:
            raise ExecutionError(f"Failed to sign transaction: {exc}", cause=exc) from exc

        signature = await self._send(bytes(tx))
        await self._confirm(signature, last_valid_height)
        logger.info("Transaction confirmed: %s", signature, extra={"signature": str(signature)})
        return ExecutionResult(signature=signature)

    async def _send(self, raw_tx: bytes) -> Signature:
        opts = TxOpts(skip_confirmation=True, preflight_commitment=self._commitment)
        # Retry loop with exponential backoff
        for attempt in range(self._max_retries):
            try:
                resp = await self._client.send_raw_transaction(raw_tx, opts=opts)
                return resp.value
            except Exception as exc:
                is_retryable = isinstance(exc, RETRYABLE_ERRORS)
                if is_retryable and attempt < self._max_retries - 1:
                    delay = self._retry_base_delay * (2 ** attempt)
                    logger.warning(
                        "Send failed (%s), retry %d/%d in %.1fs",
                        exc, attempt + 1, self._max_retries, delay,
                    )
                    await asyncio.sleep(delay)
                    continue
                message = (
                    f"Failed after {self._max_retries} retries: {exc}"
                    if is_retryable
                    else f"Transaction rejected: {exc}"
                )
                raise ExecutionError(message, cause=exc) from exc
        raise ExecutionError("Transaction was not sent")

    async def _confirm(self, signature: Signature, last_valid_height: int) -> None:
        try:
            resp = await self._client.confirm_transaction(
                signature,
                self._commitment,
                sleep_seconds=CONFIRM_POLL_INTERVAL,
                last_valid_block_height=last_valid_height,
            )
        except Exception as exc:
            raise ExecutionError(f"Failed to confirm {signature}: {exc}", cause=exc) from exc

        status = resp.value[0] if resp.value else None
        if status is not None and status.err is not None:
            raise ExecutionError(f"Transaction {signature} failed: {status.err}")
