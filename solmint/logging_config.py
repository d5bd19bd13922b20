"""Structured logging and audit trail for solmint.

Provides:
- JSON file handler with rotation (~/.solmint/logs/)
- Dedicated audit log for node executions
- Console handler respecting verbose mode
"""

import json
import logging
import logging.handlers
from datetime import datetime

from solmint.config import LOGS_DIR

AUDIT_LOG_FILE = LOGS_DIR / "audit.jsonl"
APP_LOG_FILE = LOGS_DIR / "solmint.log"

# Maximum log file size (5 MB) and backup count
MAX_LOG_BYTES = 5 * 1024 * 1024
LOG_BACKUP_COUNT = 3

# Node inputs that carry key material and must never reach a log
SECRET_INPUTS = frozenset({"fee_payer", "mint_authority"})


class JSONFormatter(logging.Formatter):
    """Format log records as single-line JSON."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info and record.exc_info[1]:
            entry["exception"] = str(record.exc_info[1])
        # Include extra fields
        for key in ("node_name", "node_inputs", "node_outcome", "duration_s", "signature"):
            if hasattr(record, key):
                entry[key] = getattr(record, key)
        return json.dumps(entry, default=str)


def setup_logging(verbose: bool = False) -> None:
    """Configure application-wide logging.

    - File handler: JSON lines to ~/.solmint/logs/solmint.log (with rotation)
    - Console handler: only if verbose=True, INFO+ level
    """
    LOGS_DIR.mkdir(parents=True, exist_ok=True)

    root = logging.getLogger("solmint")
    root.setLevel(logging.DEBUG)

    # Remove existing handlers (idempotent)
    root.handlers.clear()

    file_handler = logging.handlers.RotatingFileHandler(
        str(APP_LOG_FILE),
        maxBytes=MAX_LOG_BYTES,
        backupCount=LOG_BACKUP_COUNT,
    )
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(JSONFormatter())
    root.addHandler(file_handler)

    if verbose:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.INFO)
        console_handler.setFormatter(logging.Formatter("[%(name)s] %(message)s"))
        root.addHandler(console_handler)


def get_audit_logger() -> logging.Logger:
    """Get the dedicated audit logger for node executions."""
    logger = logging.getLogger("solmint.audit")
    logger.setLevel(logging.INFO)
    if not any(
        isinstance(h, logging.handlers.RotatingFileHandler)
        and str(AUDIT_LOG_FILE) in getattr(h, "baseFilename", "")
        for h in logger.handlers
    ):
        LOGS_DIR.mkdir(parents=True, exist_ok=True)
        handler = logging.handlers.RotatingFileHandler(
            str(AUDIT_LOG_FILE),
            maxBytes=MAX_LOG_BYTES,
            backupCount=LOG_BACKUP_COUNT,
        )
        handler.setFormatter(JSONFormatter())
        logger.addHandler(handler)
    return logger


def redact_inputs(inputs: dict) -> dict:
    """Copy of node inputs with key material replaced."""
    return {
        key: ("<redacted>" if key in SECRET_INPUTS else value)
        for key, value in inputs.items()
    }


def log_node_execution(
    node_name: str,
    node_inputs: dict,
    outcome: str,
    duration_s: float,
) -> None:
    """Log a node execution to the audit trail."""
    logger = get_audit_logger()
    logger.info(
        "Node executed: %s",
        node_name,
        extra={
            "node_name": node_name,
            "node_inputs": redact_inputs(node_inputs),
            "node_outcome": outcome[:500],
            "duration_s": round(duration_s, 3),
        },
    )
