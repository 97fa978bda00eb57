"""Public façade for the library_transfer.transfer package.

This module exposes the transfer orchestrator and the two framework-agnostic
entry points used by the HTTP API and the CLI.
"""

from .orchestration import (
    BULK_TRANSFERS,
    BulkTransfer,
    ProgressCallback,
    planned_units,
    transfer,
    transfer_session,
)
from .service import get_user_data, transfer_data

__all__ = [
    "BulkTransfer",
    "BULK_TRANSFERS",
    "ProgressCallback",
    "planned_units",
    "transfer",
    "transfer_session",
    "get_user_data",
    "transfer_data",
]
