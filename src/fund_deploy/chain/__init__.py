"""JSON-RPC connection, artifacts and transaction helpers."""

from .artifacts import Artifact, ArtifactStore
from .connections import ChainConnection, derive_accounts
from .transactions import TransactionDispatcher, decode_revert_reason

__all__ = [
    "Artifact",
    "ArtifactStore",
    "ChainConnection",
    "TransactionDispatcher",
    "decode_revert_reason",
    "derive_accounts",
]
