"""Exception hierarchy for fund protocol deployment and testing."""

from collections.abc import Sequence
from typing import Any


class FundDeployError(Exception):
    """Base exception for all deployment and harness errors."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(FundDeployError):
    """Raised when network or protocol configuration is invalid."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: Any | None = None,
        details: dict | None = None,
    ):
        super().__init__(message, details)
        self.field = field
        self.value = value


class ValidationError(FundDeployError):
    """Raised when input validation fails."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: Any | None = None,
        details: dict | None = None,
    ):
        super().__init__(message, details)
        self.field = field
        self.value = value


class NetworkError(FundDeployError):
    """Raised when network/connection issues occur."""

    def __init__(
        self,
        message: str,
        endpoint: str | None = None,
        details: dict | None = None,
    ):
        super().__init__(message, details)
        self.endpoint = endpoint


class ArtifactNotFoundError(FundDeployError):
    """Raised when no compiled artifact exists for a contract."""

    def __init__(self, contract_name: str, search_paths: Sequence[str] = ()):
        super().__init__(
            f"No artifact found for contract '{contract_name}'",
            details={"search_paths": list(search_paths)},
        )
        self.contract_name = contract_name
        self.search_paths = list(search_paths)


class DeploymentNotFoundError(FundDeployError):
    """Raised when a named deployment has no saved record."""

    def __init__(self, name: str, network: str | None = None):
        suffix = f" on network '{network}'" if network else ""
        super().__init__(f"No deployment found for '{name}'{suffix}")
        self.name = name
        self.network = network


class DependencyError(FundDeployError):
    """Raised for unknown tags, duplicate scripts or dependency cycles."""

    def __init__(self, message: str, tag: str | None = None, details: dict | None = None):
        super().__init__(message, details)
        self.tag = tag


class TransactionRevertedError(FundDeployError):
    """Raised when a transaction or call is reverted by the chain."""

    def __init__(
        self,
        reason: str,
        tx_hash: str | None = None,
        details: dict | None = None,
    ):
        message = f"Transaction reverted: {reason}" if reason else "Transaction reverted"
        super().__init__(message, details)
        self.reason = reason
        self.tx_hash = tx_hash


class VerificationError(FundDeployError):
    """Raised when block explorer verification fails."""

    def __init__(self, message: str, contract: str | None = None, details: dict | None = None):
        super().__init__(message, details)
        self.contract = contract
