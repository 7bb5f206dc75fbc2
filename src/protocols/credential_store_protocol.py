"""Credential store protocol interface."""

from typing import Optional, Protocol, runtime_checkable

from ..schemas import Credential


@runtime_checkable
class CredentialStoreProtocol(Protocol):
    """Protocol for the stored GitHub connection."""

    def get(self) -> Optional[Credential]:
        """Stored credential, or None when no account is connected."""
        ...

    def clear(self) -> None:
        """Forget the stored credential so the user must reconnect."""
        ...
