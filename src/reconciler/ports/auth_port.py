from __future__ import annotations

from typing import Protocol, runtime_checkable

from reconciler.domain.models import Caller


@runtime_checkable
class AuthPort(Protocol):
    def resolve_caller(self, token: str) -> Caller | None:
        """Return the caller owning a bearer token, or None if unknown."""
