"""Declaration providers that turn source files into declaration records."""

from __future__ import annotations

from .base import DeclarationProvider
from .typescript import TypeScriptProvider


def create_provider(target: str = "auto") -> DeclarationProvider:
    """Return the provider for a configured parsing target."""
    return TypeScriptProvider(target=target)


__all__ = [
    "create_provider",
    "DeclarationProvider",
    "TypeScriptProvider",
]
