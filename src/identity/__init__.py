"""Generators for locally created identity: device alias and security context."""

from .alias_generator import generate_random_alias  # noqa: F401
from .security_context import generate_security_context, certificate_hash  # noqa: F401

__all__ = ["generate_random_alias", "generate_security_context", "certificate_hash"]
