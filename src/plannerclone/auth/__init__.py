"""Auth module public exports."""

from plannerclone.auth.base import TokenResolver
from plannerclone.auth.factory import create_token_resolver

__all__ = ["TokenResolver", "create_token_resolver"]
