"""OAuth provider implementations.

This module contains concrete implementations of ``OAuth2Provider``.
"""

from .microsoft import MicrosoftProvider, MicrosoftResourceOwner

__all__ = [
    "MicrosoftProvider",
    "MicrosoftResourceOwner",
]
