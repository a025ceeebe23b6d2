# =============================================================================
# GitHub MCP Server - Credential Gate
# =============================================================================
"""
Credential gate for write operations.

Gateway methods are classified once, at definition time: methods wrapped in
:func:`requires_credential` are writes, everything else is a read. A write
invoked without a configured token raises :class:`AuthRequiredError` before
any request is built, so no network call is ever made. Reads never consult
the gate and go out anonymously when no token is set.
"""

import functools
import logging
from typing import Any, Callable, Optional

from .client import AuthRequiredError

logger = logging.getLogger(__name__)

WRITE = "write"
READ = "read"


class CredentialGate:
    """
    Holds the optional bearer credential.

    Attributes:
        token: The configured token, or None.
    """

    def __init__(self, token: Optional[str] = None) -> None:
        self.token = token or None

    def has_credential(self) -> bool:
        """Return True when a non-empty token is configured."""
        return self.token is not None

    def require(self, operation_name: str) -> None:
        """
        Fail fast if no credential is configured.

        Args:
            operation_name: Name of the write operation, used in the message.

        Raises:
            AuthRequiredError: If no token is configured.
        """
        if not self.has_credential():
            logger.info(f"Refusing '{operation_name}': no GitHub token configured")
            raise AuthRequiredError(
                message=f"GitHub token required for '{operation_name}'",
                status_code=401,
            )


def requires_credential(func: Callable) -> Callable:
    """
    Mark an async gateway method as a write operation.

    The wrapped method's owner must expose a ``credentials`` attribute
    holding a :class:`CredentialGate`.

    Example:
        @requires_credential
        async def create_issue(self, owner, repo, title, body):
            ...
    """

    @functools.wraps(func)
    async def wrapper(self: Any, *args: Any, **kwargs: Any) -> Any:
        self.credentials.require(func.__name__)
        return await func(self, *args, **kwargs)

    wrapper.access = WRITE
    return wrapper


def access_of(method: Callable) -> str:
    """Return ``"write"`` for gated methods and ``"read"`` otherwise."""
    return getattr(method, "access", READ)
