"""Request-scoped dependencies for the HTTP API.

Two collaborators are pluggable on the app factory and read from
``app.state``:

- an address validator, ``(address) -> bool``
- a caller verifier, ``async (request) -> address | None``

The defaults are a regex check and a trusted gateway header, both configured
under ``settings.auth``.
"""

from collections.abc import AsyncIterator, Awaitable, Callable
import re

from fastapi import Depends, Request

from playlist_service.application.services import (
    PlaylistResourceManager,
    require_owner,
)
from playlist_service.config import get_logger, settings
from playlist_service.domain.errors import InvalidInputError, UnauthorizedError
from playlist_service.infrastructure.persistence import DatabaseUnitOfWork
from playlist_service.infrastructure.persistence.database import (
    get_session,
    get_session_factory,
)

logger = get_logger(__name__)

type AddressValidator = Callable[[str], bool]
type CallerVerifier = Callable[[Request], Awaitable[str | None]]


class InvalidAddressError(InvalidInputError):
    """The owner address in the path is not a well-formed chain address."""

    default_message = "Invalid address"


def regex_address_validator(pattern: str | None = None) -> AddressValidator:
    """Build a validator that accepts addresses fully matching ``pattern``."""
    compiled = re.compile(pattern or settings.auth.address_pattern)

    def validate(address: str) -> bool:
        return compiled.fullmatch(address) is not None

    return validate


def header_caller_verifier(header: str | None = None) -> CallerVerifier:
    """Build a verifier that trusts an address header set by the gateway."""
    header_name = header or settings.auth.caller_header

    async def verify(request: Request) -> str | None:
        return request.headers.get(header_name) or None

    return verify


# -------------------------------------------------------------------------
# FASTAPI DEPENDENCIES
# -------------------------------------------------------------------------


def _check_address(request: Request, owner: str) -> str:
    if not request.app.state.address_validator(owner):
        logger.debug("Rejected owner address", owner_address=owner)
        raise InvalidAddressError()
    return owner


async def valid_owner(request: Request, owner: str) -> str:
    """Path owner address, validated."""
    return _check_address(request, owner)


async def require_caller(request: Request) -> str:
    """Resolve the verified caller address or raise ``UnauthorizedError``."""
    caller = await request.app.state.caller_verifier(request)
    if caller is None:
        raise UnauthorizedError()
    return caller


async def authorized_owner(
    request: Request,
    owner: str,
    caller: str = Depends(require_caller),
) -> tuple[str, str]:
    """Resolve the caller, validate the path owner, then require they match.

    Runs before the request body is validated, so a foreign caller is
    refused even when the body is malformed.

    Returns:
        ``(owner_address, caller_address)``
    """
    _check_address(request, owner)
    require_owner(owner, caller)
    return owner, caller


async def get_manager(request: Request) -> AsyncIterator[PlaylistResourceManager]:
    """Yield a manager over a fresh session for this request."""
    session_factory = request.app.state.session_factory or get_session_factory()
    async with get_session(session_factory) as session:
        yield PlaylistResourceManager(DatabaseUnitOfWork(session))
