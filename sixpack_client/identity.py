"""
Client identity resolution and generation.

A client id is an opaque token correlating a visitor's participate and
convert calls. It is taken from the caller when given, otherwise from the
ambient identity store, otherwise freshly generated and written back to
the store so later calls in the same session reuse it.
"""

import random
import secrets
import string
import uuid
from typing import Callable, Optional

from sixpack_client.context import IdentityStore
from sixpack_client.core.config import settings
from sixpack_client.core.exceptions import IdentityGenerationError
from sixpack_client.core.logging import get_logger

logger = get_logger(__name__)

IDENTITY_ALPHABET = string.ascii_letters
IDENTITY_LENGTH = 32

IdentityGenerator = Callable[[], str]


def uuid_identity(rng: Optional[random.Random] = None) -> str:
    """
    Generate a UUID v4 formatted client id.

    Args:
        rng: Optional random generator; when given the id is derived from it
            (deterministic for a seeded generator) instead of ``os.urandom``
    """
    if rng is not None:
        return str(uuid.UUID(int=rng.getrandbits(128), version=4))
    try:
        return str(uuid.uuid4())
    except (NotImplementedError, OSError) as e:
        raise IdentityGenerationError(f"Unable to generate client id: {e}") from e


def letter_identity(rng: Optional[random.Random] = None, length: int = IDENTITY_LENGTH) -> str:
    """Generate a client id of ``length`` characters drawn from the 52 ASCII letters."""
    rng = rng or secrets.SystemRandom()
    try:
        return "".join(rng.choice(IDENTITY_ALPHABET) for _ in range(length))
    except (NotImplementedError, OSError) as e:
        raise IdentityGenerationError(f"Unable to generate client id: {e}") from e


def resolve_identity(
    explicit: Optional[str] = None,
    store: Optional[IdentityStore] = None,
    generator: Optional[IdentityGenerator] = None,
    max_age: Optional[int] = None,
) -> str:
    """
    Resolve the client id for one call.

    Args:
        explicit: Caller supplied id, used verbatim when non-empty
        store: Ambient identity store, read once and written at most once
        generator: Zero-argument id factory (defaults to :func:`uuid_identity`)
        max_age: Lifetime in seconds for a newly persisted id

    Returns:
        The client id
    """
    if explicit:
        return explicit

    if store is not None:
        persisted = store.read_identity()
        if persisted:
            return persisted

    client_id = (generator or uuid_identity)()

    if store is not None:
        store.write_identity(client_id, max_age if max_age is not None else settings.cookie_max_age)
        logger.debug("Persisted new client id", client_id=client_id)

    return client_id
