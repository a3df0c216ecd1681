"""Access control: logins, sessions and the caller behind a token"""

import base64
import binascii
import hashlib
from typing import Optional, Tuple

from files_manager.exceptions import Unauthorized
from files_manager.models import User
from files_manager.services.metadata_store import MetadataStore
from files_manager.services.session_store import SessionStore
from files_manager.utils.logger import get_logger, mask_token

logger = get_logger(__name__)

BASIC_PREFIX = "Basic "


def hash_password(password: str) -> str:
    """One-way hash stored in place of the password (SHA-1 hex digest)"""
    return hashlib.sha1(password.encode("utf-8")).hexdigest()


def decode_basic_credentials(credentials: Optional[str]) -> Tuple[str, str]:
    """
    Decode a base64 "email:password" string.

    Raises:
        Unauthorized: if the value is absent, not base64, or lacks either part
    """
    if not credentials:
        raise Unauthorized()
    try:
        decoded = base64.b64decode(credentials.strip(), validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError, ValueError):
        raise Unauthorized()

    email, _, password = decoded.partition(":")
    if not email or not password:
        raise Unauthorized()
    return email, password


class AccessControl:
    """Resolves who is asking; every protected operation goes through here"""

    def __init__(self, metadata: MetadataStore, sessions: SessionStore):
        self.metadata = metadata
        self.sessions = sessions

    async def authenticate(self, credentials: Optional[str]) -> str:
        """Exchange base64 credentials for a new session token"""
        email, password = decode_basic_credentials(credentials)
        user = await self.metadata.find_user_by_credentials(email, hash_password(password))
        if user is None:
            logger.info("Login rejected")
            raise Unauthorized()

        token = await self.sessions.create(user.id)
        logger.info(f"User {user.id} logged in")
        return token

    async def authenticate_header(self, authorization: Optional[str]) -> str:
        """Same as authenticate, from an ``Authorization: Basic ...`` header"""
        if not authorization or not authorization.startswith(BASIC_PREFIX):
            raise Unauthorized()
        return await self.authenticate(authorization[len(BASIC_PREFIX):])

    async def resolve_session(self, token: Optional[str]) -> str:
        user_id = await self.sessions.get_user_id(token)
        if not user_id:
            raise Unauthorized()
        return user_id

    async def resolve_optional(self, token: Optional[str]) -> Optional[str]:
        """User id behind token, or None for anonymous callers"""
        if not token:
            return None
        return await self.sessions.get_user_id(token)

    async def end_session(self, token: Optional[str]):
        user_id = await self.resolve_session(token)
        await self.sessions.delete(token)
        logger.info(f"User {user_id} logged out ({mask_token(token)})")

    async def current_user(self, token: Optional[str]) -> User:
        user_id = await self.resolve_session(token)
        user = await self.metadata.find_user_by_id(user_id)
        if user is None:
            raise Unauthorized()
        return user
