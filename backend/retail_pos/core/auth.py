"""
Authentication context for the POS engine
Resolves who is acting (administrator or shop) and gates visibility

The context is created once per process and injected into the services that
need it. It restores the persisted session record at start-up and clears it
on logout.
"""
import json
import logging
from pathlib import Path
from typing import Optional

from jose import JWTError, jwt
from pydantic import ValidationError as PydanticValidationError

from retail_pos.core.errors import InvalidCredentials, NotAuthenticated, PermissionDenied
from retail_pos.core.events import BehaviorSubject, Subscription
from retail_pos.domain.session import Session
from retail_pos.domain.shop import Shop

logger = logging.getLogger(__name__)

JWT_ALGORITHM = "HS256"


def decode_session_token(token: str, secret: Optional[str] = None) -> dict:
    """
    Read the claims of a login token.

    With a secret the signature is verified (HS256); without one the claims
    are read as-is, since the server stays the authority.
    """
    try:
        if secret:
            return jwt.decode(
                token,
                secret,
                algorithms=[JWT_ALGORITHM],
                options={"verify_aud": False}
            )
        return jwt.get_unverified_claims(token)
    except JWTError as e:
        error_msg = str(e).lower()
        if "expired" in error_msg:
            raise InvalidCredentials("Token has expired") from e
        raise InvalidCredentials(f"Invalid token: {str(e)}") from e


class SessionStore:
    """Persists the active session record as a JSON file"""

    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path) if path else None

    def load(self) -> Optional[Session]:
        if not self.path or not self.path.exists():
            return None
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                return Session.model_validate(json.load(f))
        except (OSError, json.JSONDecodeError, PydanticValidationError) as e:
            logger.error(f"Error loading session from {self.path}: {e}")
            return None

    def save(self, session: Session) -> None:
        if not self.path:
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, 'w', encoding='utf-8') as f:
            f.write(session.model_dump_json(by_alias=True))

    def clear(self) -> None:
        if self.path:
            self.path.unlink(missing_ok=True)


class AuthContext:
    """Active actor for this process"""

    def __init__(self, session_store: Optional[SessionStore] = None):
        self.session_store = session_store or SessionStore()
        self.session: BehaviorSubject[Optional[Session]] = BehaviorSubject(None)

    def restore(self) -> Optional[Session]:
        """Load the persisted session record, if any"""
        saved = self.session_store.load()
        if saved and saved.is_logged_in:
            logger.info(f"Restored session for {saved.shop.email}")
            self.session.next(saved)
        return self.session.value

    def start(self, session: Session) -> None:
        self.session_store.save(session)
        self.session.next(session)

    def end(self) -> None:
        self.session_store.clear()
        self.session.next(None)

    def subscribe(self, listener) -> Subscription:
        return self.session.subscribe(listener)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def current_session(self) -> Optional[Session]:
        return self.session.value

    def current_shop(self) -> Optional[Shop]:
        current = self.session.value
        return current.shop if current else None

    def is_logged_in(self) -> bool:
        current = self.session.value
        return bool(current and current.is_logged_in)

    def is_admin(self) -> bool:
        current = self.session.value
        if not current:
            return False
        return current.role == "admin" or current.shop.is_admin

    def is_shop(self) -> bool:
        return self.is_logged_in() and not self.is_admin()

    def require_session(self) -> Session:
        current = self.session.value
        if not current or not current.is_logged_in:
            raise NotAuthenticated("Authentication required")
        return current

    def require_admin(self) -> Session:
        current = self.require_session()
        if not self.is_admin():
            raise PermissionDenied(f"Access denied. Required role: admin, your role: {current.role}")
        return current

    def visible_shop_id(self) -> Optional[int]:
        """None when every shop is visible (admin), else the acting shop's id"""
        current = self.require_session()
        if self.is_admin():
            return None
        return current.shop.id
