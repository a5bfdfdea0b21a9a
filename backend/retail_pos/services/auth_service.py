"""
Auth Service
Login/logout against the configured session source

Two session sources exist and one is chosen by configuration (AUTH_SOURCE):
- local: admin credentials from settings, shops log in by email with the
  default shop password
- remote: the token endpoint of the POS REST service

Author: TM3
Date: 2026-10-19
"""
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

import httpx

from retail_pos.core.auth import AuthContext, decode_session_token
from retail_pos.core.config import ADMIN_SHOP_ID, DEFAULT_SHOP_PASSWORD, Settings
from retail_pos.core.errors import InvalidCredentials, TransportFailure
from retail_pos.domain.session import LoginResult, Session
from retail_pos.domain.shop import Shop
from retail_pos.repositories.shop_repository import ShopRepository

logger = logging.getLogger(__name__)


class SessionSource(ABC):
    """Validates credentials and says who the actor is"""

    @abstractmethod
    async def login(self, identifier: str, secret: str) -> LoginResult:
        """Raise InvalidCredentials when the credentials are rejected"""


class LocalSessionSource(SessionSource):
    """Credentials checked against settings and the local shop list"""

    def __init__(self, shop_repository: ShopRepository, admin_email: str, admin_password: str,
                 shop_password: str = DEFAULT_SHOP_PASSWORD):
        self.shop_repository = shop_repository
        self.admin_email = admin_email
        self.admin_password = admin_password
        self.shop_password = shop_password

    async def login(self, identifier: str, secret: str) -> LoginResult:
        email = (identifier or "").strip()

        if email.lower() == self.admin_email.lower() and secret == self.admin_password:
            return LoginResult(actor_id=ADMIN_SHOP_ID, role="admin", email=email, name="Admin")

        shop = self.shop_repository.find_by_email(email) if email else None
        if shop and shop.is_active and secret == self.shop_password:
            return LoginResult(actor_id=shop.id, role=shop.role, email=shop.email, name=shop.name)

        raise InvalidCredentials("Invalid email or password")


class RemoteSessionSource(SessionSource):
    """Credentials checked by the remote token endpoint"""

    def __init__(self, base_url: str, auth_secret: Optional[str] = None, timeout: float = 30.0,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.url = f"{base_url.rstrip('/')}/TokenAuth/Authenticate"
        self.auth_secret = auth_secret
        self.timeout = timeout
        self.transport = transport

    async def login(self, identifier: str, secret: str) -> LoginResult:
        payload = {"userNameOrEmailAddress": identifier, "password": secret}
        try:
            async with httpx.AsyncClient(transport=self.transport) as client:
                response = await client.post(self.url, json=payload, timeout=self.timeout)
        except httpx.HTTPError as e:
            raise TransportFailure(f"Login request failed: {e}") from e

        if response.status_code in (400, 401, 403):
            raise InvalidCredentials(self._error_message(response) or "Invalid email or password")
        if response.is_error:
            raise TransportFailure(f"Server returned code {response.status_code}")

        body = response.json() or {}
        if body.get('error'):
            raise InvalidCredentials(self._error_message(response) or "Authentication failed")

        # ABP-style services wrap the payload in "result"
        result = body.get('result') or body
        token = result.get('accessToken') or result.get('AccessToken') or result.get('access_token')
        if not token:
            raise InvalidCredentials(result.get('message') or "Login failed. No access token returned")

        claims = decode_session_token(token, self.auth_secret)
        user_id = self._first(result, 'userId', 'UserId', 'user_id')
        if user_id is None:
            user_id = claims.get('id') or claims.get('sub')
        if user_id is None:
            raise InvalidCredentials("Login failed. No user id returned")
        try:
            actor_id = int(user_id)
        except ValueError:
            raise InvalidCredentials(f"Login failed. Invalid user id {user_id!r}")

        return LoginResult(
            actor_id=actor_id,
            role=self._role_from_claims(claims),
            email=claims.get('email') or identifier,
            name=claims.get('name'),
            token=token,
        )

    @staticmethod
    def _first(data: Dict[str, Any], *keys: str) -> Any:
        for key in keys:
            if data.get(key) is not None:
                return data[key]
        return None

    @staticmethod
    def _role_from_claims(claims: Dict[str, Any]) -> str:
        role = claims.get('role') or claims.get('roles') or "shop"
        roles = role if isinstance(role, list) else [role]
        return "admin" if any(str(r).lower() == "admin" for r in roles) else "shop"

    @staticmethod
    def _error_message(response: httpx.Response) -> Optional[str]:
        try:
            body = response.json()
        except ValueError:
            return None
        error = body.get('error') if isinstance(body, dict) else None
        if isinstance(error, dict):
            return error.get('message') or error.get('details')
        if isinstance(body, dict):
            return body.get('message')
        return None


def build_session_source(settings: Settings, shop_repository: ShopRepository) -> SessionSource:
    """Select the session source from configuration"""
    if settings.AUTH_SOURCE == "remote":
        return RemoteSessionSource(
            settings.REMOTE_API_URL,
            auth_secret=settings.AUTH_SECRET,
            timeout=settings.REMOTE_TIMEOUT,
        )
    return LocalSessionSource(shop_repository, settings.ADMIN_EMAIL, settings.ADMIN_PASSWORD)


class AuthService:
    """Turns a login result into the active session"""

    def __init__(self, source: SessionSource, context: AuthContext, shop_repository: ShopRepository):
        self.source = source
        self.context = context
        self.shop_repository = shop_repository

    async def login(self, email: str, password: str) -> Session:
        result = await self.source.login(email, password)
        shop = self._resolve_shop(result)

        session = Session(shop=shop, role=result.role, token=result.token)
        self.context.start(session)
        logger.info(f"Login successful for {shop.email} (role={result.role})")
        return session

    def logout(self) -> None:
        current = self.context.current_shop()
        self.context.end()
        if current:
            logger.info(f"Logged out {current.email}")

    def _resolve_shop(self, result: LoginResult) -> Shop:
        if result.role == "admin" or result.actor_id == ADMIN_SHOP_ID:
            return Shop(id=ADMIN_SHOP_ID, name=result.name or "Admin", email=result.email, role="admin")

        shop = (self.shop_repository.find_by_email(result.email)
                or self.shop_repository.find_by_id(result.actor_id))
        if shop:
            return shop

        # Remote accounts may not be in the local shop list yet
        return Shop(id=result.actor_id, name=result.name or result.email, email=result.email, role="shop")
