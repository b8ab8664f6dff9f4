"""
HTTP Basic access gate guarding every request with a single shared secret.
"""
import logging
import secrets
from typing import Dict, Optional

from fastapi import HTTPException, Request
from fastapi.responses import PlainTextResponse
from fastapi.security import HTTPBasic, HTTPBasicCredentials
from starlette.middleware.base import BaseHTTPMiddleware

from ..config.settings import Settings
from ..exceptions import AuthError

logger = logging.getLogger(__name__)


class AccessGate:
    """
    Two states: open when demo mode is on, guarded otherwise.

    In the guarded state the password component of a Basic credential must
    match the configured secret exactly. The username is not checked.
    """

    def __init__(self, settings: Settings):
        self.settings = settings
        self.basic = HTTPBasic(auto_error=False, realm=settings.auth_realm)

    @property
    def is_open(self) -> bool:
        return self.settings.demo_mode

    @property
    def challenge_headers(self) -> Dict[str, str]:
        return {"WWW-Authenticate": f'Basic realm="{self.settings.auth_realm}"'}

    def is_exempt(self, path: str) -> bool:
        return path in self.settings.auth_exempt_paths

    async def check(self, request: Request) -> None:
        """
        Raise AuthError unless the request may proceed.

        A missing Authorization header is "Authentication required"; a
        non-Basic scheme or a header HTTPBasic cannot decode is "Unauthorized".
        """
        if self.is_open:
            return
        if not request.headers.get("authorization"):
            raise AuthError("Authentication required")

        try:
            credentials = await self.basic(request)
        except HTTPException:
            credentials = None
        self.verify(credentials)

    def verify(self, credentials: Optional[HTTPBasicCredentials]) -> None:
        expected = self.settings.app_password
        if credentials is None or not expected:
            raise AuthError("Unauthorized")
        if not secrets.compare_digest(credentials.password.encode("utf-8"), expected.encode("utf-8")):
            raise AuthError("Unauthorized")


class AccessGateMiddleware(BaseHTTPMiddleware):
    """Front-door interceptor: every request passes the gate before routing."""

    def __init__(self, app, gate: AccessGate):
        super().__init__(app)
        self.gate = gate

    async def dispatch(self, request, call_next):
        if not self.gate.is_exempt(request.url.path):
            try:
                await self.gate.check(request)
            except AuthError as e:
                logger.warning("Rejected %s %s: %s", request.method, request.url.path, e.message)
                return PlainTextResponse(e.message, status_code=e.status_code, headers=self.gate.challenge_headers)
        return await call_next(request)
