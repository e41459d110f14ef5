"""
Server-side sessions.

The cookie only carries a random session id. The session data lives in
the sessions collection and is exposed to handlers as request.session,
the same way Starlette's own SessionMiddleware exposes a signed cookie.

Handlers mutate request.session; the middleware persists changes when
the response starts. Logout goes through destroy_session() so a store
failure can still turn into an error response.
"""

import logging

from starlette.concurrency import run_in_threadpool
from starlette.datastructures import MutableHeaders
from starlette.requests import HTTPConnection, Request
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from placement_portal.services.mongo_service import SessionService

logger = logging.getLogger(__name__)

SESSION_ID_KEY = "session_id"


class ServerSessionMiddleware:
    def __init__(
        self,
        app: ASGIApp,
        store: SessionService,
        cookie_name: str = "placement_sid",
        max_age: int = 86400,
        https_only: bool = False,
    ) -> None:
        self.app = app
        self.store = store
        self.cookie_name = cookie_name
        self.max_age = max_age
        self.security_flags = "httponly; samesite=lax"
        if https_only:
            self.security_flags += "; secure"

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] not in ("http", "websocket"):
            await self.app(scope, receive, send)
            return

        connection = HTTPConnection(scope)
        had_cookie = self.cookie_name in connection.cookies
        session_id = connection.cookies.get(self.cookie_name)
        data = None
        if session_id:
            data = await run_in_threadpool(self.store.load, session_id)
        if data is None:
            session_id = None

        initial = dict(data or {})
        scope["session"] = dict(initial)
        scope[SESSION_ID_KEY] = session_id

        async def send_wrapper(message: Message) -> None:
            if message["type"] == "http.response.start":
                session = scope["session"]
                current_id = scope.get(SESSION_ID_KEY)
                headers = MutableHeaders(scope=message)
                if session:
                    if current_id is None:
                        current_id = await run_in_threadpool(self.store.create, session)
                        headers.append("Set-Cookie", self._cookie(current_id))
                    elif session != initial:
                        await run_in_threadpool(self.store.save, current_id, session)
                        headers.append("Set-Cookie", self._cookie(current_id))
                elif had_cookie:
                    if current_id is not None:
                        await run_in_threadpool(self.store.destroy, current_id)
                    headers.append("Set-Cookie", self._expired_cookie())
            await send(message)

        await self.app(scope, receive, send_wrapper)

    def _cookie(self, session_id: str) -> str:
        return "{}={}; path=/; Max-Age={}; {}".format(
            self.cookie_name, session_id, self.max_age, self.security_flags
        )

    def _expired_cookie(self) -> str:
        return "{}=null; path=/; expires=Thu, 01 Jan 1970 00:00:00 GMT; {}".format(
            self.cookie_name, self.security_flags
        )


async def destroy_session(request: Request, store: SessionService) -> None:
    """
    Delete the stored session and empty request.session.

    Store errors propagate so the caller's error handling applies.
    """
    session_id = request.scope.get(SESSION_ID_KEY)
    if session_id is not None:
        await run_in_threadpool(store.destroy, session_id)
        logger.debug("Destroyed session %s...", session_id[:8])
    request.scope[SESSION_ID_KEY] = None
    request.session.clear()


async def rotate_session(request: Request, store: SessionService) -> None:
    """
    Drop the current session so the next write gets a new id.

    Called on login; an id the client held before authenticating
    never becomes an authenticated session.
    """
    await destroy_session(request, store)
