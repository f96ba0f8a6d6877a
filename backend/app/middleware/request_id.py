"""
Middleware that injects a request ID into every incoming request.

Must be the outermost middleware so the ID is bound before anything logs
and cleared after the response is sent.
"""

import re
import uuid

from fastapi import Request

from core.logging import bind_context, clear_context

# Client-supplied IDs are echoed back, so keep them short and header-safe
_VALID_REQUEST_ID = re.compile(r"^[A-Za-z0-9._-]{1,64}$")


class RequestIDMiddleware:
    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request = Request(scope, receive=receive)
        request_id = request.headers.get("X-Request-ID", "")
        if not _VALID_REQUEST_ID.match(request_id):
            request_id = str(uuid.uuid4())
        scope.setdefault("state", {})["request_id"] = request_id

        clear_context()
        bind_context(request_id=request_id)

        async def send_wrapper(response):
            if response["type"] == "http.response.start":
                headers = response.setdefault("headers", [])
                headers.append((b"x-request-id", request_id.encode()))
            await send(response)

        try:
            await self.app(scope, receive, send_wrapper)
        finally:
            clear_context()
