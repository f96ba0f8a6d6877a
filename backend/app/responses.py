"""
Success envelopes shared by all routers.

    {"success": true, "data": ..., "message"?: ..., "pagination"?: {...}}
"""

from typing import Any

from core.search import Page


def ok(data: Any = None, message: str | None = None) -> dict:
    body: dict = {"success": True}
    if data is not None:
        body["data"] = data
    if message:
        body["message"] = message
    return body


def paginated(page: Page) -> dict:
    return {"success": True, "data": page.items, "pagination": page.pagination()}
