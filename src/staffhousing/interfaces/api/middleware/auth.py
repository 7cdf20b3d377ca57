"""Identity middleware - takes the acting user from trusted upstream headers.

Token and session handling happen in front of this service; the gateway
forwards the authenticated user id and the property the user is working in.
"""

from dataclasses import dataclass

import falcon.asgi

USER_HEADER = "X-User-Id"
PROPERTY_HEADER = "X-Property-Id"


@dataclass
class RequestUser:
    """Acting user from request context."""

    user_id: int
    property_id: int | None = None


def _as_int(value: str | None) -> int | None:
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None


class IdentityMiddleware:
    """Sets req.context.user from identity headers, or None when absent/invalid."""

    async def process_request(self, req: falcon.asgi.Request, resp: falcon.asgi.Response) -> None:
        user_id = _as_int(req.get_header(USER_HEADER))
        if user_id is None:
            req.context.user = None
            return
        req.context.user = RequestUser(
            user_id=user_id,
            property_id=_as_int(req.get_header(PROPERTY_HEADER)),
        )
