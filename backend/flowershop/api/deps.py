from typing import Iterator, Optional
from uuid import uuid4

from fastapi import Cookie, Depends, Header, Request, Response

from flowershop.models.user import Role, User
from flowershop.services.auth import ShopSession

SESSION_COOKIE = "session_id"


def set_session_cookie(response: Response, sid: str) -> None:
    response.set_cookie(SESSION_COOKIE, sid, httponly=True, samesite="lax")


def get_shop_session(
    request: Request,
    response: Response,
    x_session_id: Optional[str] = Header(None),
    session_id: Optional[str] = Cookie(None),
) -> Iterator[ShopSession]:
    """Open the caller's session for the duration of one request.

    The id comes from the ``X-Session-Id`` header or the ``session_id`` cookie;
    a visitor with neither gets a fresh id set as a cookie. The new id is also
    kept on ``request.state`` so error responses built outside this dependency
    can set the same cookie.
    """
    sid = x_session_id or session_id
    if not sid:
        sid = uuid4().hex
        set_session_cookie(response, sid)
        request.state.new_session_id = sid
    shop_session = ShopSession(sid).open()
    try:
        yield shop_session
    finally:
        shop_session.close()


def require_roles(*roles: Role):
    def dependency(shop_session: ShopSession = Depends(get_shop_session)) -> User:
        return shop_session.require(roles)

    return dependency


def wants_html(accept: Optional[str]) -> bool:
    return "text/html" in (accept or "")
