"""Per-visitor session context: the logged-in user and their cart.

Login is a demo: whatever role the caller asks for is granted and the password
is never checked.
"""
from datetime import datetime, timezone
from typing import Iterable, Optional
import logging

from pydantic import ValidationError

from flowershop.db.storage import CART_KEY, USER_KEY, read_record, remove_record, write_record
from flowershop.errors import AccessDenied, InvalidInput
from flowershop.models.cart import CartState
from flowershop.models.user import Role, User

logger = logging.getLogger(__name__)

LOGIN_VIEW = "/login"

ROLE_HOME = {
    Role.CUSTOMER: "/",
    Role.FLORIST: "/florist/orders",
    Role.ADMIN: "/admin",
}


def display_name(email: str) -> str:
    return email.split("@")[0]


def home_for(role: Role) -> str:
    return ROLE_HOME.get(role, "/")


class ShopSession:
    """State scoped to one session id, loaded on ``open``.

    Writes go straight to storage; ``close`` only ends the request scope.
    """

    def __init__(self, session_id: str):
        self.session_id = session_id
        self.user: Optional[User] = None
        self.cart = CartState()
        self._open = False

    def open(self) -> "ShopSession":
        self.user = self._load(USER_KEY, User)
        self.cart = self._load(CART_KEY, CartState) or CartState()
        self._open = True
        return self

    def close(self) -> None:
        self._open = False

    def _load(self, key, model):
        raw = read_record(self.session_id, key)
        if raw is None:
            return None
        try:
            return model.model_validate(raw)
        except ValidationError as e:
            logger.warning("Discarding invalid %s record for session=%s: %s", key, self.session_id, e)
            remove_record(self.session_id, key)
            return None

    def _check_open(self) -> None:
        if not self._open:
            raise RuntimeError(f"session {self.session_id} is closed")

    def set_cart(self, cart: CartState) -> CartState:
        self._check_open()
        write_record(self.session_id, CART_KEY, cart.model_dump(mode="json"))
        self.cart = cart
        return cart

    def login(self, email: str, role: Role) -> User:
        self._check_open()
        email = (email or "").strip()
        if not email:
            raise InvalidInput("email is required", fields=["email"])
        user = User(
            email=email,
            name=display_name(email),
            role=role,
            login_time=datetime.now(timezone.utc),
        )
        write_record(self.session_id, USER_KEY, user.model_dump(mode="json"))
        self.user = user
        logger.info("Login session=%s email=%s role=%s", self.session_id, email, role.value)
        return user

    def logout(self) -> None:
        self._check_open()
        remove_record(self.session_id, USER_KEY)
        if self.user is not None:
            logger.info("Logout session=%s email=%s", self.session_id, self.user.email)
        self.user = None

    def require(self, roles: Iterable[Role]) -> User:
        """Return the user if their role is allowed, else raise AccessDenied to their home view."""
        if self.user is None:
            logger.warning("Anonymous access denied session=%s", self.session_id)
            raise AccessDenied(LOGIN_VIEW)
        if self.user.role not in set(roles):
            logger.warning("Role %s denied session=%s", self.user.role.value, self.session_id)
            raise AccessDenied(home_for(self.user.role))
        return self.user
