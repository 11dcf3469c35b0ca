from fastapi import APIRouter, Depends
from pydantic import BaseModel
from typing import Optional

from flowershop.api.deps import get_shop_session
from flowershop.models.user import Role
from flowershop.services.auth import ShopSession, home_for

router = APIRouter()


class LoginRequest(BaseModel):
    email: str
    # accepted for form compatibility, never verified
    password: Optional[str] = None
    role: Role = Role.CUSTOMER
    redirect: Optional[str] = None


@router.post("/login")
def login(req: LoginRequest, shop_session: ShopSession = Depends(get_shop_session)):
    user = shop_session.login(req.email, req.role)
    return {
        "session_id": shop_session.session_id,
        "user": user.model_dump(mode="json"),
        "redirect_to": req.redirect or home_for(user.role),
    }


@router.post("/logout")
def logout(shop_session: ShopSession = Depends(get_shop_session)):
    shop_session.logout()
    return {"ok": True, "redirect_to": "/login"}


@router.get("/me")
def me(shop_session: ShopSession = Depends(get_shop_session)):
    user = shop_session.user
    return {"session_id": shop_session.session_id, "user": user.model_dump(mode="json") if user else None}
