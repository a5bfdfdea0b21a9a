"""
Auth API Endpoints
Login, logout and current-session lookup

Author: TM3
Date: 2026-10-19
"""
from fastapi import APIRouter, Depends
from pydantic import BaseModel

from retail_pos.api.deps import get_context
from retail_pos.context import PosContext

router = APIRouter()


class LoginRequest(BaseModel):
    email: str
    password: str


def _session_payload(ctx: PosContext) -> dict:
    session = ctx.auth.require_session()
    return {
        "shop": session.shop.to_record(),
        "role": session.role,
        "is_admin": ctx.auth.is_admin(),
        "login_time": session.login_time.isoformat(),
    }


@router.post("/login")
async def login(payload: LoginRequest, ctx: PosContext = Depends(get_context)):
    """
    Log in as the administrator or a shop

    Returns the resolved actor; the role decides which views apply
    (admin -> dashboard, shop -> its own orders).
    """
    await ctx.auth_service.login(payload.email, payload.password)
    return {
        "status": "success",
        "data": _session_payload(ctx)
    }


@router.post("/logout")
async def logout(ctx: PosContext = Depends(get_context)):
    ctx.auth_service.logout()
    return {"status": "success"}


@router.get("/me")
async def current_session(ctx: PosContext = Depends(get_context)):
    """Active session (401 when nobody is logged in)"""
    return {
        "status": "success",
        "data": _session_payload(ctx)
    }
