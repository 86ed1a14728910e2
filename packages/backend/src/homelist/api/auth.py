"""Auth API — registration and login.

Learn: Routes for getting a bearer token:
- POST /auth/register → create an account, returns user + token
- POST /auth/login → email/password → user + token

Both are open routes. The token goes in `Authorization: Bearer <token>`
on every protected call and is good for 7 days.
"""

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from homelist.db.engine import get_db
from homelist.schemas.user import AuthResponse, LoginRequest, RegisterRequest, UserRead
from homelist.services.user_service import UserService

router = APIRouter(prefix="/auth")


def get_user_service(request: Request, db: AsyncSession = Depends(get_db)) -> UserService:
    state = request.app.state
    return UserService(
        db,
        hasher=state.hasher,
        tokens=state.tokens,
        password_min_length=state.settings.password_min_length,
    )


# ─── Register ────────────────────────────────────────────


@router.post("/register", response_model=AuthResponse, status_code=201)
async def register(body: RegisterRequest, svc: UserService = Depends(get_user_service)):
    """Create a new user account and log it in."""
    user, token = await svc.register(
        name=body.name,
        email=body.email,
        password=body.password,
        phone=body.phone,
    )
    return AuthResponse(
        message="Registration successful",
        user=UserRead.model_validate(user),
        token=token,
    )


# ─── Login ───────────────────────────────────────────────


@router.post("/login", response_model=AuthResponse)
async def login(body: LoginRequest, svc: UserService = Depends(get_user_service)):
    """Login with email and password → user + JWT."""
    user, token = await svc.authenticate(email=body.email, password=body.password)
    return AuthResponse(
        message="Login successful",
        user=UserRead.model_validate(user),
        token=token,
    )
