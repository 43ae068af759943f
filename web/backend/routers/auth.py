from typing import Optional

from fastapi import APIRouter, Depends, Header, HTTPException
from loguru import logger

from nowplaying.core.config import Config
from nowplaying.core.errors import Unauthorized
from nowplaying.domain.auth import (
    ADMIN_ROLE,
    authorize,
    check_admin_credentials,
    issue_token,
)
from ..deps import get_config
from ..schemas import LoginRequest, LoginResponse, UserInfo, VerifyResponse

router = APIRouter()


@router.post("/admin/login", response_model=LoginResponse)
async def login(request: LoginRequest, config: Config = Depends(get_config)):
    """Exchange the admin username/password for a signed token."""
    if not request.username or not request.password:
        raise HTTPException(
            status_code=400, detail="Username and password are required"
        )

    if not check_admin_credentials(request.username, request.password, config.auth):
        logger.warning(f"Failed admin login for {request.username!r}")
        raise HTTPException(status_code=401, detail="Invalid credentials")

    token = issue_token(request.username, config.auth)
    logger.info(f"Admin login: {request.username}")
    return LoginResponse(
        message="Login successful",
        token=token,
        user=UserInfo(username=request.username, role=ADMIN_ROLE),
    )


@router.get("/admin/verify", response_model=VerifyResponse)
async def verify(
    authorization: Optional[str] = Header(default=None),
    config: Config = Depends(get_config),
):
    """Report whether the bearer token is valid and whose it is."""
    try:
        claims = authorize(authorization, config.auth)
    except Unauthorized as e:
        raise HTTPException(status_code=401, detail=str(e))

    return VerifyResponse(
        message="Token valid",
        user=UserInfo(username=claims.username, role=claims.role),
    )
