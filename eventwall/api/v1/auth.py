"""Curator login endpoint."""

from fastapi import APIRouter

from eventwall.core.deps import DBSession
from eventwall.schemas.auth import Token, UserLogin
from eventwall.services.auth_service import AuthService

router = APIRouter()


@router.post("", response_model=Token)
async def login(credentials: UserLogin, db: DBSession) -> Token:
    """
    Exchange curator credentials for a bearer token.

    - **username**: Curator username
    - **password**: Curator password
    """
    return await AuthService(db).login(credentials)
