"""Auth router - accounts, bearer tokens and the current user's profile."""
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from pydantic import BaseModel

from app.database import get_database
from app.models.user import User, UserCreate, UserUpdate
from app.services.auth_service import AuthService
from app.utils.auth import verify_access_token


router = APIRouter(prefix="/auth", tags=["auth"])
bearer = HTTPBearer(auto_error=False)

UNAUTHORIZED_HEADERS = {"WWW-Authenticate": "Bearer"}


class LoginRequest(BaseModel):
    email: str
    password: str


class AccessToken(BaseModel):
    access_token: str
    token_type: str = "bearer"


async def get_current_user_id(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer),
) -> str:
    """
    Resolve the bearer token to a user ID.

    Every time log, project and location route depends on this, so all of
    them answer 401 without a valid token.
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers=UNAUTHORIZED_HEADERS,
        )

    try:
        return verify_access_token(credentials.credentials)
    except JWTError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication credentials",
            headers=UNAUTHORIZED_HEADERS,
        )


@router.post("/register", response_model=User, status_code=status.HTTP_201_CREATED)
async def register(user: UserCreate, db=Depends(get_database)):
    """Create an account (400 if the email is taken)."""
    try:
        return await AuthService(db).register_user(
            email=user.email,
            password=user.password,
            full_name=user.full_name,
        )
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.post("/login", response_model=AccessToken)
async def login(credentials: LoginRequest, db=Depends(get_database)):
    """Exchange email and password for an access token (401 if wrong)."""
    try:
        token = await AuthService(db).login(
            email=credentials.email,
            password=credentials.password,
        )
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
            headers=UNAUTHORIZED_HEADERS,
        )

    return AccessToken(access_token=token)


@router.get("/me", response_model=User)
async def read_profile(
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """The authenticated user's profile."""
    try:
        return await AuthService(db).get_user_by_id(user_id)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.patch("/me", response_model=User)
async def update_profile(
    user_update: UserUpdate,
    user_id: str = Depends(get_current_user_id),
    db=Depends(get_database),
):
    """Change profile metadata (currently the display name)."""
    try:
        return await AuthService(db).update_profile(user_id, user_update)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
