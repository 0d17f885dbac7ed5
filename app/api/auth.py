"""Back-office authentication and account management"""

from datetime import datetime, timedelta
from typing import List, Optional
from uuid import UUID

import structlog
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer, OAuth2PasswordRequestForm
from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.database import get_db
from app.errors import ConflictError, NotFoundError
from app.models.user import User, UserRole
from app.schemas.auth import Token, RefreshRequest, UserCreate, UserUpdate, UserResponse

router = APIRouter()
logger = structlog.get_logger()

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login")

ACCESS_TOKEN = "access"
REFRESH_TOKEN = "refresh"


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def _encode(user: User, token_type: str, lifetime: timedelta) -> str:
    payload = {
        "sub": str(user.id),
        "type": token_type,
        "exp": datetime.utcnow() + lifetime,
    }
    if token_type == ACCESS_TOKEN:
        payload["role"] = user.role.value
    return jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def create_access_token(user: User) -> str:
    return _encode(user, ACCESS_TOKEN, timedelta(minutes=settings.access_token_expire_minutes))


def create_refresh_token(user: User) -> str:
    return _encode(user, REFRESH_TOKEN, timedelta(days=settings.refresh_token_expire_days))


def decode_token(token: str, expected_type: str) -> Optional[UUID]:
    """User id carried by a token of the expected type, or None when the token is unusable"""
    try:
        payload = jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
        user_id = payload.get("sub")
        if user_id is None or payload.get("type") != expected_type:
            return None
        return UUID(user_id)
    except (JWTError, ValueError):
        return None


async def authenticate_user(db: AsyncSession, email: str, password: str) -> Optional[User]:
    result = await db.execute(select(User).where(User.email == email.strip().lower()))
    user = result.scalar_one_or_none()
    if user is None or not verify_password(password, user.hashed_password):
        return None
    return user


async def _issue_tokens(db: AsyncSession, user: User) -> Token:
    """New access and refresh tokens; the stored refresh token is rotated"""
    access_token = create_access_token(user)
    refresh_token = create_refresh_token(user)

    user.refresh_token = refresh_token
    await db.commit()

    return Token(
        access_token=access_token,
        refresh_token=refresh_token,
        expires_in=settings.access_token_expire_minutes * 60,
    )


async def get_current_user(
    token: str = Depends(oauth2_scheme),
    db: AsyncSession = Depends(get_db),
) -> User:
    """Get current authenticated user from token"""
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    user_id = decode_token(token, ACCESS_TOKEN)
    if user_id is None:
        raise credentials_exception

    result = await db.execute(select(User).where(User.id == user_id))
    user = result.scalar_one_or_none()

    if user is None or not user.is_active:
        raise credentials_exception

    return user


def require_role(required_role: UserRole):
    """Dependency factory for role-based access control"""
    async def role_checker(current_user: User = Depends(get_current_user)) -> User:
        if not current_user.has_permission(required_role):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Insufficient permissions",
            )
        return current_user
    return role_checker


# Staff read orders, messages and the team page; admins manage everything
require_staff = require_role(UserRole.STAFF)
require_admin = require_role(UserRole.ADMIN)


@router.post("/login", response_model=Token)
async def login(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: AsyncSession = Depends(get_db),
):
    """Authenticate with email and password"""
    user = await authenticate_user(db, form_data.username, form_data.password)

    if user is None:
        logger.info("Failed login attempt", email=form_data.username)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User account is disabled",
        )

    user.last_login = datetime.utcnow()
    logger.info("User logged in", user_id=str(user.id), role=user.role.value)
    return await _issue_tokens(db, user)


@router.post("/refresh", response_model=Token)
async def refresh_token(
    request: RefreshRequest,
    db: AsyncSession = Depends(get_db),
):
    """Exchange a refresh token for a new token pair"""
    invalid = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid refresh token",
    )

    user_id = decode_token(request.refresh_token, REFRESH_TOKEN)
    if user_id is None:
        raise invalid

    result = await db.execute(select(User).where(User.id == user_id))
    user = result.scalar_one_or_none()

    if not user or not user.is_active or user.refresh_token != request.refresh_token:
        raise invalid

    return await _issue_tokens(db, user)


@router.post("/logout")
async def logout(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Invalidate the stored refresh token"""
    current_user.refresh_token = None
    await db.commit()
    return {"message": "Successfully logged out"}


@router.get("/me", response_model=UserResponse)
async def get_current_user_info(
    current_user: User = Depends(get_current_user),
):
    return current_user


@router.post("/register", response_model=UserResponse, status_code=201)
async def register_user(
    user_data: UserCreate,
    current_user: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    """Create another back-office account"""
    email = user_data.email.lower()
    result = await db.execute(select(User).where(User.email == email))
    if result.scalar_one_or_none():
        raise ConflictError("Email already registered")

    user = User(
        email=email,
        hashed_password=get_password_hash(user_data.password),
        full_name=user_data.full_name,
        role=user_data.role,
        is_active=True,
    )
    db.add(user)
    await db.commit()
    await db.refresh(user)

    logger.info("User registered", user_id=str(user.id), role=user.role.value, created_by=str(current_user.id))
    return user


@router.get("/users", response_model=List[UserResponse])
async def list_users(
    current_user: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    """List back-office accounts"""
    result = await db.execute(select(User).order_by(User.created_at, User.email))
    return result.scalars().all()


@router.patch("/users/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: UUID,
    user_data: UserUpdate,
    current_user: User = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    """Change an account's name, role, active flag or password"""
    result = await db.execute(select(User).where(User.id == user_id))
    user = result.scalar_one_or_none()
    if user is None:
        raise NotFoundError("User not found")

    updates = user_data.model_dump(exclude_unset=True, exclude_none=True)
    if user.id == current_user.id and (
        updates.get("is_active") is False or updates.get("role", UserRole.ADMIN) != UserRole.ADMIN
    ):
        raise ConflictError("Admins cannot deactivate or demote themselves")

    password = updates.pop("password", None)
    if password:
        user.hashed_password = get_password_hash(password)
    if updates.get("is_active") is False:
        user.refresh_token = None
    for field, value in updates.items():
        setattr(user, field, value)

    await db.commit()
    await db.refresh(user)

    logger.info("User updated", user_id=str(user.id), fields=sorted(user_data.model_dump(exclude_unset=True)))
    return user
