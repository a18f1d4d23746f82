# auth_routes.py
from fastapi import APIRouter, HTTPException, Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from datetime import datetime, timedelta, timezone
from typing import Dict, Optional
import bcrypt
import jwt as pyjwt

import config
from models.user import User, UserPublic, LoginRequest, LoginResponse
from models.enums import UserRole

router = APIRouter(tags=["Authentication"])
security = HTTPBearer()


# -------------------- Password utils -------------------- #
def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode(), bcrypt.gensalt()).decode()


def verify_password(password: str, hashed: str) -> bool:
    return bcrypt.checkpw(password.encode(), hashed.encode())


# -------------------- Demo accounts -------------------- #
# No user management: one admin and one citizen, as in the original deployment
USERS: Dict[str, User] = {
    "1": User(id="1", username="admin", role=UserRole.ADMIN, password_hash=hash_password("admin123")),
    "2": User(id="2", username="user", role=UserRole.CITIZEN, password_hash=hash_password("user123")),
}


def find_user_by_username(username: str) -> Optional[User]:
    for user in USERS.values():
        if user.username == username:
            return user
    return None


# -------------------- JWT -------------------- #
def create_jwt(user: User) -> str:
    payload = {
        "sub": user.id,
        "role": user.role.value,
        "username": user.username,
        "exp": datetime.now(timezone.utc) + timedelta(minutes=config.JWT_EXPIRATION_MINUTES),
    }
    return pyjwt.encode(payload, config.JWT_SECRET, algorithm=config.JWT_ALGORITHM)


def decode_jwt(token: str) -> Optional[dict]:
    try:
        return pyjwt.decode(token, config.JWT_SECRET, algorithms=[config.JWT_ALGORITHM])
    except pyjwt.PyJWTError:
        return None


# -------------------- Dependencies for the authenticated user -------------------- #
async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security)
) -> UserPublic:
    payload = decode_jwt(credentials.credentials)
    if not payload or not payload.get("sub"):
        raise HTTPException(status_code=401, detail="Invalid token")

    user = USERS.get(payload["sub"])
    if not user:
        raise HTTPException(status_code=404, detail="User not found")

    return UserPublic(id=user.id, username=user.username, role=user.role)


def require_role(*roles: UserRole):
    async def checker(current_user: UserPublic = Depends(get_current_user)) -> UserPublic:
        if current_user.role not in roles:
            raise HTTPException(status_code=403, detail="Insufficient permissions")
        return current_user
    return checker


# -------------------- Login -------------------- #
@router.post("/login", response_model=LoginResponse)
def login(data: LoginRequest):
    user = find_user_by_username(data.username)
    if not user or not verify_password(data.password, user.password_hash):
        raise HTTPException(status_code=401, detail="Invalid credentials")

    return LoginResponse(
        token=create_jwt(user),
        user=UserPublic(id=user.id, username=user.username, role=user.role),
    )


# -------------------- Current user -------------------- #
@router.get("/me", response_model=UserPublic)
def get_me(current_user: UserPublic = Depends(get_current_user)):
    return current_user
