from pydantic import BaseModel, Field
from models.enums import UserRole

# Internal account record
class User(BaseModel):
    id: str
    username: str
    role: UserRole
    password_hash: str

class LoginRequest(BaseModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)

# Public user data (never carries the hash)
class UserPublic(BaseModel):
    id: str
    username: str
    role: UserRole

class LoginResponse(BaseModel):
    token: str
    user: UserPublic
