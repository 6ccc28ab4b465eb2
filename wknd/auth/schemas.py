from pydantic import EmailStr
from typing import Optional
from datetime import datetime

from wknd.schemas import CamelModel

class UserCreate(CamelModel):
    email: Optional[EmailStr] = None
    password: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None

class LoginRequest(CamelModel):
    email: Optional[EmailStr] = None
    password: Optional[str] = None

class UserUpdate(CamelModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None

class User(CamelModel):
    id: int
    email: EmailStr
    first_name: str
    last_name: str
    created_at: Optional[datetime] = None

# Auth Response
class AuthResponse(CamelModel):
    message: str
    token: str
    user: User

class ProfileResponse(CamelModel):
    user: User

class TokenUser(CamelModel):
    user_id: int
    email: Optional[str] = None

class VerifyResponse(CamelModel):
    valid: bool = True
    user: TokenUser
