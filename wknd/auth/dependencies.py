from typing import Optional
from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session
from wknd.database import get_db
from wknd.auth.utils import invalid_token_exception, verify_token
from wknd.auth.service import UserService
from wknd.models import User

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login", auto_error=False)

def get_token_payload(token: Optional[str] = Depends(oauth2_scheme)) -> dict:
    """Decode the bearer token of the current request"""
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Access token required",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return verify_token(token, invalid_token_exception())

def get_current_user(payload: dict = Depends(get_token_payload), db: Session = Depends(get_db)) -> User:
    """Get current authenticated user"""
    user = UserService.get_user_by_id(db, user_id=payload["user_id"])
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found"
        )
    return user

def require_admin(current_user: User = Depends(get_current_user)) -> User:
    """Require admin role for access"""
    if not current_user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required"
        )
    return current_user
