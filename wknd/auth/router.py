from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from wknd.database import get_db
from wknd.auth.schemas import (
    UserCreate, User, UserUpdate, LoginRequest, AuthResponse, ProfileResponse,
    TokenUser, VerifyResponse
)
from wknd.auth.service import UserService
from wknd.auth.utils import create_access_token
from wknd.auth.dependencies import get_current_user, get_token_payload
from wknd.models import User as UserModel
from wknd.schemas import ActionResponse

router = APIRouter()

def _issue_token(user: UserModel) -> str:
    return create_access_token(data={"sub": str(user.id), "email": user.email})

@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register_user(user: UserCreate, db: Session = Depends(get_db)):
    """Register a new user"""
    db_user = UserService.create_user(db=db, user=user)
    return AuthResponse(
        message="User created successfully",
        token=_issue_token(db_user),
        user=User.model_validate(db_user)
    )

@router.post("/login", response_model=AuthResponse)
def login(login_data: LoginRequest, db: Session = Depends(get_db)):
    """Exchange email and password for a bearer token"""
    user = UserService.authenticate_user(db, login_data)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return AuthResponse(
        message="Login successful",
        token=_issue_token(user),
        user=User.model_validate(user)
    )

@router.get("/profile", response_model=ProfileResponse)
def read_profile(current_user: UserModel = Depends(get_current_user)):
    """Get current user profile"""
    return ProfileResponse(user=User.model_validate(current_user))

@router.put("/profile", response_model=ActionResponse)
def update_profile(
    user_update: UserUpdate,
    current_user: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Update current user profile"""
    updated_user = UserService.update_user(db=db, user_id=current_user.id, user_update=user_update)
    if not updated_user:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found"
        )
    return ActionResponse(message="Profile updated successfully")

@router.get("/verify", response_model=VerifyResponse)
def verify(payload: dict = Depends(get_token_payload)):
    """Check that the bearer token is valid"""
    return VerifyResponse(user=TokenUser(user_id=payload["user_id"], email=payload.get("email")))
