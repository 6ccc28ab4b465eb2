from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from wknd.database import persistence_guard
from wknd.exceptions import ValidationError
from wknd.models import User
from wknd.auth.schemas import UserCreate, UserUpdate, LoginRequest
from wknd.auth.utils import get_password_hash, verify_password
from typing import Optional

MIN_PASSWORD_LENGTH = 6

class UserService:
    @staticmethod
    def get_user_by_email(db: Session, email: str) -> Optional[User]:
        """Get user by email"""
        with persistence_guard(db, "load user"):
            return db.query(User).filter(User.email == email.lower()).first()

    @staticmethod
    def get_user_by_id(db: Session, user_id: int) -> Optional[User]:
        """Get user by ID"""
        with persistence_guard(db, "load user"):
            return db.query(User).filter(User.id == user_id).first()

    @staticmethod
    def create_user(db: Session, user: UserCreate, is_admin: bool = False) -> User:
        """Create a new user"""
        if not all([user.email, user.password, user.first_name, user.last_name]):
            raise ValidationError("All fields are required")
        if len(user.password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters long")

        email = user.email.lower()
        if UserService.get_user_by_email(db, email):
            raise ValidationError("User with this email already exists")

        db_user = User(
            email=email,
            password=get_password_hash(user.password),
            first_name=user.first_name,
            last_name=user.last_name,
            is_admin=is_admin
        )

        with persistence_guard(db, "create user"):
            try:
                db.add(db_user)
                db.commit()
                db.refresh(db_user)
            except IntegrityError:
                db.rollback()
                raise ValidationError("User with this email already exists")
        return db_user

    @staticmethod
    def authenticate_user(db: Session, login_data: LoginRequest) -> Optional[User]:
        """Authenticate user with email and password"""
        if not login_data.email or not login_data.password:
            raise ValidationError("Email and password are required")

        user = UserService.get_user_by_email(db, login_data.email)
        if not user:
            return None
        if not verify_password(login_data.password, user.password):
            return None
        return user

    @staticmethod
    def update_user(db: Session, user_id: int, user_update: UserUpdate) -> Optional[User]:
        """Update first and last name"""
        if not user_update.first_name or not user_update.last_name:
            raise ValidationError("First name and last name are required")

        db_user = UserService.get_user_by_id(db, user_id)
        if not db_user:
            return None

        with persistence_guard(db, "update user"):
            db_user.first_name = user_update.first_name
            db_user.last_name = user_update.last_name
            db.commit()
            db.refresh(db_user)
        return db_user
