"""User API routes."""
import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.user import User
from app.schemas.user import UserCreate, UserOut, UserRegistered
from app.security import create_access_token, get_current_user

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/", response_model=UserRegistered, status_code=status.HTTP_201_CREATED)
def register_user(payload: UserCreate, db: Session = Depends(get_db)):
    """Register a user and hand back a bearer token for subsequent calls."""
    existing = db.query(User).filter(User.email == payload.email).first()
    if existing:
        raise HTTPException(status_code=409, detail="A user with this email already exists")

    user = User(**payload.model_dump())
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.warning("Registration for %s lost a race on the unique email", payload.email)
        raise HTTPException(status_code=409, detail="A user with this email already exists")
    db.refresh(user)
    logger.info("Registered user %s (%s)", user.user_id, user.email)
    return UserRegistered(
        user_id=user.user_id,
        name=user.name,
        email=user.email,
        created_at=user.created_at,
        access_token=create_access_token(user.user_id),
    )


@router.get("/me", response_model=UserOut)
def get_me(current_user: User = Depends(get_current_user)):
    """The authenticated user."""
    return current_user


@router.get("/{user_id}", response_model=UserOut)
def get_user(user_id: str, db: Session = Depends(get_db), _: User = Depends(get_current_user)):
    """Fetch a single user by ID."""
    user = db.query(User).filter(User.user_id == user_id).first()
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user
