from fastapi import APIRouter, Depends, HTTPException
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from myskool.config import settings
from myskool.database import get_db
from myskool.models.user import User
from myskool.schemas.user import Token, UserCreate, UserOut
from myskool.utils.auth import create_access_token, get_current_user
from myskool.utils.hashing import hash_password, verify_password

import logging
logger = logging.getLogger("myskool.auth")


router = APIRouter(prefix=f"{settings.API_PREFIX}/auth", tags=["Auth"])


@router.post("/register", response_model=UserOut)
def register(user_data: UserCreate, db: Session = Depends(get_db)):
    username = user_data.username.strip()

    exists = db.query(User).filter(User.username == username).first()
    if exists:
        raise HTTPException(status_code=400, detail="Username already exists")

    new_user = User(
        username=username,
        password_hash=hash_password(user_data.password),
        role="user",
    )
    db.add(new_user)
    db.commit()
    db.refresh(new_user)
    logger.info("Registered user %s", new_user.username)
    return new_user


@router.post("/login", response_model=Token)
def login(form_data: OAuth2PasswordRequestForm = Depends(), db: Session = Depends(get_db)):
    user = db.query(User).filter(User.username == form_data.username).first()
    if not user or not verify_password(form_data.password, user.password_hash):
        logger.info("Failed login for %s", form_data.username)
        raise HTTPException(status_code=403, detail="Invalid credentials")

    token = create_access_token({"sub": user.username})
    return Token(access_token=token)


@router.get("/me", response_model=UserOut)
def get_me(current_user: User = Depends(get_current_user)):
    return current_user
