from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from jobtracker.auth import (
    TokenClaims,
    create_access_token,
    get_current_claims,
    hash_password,
    password_too_long,
    verify_password,
)
from jobtracker.database import get_db
from jobtracker.errors import AuthError, ConflictError, NotFoundError, ValidationError
from jobtracker.models.user import User
from jobtracker.rate_limit import client_key
from jobtracker.schemas.auth import AuthResponse, LoginRequest, MeResponse, RegisterRequest, UserOut


logger = logging.getLogger(__name__)

router = APIRouter()

MIN_PASSWORD_LENGTH = 6
DUPLICATE_USER_MESSAGE = "User with this email or username already exists"
INVALID_CREDENTIALS_MESSAGE = "Invalid email or password"


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(payload: RegisterRequest, db: Session = Depends(get_db)) -> AuthResponse:
    username = (payload.username or "").strip()
    email = (payload.email or "").strip()
    password = payload.password or ""
    if not username or not email or not password:
        raise ValidationError("Username, email, and password are required")
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters long")
    if password_too_long(password):
        raise ValidationError("Password must be at most 72 bytes long")

    existing = db.query(User.id).filter(or_(User.email == email, User.username == username)).first()
    if existing:
        raise ConflictError(DUPLICATE_USER_MESSAGE)

    user = User(username=username, email=email, password_hash=hash_password(password))
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # lost a race with a concurrent registration
        db.rollback()
        raise ConflictError(DUPLICATE_USER_MESSAGE)
    db.refresh(user)
    logger.info("Registered user %s (%s)", user.id, user.username)

    token = create_access_token(user.id, user.username)
    return AuthResponse(message="User created successfully", token=token, user=UserOut.model_validate(user))


@router.post("/login", response_model=AuthResponse)
def login(payload: LoginRequest, request: Request, db: Session = Depends(get_db)) -> AuthResponse:
    email = (payload.email or "").strip()
    password = payload.password or ""
    if not email or not password:
        raise ValidationError("Email and password are required")

    user = db.query(User).filter(User.email == email).first()
    if not user or not verify_password(password, user.password_hash):
        logger.warning("Failed login attempt from %s", client_key(request))
        raise AuthError(INVALID_CREDENTIALS_MESSAGE)

    logger.info("User %s logged in", user.id)
    token = create_access_token(user.id, user.username)
    return AuthResponse(message="Login successful", token=token, user=UserOut.model_validate(user))


@router.get("/me", response_model=MeResponse)
def me(
    claims: TokenClaims = Depends(get_current_claims),
    db: Session = Depends(get_db),
) -> MeResponse:
    user = db.get(User, claims.user_id)
    if not user:
        raise NotFoundError("User not found")
    return MeResponse(user=UserOut.model_validate(user))
