"""Authentication API."""
from fastapi import APIRouter, HTTPException, status, Depends
from pydantic import BaseModel
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.security import (
    UserExistsError,
    authenticate_user,
    create_token_for_user,
    create_user,
    get_current_user,
    get_current_user_id,
)

router = APIRouter()

MIN_PASSWORD_LENGTH = 6


class CredentialsRequest(BaseModel):
    email: str
    password: str


class UserInfo(BaseModel):
    id: int
    email: str


class TokenResponse(BaseModel):
    message: str = "Login successful."
    access_token: str
    token_type: str = "bearer"
    user: UserInfo


@router.post("/register", status_code=status.HTTP_201_CREATED)
def register(request: CredentialsRequest, db: Session = Depends(get_db)):
    if not request.email.strip() or len(request.password) < MIN_PASSWORD_LENGTH:
        raise HTTPException(
            status_code=400,
            detail=f"Email is required and password must be at least {MIN_PASSWORD_LENGTH} characters.",
        )
    try:
        create_user(db, request.email.strip(), request.password)
    except UserExistsError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    return {"message": "Registration successful! Redirecting to login."}


@router.post("/login", response_model=TokenResponse)
def login(request: CredentialsRequest, db: Session = Depends(get_db)):
    user = authenticate_user(db, request.email.strip(), request.password)
    if not user:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid email or password.")
    return TokenResponse(
        access_token=create_token_for_user(user),
        user=UserInfo(id=user.id, email=user.email),
    )


@router.get("/me", response_model=UserInfo)
async def get_me(
    user_id: int = Depends(get_current_user_id),
    current_user: dict = Depends(get_current_user),
):
    return UserInfo(id=user_id, email=current_user.get("email", ""))
