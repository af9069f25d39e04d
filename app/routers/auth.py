from fastapi import APIRouter, Depends, Response, status, Request
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from app.database import get_db
from app.models.business import Business
from app.models.users import User
from app.schemas.user import UserCreate, UserLogin, UserResponse
from app.core.auth import get_current_user
from app.core.hashing import hash_password, verify_password
from app.core.jwt import create_session_token, session_max_age
from app.core.rate_limiter import limiter
from app.core.config import settings
from app.core.errors import AuthenticationError, ConflictError, StoreError, ValidationError

router = APIRouter(prefix="/auth", tags=["Authentication"])

COMMON_PASSWORDS = {
    "password",
    "password123",
    "12345678",
    "qwerty123",
    "admin123",
}


# ---------------- SIGNUP ----------------
@router.post("/signup", status_code=status.HTTP_201_CREATED)
@limiter.limit("3/minute")
def signup(request: Request, user_data: UserCreate, db: Session = Depends(get_db)):
    raw_password = user_data.password.lower()

    if raw_password in COMMON_PASSWORDS:
        raise ValidationError("Password is too common. Please choose a stronger password.")

    if user_data.password.isdigit():
        raise ValidationError("Password cannot be numbers only.")

    if db.query(User).filter(User.email == user_data.email).first():
        raise ConflictError("Email already exists")

    if db.query(Business).filter(Business.name == user_data.business_name).first():
        raise ConflictError("Business name already exists")

    try:
        business = Business(name=user_data.business_name)
        db.add(business)
        db.flush()

        user = User(
            email=user_data.email,
            password_hash=hash_password(user_data.password),
            display_name=user_data.display_name,
            business_id=business.id,
        )
        db.add(user)
        db.commit()

    except SQLAlchemyError:
        db.rollback()
        raise StoreError("Unable to create account")

    return {"message": "Account created successfully. Please login."}


# ---------------- LOGIN (SESSION COOKIE) ----------------
@router.post("/login")
@limiter.limit("5/minute")
def login(
    request: Request,
    response: Response,
    credentials: UserLogin,
    db: Session = Depends(get_db),
):
    user = db.query(User).filter(User.email == credentials.email).first()

    if not user or not verify_password(credentials.password, user.password_hash):
        raise AuthenticationError("Invalid credentials")

    token = create_session_token(
        data={"sub": str(user.id), "business_id": user.business_id}
    )

    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=token,
        max_age=int(session_max_age().total_seconds()),
        httponly=True,
        secure=settings.SESSION_COOKIE_SECURE,
        samesite="strict",
        path="/",
    )

    return {"status": "success"}


# ---------------- LOGOUT ----------------
@router.post("/logout")
def logout(response: Response):
    response.delete_cookie(key=settings.SESSION_COOKIE_NAME, path="/")
    return {"status": "success"}


# ---------------- CURRENT USER ----------------
@router.get("/me", response_model=UserResponse)
def me(current_user=Depends(get_current_user)):
    return current_user
