# backend/routes/auth.py
from fastapi import APIRouter, Depends, HTTPException, status, Request
from sqlalchemy.orm import Session
from sqlalchemy import func
from utils.hashing import get_password_hash, verify_password
from utils.tokenJWT import create_access_token, get_current_user
from utils.audit import write_log
from utils.permissions import ensure_first_user_is_admin, user_roles
from models.users import User
from schemas import user as schemas
from database import get_db

router = APIRouter(tags=["Auth"])

def _client_ip(request: Request):
    return request.client.host if request and request.client else None

def _user_out(db: Session, user: User) -> schemas.UserResponse:
    return schemas.UserResponse(
        id=user.id, email=user.email, full_name=user.full_name, roles=user_roles(db, user.id)
    )

# Register a new user; the very first account becomes the shop administrator
@router.post("/register", response_model=schemas.UserResponse, status_code=status.HTTP_201_CREATED)
def register(user: schemas.UserCreate, request: Request, db: Session = Depends(get_db)):
    normalized_email = user.email.strip().lower()

    db_user = db.query(User).filter(func.lower(User.email) == normalized_email).first()
    if db_user:
        write_log(db, action="REGISTER", resource="auth", status="FAIL", ip=_client_ip(request),
                  meta={"email": normalized_email, "reason": "Email exists"})
        raise HTTPException(status_code=400, detail="Email already registered")

    new_user = User(
        email=normalized_email,
        password_hash=get_password_hash(user.password),
        full_name=user.full_name,
    )
    db.add(new_user)
    db.flush()
    made_admin = ensure_first_user_is_admin(db, new_user.id)
    db.commit()
    db.refresh(new_user)

    write_log(db, user_id=new_user.id, action="REGISTER", resource="auth", status="SUCCESS",
              ip=_client_ip(request), meta={"email": new_user.email, "admin": made_admin})

    return _user_out(db, new_user)


# Authenticate user and issue JWT token
@router.post("/login", response_model=schemas.Token)
def login(payload: schemas.UserLogin, request: Request, db: Session = Depends(get_db)):
    db_user = db.query(User).filter(User.email == payload.email.strip().lower()).first()

    if not db_user or not verify_password(payload.password, db_user.password_hash):
        write_log(db, user_id=(db_user.id if db_user else None), action="LOGIN", resource="auth",
                  status="FAIL", ip=_client_ip(request), meta={"email": payload.email})
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")

    # Only identity goes into the token, roles are looked up per request
    access_token = create_access_token(data={"sub": db_user.email})

    write_log(db, user_id=db_user.id, action="LOGIN", resource="auth",
              status="SUCCESS", ip=_client_ip(request), meta={"email": db_user.email})

    return {"access_token": access_token, "token_type": "bearer"}


# Current user with fresh roles, used by the dashboard as a display hint only
@router.get("/me", response_model=schemas.UserResponse)
def me(current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return _user_out(db, current_user)
