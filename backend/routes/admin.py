# backend/routes/admin.py
from fastapi import APIRouter, Depends, HTTPException, status, Query, Request
from typing import List, Optional, Literal
from sqlalchemy.orm import Session
from pydantic import BaseModel
from database import get_db
from models.users import User, UserRole
from utils.audit import write_log
from utils.permissions import ADMIN_ROLE, grant_role, user_roles
from utils.tokenJWT import require_admin
from schemas.user import UserResponse

router = APIRouter(prefix="/admin", tags=["Admin"])

# Schema for paginated user list response
class PaginatedUsersResponse(BaseModel):
    items: List[UserResponse]
    total: int
    page: int
    page_size: int

class RoleUpdate(BaseModel):
    admin: bool


# Retrieve a list of users with filtering, sorting, and pagination (Admin only)
@router.get("/users", response_model=PaginatedUsersResponse)
def get_all_users(
    q: Optional[str] = Query(None, description="Search by e-mail"),
    page: int = Query(1, ge=1),
    page_size: int = Query(10, ge=1, le=100),
    sort_by: Literal["id", "email", "full_name"] = "id",
    order: Literal["asc", "desc"] = "asc",
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    query = db.query(User)

    if q:
        query = query.filter(User.email.ilike(f"%{q.lower()}%"))

    sort_map = {
        "id": User.id,
        "email": User.email,
        "full_name": User.full_name,
    }
    col = sort_map.get(sort_by, User.id)
    query = query.order_by(col.asc() if order == "asc" else col.desc())

    total = query.count()
    users = query.offset((page - 1) * page_size).limit(page_size).all()

    return {
        "items": [
            UserResponse(id=u.id, email=u.email, full_name=u.full_name, roles=user_roles(db, u.id))
            for u in users
        ],
        "total": total,
        "page": page,
        "page_size": page_size,
    }


# Grant or revoke the admin role (Admin only)
@router.put("/users/{user_id}/role", response_model=UserResponse)
def update_user_role(
    user_id: int,
    payload: RoleUpdate,
    request: Request,
    db: Session = Depends(get_db),
    admin: User = Depends(require_admin),
):
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")

    if payload.admin:
        grant_role(db, user.id, ADMIN_ROLE)
    else:
        # The shop must always keep at least one administrator
        if user.id == admin.id:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="You cannot revoke your own admin role")
        db.query(UserRole).filter(UserRole.user_id == user.id, UserRole.role == ADMIN_ROLE).delete()

    db.commit()

    write_log(db, user_id=admin.id, action="ROLE_CHANGE", resource="users", status="SUCCESS",
              ip=request.client.host if request.client else None,
              meta={"target": user.id, "admin": payload.admin})

    return UserResponse(id=user.id, email=user.email, full_name=user.full_name, roles=user_roles(db, user.id))
