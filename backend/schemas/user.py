from pydantic import BaseModel, EmailStr, Field
from typing import List, Optional

# Shared properties for user models
class UserBase(BaseModel):
    email: EmailStr

# Schema for user authentication credentials
class UserLogin(UserBase):
    password: str

# Schema for user registration requests
class UserCreate(UserBase):
    password: str = Field(min_length=6)
    full_name: Optional[str] = None

# Output schema for user profile details
class UserResponse(UserBase):
    id: int
    full_name: Optional[str] = None
    roles: List[str] = []

# Schema for JWT authentication token response
class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"
