from pydantic import BaseModel, Field
from typing import Optional

EMAIL_REGX = r"^[^@]+@[^@]+\.[^@]+$"


# Schema for signup
class UserCreate(BaseModel):
    email: str = Field(..., pattern=EMAIL_REGX)
    password: str = Field(..., min_length=6)

# Schema for login (JSON body)
class UserLogin(BaseModel):
    email: str = Field(..., pattern=EMAIL_REGX)
    password: str

# Schema for returning user (without password)
class UserResponse(BaseModel):
    id: str
    email: str

    class Config:
        from_attributes = True

# Schema for signup response. access_token is None when the provider
# does not open a session on sign-up.
class UserSignupResponse(BaseModel):
    user: UserResponse
    access_token: Optional[str] = None
    token_type: str = "bearer"

class LoginResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user_id: str
