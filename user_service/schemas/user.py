"""
Pydantic schemas for User Service.
"""
from typing import Optional
from pydantic import BaseModel, EmailStr, Field


class UserBase(BaseModel):
    """Base user schema"""
    name: str = Field(..., min_length=1, max_length=100, description="User name")
    email: EmailStr = Field(..., description="Unique user email")


class UserCreate(UserBase):
    """Schema for creating a user"""
    pass


class UserUpdate(BaseModel):
    """Schema for updating a user; omitted fields are left untouched"""
    name: Optional[str] = Field(None, min_length=1, max_length=100, description="User name")
    email: Optional[EmailStr] = Field(None, description="Unique user email")


class UserResponse(UserBase):
    """Schema for user response"""
    id: int = Field(..., description="User ID")

    class Config:
        from_attributes = True


class Message(BaseModel):
    """Error body returned for 404 and 409 responses"""
    message: str
