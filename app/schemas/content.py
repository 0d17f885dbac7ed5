"""Contact, testimonial and team schemas"""

from datetime import datetime
from typing import Optional
from uuid import UUID
from pydantic import BaseModel, EmailStr, Field


class ContactMessageCreate(BaseModel):
    """Contact form submission; every field is required"""
    first_name: str = Field(..., min_length=1, alias="firstName")
    last_name: str = Field(..., min_length=1, alias="lastName")
    email: EmailStr
    phone: str = Field(..., min_length=1)
    subject: str = Field(..., min_length=1)
    message: str = Field(..., min_length=1)

    class Config:
        populate_by_name = True


class ContactMessageUpdate(BaseModel):
    is_read: Optional[bool] = None


class ContactMessageResponse(BaseModel):
    """Contact message response"""
    id: UUID
    first_name: str
    last_name: str
    email: str
    phone: str
    subject: str
    message: str
    is_read: bool
    created_at: datetime

    class Config:
        from_attributes = True


class TestimonialCreate(BaseModel):
    """Create testimonial request"""
    name: str = Field(..., min_length=1)
    photo: Optional[str] = None
    rating: int = Field(..., ge=1, le=5)
    content: str = Field(..., min_length=1)


class TestimonialUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    photo: Optional[str] = None
    rating: Optional[int] = Field(None, ge=1, le=5)
    content: Optional[str] = Field(None, min_length=1)


class TestimonialResponse(BaseModel):
    """Testimonial response"""
    id: UUID
    name: str
    photo: Optional[str]
    rating: int
    content: str
    created_at: datetime

    class Config:
        from_attributes = True


class TeamMemberCreate(BaseModel):
    """Create team member request"""
    name: str = Field(..., min_length=1)
    email: EmailStr
    phone: Optional[str] = None
    role: str = Field(..., min_length=1)
    quote: Optional[str] = None
    image: Optional[str] = None


class TeamMemberUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    role: Optional[str] = Field(None, min_length=1)
    quote: Optional[str] = None
    image: Optional[str] = None


class TeamMemberResponse(BaseModel):
    """Team member response"""
    id: UUID
    name: str
    email: str
    phone: Optional[str]
    role: str
    quote: Optional[str]
    image: Optional[str]
    created_at: datetime

    class Config:
        from_attributes = True
