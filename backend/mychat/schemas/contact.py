from typing import Optional
from datetime import datetime
from pydantic import BaseModel, Field
from mychat.models.contact import ContactStatus


class ContactSearchRequest(BaseModel):
    query: str = Field(..., min_length=1, max_length=100, description="Matched against username, display name or email")
    limit: int = Field(default=20, ge=1, le=50)


class SendContactRequest(BaseModel):
    receiver_id: str = Field(..., min_length=1)


class UpdateContactRequest(BaseModel):
    status: ContactStatus


class UserSummary(BaseModel):
    id: str
    username: Optional[str] = None
    display_name: Optional[str] = None
    avatar_url: Optional[str] = None

    class Config:
        from_attributes = True


class UserSearchResult(BaseModel):
    user_id: str
    username: Optional[str] = None
    display_name: Optional[str] = None
    email: Optional[str] = None
    avatar_url: Optional[str] = None
    contact_status: Optional[ContactStatus] = None
    contact_id: Optional[int] = None


class ContactResponse(BaseModel):
    """One relationship, seen from the viewer's side."""
    id: int
    user_id: str
    username: Optional[str] = None
    display_name: Optional[str] = None
    email: Optional[str] = None
    avatar_url: Optional[str] = None
    status: ContactStatus
    created_at: datetime
    updated_at: datetime
    is_requester: bool


class ContactRequestResponse(BaseModel):
    id: int
    requester_id: str
    receiver_id: str
    status: ContactStatus
    created_at: datetime
    updated_at: datetime
    requester: UserSummary
    receiver: UserSummary
