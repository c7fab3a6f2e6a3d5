from fastapi import APIRouter, Depends, Response, status
from typing import List
from mychat.models.user import User
from mychat.schemas.contact import (
    ContactSearchRequest,
    SendContactRequest,
    UpdateContactRequest,
    UserSearchResult,
    ContactResponse,
    ContactRequestResponse,
)
from mychat.services.contacts import ContactService
from mychat.core.auth import get_current_user
from mychat.core.deps import get_contact_service

router = APIRouter()

@router.post("/search", response_model=List[UserSearchResult])
async def search_users(
    request: ContactSearchRequest,
    current_user: User = Depends(get_current_user),
    contacts: ContactService = Depends(get_contact_service)
):
    """
    Search users by display name, username or email, with the caller's contact status for each
    """
    return contacts.search_users(current_user.id, request.query, request.limit)

@router.get("", response_model=List[ContactResponse])
async def list_contacts(
    current_user: User = Depends(get_current_user),
    contacts: ContactService = Depends(get_contact_service)
):
    """
    Get all contacts for current user, most recently updated first
    """
    return contacts.list_contacts(current_user.id)

@router.post("/requests", response_model=ContactRequestResponse, status_code=status.HTTP_201_CREATED)
async def send_contact_request(
    request: SendContactRequest,
    response: Response,
    current_user: User = Depends(get_current_user),
    contacts: ContactService = Depends(get_contact_service)
):
    """
    Send a contact request to another user
    """
    created = contacts.send_request(current_user.id, request.receiver_id)
    response.headers["Location"] = f"/api/contacts/{created.id}"
    return created

@router.get("/{contact_id}", response_model=ContactRequestResponse)
async def get_contact(
    contact_id: int,
    current_user: User = Depends(get_current_user),
    contacts: ContactService = Depends(get_contact_service)
):
    """
    Get a specific contact by ID
    """
    return contacts.get_contact(current_user.id, contact_id)

@router.put("/{contact_id}", response_model=ContactRequestResponse)
async def update_contact(
    contact_id: int,
    request: UpdateContactRequest,
    current_user: User = Depends(get_current_user),
    contacts: ContactService = Depends(get_contact_service)
):
    """
    Update contact status (accept/reject/block)
    """
    return contacts.update_status(current_user.id, contact_id, request.status)

@router.delete("/{contact_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_contact(
    contact_id: int,
    current_user: User = Depends(get_current_user),
    contacts: ContactService = Depends(get_contact_service)
):
    """
    Delete a contact relationship
    """
    contacts.delete_contact(current_user.id, contact_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
