"""Service providers for route handlers."""
from functools import lru_cache

from fastapi import Depends
from sqlalchemy.orm import Session

from mychat.db.session import get_db
from mychat.services import AvatarService, ChatService, ContactService, ProfileService


def get_contact_service(db: Session = Depends(get_db)) -> ContactService:
    return ContactService(db)


@lru_cache()
def get_avatar_service() -> AvatarService:
    return AvatarService()


def get_profile_service(
    db: Session = Depends(get_db),
    contacts: ContactService = Depends(get_contact_service),
    avatars: AvatarService = Depends(get_avatar_service),
) -> ProfileService:
    return ProfileService(db, contacts, avatars)


def get_chat_service() -> ChatService:
    return ChatService()
