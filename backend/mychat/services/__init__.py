from mychat.services.avatars import AvatarFile, AvatarService
from mychat.services.chat import ChatService
from mychat.services.contacts import ContactService
from mychat.services.profile import ProfileService

__all__ = [
    "AvatarFile",
    "AvatarService",
    "ChatService",
    "ContactService",
    "ProfileService",
]
