from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, UniqueConstraint, CheckConstraint
from sqlalchemy import Enum as SAEnum
from mychat.db.session import Base
from datetime import datetime
from enum import Enum


class ContactStatus(str, Enum):
    pending = 'pending'
    accepted = 'accepted'
    rejected = 'rejected'
    blocked = 'blocked'


class Contact(Base):
    __tablename__ = "contacts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    requester_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    receiver_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    status = Column(SAEnum(ContactStatus, name='contact_status'), nullable=False, default=ContactStatus.pending)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    # Lookups always check both orderings; this only guards the stored one
    __table_args__ = (
        UniqueConstraint('requester_id', 'receiver_id', name='ix_contacts_requester_receiver'),
        CheckConstraint('requester_id <> receiver_id', name='ck_contacts_not_self'),
    )

    def involves(self, user_id: str) -> bool:
        return user_id in (self.requester_id, self.receiver_id)

    def other_party(self, user_id: str) -> str:
        return self.receiver_id if self.requester_id == user_id else self.requester_id

    def __repr__(self):
        return f"<Contact id={self.id} requester_id={self.requester_id} receiver_id={self.receiver_id} status={self.status}>"
