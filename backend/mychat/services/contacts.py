"""
Contact relationships between users.

A relationship is stored as one directed row (requester -> receiver) but is
treated as undirected: every lookup checks both orderings, and at most one
row may exist per pair of users.
"""
from datetime import datetime
from typing import Dict, Iterable, List

from sqlalchemy import and_, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from mychat.core.errors import ConflictError, ForbiddenError, InvalidArgumentError, NotFoundError
from mychat.models.contact import Contact, ContactStatus
from mychat.models.user import User
from mychat.schemas.contact import (
    ContactRequestResponse,
    ContactResponse,
    UserSearchResult,
    UserSummary,
)
from mychat.utils.logger import get_logger, safe_repr

logger = get_logger(__name__)

SEARCH_LIMIT_MIN = 1
SEARCH_LIMIT_MAX = 50


def _like_pattern(query: str) -> str:
    escaped = query.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def _pair_filter(user_a: str, user_b: str):
    return or_(
        and_(Contact.requester_id == user_a, Contact.receiver_id == user_b),
        and_(Contact.requester_id == user_b, Contact.receiver_id == user_a),
    )


class ContactService:
    def __init__(self, db: Session):
        self.db = db

    def search_users(self, viewer_id: str, query: str, limit: int = 20) -> List[UserSearchResult]:
        """
        Case-insensitive substring search over username, display name and email.
        The viewer is never part of the result. Each hit is annotated with the
        viewer's existing relationship to that user, if any.
        """
        if not SEARCH_LIMIT_MIN <= limit <= SEARCH_LIMIT_MAX:
            raise InvalidArgumentError(f"Limit must be between {SEARCH_LIMIT_MIN} and {SEARCH_LIMIT_MAX}")
        term = (query or "").strip()
        if not term:
            raise InvalidArgumentError("Search query cannot be empty")

        pattern = _like_pattern(term)
        users = self.db.query(User).filter(
            User.id != viewer_id,
            or_(
                User.username.ilike(pattern, escape="\\"),
                User.display_name.ilike(pattern, escape="\\"),
                User.email.ilike(pattern, escape="\\"),
            )
        ).limit(limit).all()

        user_ids = [user.id for user in users]
        contacts_by_other: Dict[str, Contact] = {}
        if user_ids:
            contacts = self.db.query(Contact).filter(
                or_(
                    and_(Contact.requester_id == viewer_id, Contact.receiver_id.in_(user_ids)),
                    and_(Contact.receiver_id == viewer_id, Contact.requester_id.in_(user_ids)),
                )
            ).all()
            contacts_by_other = {contact.other_party(viewer_id): contact for contact in contacts}

        logger.debug("User search by %s for %s matched %d users", viewer_id, safe_repr(term), len(users))

        results = []
        for user in users:
            contact = contacts_by_other.get(user.id)
            results.append(UserSearchResult(
                user_id=user.id,
                username=user.username,
                display_name=user.display_name,
                email=user.email,
                avatar_url=user.avatar_url,
                contact_status=contact.status if contact else None,
                contact_id=contact.id if contact else None,
            ))
        return results

    def list_contacts(self, viewer_id: str) -> List[ContactResponse]:
        """All relationships involving the viewer, most recently updated first."""
        contacts = self.db.query(Contact).filter(
            or_(Contact.requester_id == viewer_id, Contact.receiver_id == viewer_id)
        ).order_by(Contact.updated_at.desc(), Contact.id.desc()).all()

        users = self._load_users(contact.other_party(viewer_id) for contact in contacts)

        result = []
        for contact in contacts:
            other = users.get(contact.other_party(viewer_id))
            if other is None:
                logger.warning("Contact %s references missing user %s", contact.id, contact.other_party(viewer_id))
                continue
            result.append(ContactResponse(
                id=contact.id,
                user_id=other.id,
                username=other.username,
                display_name=other.display_name,
                email=other.email,
                avatar_url=other.avatar_url,
                status=contact.status,
                created_at=contact.created_at,
                updated_at=contact.updated_at,
                is_requester=contact.requester_id == viewer_id,
            ))
        return result

    def send_request(self, requester_id: str, receiver_id: str) -> ContactRequestResponse:
        receiver = self.db.query(User).filter(User.id == receiver_id).first()
        if not receiver:
            raise NotFoundError("User")

        if requester_id == receiver_id:
            raise InvalidArgumentError("Cannot send contact request to yourself")

        existing = self.db.query(Contact).filter(_pair_filter(requester_id, receiver_id)).first()
        if existing:
            raise ConflictError("Contact relationship already exists")

        contact = Contact(
            requester_id=requester_id,
            receiver_id=receiver_id,
            status=ContactStatus.pending
        )
        self.db.add(contact)
        try:
            self.db.commit()
        except IntegrityError:
            # A concurrent request for the same pair won the insert
            self.db.rollback()
            raise ConflictError("Contact relationship already exists")
        self.db.refresh(contact)

        logger.info("Contact request %s sent from %s to %s", contact.id, requester_id, receiver_id)
        return self._to_request_response(contact)

    def get_contact(self, viewer_id: str, contact_id: int) -> ContactRequestResponse:
        contact = self._get_for_viewer(viewer_id, contact_id)
        return self._to_request_response(contact)

    def update_status(self, viewer_id: str, contact_id: int, new_status: ContactStatus) -> ContactRequestResponse:
        """
        Move a relationship to a new status.

        Pending requests can only be accepted or rejected by their receiver.
        Once a relationship has left pending, either party may set any
        non-pending status, including un-blocking.
        """
        contact = self._get_for_viewer(viewer_id, contact_id)

        if new_status == ContactStatus.pending:
            raise InvalidArgumentError("Cannot set status back to pending")

        if (contact.status == ContactStatus.pending
                and new_status in (ContactStatus.accepted, ContactStatus.rejected)
                and contact.receiver_id != viewer_id):
            raise ForbiddenError("Only the receiver can accept or reject pending requests")

        previous = contact.status
        contact.status = new_status
        contact.updated_at = datetime.utcnow()
        self.db.commit()
        self.db.refresh(contact)

        logger.info("Contact %s status changed by %s: %s -> %s", contact.id, viewer_id, previous.value, new_status.value)
        return self._to_request_response(contact)

    def delete_contact(self, viewer_id: str, contact_id: int) -> None:
        contact = self._get_for_viewer(viewer_id, contact_id)
        self.db.delete(contact)
        self.db.commit()
        logger.info("Contact %s deleted by %s", contact_id, viewer_id)

    def are_contacts(self, user_a: str, user_b: str) -> bool:
        contact = self.db.query(Contact).filter(
            _pair_filter(user_a, user_b),
            Contact.status == ContactStatus.accepted
        ).first()
        return contact is not None

    def _get_for_viewer(self, viewer_id: str, contact_id: int) -> Contact:
        contact = self.db.query(Contact).filter(Contact.id == contact_id).first()
        if not contact:
            raise NotFoundError("Contact")
        if not contact.involves(viewer_id):
            raise ForbiddenError("You are not part of this contact relationship")
        return contact

    def _load_users(self, user_ids: Iterable[str]) -> Dict[str, User]:
        ids = set(user_ids)
        if not ids:
            return {}
        return {user.id: user for user in self.db.query(User).filter(User.id.in_(ids)).all()}

    def _to_request_response(self, contact: Contact) -> ContactRequestResponse:
        users = self._load_users([contact.requester_id, contact.receiver_id])
        return ContactRequestResponse(
            id=contact.id,
            requester_id=contact.requester_id,
            receiver_id=contact.receiver_id,
            status=contact.status,
            created_at=contact.created_at,
            updated_at=contact.updated_at,
            requester=UserSummary.model_validate(users[contact.requester_id]),
            receiver=UserSummary.model_validate(users[contact.receiver_id]),
        )
