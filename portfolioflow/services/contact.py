from datetime import datetime
from typing import List
from sqlalchemy.exc import SQLAlchemyError
from portfolioflow.db.db import SessionLocal
from portfolioflow.db.dbmodels import ContactMessage as ContactMessageRow
from portfolioflow.services.errors import MessageNotFoundError, PersistenceError
from portfolioflow.utils.forms import ContactForm
from portfolioflow.utils.models import ContactMessage


def _to_message(row: ContactMessageRow) -> ContactMessage:
    return ContactMessage(
        id=row.id,
        name=row.name,
        email=row.email,
        message=row.message,
        created_at=row.created_at or datetime.utcnow(),
        is_read=bool(row.is_read),
    )


def submit_contact_message(form: ContactForm) -> ContactMessage:
    db = SessionLocal()
    try:
        row = ContactMessageRow(
            name=form.name,
            email=str(form.email),
            message=form.message,
            created_at=datetime.utcnow(),
            is_read=False,
        )
        db.add(row)
        db.commit()
        db.refresh(row)
        print(f"💾 Saved contact message from {row.name} <{row.email}>")
        return _to_message(row)
    except SQLAlchemyError as e:
        db.rollback()
        print(f"❌ Error saving contact message: {e}")
        raise PersistenceError(f"Could not send your message: {e}") from e
    finally:
        db.close()


def list_contact_messages() -> List[ContactMessage]:
    """Newest first."""
    db = SessionLocal()
    try:
        rows = db.query(ContactMessageRow).order_by(
            ContactMessageRow.created_at.desc()).all()
        return [_to_message(row) for row in rows]
    except SQLAlchemyError as e:
        print(f"❌ Error fetching contact messages: {e}")
        raise PersistenceError(f"Could not load messages: {e}") from e
    finally:
        db.close()


def toggle_read_status(message_id: str) -> ContactMessage:
    db = SessionLocal()
    try:
        row = db.get(ContactMessageRow, message_id)
        if row is None:
            raise MessageNotFoundError(message_id)
        row.is_read = not row.is_read
        db.commit()
        db.refresh(row)
        print(
            f"📝 Message {message_id} marked as {'read' if row.is_read else 'unread'}")
        return _to_message(row)
    except SQLAlchemyError as e:
        db.rollback()
        print(f"❌ Error updating read status: {e}")
        raise PersistenceError(f"Could not update message status: {e}") from e
    finally:
        db.close()


def delete_contact_message(message_id: str) -> None:
    db = SessionLocal()
    try:
        row = db.get(ContactMessageRow, message_id)
        if row is None:
            raise MessageNotFoundError(message_id)
        sender = row.name
        db.delete(row)
        db.commit()
        print(f"🗑️ Deleted message {message_id} from {sender}")
    except SQLAlchemyError as e:
        db.rollback()
        print(f"❌ Error deleting message {message_id}: {e}")
        raise PersistenceError(f"Could not delete message: {e}") from e
    finally:
        db.close()
