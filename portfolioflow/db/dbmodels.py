import uuid
from datetime import datetime
from sqlalchemy import Boolean, Column, DateTime, JSON, String, Text
from sqlalchemy.orm import declarative_base

Base = declarative_base()


def new_id() -> str:
    return uuid.uuid4().hex


class AdminUser(Base):
    __tablename__ = "admin_users"

    id = Column(String, primary_key=True, default=new_id)
    username = Column(String, unique=True, index=True, nullable=False)
    password = Column(String, nullable=False)


class Project(Base):
    __tablename__ = "projects"

    id = Column(String, primary_key=True, default=new_id)
    title = Column(String, index=True, nullable=False)
    description = Column(Text, nullable=False)
    long_description = Column(Text, nullable=True)
    image_url = Column(String, nullable=True)
    model = Column(String, nullable=True)  # /models/<name>.glb
    data_ai_hint = Column(String, nullable=True)
    category = Column(String, nullable=False)
    technologies = Column(JSON, nullable=False, default=list)
    live_link = Column(String, nullable=True)
    source_link = Column(String, nullable=True)
    documentation_link = Column(String, nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow)


class ContactMessage(Base):
    __tablename__ = "contact_messages"

    id = Column(String, primary_key=True, default=new_id)
    name = Column(String, nullable=False)
    email = Column(String, nullable=False)
    message = Column(Text, nullable=False)
    created_at = Column(DateTime, index=True, nullable=False,
                        default=datetime.utcnow)
    is_read = Column(Boolean, nullable=False, default=False)


class ResumeContent(Base):
    """Singleton resume document, stored as one JSON blob."""
    __tablename__ = "resume_content"

    id = Column(String, primary_key=True)
    data = Column(JSON, nullable=False)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow)
