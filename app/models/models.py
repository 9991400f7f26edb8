import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.database import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_id() -> str:
    return str(uuid.uuid4())


# 1. Profiles table (id is the Supabase auth user id)
class Profile(Base):
    __tablename__ = "profiles"

    id = Column(String(36), primary_key=True, index=True)
    full_name = Column(String, nullable=True)
    branch = Column(String, nullable=True)
    semester = Column(Integer, nullable=True)
    role = Column(String, nullable=False, default="student", server_default="student")
    created_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now())

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"


# 2. Branches table
class Branch(Base):
    __tablename__ = "branches"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String, unique=True, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now())


# 3. Folders table (self-referencing tree)
class Folder(Base):
    __tablename__ = "folders"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String, nullable=False)
    # cascade is left to the database, nothing in the app walks the subtree
    parent_id = Column(String(36), ForeignKey("folders.id", ondelete="CASCADE"), nullable=True, index=True)
    color = Column(String(7), nullable=False, default="#135bec")
    created_by = Column(String(36), nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now())

    resources = relationship("Resource", back_populates="folder", passive_deletes=True)


# 4. Resources table (uploaded notes, papers, lab manuals, books)
class Resource(Base):
    __tablename__ = "resources"

    id = Column(String(36), primary_key=True, default=new_id)
    title = Column(String, nullable=False, index=True)
    branch = Column(String, index=True)  # free text, survives branch deletion
    semester = Column(Integer, index=True)
    subject_code = Column(String, default="")
    type = Column(String, index=True)  # Notes, Papers, Labs, Books
    file_url = Column(String, nullable=False)  # Supabase storage public link
    uploaded_by = Column(String(36), index=True)
    folder_id = Column(String(36), ForeignKey("folders.id", ondelete="SET NULL"), nullable=True, index=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now(), index=True)

    folder = relationship("Folder", back_populates="resources")


# 5. Notifications table (broadcast to everyone)
class Notification(Base):
    __tablename__ = "notifications"

    id = Column(String(36), primary_key=True, default=new_id)
    message = Column(Text, nullable=False)
    type = Column(String, nullable=False, default="info")  # info, warning, success
    created_by = Column(String(36), nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now(), index=True)
