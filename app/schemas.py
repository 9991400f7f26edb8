"""
Form payloads for the portal.

Each model validates what a form posts before anything is sent to the
database or to Supabase.
"""
from typing import Optional, Literal
from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator


class _Form(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)


class ResourceUpload(_Form):
    """Metadata entered on the admin upload page"""
    title: str = Field(..., min_length=1, max_length=200)
    branch: str = Field(..., min_length=1)
    semester: int = Field(..., ge=1, le=8)
    subject_code: str = ""
    type: Literal["Notes", "Papers", "Labs", "Books"] = "Notes"
    folder_id: Optional[str] = None

    @field_validator("folder_id", mode="before")
    @classmethod
    def blank_folder_is_root(cls, v):
        return v or None


class ResourceEdit(_Form):
    title: str = Field(..., min_length=1, max_length=200)
    subject_code: str = ""


class FolderCreate(_Form):
    name: str = Field(..., min_length=1, max_length=100)
    parent_id: Optional[str] = None
    color: str = Field("#135bec", pattern=r"^#[0-9a-fA-F]{6}$")

    @field_validator("parent_id", mode="before")
    @classmethod
    def blank_parent_is_root(cls, v):
        return v or None


class BranchCreate(_Form):
    name: str = Field(..., min_length=1, max_length=100)


class NotificationCreate(_Form):
    message: str = Field(..., min_length=1)
    type: Literal["info", "warning", "success"] = "info"


class ProfileUpdate(_Form):
    """Role is not part of this form; it is assigned server-side only."""
    full_name: str = ""
    branch: Optional[str] = None
    semester: Optional[int] = Field(None, ge=1, le=8)

    @field_validator("branch", "semester", mode="before")
    @classmethod
    def blank_is_none(cls, v):
        return None if v == "" else v


class SignUpForm(_Form):
    full_name: str = Field(..., min_length=1)
    email: EmailStr
    password: str = Field(..., min_length=6)


def first_error(exc) -> str:
    """Human readable text of the first pydantic error."""
    errors = exc.errors()
    if not errors:
        return "Invalid input"
    err = errors[0]
    field = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
    return f"{field}: {err.get('msg')}" if field else err.get("msg", "Invalid input")
