"""
Portal exceptions.

Services raise these instead of generic ``Exception`` so that form handlers
can show ``message`` inline and the API layer can map ``status_code``.

Usage:
    from app.exceptions import NotFoundError

    if folder is None:
        raise NotFoundError("Folder", folder_id)
"""

from typing import Any, Dict, Optional


class PortalError(Exception):
    """Base exception for all portal errors"""

    status_code = 500

    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


class ConfigurationError(PortalError):
    """Required settings are missing"""

    def __init__(self, message: str):
        super().__init__(message, code="CONFIGURATION_ERROR")


# ============================================
# Authentication & Authorization Errors
# ============================================

class AuthenticationError(PortalError):
    """Sign in, sign up or session lookup failed"""

    status_code = 401

    def __init__(self, message: str = "Authentication failed"):
        super().__init__(message, code="AUTH_FAILED")


class AuthorizationError(PortalError):
    """User not allowed to perform this action"""

    status_code = 403

    def __init__(self, message: str = "Not authorized"):
        super().__init__(message, code="NOT_AUTHORIZED")


# ============================================
# Lookup & Validation Errors
# ============================================

class NotFoundError(PortalError):
    status_code = 404

    def __init__(self, resource_type: str, resource_id: Any):
        super().__init__(
            f"{resource_type} with ID '{resource_id}' not found",
            code=f"{resource_type.upper()}_NOT_FOUND",
            details={"resource_type": resource_type, "resource_id": resource_id},
        )


class PortalValidationError(PortalError):
    """Input rejected before any backend call was made"""

    status_code = 400

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message, code="VALIDATION_ERROR", details={"field": field} if field else None)


class FolderCycleError(PortalValidationError):
    """A folder cannot be placed inside itself or one of its descendants"""

    def __init__(self, folder_id: str, parent_id: str):
        super().__init__("A folder cannot be moved into itself or one of its subfolders", field="parent_id")
        self.code = "FOLDER_CYCLE"
        self.details.update({"folder_id": folder_id, "parent_id": parent_id})


# ============================================
# Backend Errors
# ============================================

class BackendError(PortalError):
    """Database or Supabase call failed"""

    status_code = 502

    def __init__(self, message: str, operation: Optional[str] = None):
        super().__init__(message, code="BACKEND_ERROR", details={"operation": operation} if operation else None)


class StorageError(BackendError):
    """Supabase storage upload or removal failed"""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message, operation="storage")
        self.code = "STORAGE_ERROR"
        if path:
            self.details["path"] = path
