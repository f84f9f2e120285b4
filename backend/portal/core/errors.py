"""
Error kinds returned by the API.

Every handler-level failure is raised as a ``PortalError`` subclass and
rendered by the exception handlers in ``portal.main`` as
``{"error": <code>, "message": <text>}``.
"""

from fastapi import status

from portal.core.config import settings


class PortalError(Exception):
    code = "InternalError"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    message = "Internal server error"

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"error": self.code, "message": self.message}


class Unauthenticated(PortalError):
    code = "Unauthenticated"
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Unauthorized"


class Forbidden(PortalError):
    code = "Forbidden"
    message = "Unauthorized"

    @property
    def status_code(self) -> int:
        return settings.FORBIDDEN_STATUS_CODE


class MissingField(PortalError):
    code = "MissingField"
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Missing required fields"


class MissingParameter(PortalError):
    code = "MissingParameter"
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Email parameter is required"


class InvalidEmail(PortalError):
    code = "InvalidEmail"
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Invalid email format"


class WeakPassword(PortalError):
    code = "WeakPassword"
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Password is too short"


class EmailConflict(PortalError):
    code = "EmailConflict"
    status_code = status.HTTP_400_BAD_REQUEST
    message = "User with this email already exists"


class InvalidProfile(PortalError):
    code = "InvalidProfile"
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Please provide a valid LinkedIn profile URL"


class NotFound(PortalError):
    code = "NotFound"
    status_code = status.HTTP_404_NOT_FOUND
    message = "User not found"


class WrongRole(PortalError):
    code = "WrongRole"
    status_code = status.HTTP_400_BAD_REQUEST
    message = "User is not an HR member"


class SelfDeletion(PortalError):
    code = "SelfDeletion"
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Cannot delete your own account"


class InternalError(PortalError):
    pass
