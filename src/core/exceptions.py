"""Custom exceptions and error codes."""

from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Standardized error codes for the API."""

    # Authentication errors (401)
    UNAUTHORIZED = "UNAUTHORIZED"
    INVALID_TOKEN = "INVALID_TOKEN"

    # Authorization errors (403)
    FORBIDDEN = "FORBIDDEN"

    # Not found errors (404)
    USER_NOT_FOUND = "USER_NOT_FOUND"
    PROFILE_NOT_FOUND = "PROFILE_NOT_FOUND"
    POST_NOT_FOUND = "POST_NOT_FOUND"
    COMMENT_NOT_FOUND = "COMMENT_NOT_FOUND"
    EXPERIENCE_NOT_FOUND = "EXPERIENCE_NOT_FOUND"
    EDUCATION_NOT_FOUND = "EDUCATION_NOT_FOUND"
    GITHUB_USER_NOT_FOUND = "GITHUB_USER_NOT_FOUND"

    # Validation errors (400)
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    USER_EXISTS = "USER_EXISTS"
    ALREADY_LIKED = "ALREADY_LIKED"

    # Conflict errors (409)
    CONCURRENT_MODIFICATION = "CONCURRENT_MODIFICATION"

    # Rate limiting (429)
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"

    # Server errors (500/502)
    INTERNAL_ERROR = "INTERNAL_ERROR"
    PROFILE_MISSING = "PROFILE_MISSING"
    EXTERNAL_SERVICE_ERROR = "EXTERNAL_SERVICE_ERROR"


class AppException(Exception):
    """Base application exception."""

    def __init__(
        self,
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Any | None = None,
    ) -> None:
        self.error_code = error_code
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(self.message)


class AuthenticationError(AppException):
    """Authentication failed."""

    def __init__(
        self,
        message: str = "Authentication required",
        error_code: ErrorCode = ErrorCode.UNAUTHORIZED,
    ) -> None:
        super().__init__(
            error_code=error_code,
            message=message,
            status_code=401,
        )


class AuthorizationError(AppException):
    """Authorization failed."""

    def __init__(self, message: str = "Access denied") -> None:
        super().__init__(
            error_code=ErrorCode.FORBIDDEN,
            message=message,
            status_code=403,
        )


class ValidationFailedError(AppException):
    """One or more fields failed validation.

    ``errors`` is a list of ``{"field": ..., "message": ...}`` pairs so every
    failing field is reported in a single response.
    """

    def __init__(self, errors: list[dict[str, str]]) -> None:
        self.errors = errors
        super().__init__(
            error_code=ErrorCode.VALIDATION_ERROR,
            message="Request validation failed",
            status_code=400,
            details=errors,
        )


class InvalidCredentialsError(AppException):
    """Email/password pair did not match a user."""

    def __init__(self) -> None:
        super().__init__(
            error_code=ErrorCode.INVALID_CREDENTIALS,
            message="Invalid credentials",
            status_code=400,
        )


class EmailAlreadyRegisteredError(AppException):
    """A user with this email already exists."""

    def __init__(self, email: str) -> None:
        super().__init__(
            error_code=ErrorCode.USER_EXISTS,
            message="User already exists",
            status_code=400,
            details={"email": email},
        )


class UserNotFoundError(AppException):
    """User not found."""

    def __init__(self, user_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.USER_NOT_FOUND,
            message=f"User not found: {user_id}",
            status_code=404,
            details={"user_id": user_id},
        )


class ProfileNotFoundError(AppException):
    """No profile exists for the user."""

    def __init__(self, user_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.PROFILE_NOT_FOUND,
            message="Profile not found",
            status_code=404,
            details={"user_id": user_id},
        )


class ProfileMissingError(AppException):
    """A nested profile collection was mutated before the profile was created.

    Experience and education entries require an existing profile; reaching
    the mutation without one is an internal precondition violation.
    """

    def __init__(self, user_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.PROFILE_MISSING,
            message="Cannot modify a profile that does not exist",
            status_code=500,
            details={"user_id": user_id},
        )


class ExperienceNotFoundError(AppException):
    """Experience entry not found on the profile."""

    def __init__(self, experience_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.EXPERIENCE_NOT_FOUND,
            message=f"Experience not found: {experience_id}",
            status_code=404,
            details={"experience_id": experience_id},
        )


class EducationNotFoundError(AppException):
    """Education entry not found on the profile."""

    def __init__(self, education_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.EDUCATION_NOT_FOUND,
            message=f"Education not found: {education_id}",
            status_code=404,
            details={"education_id": education_id},
        )


class PostNotFoundError(AppException):
    """Post not found."""

    def __init__(self, post_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.POST_NOT_FOUND,
            message=f"Post not found: {post_id}",
            status_code=404,
            details={"post_id": post_id},
        )


class CommentNotFoundError(AppException):
    """Comment not found on the post."""

    def __init__(self, comment_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.COMMENT_NOT_FOUND,
            message=f"Comment not found: {comment_id}",
            status_code=404,
            details={"comment_id": comment_id},
        )


class AlreadyLikedError(AppException):
    """The user has already liked the post."""

    def __init__(self, post_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.ALREADY_LIKED,
            message="Post is already liked",
            status_code=400,
            details={"post_id": post_id},
        )


class ConcurrentModificationError(AppException):
    """The document changed between load and save."""

    def __init__(self, resource: str, resource_id: str) -> None:
        super().__init__(
            error_code=ErrorCode.CONCURRENT_MODIFICATION,
            message=f"The {resource} was modified by another request, retry the operation",
            status_code=409,
            details={"resource": resource, "id": resource_id},
        )


class GitHubUserNotFoundError(AppException):
    """GitHub has no user with this name."""

    def __init__(self, username: str) -> None:
        super().__init__(
            error_code=ErrorCode.GITHUB_USER_NOT_FOUND,
            message=f"No GitHub profile found: {username}",
            status_code=404,
            details={"username": username},
        )


class ExternalServiceError(AppException):
    """An upstream service failed or returned an unexpected response."""

    def __init__(self, service: str, message: str = "Upstream service unavailable") -> None:
        super().__init__(
            error_code=ErrorCode.EXTERNAL_SERVICE_ERROR,
            message=message,
            status_code=502,
            details={"service": service},
        )
