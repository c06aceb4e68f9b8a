"""
Error taxonomy for the API.

Every error a handler or repository raises is an ``APIException``; the
subclass fixes the HTTP status and the default error code, and ``main``
renders all of them in one envelope.
"""
from typing import Any, Iterable, Optional


class APIException(Exception):
    status_code = 500
    code = "API_ERROR"

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Any] = None,
        status_code: Optional[int] = None,
    ):
        super().__init__(message)
        self.message = message
        self.details = details
        if code is not None:
            self.code = code
        if status_code is not None:
            self.status_code = status_code


class BadRequestException(APIException):
    """Invalid input: 400."""

    status_code = 400
    code = "BAD_REQUEST"


class UnauthorizedException(APIException):
    """Missing identity or insufficient privileges: 401."""

    status_code = 401
    code = "UNAUTHORIZED"


class NotFoundException(APIException):
    status_code = 404
    code = "NOT_FOUND"


class ValidationException(BadRequestException):
    """Request failed schema validation; ``details`` lists every violation."""

    code = "VALIDATION_ERROR"

    def __init__(self, errors: list):
        super().__init__("Request validation failed", details=errors)

    @classmethod
    def from_errors(cls, errors: Iterable[dict]) -> "ValidationException":
        """
        Build from pydantic error dicts.

        Each error becomes ``"<field>: <msg>"``; the body/query/path prefix is
        dropped from the location and unknown keys read "unexpected field".
        """
        messages = []
        for error in errors:
            loc = ".".join(
                str(part)
                for part in error.get("loc", ())
                if part not in ("body", "query", "path")
            )
            if error.get("type") == "extra_forbidden":
                msg = "unexpected field"
            else:
                msg = error.get("msg", "invalid")
            messages.append(f"{loc}: {msg}" if loc else msg)
        return cls(messages)


class InvalidCredentialsException(UnauthorizedException):
    code = "INVALID_CREDENTIALS"

    def __init__(self):
        super().__init__("Invalid username/password")


# Duplicates are bad input as far as the client is concerned
class DuplicateCompanyException(BadRequestException):
    code = "DUPLICATE_COMPANY"

    def __init__(self, handle: str):
        super().__init__(f"Duplicate company: {handle}")


class DuplicateUsernameException(BadRequestException):
    code = "DUPLICATE_USERNAME"

    def __init__(self, username: str):
        super().__init__(f"Duplicate username: {username}")


class CompanyNotFoundException(NotFoundException):
    code = "COMPANY_NOT_FOUND"

    def __init__(self, handle: str):
        super().__init__(f"No company: {handle}")


class JobNotFoundException(NotFoundException):
    code = "JOB_NOT_FOUND"

    def __init__(self, job_id: int):
        super().__init__(f"No job: {job_id}")


class UserNotFoundException(NotFoundException):
    code = "USER_NOT_FOUND"

    def __init__(self, username: str):
        super().__init__(f"No user: {username}")
