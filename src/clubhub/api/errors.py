"""Translation of domain exceptions into HTTP errors."""

from fastapi import HTTPException, status

from clubhub.core.exceptions import (
    AccountAlreadyExistsError,
    ClubHubError,
    ClubNotFoundError,
    DuplicateMembershipError,
    EventNotFoundError,
    InvalidCredentialsError,
    InvalidTransitionError,
    MembershipNotFoundError,
    NotificationNotFoundError,
    PermissionDeniedError,
    ProfileNotFoundError,
    RoleNotFoundError,
    ValidationError,
)

_STATUS_BY_ERROR = (
    (
        (
            ClubNotFoundError,
            MembershipNotFoundError,
            RoleNotFoundError,
            EventNotFoundError,
            NotificationNotFoundError,
            ProfileNotFoundError,
        ),
        status.HTTP_404_NOT_FOUND,
    ),
    (PermissionDeniedError, status.HTTP_403_FORBIDDEN),
    (
        (AccountAlreadyExistsError, DuplicateMembershipError, InvalidTransitionError),
        status.HTTP_409_CONFLICT,
    ),
    (InvalidCredentialsError, status.HTTP_401_UNAUTHORIZED),
    (ValidationError, status.HTTP_400_BAD_REQUEST),
)


def to_http_exception(exc: ClubHubError) -> HTTPException:
    """Build the HTTPException for a domain error, keeping its message as detail."""
    for error_types, status_code in _STATUS_BY_ERROR:
        if isinstance(exc, error_types):
            return HTTPException(status_code=status_code, detail=str(exc))
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
