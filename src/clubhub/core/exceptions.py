"""Custom exception classes for ClubHub.

This module defines application-specific exceptions following Google Python
Style Guide. Managers raise them; route handlers translate them into HTTP
errors.
"""


class ClubHubError(Exception):
    """Base exception for all ClubHub errors."""

    pass


class AccountAlreadyExistsError(ClubHubError):
    """Raised when registering an email that already has an account."""

    def __init__(self, email: str):
        """Initialize the exception.

        Args:
            email: The email address that is already registered.
        """
        self.email = email
        super().__init__(f"An account with email '{email}' already exists")


class InvalidCredentialsError(ClubHubError):
    """Raised when login credentials do not match an account."""

    def __init__(self, message: str = "Invalid email or password"):
        super().__init__(message)


class ClubNotFoundError(ClubHubError):
    """Raised when a requested club cannot be found."""

    def __init__(self, club_id: str):
        """Initialize the exception.

        Args:
            club_id: The ID of the club that was not found.
        """
        self.club_id = club_id
        super().__init__(f"Club '{club_id}' not found")


class MembershipNotFoundError(ClubHubError):
    """Raised when a requested membership cannot be found."""

    def __init__(self, membership_id: str):
        self.membership_id = membership_id
        super().__init__(f"Membership '{membership_id}' not found")


class RoleNotFoundError(ClubHubError):
    """Raised when a requested club role cannot be found."""

    def __init__(self, role_id: str):
        self.role_id = role_id
        super().__init__(f"Role '{role_id}' not found")


class EventNotFoundError(ClubHubError):
    """Raised when a requested event cannot be found."""

    def __init__(self, event_id: str):
        self.event_id = event_id
        super().__init__(f"Event '{event_id}' not found")


class NotificationNotFoundError(ClubHubError):
    """Raised when a notification is missing or belongs to someone else."""

    def __init__(self, notification_id: str):
        self.notification_id = notification_id
        super().__init__(f"Notification '{notification_id}' not found")


class ProfileNotFoundError(ClubHubError):
    """Raised when a requested student profile cannot be found."""

    def __init__(self, profile_id: str):
        self.profile_id = profile_id
        super().__init__(f"Profile '{profile_id}' not found")


class PermissionDeniedError(ClubHubError):
    """Raised when the caller may not act on the target resource."""

    pass


class InvalidTransitionError(ClubHubError):
    """Raised when a membership action does not apply to its current status."""

    def __init__(self, action: str, status: str):
        """Initialize the exception.

        Args:
            action: The requested action (approve, reject, remove).
            status: The membership's current status.
        """
        self.action = action
        self.status = status
        super().__init__(f"Cannot {action} a membership that is {status}")


class DuplicateMembershipError(ClubHubError):
    """Raised when joining a club with a pending or accepted membership."""

    def __init__(self, club_id: str, status: str):
        self.club_id = club_id
        self.status = status
        super().__init__(f"You already have a {status} membership for club '{club_id}'")


class ValidationError(ClubHubError):
    """Raised when data validation fails."""

    pass
