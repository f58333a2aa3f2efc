"""
Exception hierarchy for the Jira tracker adapter.

Every error raised by the adapter derives from JiraTrackerError so that
host code can catch the whole family at once.
"""

from typing import List, Optional


class JiraTrackerError(Exception):
    """Base exception for all adapter errors."""


class ConfigurationError(JiraTrackerError, ValueError):
    """Required configuration or argument is missing or invalid."""


class ConnectivityError(JiraTrackerError):
    """Jira could not be reached or refused the credentials."""


class NotFoundError(JiraTrackerError):
    """A required remote object does not exist."""


class TransportError(JiraTrackerError):
    """A remote call failed."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class AuthenticationError(TransportError):
    """Jira rejected the login or the session token."""


class WorkflowMismatchError(JiraTrackerError):
    """
    No available workflow action leads to the requested status.

    Carries the requested status and the names of the actions that were
    available on the issue at the time, so the caller can see what the
    workflow actually offered.
    """

    def __init__(self, requested_status: str, available_actions: List[str]):
        self.requested_status = requested_status
        self.available_actions = list(available_actions)
        super().__init__(
            f"Changing the status to {requested_status} is not permitted in "
            f"the current workflow. The only permitted operations are: "
            f"{', '.join(self.available_actions)}"
        )
