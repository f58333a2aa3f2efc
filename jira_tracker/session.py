"""
Session lifecycle against the Jira server.

The session token is acquired on first use and reused for every later
call made through the same adapter instance.
"""

import logging
from typing import Optional

from .errors import ConnectivityError
from .models import Credentials
from .transport import JiraTransport
from .utils import combine_paths

logger = logging.getLogger('jira_tracker.session')


class SessionManager:
    """
    Owns the transport and the memoized session token.

    Not safe for concurrent first access; one adapter serves one caller.
    """

    def __init__(self, credentials: Credentials, transport=None, config=None):
        """
        Args:
            credentials: Server address and login
            transport: Prebuilt transport; created on demand when omitted
            config: Configuration handed to a transport created on demand
        """
        self.credentials = credentials
        self.config = config
        self._transport = transport
        self._token: Optional[str] = None

    @property
    def service_url(self) -> str:
        return combine_paths(self.credentials.base_url, self.credentials.relative_service_url)

    @property
    def transport(self):
        if self._transport is None:
            self._transport = JiraTransport(self.service_url, self.config)
        return self._transport

    def token(self) -> str:
        """Return the session token, logging in on first call."""
        if self._token is None:
            logger.debug(f"Logging in to {self.service_url} as {self.credentials.username}")
            self._token = self.transport.login(self.credentials.username, self.credentials.password)
        return self._token

    def validate(self) -> None:
        """
        Check connectivity with a throwaway login/logout cycle.

        The memoized token is neither used nor replaced.

        Raises:
            ConnectivityError: If the login or logout fails for any reason
        """
        try:
            token = self.transport.login(self.credentials.username, self.credentials.password)
            self.transport.logout(token)
        except Exception as e:
            raise ConnectivityError(str(e)) from e

    def close(self) -> None:
        """Log out the memoized token, if any. Never raises."""
        if self._token is not None:
            try:
                self.transport.logout(self._token)
            except Exception as e:
                logger.warning(f"Logout from {self.service_url} failed: {e}")
            self._token = None

        if self._transport is not None:
            self._transport.close()
