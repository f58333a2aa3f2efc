"""
Release (version) lifecycle.

Both operations are idempotent: creating an existing version and
releasing an already released one do nothing.
"""

import logging
from datetime import datetime
from typing import Optional

from .errors import ConfigurationError, NotFoundError
from .models import ApplicationFilter
from .projects import ProjectResolver

logger = logging.getLogger('jira_tracker.releases')


class ReleaseManager:
    """Creates and releases Jira versions for host releases."""

    def __init__(self, session, resolver: ProjectResolver):
        self.session = session
        self.resolver = resolver

    @staticmethod
    def _require(release_name: Optional[str], project_filter: Optional[ApplicationFilter], action: str) -> str:
        """
        Check the preconditions shared by create and deploy.

        Returns:
            The project key of the filter

        Raises:
            ConfigurationError: If the release name or project key is missing
        """
        if not release_name:
            raise ConfigurationError("A release number is required")

        if not project_filter or not project_filter.project_key:
            raise ConfigurationError(
                f"Application must be specified in category ID filter to {action} a release."
            )

        return project_filter.project_key

    def create_release(self, release_name: str, project_filter: ApplicationFilter) -> None:
        """
        Create the version if the project does not have it yet.

        Args:
            release_name: Version name
            project_filter: Filter carrying the project key

        Raises:
            ConfigurationError: If the release name or project key is missing
        """
        project_key = self._require(release_name, project_filter, 'create')

        if self.resolver.find_version(project_key, release_name) is not None:
            logger.debug(f"Version {release_name} already exists in {project_key}")
            return

        self.session.transport.add_version(self.session.token(), project_key, release_name)
        logger.info(f"Created version {release_name} in {project_key}")

    def deploy_release(self, release_name: str, project_filter: ApplicationFilter) -> None:
        """
        Mark the version as released today.

        Args:
            release_name: Version name
            project_filter: Filter carrying the project key

        Raises:
            ConfigurationError: If the release name or project key is missing
            NotFoundError: If the project has no such version
        """
        project_key = self._require(release_name, project_filter, 'close')

        version = self.resolver.find_version(project_key, release_name)
        if version is None:
            raise NotFoundError(f"Version {release_name} does not exist.")

        if version.released:
            logger.debug(f"Version {release_name} is already released")
            return

        version.released = True
        version.release_date = datetime.now()
        self.session.transport.release_version(self.session.token(), version)
        logger.info(f"Released version {release_name} in {project_key}")
