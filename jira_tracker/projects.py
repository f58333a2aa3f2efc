"""
Project and version lookups.

Projects are read-only from the adapter's point of view; versions are
looked up here and created or released by the release manager.
"""

import logging
from typing import Dict, List, Optional

from .models import ApplicationFilter, Project, Version
from .utils import first_wins

logger = logging.getLogger('jira_tracker.projects')


class ProjectResolver:
    """Resolves application names and release names to Jira objects."""

    def __init__(self, session):
        self.session = session

    def get_projects(self) -> List[Project]:
        remote = self.session.transport.get_projects(self.session.token())
        return [Project(key=data.get('key'), name=data.get('name')) for data in remote]

    def list_projects(self) -> Dict[str, str]:
        """
        List the projects visible to the session.

        Returns:
            Mapping of project key to display name, first name wins on
            duplicate keys
        """
        return first_wins((project.key, project.name) for project in self.get_projects())

    def resolve_default_filter(self, application_name: str) -> ApplicationFilter:
        """
        Find the project named like the application.

        Args:
            application_name: Host application name

        Returns:
            Filter with the matching project key, or an empty filter
        """
        wanted = (application_name or '').lower()
        for key, name in self.list_projects().items():
            if (name or '').lower() == wanted:
                logger.debug(f"Application {application_name} maps to project {key}")
                return ApplicationFilter(project_key=key)

        return ApplicationFilter()

    def get_versions(self, project_key: str) -> List[Version]:
        remote = self.session.transport.get_versions(self.session.token(), project_key)
        return [Version.from_remote(project_key, data) for data in remote]

    def find_version(self, project_key: str, release_name: str) -> Optional[Version]:
        """Return the version named ``release_name`` (trimmed, case-insensitive), or None."""
        for version in self.get_versions(project_key):
            if version.matches(release_name):
                return version
        return None
