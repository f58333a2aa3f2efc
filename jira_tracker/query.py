"""
Issue enumeration for a release.

Builds a JQL query from the release name and the optional project
filter, runs it without a result cap and normalizes every returned issue.
"""

import logging
from typing import Dict, List, Optional

from .catalog import StatusCatalog
from .errors import ConfigurationError
from .models import ApplicationFilter, Issue
from .projects import ProjectResolver
from .utils import jql_quote

logger = logging.getLogger('jira_tracker.query')


def build_release_jql(release_name: str, project_key: Optional[str] = None) -> str:
    """
    Build the JQL selecting a release's issues.

    Examples:
        >>> build_release_jql('1.0')
        'fixVersion = "1.0"'
        >>> build_release_jql('1.0', 'ABC')
        'fixVersion = "1.0" and project = "ABC"'
    """
    jql = f"fixVersion = {jql_quote(release_name)}"
    if project_key:
        jql += f" and project = {jql_quote(project_key)}"
    return jql


class IssueQueryEngine:
    """Finds the issues that belong to a release."""

    def __init__(self, session, catalog: StatusCatalog, resolver: ProjectResolver):
        self.session = session
        self.catalog = catalog
        self.resolver = resolver

    @property
    def base_url(self) -> str:
        return self.session.credentials.base_url.rstrip('/')

    def to_issue(self, raw_issue: Dict) -> Issue:
        return Issue.from_remote(raw_issue, self.catalog.status_name, self.base_url)

    def get_issue(self, issue_id: str) -> Issue:
        raw_issue = self.session.transport.get_issue(self.session.token(), issue_id)
        return self.to_issue(raw_issue)

    def enumerate_issues(
        self,
        release_name: str,
        project_filter: Optional[ApplicationFilter] = None
    ) -> List[Issue]:
        """
        List the issues whose fix version is ``release_name``.

        A release without a matching version in the filtered project has
        no issues yet, so an empty list is returned rather than an error.

        Args:
            release_name: Release (version) name
            project_filter: Optional filter narrowing the query to one project

        Returns:
            Issues in the order Jira returned them

        Raises:
            ConfigurationError: If the release name is missing
        """
        if not release_name:
            raise ConfigurationError("A release number is required")

        project_key = project_filter.project_key if project_filter else None

        if project_key and self.resolver.find_version(project_key, release_name) is None:
            logger.debug(f"No version {release_name} in project {project_key}")
            return []

        jql = build_release_jql(release_name, project_key)
        raw_issues = self.session.transport.search_issues(self.session.token(), jql)

        if not raw_issues:
            return []

        logger.debug(f"Found {len(raw_issues)} issues for release {release_name}")
        return [self.to_issue(raw_issue) for raw_issue in raw_issues]
