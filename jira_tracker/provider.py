"""
Jira issue-tracker provider.

The single entry point a release-automation host talks to. It composes
the session, status catalog, project resolver, query engine, release
manager and transition resolver behind one uniform contract, and is a
context manager so that the session is released when the caller is done.
"""

import logging
from typing import Dict, List, Optional

from tqdm import tqdm

from .catalog import StatusCatalog
from .errors import ConfigurationError
from .models import ApplicationFilter, Credentials, Issue, IssueTrackerContext
from .projects import ProjectResolver
from .query import IssueQueryEngine
from .releases import ReleaseManager
from .session import SessionManager
from .transitions import TransitionResolver

logger = logging.getLogger('jira_tracker.provider')


def _validate_status(status: Optional[str]) -> str:
    status = (status or '').strip()
    if len(status) < 2:
        raise ConfigurationError(
            "The status being applied must contain text and be at least 2 characters long"
        )
    return status


class JiraProvider:
    """
    Adapter between a release-automation host and one Jira server.

    Not safe for concurrent use: the session token and the status
    catalog are computed on first access by a single caller.

    Example:
        >>> with JiraProvider(credentials) as provider:
        ...     for issue in provider.enumerate_issues(context):
        ...         print(issue.key, issue.status)
    """

    def __init__(
        self,
        credentials: Credentials,
        transport=None,
        config=None,
        legacy_filter: Optional[ApplicationFilter] = None,
        show_progress: bool = False
    ):
        """
        Initialize the provider.

        Args:
            credentials: Server address and login
            transport: Prebuilt transport (tests); created lazily otherwise
            config: Configuration object used for a lazily created transport
            legacy_filter: Filter used when a call context carries none
            show_progress: Display progress bars during bulk operations
        """
        self.credentials = credentials
        self.legacy_filter = legacy_filter
        self.show_progress = show_progress

        self.session = SessionManager(credentials, transport=transport, config=config)
        self.catalog = StatusCatalog(self.session)
        self.resolver = ProjectResolver(self.session)
        self.query = IssueQueryEngine(self.session, self.catalog, self.resolver)
        self.releases = ReleaseManager(self.session, self.resolver)
        self.transitions = TransitionResolver(self.session)

    @classmethod
    def from_config(cls, config, transport=None) -> 'JiraProvider':
        legacy_project = config.legacy_project
        return cls(
            Credentials.from_config(config),
            transport=transport,
            config=config,
            legacy_filter=ApplicationFilter(legacy_project) if legacy_project else None,
            show_progress=config.show_progress,
        )

    def __enter__(self) -> 'JiraProvider':
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()

    def close(self) -> None:
        self.session.close()

    def describe(self) -> str:
        return f"JIRA at {self.credentials.base_url}"

    def is_available(self) -> bool:
        return True

    def get_filter(self, context: IssueTrackerContext) -> Optional[ApplicationFilter]:
        if context.application_filter is not None:
            return context.application_filter
        return self.legacy_filter

    def validate_connection(self) -> None:
        self.session.validate()

    def list_projects(self) -> Dict[str, str]:
        return self.resolver.list_projects()

    def get_default_filter(self, application_name: str) -> ApplicationFilter:
        """
        Filter used for an application that has none configured.

        The legacy filter wins when present; otherwise the project whose
        name equals the application name is used.
        """
        if self.legacy_filter is not None:
            return self.legacy_filter
        return self.resolver.resolve_default_filter(application_name)

    def enumerate_issues(self, context: IssueTrackerContext) -> List[Issue]:
        return self.query.enumerate_issues(context.release_number, self.get_filter(context))

    def create_release(self, context: IssueTrackerContext) -> None:
        self.releases.create_release(context.release_number, self.get_filter(context))

    def deploy_release(self, context: IssueTrackerContext) -> None:
        self.releases.deploy_release(context.release_number, self.get_filter(context))

    def close_issue(self, context: IssueTrackerContext, issue_id: str) -> None:
        self.transitions.close_issue(issue_id)

    def close_all_issues(self, context: IssueTrackerContext) -> None:
        """Close every issue of the release, stopping at the first failure."""
        issues = self.enumerate_issues(context)
        for issue in tqdm(issues, desc=f"Closing {context.release_number}", disable=not self.show_progress):
            self.transitions.close_issue(issue.id)

    def add_comment(self, context: IssueTrackerContext, issue_id: str, comment_text: str) -> None:
        self.session.transport.add_comment(self.session.token(), issue_id, comment_text)

    def available_transitions(self, issue_id: str) -> List[str]:
        return [action.name for action in self.transitions.available_actions(issue_id)]

    def change_issue_status(self, context: IssueTrackerContext, issue_id: str, issue_status: str) -> None:
        """
        Move one issue to ``issue_status`` unless it is already there.

        Raises:
            ConfigurationError: If the status is shorter than two characters
            WorkflowMismatchError: If the workflow offers no matching action
        """
        issue_status = _validate_status(issue_status)

        issue = self.query.get_issue(issue_id)
        if issue.status == issue_status:
            logger.debug(f"{issue.key} is already in the {issue_status} status.")
            return

        self.transitions.change_status(issue.id, issue_status)

    def change_status_for_all_issues(self, context: IssueTrackerContext, from_status: str, to_status: str) -> None:
        """
        Move every issue of the release that is in ``from_status`` to ``to_status``.

        Issues in any other status are skipped without contacting Jira.
        """
        to_status = _validate_status(to_status)

        issues = self.enumerate_issues(context)
        for issue in tqdm(issues, desc=f"Updating {context.release_number}", disable=not self.show_progress):
            if issue.status != from_status:
                logger.debug(f"{issue.key} is not in the {from_status} status, and will not be changed.")
                continue

            self.transitions.change_status(issue.id, to_status)
