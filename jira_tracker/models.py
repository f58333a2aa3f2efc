"""
Value objects exchanged between the adapter and its host.

Remote payloads are plain dictionaries as returned by the Jira REST API;
the classes here are the normalized shapes the adapter hands back.
"""

import os
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional

from .utils import clean_text, safe_get


@dataclass(frozen=True)
class Credentials:
    """Connection settings for one Jira server."""

    base_url: str
    username: str
    password: str = field(repr=False)
    relative_service_url: str = '/rest'

    @classmethod
    def from_config(cls, config) -> 'Credentials':
        """
        Build credentials from the ``jira`` config section.

        The password falls back to the ``JIRA_PASSWORD`` environment
        variable when the config file does not carry one.
        """
        return cls(
            base_url=config.jira_base_url,
            username=config.get('jira.username'),
            password=config.get('jira.password') or os.environ.get('JIRA_PASSWORD', ''),
            relative_service_url=config.get('jira.relative_service_url', '/rest'),
        )


@dataclass(frozen=True)
class ApplicationFilter:
    """Links a host application to a Jira project key."""

    project_key: Optional[str] = None

    def __bool__(self) -> bool:
        return bool(self.project_key)


@dataclass(frozen=True)
class IssueTrackerContext:
    """Per-call context supplied by the host."""

    release_number: Optional[str] = None
    application_filter: Optional[ApplicationFilter] = None


@dataclass(frozen=True)
class Project:
    key: str
    name: str


@dataclass
class Version:
    """A release version inside one project."""

    id: Optional[str]
    project_key: str
    name: str
    released: bool = False
    release_date: Optional[datetime] = None

    @classmethod
    def from_remote(cls, project_key: str, data: Dict[str, Any]) -> 'Version':
        release_date = data.get('releaseDate')
        return cls(
            id=data.get('id'),
            project_key=project_key,
            name=data.get('name') or '',
            released=bool(data.get('released', False)),
            release_date=datetime.strptime(release_date, '%Y-%m-%d') if release_date else None,
        )

    def matches(self, release_name: str) -> bool:
        """Case-insensitive comparison ignoring surrounding whitespace."""
        return self.name.strip().lower() == (release_name or '').strip().lower()


@dataclass(frozen=True)
class WorkflowAction:
    id: str
    name: str

    @classmethod
    def from_remote(cls, data: Dict[str, Any]) -> 'WorkflowAction':
        return cls(id=str(data.get('id')), name=data.get('name') or '')


@dataclass(frozen=True)
class Issue:
    """Snapshot of a Jira issue at fetch time."""

    id: str
    key: str
    title: str
    status: Optional[str]
    url: str

    @classmethod
    def from_remote(cls, raw_issue: Dict[str, Any], status_name, base_url: str) -> 'Issue':
        """
        Normalize a raw issue payload.

        Args:
            raw_issue: Issue dictionary from the search or issue endpoint
            status_name: Callable resolving a status id to its display name
            base_url: Jira base URL without a trailing slash

        Returns:
            Issue record
        """
        fields = raw_issue.get('fields', {})
        key = raw_issue.get('key', '')
        status_id = safe_get(fields, 'status', 'id')
        status = status_name(status_id) or safe_get(fields, 'status', 'name')

        return cls(
            id=str(raw_issue.get('id') or key),
            key=key,
            title=clean_text(safe_get(fields, 'summary', default='')),
            status=status,
            url=f"{base_url}/browse/{key}",
        )
