"""
Jira issue-tracker adapter package.

Connects a release-automation host to a Jira server: enumerates the
issues of a release, creates and releases versions, and moves issues
through their workflow.
"""

__version__ = '1.0.0'
__description__ = 'Jira issue tracker adapter for release automation'

from .config import Config, load_config
from .errors import (
    AuthenticationError,
    ConfigurationError,
    ConnectivityError,
    JiraTrackerError,
    NotFoundError,
    TransportError,
    WorkflowMismatchError,
)
from .filter_store import FilterStore
from .models import ApplicationFilter, Credentials, Issue, IssueTrackerContext, Project, Version, WorkflowAction
from .provider import JiraProvider
from .transport import JiraTransport
from .utils import combine_paths

__all__ = [
    'Config',
    'load_config',
    'JiraProvider',
    'JiraTransport',
    'FilterStore',
    'ApplicationFilter',
    'Credentials',
    'Issue',
    'IssueTrackerContext',
    'Project',
    'Version',
    'WorkflowAction',
    'combine_paths',
    'JiraTrackerError',
    'ConfigurationError',
    'ConnectivityError',
    'NotFoundError',
    'TransportError',
    'AuthenticationError',
    'WorkflowMismatchError',
]
