"""Shared fixtures: an in-memory stand-in for the Jira transport."""

import pytest

from jira_tracker.errors import TransportError
from jira_tracker.models import Credentials
from jira_tracker.provider import JiraProvider


class FakeTransport:
    """Records every call and answers from in-memory data."""

    def __init__(self):
        self.calls = []
        self.statuses = [
            {'id': '1', 'name': 'Open'},
            {'id': '3', 'name': 'In Progress'},
            {'id': '5', 'name': 'Resolved'},
            {'id': '6', 'name': 'Closed'},
        ]
        self.projects = [{'key': 'ABC', 'name': 'Shop'}, {'key': 'XYZ', 'name': 'Backend'}]
        self.versions = {'ABC': [{'id': '100', 'name': '1.0', 'released': False}]}
        self.issues = {}
        self.actions = {}
        self.fail_logout = False
        self.fail_login = False
        self.logins = 0
        self.closed = False

    def _record(self, name, *args):
        self.calls.append((name,) + args)

    def calls_named(self, name):
        return [call for call in self.calls if call[0] == name]

    def add_issue(self, issue_id, key, status_id, summary='Something', actions=None):
        self.issues[issue_id] = {
            'id': issue_id,
            'key': key,
            'fields': {'summary': summary, 'status': {'id': status_id}},
        }
        self.actions[issue_id] = [
            {'id': str(index + 10), 'name': name} for index, name in enumerate(actions or [])
        ]

    def login(self, username, password):
        self._record('login', username)
        if self.fail_login:
            raise TransportError("401 Unauthorized", 401)
        self.logins += 1
        return f"JSESSIONID=token-{self.logins}"

    def logout(self, token):
        self._record('logout', token)
        if self.fail_logout:
            raise TransportError("session expired", 401)

    def get_statuses(self, token):
        self._record('get_statuses')
        return self.statuses

    def get_projects(self, token):
        self._record('get_projects')
        return self.projects

    def get_versions(self, token, project_key):
        self._record('get_versions', project_key)
        return self.versions.get(project_key, [])

    def add_version(self, token, project_key, name):
        self._record('add_version', project_key, name)
        version = {'id': str(200 + len(self.calls)), 'name': name, 'released': False}
        self.versions.setdefault(project_key, []).append(version)
        return version

    def release_version(self, token, version):
        self._record('release_version', version.name)
        for data in self.versions[version.project_key]:
            if data['id'] == version.id:
                data['released'] = version.released
                data['releaseDate'] = version.release_date.strftime('%Y-%m-%d')

    def search_issues(self, token, jql):
        self._record('search_issues', jql)
        return list(self.issues.values())

    def get_issue(self, token, issue_id):
        self._record('get_issue', issue_id)
        return self.issues[issue_id]

    def get_available_actions(self, token, issue_id):
        self._record('get_available_actions', issue_id)
        return self.actions.get(issue_id, [])

    def progress_workflow_action(self, token, issue_id, action_id):
        self._record('progress_workflow_action', issue_id, action_id)

    def add_comment(self, token, issue_id, body):
        self._record('add_comment', issue_id, body)
        return {'id': '1', 'body': body}

    def get_stats(self):
        return {'requests_made': len(self.calls), 'requests_failed': 0}

    def close(self):
        self.closed = True


@pytest.fixture
def credentials():
    return Credentials(
        base_url='https://jira.example.com/',
        username='bot',
        password='secret',
        relative_service_url='/rest',
    )


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def provider(credentials, transport):
    return JiraProvider(credentials, transport=transport)
