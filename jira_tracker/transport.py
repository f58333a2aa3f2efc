"""
HTTP transport for the Jira REST API.

This module handles:
- Connection pooling and retry with backoff for idempotent requests
- Session-cookie login and logout
- Paged JQL search
- Mapping HTTP failures to adapter exceptions

Every operation returns the decoded JSON payload unchanged; turning it
into adapter records is the caller's job.
"""

import logging
from typing import Any, Dict, List, Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .errors import AuthenticationError, TransportError
from .utils import combine_paths

logger = logging.getLogger('jira_tracker.transport')


class JiraTransport:
    """
    Thin client for the Jira REST endpoints the adapter consumes.

    Authenticated operations take the session token as their first
    argument; the token is the session cookie returned by ``login``.
    """

    def __init__(self, service_url: str, config=None):
        """
        Initialize the transport.

        Args:
            service_url: Root of the REST service, e.g. https://jira/rest
            config: Optional configuration object with an ``http`` section
        """
        self.service_url = service_url
        self.config = config
        self.session = self._create_session()

        self.stats = {
            'requests_made': 0,
            'requests_failed': 0,
        }

    def _setting(self, key: str, default: Any) -> Any:
        if self.config is None:
            return default
        return self.config.get(key, default)

    def _create_session(self) -> requests.Session:
        """
        Create requests session with retry logic and connection pooling.

        Returns:
            Configured requests.Session
        """
        session = requests.Session()

        # POST is left out: comments and transitions must not be replayed
        retry_strategy = Retry(
            total=self._setting('http.max_retries', 5),
            status_forcelist=[429, 500, 502, 503, 504],
            allowed_methods=["GET", "PUT", "DELETE"],
            backoff_factor=self._setting('http.retry_delay', 2.0)
        )

        adapter = HTTPAdapter(max_retries=retry_strategy)

        session.mount("http://", adapter)
        session.mount("https://", adapter)

        session.headers.update({
            'User-Agent': self._setting('http.user_agent', 'jira-tracker/1.0'),
            'Accept': 'application/json',
            'Content-Type': 'application/json'
        })

        return session

    def _request(
        self,
        method: str,
        path: str,
        token: Optional[str] = None,
        params: Optional[Dict[str, Any]] = None,
        payload: Optional[Dict[str, Any]] = None
    ) -> Any:
        """
        Perform a request and decode its JSON body.

        Raises:
            AuthenticationError: On HTTP 401 or 403
            TransportError: On any other HTTP or network failure
        """
        url = combine_paths(self.service_url, path)
        headers = {'Cookie': token} if token else None
        self.stats['requests_made'] += 1

        try:
            response = self.session.request(
                method,
                url,
                params=params,
                json=payload,
                headers=headers,
                timeout=self._setting('http.request_timeout', 30),
                verify=self._setting('http.verify_ssl', True)
            )
        except requests.exceptions.Timeout as e:
            self.stats['requests_failed'] += 1
            raise TransportError(f"Request timeout for {method} {url}") from e
        except requests.exceptions.ConnectionError as e:
            self.stats['requests_failed'] += 1
            raise TransportError(f"Connection error for {method} {url}: {e}") from e
        except requests.exceptions.RequestException as e:
            self.stats['requests_failed'] += 1
            raise TransportError(f"Request failed for {method} {url}: {e}") from e

        if response.status_code >= 400:
            self.stats['requests_failed'] += 1
            message = (
                f"{method} {url} failed with {response.status_code}: "
                f"{response.text[:200]}"
            )
            logger.debug(message)
            if response.status_code in (401, 403):
                raise AuthenticationError(message, response.status_code)
            raise TransportError(message, response.status_code)

        if response.status_code == 204 or not response.content:
            return None

        return response.json()

    def login(self, username: str, password: str) -> str:
        data = self._request(
            'POST',
            'auth/1/session',
            payload={'username': username, 'password': password}
        )
        session = (data or {}).get('session') or {}
        if not session.get('value'):
            raise AuthenticationError(f"Login to {self.service_url} returned no session")
        return f"{session.get('name', 'JSESSIONID')}={session['value']}"

    def logout(self, token: str) -> None:
        self._request('DELETE', 'auth/1/session', token)

    def get_statuses(self, token: str) -> List[Dict[str, Any]]:
        return self._request('GET', 'api/2/status', token) or []

    def get_projects(self, token: str) -> List[Dict[str, Any]]:
        return self._request('GET', 'api/2/project', token) or []

    def get_versions(self, token: str, project_key: str) -> List[Dict[str, Any]]:
        return self._request('GET', f'api/2/project/{project_key}/versions', token) or []

    def add_version(self, token: str, project_key: str, name: str) -> Dict[str, Any]:
        return self._request(
            'POST',
            'api/2/version',
            token,
            payload={'name': name, 'project': project_key}
        )

    def release_version(self, token: str, version) -> Dict[str, Any]:
        """Push the released flag and release date of a Version."""
        payload = {'released': version.released}
        if version.release_date:
            payload['releaseDate'] = version.release_date.strftime('%Y-%m-%d')
        return self._request('PUT', f'api/2/version/{version.id}', token, payload=payload)

    def search_issues(self, token: str, jql: str) -> List[Dict[str, Any]]:
        """
        Run a JQL search and return every matching issue.

        Pages through the search endpoint until the reported total is
        reached, so the caller never sees a truncated result.

        Args:
            token: Session token
            jql: Query string

        Returns:
            Raw issue dictionaries in the order Jira returned them
        """
        issues: List[Dict[str, Any]] = []
        start_at = 0
        page_size = self._setting('http.page_size', 100)

        while True:
            logger.debug(f"Searching issues: startAt={start_at}, jql={jql}")
            results = self._request(
                'GET',
                'api/2/search',
                token,
                params={
                    'jql': jql,
                    'startAt': start_at,
                    'maxResults': page_size,
                    'fields': 'summary,status',
                }
            ) or {}

            batch = results.get('issues', [])
            total = results.get('total', 0)

            if not batch:
                break

            issues.extend(batch)
            start_at += len(batch)
            if start_at >= total:
                break

        return issues

    def get_issue(self, token: str, issue_id: str) -> Dict[str, Any]:
        return self._request('GET', f'api/2/issue/{issue_id}', token, params={'fields': 'summary,status'})

    def get_available_actions(self, token: str, issue_id: str) -> List[Dict[str, Any]]:
        data = self._request('GET', f'api/2/issue/{issue_id}/transitions', token) or {}
        return data.get('transitions', [])

    def progress_workflow_action(self, token: str, issue_id: str, action_id: str) -> None:
        self._request(
            'POST',
            f'api/2/issue/{issue_id}/transitions',
            token,
            payload={'transition': {'id': action_id}}
        )

    def add_comment(self, token: str, issue_id: str, body: str) -> Dict[str, Any]:
        return self._request('POST', f'api/2/issue/{issue_id}/comment', token, payload={'body': body})

    def get_stats(self) -> Dict[str, int]:
        return self.stats.copy()

    def close(self) -> None:
        if self.session:
            self.session.close()
            logger.debug(f"HTTP session closed for {self.service_url}")
