"""
Basic tests for configuration, utilities and the filter store.

Run with: pytest tests/
"""

import os
import tempfile
from pathlib import Path

import pytest

from jira_tracker.config import Config
from jira_tracker.errors import ConfigurationError
from jira_tracker.filter_store import FilterStore
from jira_tracker.models import ApplicationFilter, Credentials, Issue, Version
from jira_tracker.query import build_release_jql
from jira_tracker.utils import clean_text, combine_paths, first_wins, jql_quote, safe_get


class TestUtils:
    """Test utility functions."""

    @pytest.mark.parametrize('base, relative', [
        ('http://h/', '/rest'),
        ('http://h/', 'rest'),
        ('http://h', '/rest'),
        ('http://h', 'rest'),
    ])
    def test_combine_paths(self, base, relative):
        """Exactly one slash separates the parts."""
        assert combine_paths(base, relative) == 'http://h/rest'

    def test_clean_text(self):
        text = "  Multiple   spaces   and\n\nnewlines  "
        assert clean_text(text) == "Multiple spaces and newlines"

    def test_safe_get(self):
        data = {'a': {'b': {'c': 'value'}}}
        assert safe_get(data, 'a', 'b', 'c') == 'value'
        assert safe_get(data, 'x', 'y', default='default') == 'default'

    def test_first_wins(self):
        grouped = first_wins([('1', 'Open'), ('2', 'Closed'), ('1', 'Reopened')])
        assert grouped == {'1': 'Open', '2': 'Closed'}
        assert list(grouped) == ['1', '2']

    def test_jql_quote_escapes_quotes(self):
        assert jql_quote('say "hi"') == '"say \\"hi\\""'

    def test_build_release_jql(self):
        assert build_release_jql('1.0') == 'fixVersion = "1.0"'
        assert build_release_jql('1.0', 'ABC') == 'fixVersion = "1.0" and project = "ABC"'


class TestModels:
    """Test value objects."""

    def test_version_matches_trimmed_case_insensitive(self):
        version = Version(id='1', project_key='ABC', name=' Release-1.0 ')
        assert version.matches('release-1.0')
        assert not version.matches('release-1.1')

    def test_version_from_remote(self):
        version = Version.from_remote('ABC', {
            'id': '7', 'name': '2.0', 'released': True, 'releaseDate': '2024-05-01'
        })
        assert version.released
        assert version.release_date.year == 2024

    def test_issue_from_remote(self):
        raw = {'id': '10', 'key': 'ABC-1', 'fields': {'summary': ' Fix  it ', 'status': {'id': '1'}}}
        issue = Issue.from_remote(raw, {'1': 'Open'}.get, 'https://jira')
        assert issue.id == '10'
        assert issue.title == 'Fix it'
        assert issue.status == 'Open'
        assert issue.url == 'https://jira/browse/ABC-1'

    def test_empty_filter_is_falsy(self):
        assert not ApplicationFilter()
        assert ApplicationFilter('ABC')

    def test_credentials_hide_password(self):
        credentials = Credentials('https://jira', 'bot', 'secret')
        assert 'secret' not in repr(credentials)


class TestConfig:
    """Test configuration management."""

    def write_config(self, tmpdir, body):
        config_path = Path(tmpdir) / 'config.yaml'
        config_path.write_text(body, encoding='utf-8')
        return str(config_path)

    def test_load_config(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            config_path = self.write_config(tmpdir, """
jira:
  base_url: "https://jira.example.com"
  username: "bot"
  password: "secret"
  legacy_project: "ABC"

http:
  page_size: 50

logging:
  level: "INFO"
  log_dir: "{}/logs"
""".format(tmpdir))

            config = Config(config_path)
            assert config.jira_base_url == "https://jira.example.com"
            assert config.page_size == 50
            assert config.max_retries == 5
            assert config.legacy_project == 'ABC'
            assert os.path.isdir(os.path.join(tmpdir, 'logs'))

            credentials = Credentials.from_config(config)
            assert credentials.relative_service_url == '/rest'
            assert credentials.password == 'secret'

    def test_config_validation(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            config_path = self.write_config(tmpdir, "invalid: yaml")
            with pytest.raises(ConfigurationError):
                Config(config_path)

    def test_non_positive_numbers_rejected(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            config_path = self.write_config(tmpdir, """
jira: {base_url: "https://jira", username: "bot"}
http: {page_size: 0}
logging: {level: "INFO"}
""")
            with pytest.raises(ConfigurationError):
                Config(config_path)

    @pytest.mark.parametrize('http_section', [
        '{page_size: "100"}',
        '{max_retries: true}',
        '{retry_delay: 0}',
        '{retry_delay: -1.5}',
    ])
    def test_invalid_http_numbers_rejected(self, http_section):
        with tempfile.TemporaryDirectory() as tmpdir:
            config_path = self.write_config(tmpdir, f"""
jira: {{base_url: "https://jira", username: "bot"}}
http: {http_section}
logging: {{level: "INFO"}}
""")
            with pytest.raises(ConfigurationError):
                Config(config_path)

    def test_password_from_environment(self, monkeypatch):
        monkeypatch.setenv('JIRA_PASSWORD', 'from-env')
        with tempfile.TemporaryDirectory() as tmpdir:
            config_path = self.write_config(tmpdir, """
jira: {base_url: "https://jira", username: "bot"}
logging: {level: "INFO"}
""")
            credentials = Credentials.from_config(Config(config_path))
            assert credentials.password == 'from-env'

    def test_missing_file(self):
        with pytest.raises(FileNotFoundError):
            Config('/nonexistent/config.yaml')


class TestFilterStore:
    """Test application filter persistence."""

    def test_set_and_reload(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = os.path.join(tmpdir, 'data', 'filters.json')
            store = FilterStore(path)
            store.set('Shop', 'ABC')

            reloaded = FilterStore(path)
            assert reloaded.get('Shop') == ApplicationFilter('ABC')
            assert reloaded.get('Other') is None

    def test_remove(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            store = FilterStore(os.path.join(tmpdir, 'filters.json'))
            store.set('Shop', 'ABC')
            assert store.remove('Shop')
            assert not store.remove('Shop')
            assert store.all() == {}

    def test_corrupt_file_starts_empty(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / 'filters.json'
            path.write_text('{not json', encoding='utf-8')
            store = FilterStore(str(path))
            assert store.all() == {}
