"""Tests for the command line entry point."""

import os
import tempfile

import pytest

import main
from jira_tracker.filter_store import FilterStore
from jira_tracker.models import ApplicationFilter


@pytest.fixture
def store():
    with tempfile.TemporaryDirectory() as tmpdir:
        yield FilterStore(os.path.join(tmpdir, 'filters.json'))


class TestArguments:

    def test_release_command(self):
        args = main.parse_arguments(['issues', '1.0', '--project', 'ABC'])
        assert args.command == 'issues'
        assert args.release == '1.0'
        assert args.project == 'ABC'

    def test_project_and_application_are_exclusive(self):
        with pytest.raises(SystemExit):
            main.parse_arguments(['issues', '1.0', '--project', 'ABC', '--application', 'Shop'])

    def test_status_all(self):
        args = main.parse_arguments(['status-all', '1.0', 'Open', 'Resolved'])
        assert (args.from_status, args.to_status) == ('Open', 'Resolved')


class TestContext:

    def test_explicit_project(self, provider, store):
        args = main.parse_arguments(['issues', '1.0', '--project', 'XYZ'])
        context = main.build_context(args, provider, store)
        assert context.release_number == '1.0'
        assert context.application_filter == ApplicationFilter('XYZ')

    def test_application_from_store(self, provider, store, transport):
        store.set('Shop', 'XYZ')
        args = main.parse_arguments(['issues', '1.0', '--application', 'Shop'])
        assert main.build_context(args, provider, store).application_filter == ApplicationFilter('XYZ')
        assert transport.calls_named('get_projects') == []

    def test_application_falls_back_to_default_filter(self, provider, store):
        args = main.parse_arguments(['issues', '1.0', '--application', 'Shop'])
        assert main.build_context(args, provider, store).application_filter == ApplicationFilter('ABC')

    def test_non_release_command(self, provider, store):
        args = main.parse_arguments(['close', 'ABC-1'])
        context = main.build_context(args, provider, store)
        assert context.release_number is None
        assert context.application_filter is None


class TestCommands:

    def test_issues_command(self, provider, store, transport, capsys):
        transport.add_issue('10', 'ABC-1', '1', summary='Broken login')
        main.run_command(main.parse_arguments(['issues', '1.0', '--project', 'ABC']), provider, store)
        assert 'ABC-1\tOpen\tBroken login\thttps://jira.example.com/browse/ABC-1' in capsys.readouterr().out

    def test_transitions_command(self, provider, store, transport, capsys):
        transport.add_issue('10', 'ABC-1', '1', actions=['Start Progress'])
        main.run_command(main.parse_arguments(['transitions', '10']), provider, store)
        assert capsys.readouterr().out == 'Start Progress\n'

    def test_filter_commands(self, store, capsys):
        main.run_filter_command(main.parse_arguments(['filter', 'set', 'Shop', 'ABC']), store)
        main.run_filter_command(main.parse_arguments(['filter', 'list']), store)
        assert capsys.readouterr().out == 'Shop\tABC\n'

    def test_missing_config_exits_with_error(self):
        with pytest.raises(SystemExit) as excinfo:
            main.main(['--config', '/nonexistent/config.yaml', 'validate'])
        assert excinfo.value.code == 1
