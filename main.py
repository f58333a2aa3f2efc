"""
Command line entry point for the Jira tracker adapter.

Usage:
    python main.py validate                          # Test the connection
    python main.py projects                          # List visible projects
    python main.py issues 1.2.0 --project ABC        # Issues of a release
    python main.py create-release 1.2.0 --application Shop
    python main.py deploy-release 1.2.0 --project ABC
    python main.py status-all 1.2.0 Open Resolved --project ABC
    python main.py filter set Shop ABC               # Remember a filter
"""

import argparse
import logging
import sys

from jira_tracker.config import load_config
from jira_tracker.errors import JiraTrackerError
from jira_tracker.filter_store import FilterStore
from jira_tracker.models import ApplicationFilter, IssueTrackerContext
from jira_tracker.provider import JiraProvider
from jira_tracker.utils import setup_logging

logger = logging.getLogger('jira_tracker')


def parse_arguments(argv=None) -> argparse.Namespace:
    """
    Parse command line arguments.

    Returns:
        Parsed arguments
    """
    parser = argparse.ArgumentParser(
        description='Jira issue tracker adapter for release automation',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py validate
  python main.py issues 1.2.0 --project ABC
  python main.py close-all 1.2.0 --application Shop
  python main.py status ABC-12 Resolved
        """
    )

    parser.add_argument(
        '--config',
        type=str,
        default='config.yaml',
        help='Path to configuration file (default: config.yaml)'
    )

    parser.add_argument(
        '--debug',
        action='store_true',
        help='Enable debug logging'
    )

    commands = parser.add_subparsers(dest='command', required=True)

    commands.add_parser('validate', help='Log in and out to test the connection')
    commands.add_parser('projects', help='List projects visible to the user')

    default_filter = commands.add_parser('default-filter', help='Show the project an application maps to')
    default_filter.add_argument('application')

    def release_command(name, help_text):
        command = commands.add_parser(name, help=help_text)
        command.add_argument('release')
        scope = command.add_mutually_exclusive_group()
        scope.add_argument('--project', help='Jira project key')
        scope.add_argument('--application', help='Application name from the filter store')
        return command

    release_command('issues', 'List the issues of a release')
    release_command('create-release', 'Create the release version if missing')
    release_command('deploy-release', 'Mark the release version as released')
    release_command('close-all', 'Close every issue of a release')
    status_all = release_command('status-all', 'Move issues of a release between statuses')
    status_all.add_argument('from_status')
    status_all.add_argument('to_status')

    close = commands.add_parser('close', help='Close one issue')
    close.add_argument('issue')

    comment = commands.add_parser('comment', help='Comment on an issue')
    comment.add_argument('issue')
    comment.add_argument('text')

    status = commands.add_parser('status', help='Move an issue to a status')
    status.add_argument('issue')
    status.add_argument('status')

    transitions = commands.add_parser('transitions', help='List actions available on an issue')
    transitions.add_argument('issue')

    filters = commands.add_parser('filter', help='Manage application filters')
    filter_actions = filters.add_subparsers(dest='filter_action', required=True)
    filter_set = filter_actions.add_parser('set')
    filter_set.add_argument('application')
    filter_set.add_argument('project')
    filter_remove = filter_actions.add_parser('remove')
    filter_remove.add_argument('application')
    filter_actions.add_parser('list')

    return parser.parse_args(argv)


def build_context(args, provider: JiraProvider, store: FilterStore) -> IssueTrackerContext:
    """
    Build the call context of a release command.

    An explicit project wins; an application is looked up in the filter
    store and falls back to the provider's default filter.
    """
    application_filter = None

    if getattr(args, 'project', None):
        application_filter = ApplicationFilter(args.project)
    elif getattr(args, 'application', None):
        application_filter = store.get(args.application) or provider.get_default_filter(args.application)
        logger.debug(f"Application {args.application} uses filter {application_filter}")

    return IssueTrackerContext(
        release_number=getattr(args, 'release', None),
        application_filter=application_filter
    )


def run_filter_command(args, store: FilterStore) -> None:
    if args.filter_action == 'set':
        store.set(args.application, args.project)
    elif args.filter_action == 'remove':
        if not store.remove(args.application):
            logger.warning(f"No filter stored for {args.application}")
    else:
        for application, project in sorted(store.all().items()):
            print(f"{application}\t{project}")


def run_command(args, provider: JiraProvider, store: FilterStore) -> None:
    """Dispatch one adapter command."""
    context = build_context(args, provider, store)

    if args.command == 'validate':
        provider.validate_connection()
        logger.info(f"Connection to {provider.describe()} is valid")

    elif args.command == 'projects':
        for key, name in provider.list_projects().items():
            print(f"{key}\t{name}")

    elif args.command == 'default-filter':
        print(provider.get_default_filter(args.application).project_key or '')

    elif args.command == 'issues':
        issues = provider.enumerate_issues(context)
        for issue in issues:
            print(f"{issue.key}\t{issue.status}\t{issue.title}\t{issue.url}")
        logger.info(f"{len(issues)} issues in release {args.release}")

    elif args.command == 'create-release':
        provider.create_release(context)

    elif args.command == 'deploy-release':
        provider.deploy_release(context)

    elif args.command == 'close':
        provider.close_issue(context, args.issue)

    elif args.command == 'close-all':
        provider.close_all_issues(context)

    elif args.command == 'comment':
        provider.add_comment(context, args.issue, args.text)

    elif args.command == 'status':
        provider.change_issue_status(context, args.issue, args.status)

    elif args.command == 'status-all':
        provider.change_status_for_all_issues(context, args.from_status, args.to_status)

    elif args.command == 'transitions':
        for name in provider.available_transitions(args.issue):
            print(name)


def main(argv=None):
    """Main entry point."""
    args = parse_arguments(argv)

    try:
        config = load_config(args.config)

        if args.debug:
            config.set('logging.level', 'DEBUG')

        setup_logging(config)
        logger.debug(f"Configuration loaded from: {args.config}")

        store = FilterStore(config.filter_store_path)

        if args.command == 'filter':
            run_filter_command(args, store)
            sys.exit(0)

        with JiraProvider.from_config(config) as provider:
            run_command(args, provider, store)
            stats = provider.session.transport.get_stats()
            logger.debug(
                f"Requests: {stats['requests_made']}, failed: {stats['requests_failed']}"
            )

        sys.exit(0)

    except KeyboardInterrupt:
        logger.warning("Interrupted by user.")
        sys.exit(130)

    except JiraTrackerError as e:
        logger.error(f"{type(e).__name__}: {e}")
        sys.exit(1)

    except Exception as e:
        logger.error(f"Fatal error: {e}", exc_info=True)
        sys.exit(1)


if __name__ == '__main__':
    main()
