"""
Workflow transitions.

Jira workflows are configured per project, so the actions that move an
issue to a given status are only known by asking for the actions
available on that issue right now. A status is matched to an action by
name: the status without its last character ("Resolved" -> "Resolve")
must appear in the action name ("Resolve Issue").
"""

import logging
from typing import List, Optional

from .errors import WorkflowMismatchError
from .models import WorkflowAction

logger = logging.getLogger('jira_tracker.transitions')

CLOSE_ACTION_NAME = 'Close Issue'


def status_fragment(status: str) -> str:
    """Drop the final character of a status name."""
    return status[:-1]


def match_action(actions: List[WorkflowAction], status: str) -> Optional[WorkflowAction]:
    """
    Pick the action leading to ``status``.

    The first action, in the order Jira listed them, whose name contains
    the status fragment wins. Matching is case-sensitive.
    """
    fragment = status_fragment(status)
    for action in actions:
        if fragment in action.name:
            return action
    return None


class TransitionResolver:

    def __init__(self, session):
        self.session = session

    def available_actions(self, issue_id: str) -> List[WorkflowAction]:
        remote = self.session.transport.get_available_actions(self.session.token(), issue_id)
        return [WorkflowAction.from_remote(data) for data in remote]

    def _progress(self, issue_id: str, action: WorkflowAction) -> None:
        self.session.transport.progress_workflow_action(self.session.token(), issue_id, action.id)

    def change_status(self, issue_id: str, to_status: str) -> WorkflowAction:
        """
        Move an issue to ``to_status`` through the matching workflow action.

        Args:
            issue_id: Issue id or key
            to_status: Target status display name, at least two characters

        Returns:
            The action that was executed

        Raises:
            WorkflowMismatchError: If no available action matches
        """
        logger.debug(f"Changing {issue_id} to {to_status} status...")
        actions = self.available_actions(issue_id)

        action = match_action(actions, to_status)
        if action is None:
            raise WorkflowMismatchError(to_status, [a.name for a in actions])

        self._progress(issue_id, action)
        return action

    def close_issue(self, issue_id: str) -> WorkflowAction:
        """
        Run the "Close Issue" action on an issue.

        Raises:
            WorkflowMismatchError: If the issue offers no such action
        """
        actions = self.available_actions(issue_id)
        action = next(
            (a for a in actions if a.name.lower() == CLOSE_ACTION_NAME.lower()),
            None
        )
        if action is None:
            raise WorkflowMismatchError(CLOSE_ACTION_NAME, [a.name for a in actions])

        self._progress(issue_id, action)
        logger.info(f"Closed {issue_id}")
        return action
