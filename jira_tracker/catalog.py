"""Status id to display name lookup, loaded once per adapter."""

import logging
from typing import Dict, Optional

from .utils import first_wins

logger = logging.getLogger('jira_tracker.catalog')


class StatusCatalog:

    def __init__(self, session):
        self.session = session
        self._statuses: Optional[Dict[str, str]] = None

    @property
    def statuses(self) -> Dict[str, str]:
        if self._statuses is None:
            remote = self.session.transport.get_statuses(self.session.token())
            # duplicate ids keep the first name seen
            self._statuses = first_wins(
                (status.get('id') or '', status.get('name')) for status in remote
            )
            logger.debug(f"Loaded {len(self._statuses)} statuses")
        return self._statuses

    def status_name(self, status_id: Optional[str]) -> Optional[str]:
        return self.statuses.get(status_id or '')
