"""
Persistent application filters for the command line.

Maps host application names to Jira project keys in a JSON file so that
release commands can be run by application name.
"""

import json
import logging
from pathlib import Path
from typing import Dict, Optional

from .models import ApplicationFilter

logger = logging.getLogger('jira_tracker.filters')


class FilterStore:
    """
    JSON-file backed application filter store.

    The file holds a single object ``{"filters": {app: project_key}}``.
    """

    def __init__(self, path: str):
        """
        Initialize the store and load existing filters.

        Args:
            path: Location of the JSON file
        """
        self.path = Path(path)
        self.filters: Dict[str, str] = {}
        self.load()

    def load(self) -> bool:
        """
        Load filters from disk.

        Returns:
            True if a store file was read, False otherwise
        """
        if not self.path.exists():
            return False

        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (json.JSONDecodeError, IOError) as e:
            logger.error(f"Failed to load filter store {self.path}: {e}")
            return False

        self.filters = dict(data.get('filters', {}))
        logger.debug(f"Loaded {len(self.filters)} filters from {self.path}")
        return True

    def save(self) -> None:
        """
        Save filters to disk.

        Uses atomic write (write to temp file, then rename) to prevent corruption.
        """
        self.path.parent.mkdir(parents=True, exist_ok=True)
        temp_file = self.path.with_suffix('.tmp')

        with open(temp_file, 'w', encoding='utf-8') as f:
            json.dump({'filters': self.filters}, f, indent=2, ensure_ascii=False)

        temp_file.replace(self.path)

    def get(self, application: str) -> Optional[ApplicationFilter]:
        project_key = self.filters.get(application)
        return ApplicationFilter(project_key) if project_key else None

    def set(self, application: str, project_key: str) -> None:
        self.filters[application] = project_key
        self.save()
        logger.info(f"Application {application} now uses project {project_key}")

    def remove(self, application: str) -> bool:
        if application not in self.filters:
            return False
        del self.filters[application]
        self.save()
        return True

    def all(self) -> Dict[str, str]:
        return dict(self.filters)

    def __repr__(self) -> str:
        return f"FilterStore(path={self.path}, filters={len(self.filters)})"
