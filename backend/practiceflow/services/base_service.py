"""
Base service class.
Services contain business logic and coordinate repositories.
"""

from abc import ABC
from typing import Dict, Iterable, Optional
from uuid import UUID

from practiceflow.core.config import settings


class BaseService(ABC):
    """Base service class for all services."""

    @staticmethod
    def _client_name(client_id: Optional[UUID], names: Dict[UUID, str]) -> Optional[str]:
        """Display name for a referenced client; dangling references get a placeholder."""
        if client_id is None:
            return None
        return names.get(client_id, settings.UNKNOWN_CLIENT_LABEL)

    @staticmethod
    def _as_strings(values: Iterable) -> list:
        """JSON-safe copy of an id list."""
        return [str(value) for value in values]

    @staticmethod
    def _drop_nulls(update_dict: dict, nullable: Iterable[str]) -> dict:
        """Ignore explicit nulls for fields that cannot be cleared."""
        allowed = set(nullable)
        return {key: value for key, value in update_dict.items() if value is not None or key in allowed}
