"""Read access to the blog preference."""

import logging

from apis.shared.errors import ErrorCode, ServiceError

from .models import Preference
from .repository import PreferenceRepository

logger = logging.getLogger(__name__)


class PreferenceQueryService:
    """Preference lookups for request handlers."""

    def __init__(self, repository: PreferenceRepository):
        self._repository = repository

    async def get_preference(self) -> Preference:
        """
        Get the blog preference.

        Falls back to the defaults (registration closed) when nothing has been
        stored yet.

        Raises:
            ServiceError: if the preference store cannot be read
        """
        try:
            preference = await self._repository.get_preference()
        except Exception as e:
            logger.error(f"Failed to load preference: {e}", exc_info=True)
            raise ServiceError("Failed to load preference", ErrorCode.SERVICE_UNAVAILABLE, detail=str(e))

        if preference is None:
            logger.debug("No preference stored - using defaults")
            return Preference()
        return preference
