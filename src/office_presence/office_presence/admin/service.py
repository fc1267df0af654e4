from __future__ import annotations

import logging

from ..access.resolver import AccessResolver
from ..core.enums import Operation
from ..users.model import Principal
from .repository import StatisticsRepository

logger = logging.getLogger(__name__)


class AdminService:
    """Organisation-wide maintenance. Checked on the actor's own role only."""

    def __init__(self, statistics: StatisticsRepository, resolver: AccessResolver):
        self._statistics = statistics
        self._resolver = resolver

    def reset_statistics(self, actor: Principal) -> dict:
        self._resolver.require_role_operation(Operation.RESET_STATISTICS, actor)
        deleted = self._statistics.reset_all()
        logger.warning("Statistics reset by %s: %s", actor.user_id, deleted)
        return {"message": "All statistics have been reset successfully", "deleted": deleted}
