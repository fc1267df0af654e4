from __future__ import annotations

from typing import Protocol


class StatisticsRepository(Protocol):
    def reset_all(self) -> dict[str, int]:
        """Delete attendance, delegations and capacity in one transaction.

        Returns the number of deleted rows per table. Users are kept.
        """

        raise NotImplementedError
