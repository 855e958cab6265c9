"""In-memory registry of per-visitor orchestrators.

Each visitor (identified by the ``X-Visitor-ID`` header) owns exactly one
:class:`BookingOrchestrator`, so wizard state is never shared between
browsers.  Nothing is persisted: a restart forgets every draft.
"""

from __future__ import annotations

import logging
from collections import OrderedDict

from clinic_booking.catalog import CatalogStore
from clinic_booking.interfaces import BookingHandoff
from clinic_booking.orchestrator import BookingOrchestrator

logger = logging.getLogger(__name__)


class VisitorRegistry:
    """Creates orchestrators on first use and evicts the least recently used."""

    def __init__(
        self,
        store: CatalogStore,
        handoff: BookingHandoff,
        max_visitors: int = 1000,
    ) -> None:
        self._store = store
        self._handoff = handoff
        self._max = max_visitors
        self._orchestrators: OrderedDict[str, BookingOrchestrator] = OrderedDict()

    def get(self, visitor_id: str) -> BookingOrchestrator:
        """Return the visitor's orchestrator, creating it if needed."""
        orchestrator = self._orchestrators.get(visitor_id)
        if orchestrator is not None:
            self._orchestrators.move_to_end(visitor_id)
            return orchestrator

        if len(self._orchestrators) >= self._max:
            evicted, _ = self._orchestrators.popitem(last=False)
            logger.info("Visitor registry full, evicted %s", evicted)

        orchestrator = BookingOrchestrator(self._store, handoff=self._handoff)
        self._orchestrators[visitor_id] = orchestrator
        return orchestrator

    def __len__(self) -> int:
        return len(self._orchestrators)
