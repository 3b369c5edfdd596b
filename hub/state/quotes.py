"""Quote state — list, selection, status changes and sending."""

from __future__ import annotations

import contextlib
import uuid

from hub.models.enums import QuoteStatus
from hub.schemas.quote import QuoteRead
from hub.services.quotes import QuoteService
from hub.state.base import STORE_ERRORS, EntityStore


class QuoteStore(EntityStore[QuoteRead]):
    read_schema = QuoteRead
    label = "quotes"
    service: QuoteService

    def _patch_status(self, quote_id: uuid.UUID, status: QuoteStatus) -> None:
        self.items = [
            q.model_copy(update={"status": status}) if q.id == quote_id else q for q in self.items
        ]
        if self.selected is not None and self.selected.id == quote_id:
            self.selected = self.selected.model_copy(update={"status": status})

    async def update_status(self, quote_id: uuid.UUID, status: QuoteStatus) -> None:
        async with self._track("submitting", "submit_error", "updating status of"):
            async with self._session() as db:
                await self.service.update_status(db, quote_id, status)
            self._patch_status(quote_id, QuoteStatus(status))

    async def send(self, quote_id: uuid.UUID) -> None:
        """Send the quote; locally it becomes ``sent``."""
        async with self._track("submitting", "submit_error", "sending"):
            async with self._session() as db:
                await self.service.send(db, quote_id)
            self._patch_status(quote_id, QuoteStatus.SENT)

    async def generate_pdf(self, quote_id: uuid.UUID) -> str:
        async with self._session() as db:
            return await self.service.generate_pdf(db, quote_id)

    async def search(self, term: str, max_results: int | None = None) -> None:  # type: ignore[override]
        """Narrow the already-loaded list by subject or quote number."""
        with contextlib.suppress(*STORE_ERRORS):
            async with self._track("loading", "error", "searching"):
                needle = term.lower()
                matches = [
                    q for q in self.items
                    if needle in q.subject.lower() or needle in q.quote_number.lower()
                ]
                self.items = matches[:max_results] if max_results else matches
