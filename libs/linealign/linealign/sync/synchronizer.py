"""Keep the source and target editor views visually in step.

Every sync scrolls the *other* view, whose own scroll callback would otherwise
start a sync back towards the first view. A single `is_syncing` flag, shared
by both directions, drops any sync requested while another one is in flight.
The flag stays set through the settle delay so the echo of our own scroll is
dropped as well, and it is cleared on every exit path.

All methods run on one event loop; the flag needs no lock.
"""

from __future__ import annotations

import asyncio
import logging

from linealign.alignment.resolver import CorrespondenceResolver
from linealign.models.segment import Side
from linealign.views.base import EditorView

logger = logging.getLogger(__name__)


class ViewSynchronizer:
    def __init__(
        self,
        source_view: EditorView,
        target_view: EditorView,
        resolver: CorrespondenceResolver,
        *,
        settle_delay_s: float = 0.05,
        enabled: bool = True,
        select_line: bool = False,
    ) -> None:
        self.source_view = source_view
        self.target_view = target_view
        self.resolver = resolver
        self.settle_delay_s = max(0.0, float(settle_delay_s))
        self.enabled = enabled
        self.select_line = select_line
        self.is_syncing = False
        self.completed = 0
        self.suppressed = 0
        self._pending: set[asyncio.Task[bool]] = set()

    def view_for(self, side: Side) -> EditorView:
        return self.source_view if side is Side.SOURCE else self.target_view

    def _can_start(self, operation: str, from_side: Side) -> bool:
        if not self.enabled:
            return False
        if self.is_syncing:
            self.suppressed += 1
            logger.debug("sync suppressed (op=%s, from=%s)", operation, from_side.value)
            return False
        return True

    async def sync_to_position(
        self,
        from_side: Side,
        clicked_position: int,
        other_position: int,
    ) -> bool:
        """Scroll the other view so `other_position` sits at the same height as the click."""
        if not self._can_start("position", from_side):
            return False
        self.is_syncing = True
        try:
            return await self._align_positions(from_side, clicked_position, other_position)
        except Exception:
            logger.warning(
                "view sync failed (op=position, from=%s, click=%s, other=%s)",
                from_side.value,
                clicked_position,
                other_position,
                exc_info=True,
            )
            return False
        finally:
            self.is_syncing = False

    async def _align_positions(
        self,
        from_side: Side,
        clicked_position: int,
        other_position: int,
    ) -> bool:
        view = self.view_for(from_side)
        other = self.view_for(from_side.other)
        other.scroll_to(other_position, "start")
        # Rendering of the scroll is asynchronous; measure only after it settles.
        await asyncio.sleep(self.settle_delay_s)
        other_y = other.coords_at(other_position)
        clicked_y = view.coords_at(clicked_position)
        if other_y is None or clicked_y is None:
            logger.debug("coordinates unavailable, skipping offset adjustment")
        else:
            delta = other_y - clicked_y
            if delta:
                other.scroll_by(delta)
        self.completed += 1
        return True

    async def sync_to_clicked_line(self, click_position: int, from_side: Side) -> bool:
        """Resolve the click on `from_side` and bring its counterpart alongside it."""
        if not self._can_start("click", from_side):
            return False
        try:
            other_position = self.resolver.resolve(click_position, from_side)
        except Exception:
            logger.warning(
                "correspondence lookup failed (from=%s, click=%s)",
                from_side.value,
                click_position,
                exc_info=True,
            )
            return False
        if other_position is None:
            return False
        return await self.sync_to_position(from_side, click_position, other_position)

    async def sync_line_to_line(
        self,
        from_side: Side,
        line_number: int,
        *,
        select: bool | None = None,
    ) -> bool:
        """Center the same line number (clamped) in the other view."""
        if not self._can_start("line", from_side):
            return False
        do_select = self.select_line if select is None else select
        self.is_syncing = True
        try:
            other = self.view_for(from_side.other)
            line = max(1, min(int(line_number), other.line_count))
            start = other.line_start(line)
            other.scroll_to(start, "center")
            if do_select:
                other.set_selection(start, other.line_end(line))
            await asyncio.sleep(self.settle_delay_s)
            self.completed += 1
            return True
        except Exception:
            logger.warning(
                "view sync failed (op=line, from=%s, line=%s)",
                from_side.value,
                line_number,
                exc_info=True,
            )
            return False
        finally:
            self.is_syncing = False

    async def sync_line_selection(self, from_side: Side, line_number: int) -> bool:
        return await self.sync_line_to_line(from_side, line_number, select=True)

    async def sync_text_selection(self, from_side: Side, start: int, end: int) -> bool:
        """Mirror a selection as the same (clamped) line range in the other view."""
        if not self._can_start("selection", from_side):
            return False
        self.is_syncing = True
        try:
            view = self.view_for(from_side)
            other = self.view_for(from_side.other)
            first = view.line_at(min(start, end))
            last = view.line_at(max(start, end))
            total = other.line_count
            first = max(1, min(first, total))
            last = max(first, min(last, total))
            sel_start = other.line_start(first)
            other.scroll_to(sel_start, "center")
            other.set_selection(sel_start, other.line_end(last))
            await asyncio.sleep(self.settle_delay_s)
            self.completed += 1
            return True
        except Exception:
            logger.warning(
                "view sync failed (op=selection, from=%s, start=%s, end=%s)",
                from_side.value,
                start,
                end,
                exc_info=True,
            )
            return False
        finally:
            self.is_syncing = False

    def request_line_sync(self, from_side: Side, line_number: int) -> asyncio.Task[bool] | None:
        """Entry point for scroll callbacks; schedules a line sync unless one is running."""
        if not self._can_start("line", from_side):
            return None
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug(
                "no running event loop, line sync skipped (from=%s, line=%s)",
                from_side.value,
                line_number,
            )
            return None
        task = loop.create_task(self.sync_line_to_line(from_side, line_number))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def drain(self) -> None:
        """Wait until every scheduled sync has finished."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)
