"""Cursor pagination mixin for managers."""

import asyncio
import logging
from typing import Any, Dict, List, Mapping

from ..entities.requests import ListOptions
from ..entities.responses import ListResult

logger = logging.getLogger(__name__)


class CursorPaginationMixin:
    """Fetches one page of rows from a store delegate.
    
    One extra row is requested to detect a following page, so no count-ahead
    query is needed. The total is fetched by a count query issued
    concurrently with the page query against the same filter.
    """
    
    def build_order_by(self, options: ListOptions) -> List[Dict[str, str]]:
        """Order by the sort field, then by id so the order is stable."""
        order = options.sort.order.value
        order_by = [{options.sort.field: order}]
        if options.sort.field != "id":
            order_by.append({"id": order})
        return order_by
    
    async def fetch_page(
        self,
        delegate: Any,
        where: Mapping[str, Any],
        options: ListOptions,
    ) -> ListResult[Dict[str, Any]]:
        """Fetch a page of raw rows.
        
        Args:
            delegate: Store delegate to query
            where: Filter shared by the page and count queries
            options: Cursor, limit and sort
            
        Returns:
            ListResult of rows
        """
        rows, total = await asyncio.gather(
            delegate.find_many(
                where=dict(where),
                order_by=self.build_order_by(options),
                take=options.limit + 1,
                cursor={"id": options.cursor} if options.cursor else None,
            ),
            delegate.count(dict(where)),
        )
        
        rows = list(rows)
        has_more = len(rows) > options.limit
        if has_more:
            rows = rows[:options.limit]
        next_cursor = str(rows[-1]["id"]) if has_more and rows else None
        
        logger.debug(f"Fetched page of {len(rows)} rows (total={total}, has_more={has_more})")
        return ListResult(items=rows, total=total, has_more=has_more, next_cursor=next_cursor)
