"""
Bulk operations on Things data.

A batch applies one single-item operation to every element of a collection,
in order and one at a time. A failing item does not stop the batch: its error
message is recorded and the next item is processed. Items run sequentially so
that each one sees exactly the state the previous one left behind.
"""
import logging
from typing import Any, Awaitable, Callable, Optional, Sequence

from .data_models import BatchItemResult, BatchResult

logger = logging.getLogger(__name__)


async def run_batch(
    items: Sequence[Any],
    operation: Callable[[int, Any], Awaitable[Optional[str]]],
    item_id: Optional[Callable[[Any], Optional[str]]] = None,
) -> BatchResult:
    """Run ``operation(index, item)`` for each item and summarise the outcomes.

    ``operation`` returns the id to report for a successful item. ``item_id``
    extracts an id from the input item to report alongside a failure (for
    batches addressed by id); without it failed items carry no id.
    """
    results = []
    for index, item in enumerate(items):
        try:
            result_id = await operation(index, item)
        except Exception as e:  # recorded per item, never raised for the batch
            logger.warning("Batch item %d failed: %s", index, e)
            failed_id = item_id(item) if item_id else None
            results.append(BatchItemResult(index=index, success=False, id=failed_id, error=str(e)))
        else:
            results.append(BatchItemResult(index=index, success=True, id=result_id))
    return BatchResult.from_results(results)
