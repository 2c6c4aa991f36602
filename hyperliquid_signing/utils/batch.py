"""
Batch operation utilities

Runs one async operation per item concurrently, e.g. collecting the
co-signatures of a multi-sig payload from several wallets.
"""

import asyncio
from typing import Any, Awaitable, Callable, List, Optional, TypeVar

T_Output = TypeVar("T_Output")


async def gather_in_order(
    items: List[Any],
    processor: Callable[[Any, int], Awaitable[T_Output]],
    concurrency: Optional[int] = None,
) -> List[T_Output]:
    """
    Process items concurrently and return results in input order.

    Unlike a partial-failure batch, the first error is raised to the caller
    and no partial result list is returned.

    Args:
        items: Items to process
        processor: Async function(item, index) -> result
        concurrency: Maximum concurrent operations (default: unlimited)

    Returns:
        Results, one per item, in the order of ``items``

    Raises:
        ValueError: If concurrency is less than 1
    """
    if concurrency is None:
        return list(
            await asyncio.gather(*[processor(item, i) for i, item in enumerate(items)])
        )

    if concurrency < 1:
        raise ValueError("concurrency must be at least 1")

    semaphore = asyncio.Semaphore(concurrency)

    async def process_item(index: int, item: Any) -> T_Output:
        async with semaphore:
            return await processor(item, index)

    return list(
        await asyncio.gather(*[process_item(i, item) for i, item in enumerate(items)])
    )
