import asyncio
from typing import Any, Awaitable, List


async def gather_or_cancel(*aws: Awaitable) -> List[Any]:
    """
    Like `asyncio.gather`, but when one of the awaitables fails (or the caller
    is cancelled) the others are cancelled and awaited before the error
    propagates, so nothing keeps running in the background.
    """
    tasks = [asyncio.ensure_future(aw) for aw in aws]
    try:
        return await asyncio.gather(*tasks)
    finally:
        # no-op for the tasks that are already done
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
