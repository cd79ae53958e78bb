"""Run tool handlers uniformly, whether they are sync or async."""

from __future__ import annotations

import asyncio
import inspect
from typing import Any, Callable

from ...exceptions import ToolExecutionError
from ...logger import get_logger

logger = get_logger(__name__)


async def run_handler(handler: Callable[..., Any], arguments: Any, *, timeout: float) -> Any:
    """Execute a tool handler, handling async/sync and timeouts.

    Coroutine functions are awaited on the running loop. Plain callables run in a
    worker thread so a blocking handler never stalls the transport. A plain
    callable that hands back an awaitable has it awaited as well.

    Args:
        handler: The callable to execute.
        arguments: The validated arguments passed as the single positional argument.
        timeout: Timeout in seconds for the whole execution.

    Returns:
        The value returned by the handler.

    Raises:
        ToolExecutionError: If execution times out.
    """
    try:
        if inspect.iscoroutinefunction(handler):
            return await asyncio.wait_for(handler(arguments), timeout=timeout)

        result = await asyncio.wait_for(asyncio.to_thread(handler, arguments), timeout=timeout)
        if inspect.isawaitable(result):
            return await asyncio.wait_for(result, timeout=timeout)
        return result

    except asyncio.TimeoutError as exc:
        msg = f"Tool execution timed out after {timeout} seconds."
        logger.warning(msg)
        raise ToolExecutionError(msg) from exc
