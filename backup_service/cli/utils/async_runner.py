"""Run async code from click commands."""

import asyncio
from collections.abc import Awaitable, Callable
from functools import wraps
from typing import TypeVar

T = TypeVar("T")


def coro(f: Callable[..., Awaitable[T]]) -> Callable[..., T]:
    """
    Decorator that lets a click command be written as a coroutine.

    Each invocation gets a fresh event loop via asyncio.run(), since a CLI
    process runs one command and exits.

    Usage:
        @cli.command()
        @coro
        async def my_command():
            result = await some_async_function()
            click.echo(result)
    """

    @wraps(f)
    def wrapper(*args, **kwargs) -> T:
        return asyncio.run(f(*args, **kwargs))

    return wrapper
