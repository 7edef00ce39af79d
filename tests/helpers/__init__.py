"""Test helper utilities."""

import asyncio


def make_fetch(*outcomes):
    """Build a fetch operation that returns (or raises) each outcome in turn.

    Exceptions in ``outcomes`` are raised; anything else is returned. The
    returned callable records how many times it was awaited in ``calls``.
    """
    remaining = list(outcomes)

    async def fetch():
        fetch.calls += 1
        outcome = remaining.pop(0)
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome

    fetch.calls = 0
    return fetch


def make_gated_fetch(outcome):
    """Fetch operation that blocks until ``fetch.gate`` is set."""
    gate = asyncio.Event()

    async def fetch():
        await gate.wait()
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome

    fetch.gate = gate
    return fetch
