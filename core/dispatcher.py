import asyncio
import logging
import random
from dataclasses import replace
from typing import AsyncIterator, Iterable, List, Optional, Sequence, Tuple

import httpx

from core.classifier import Outcome
from core.exceptions import ConfigurationError
from core.templater import RequestSpec, Templater
from core.utils import random_element

logger = logging.getLogger(__name__)

DEFAULT_THREADS = 4

# A non-ASCII word in a Host header surfaces as UnicodeEncodeError before
# httpx sends anything.
REQUEST_ERRORS = (httpx.HTTPError, httpx.InvalidURL, UnicodeError)

# Bodies up to this size are read and dropped so the connection returns to the
# pool; anything larger is cut off and its connection closed.
MAX_DRAINED_BODY = 64 * 1024


class ConcurrencyBudget:
    """
    Counting semaphore bounding the number of in-flight requests.

    Used as an async context manager; the unit is released on every exit path,
    including exceptions and task cancellation.
    """
    def __init__(self, limit: int = DEFAULT_THREADS):
        if limit < 1:
            raise ConfigurationError(f"Concurrency limit must be at least 1, got {limit}")
        self.limit = limit
        self._semaphore = asyncio.Semaphore(limit)
        self.in_flight = 0
        self.peak = 0  # highest in_flight seen, for diagnostics

    async def __aenter__(self):
        await self._semaphore.acquire()
        self.in_flight += 1
        self.peak = max(self.peak, self.in_flight)
        return self

    async def __aexit__(self, exc_type, exc, tb):
        self.in_flight -= 1
        self._semaphore.release()
        return False


async def drain(response: httpx.Response, limit: int = MAX_DRAINED_BODY) -> int:
    """
    Reads and discards at most about `limit` bytes of the response body.

    Returns:
        int: Number of body bytes read.
    """
    received = 0
    async for chunk in response.aiter_raw():
        received += len(chunk)
        if received > limit:
            logger.debug(f"Body of {response.url} exceeds {limit} bytes, dropping the connection")
            break
    return received


def describe_error(exc: Exception) -> str:
    """httpx timeouts often carry an empty message; fall back to the class name."""
    message = str(exc).strip()
    name = type(exc).__name__
    return f"{name}: {message}" if message else name


class Dispatcher:
    """
    Issues one GET per word through a shared httpx client while holding a
    unit of the concurrency budget.
    """
    def __init__(self, client: httpx.AsyncClient, templater: Templater, url_template: str,
                 budget: ConcurrencyBudget, user_agents: Optional[Sequence[str]] = None,
                 rng: Optional[random.Random] = None):
        """
        Initializes the Dispatcher.

        Args:
            client (httpx.AsyncClient): Shared client, never mutated here.
            templater (Templater): Strategy for the current mode.
            url_template (str): Template produced by templater.derive_template.
            budget (ConcurrencyBudget): Shared concurrency budget.
            user_agents (Sequence[str], optional): Pool sampled once per request.
            rng (random.Random, optional): Randomness source for User-Agent sampling.
        """
        self.client = client
        self.templater = templater
        self.url_template = url_template
        self.budget = budget
        self.user_agents = list(user_agents or [])
        self.rng = rng if rng is not None else random.Random()

    def build_spec(self, word: str) -> RequestSpec:
        spec = self.templater.derive_request_spec(self.url_template, word)
        user_agent = random_element(self.user_agents, self.rng)
        if user_agent:
            spec = replace(spec, user_agent=user_agent)
        return spec

    async def dispatch(self, word: str) -> Tuple[RequestSpec, Outcome]:
        """
        Sends the request for a single word. Transport failures are turned
        into a failed Outcome, never raised.
        """
        async with self.budget:
            spec = self.build_spec(word)
            try:
                logger.debug(f"GET {spec.url} {spec.headers() or ''}")
                async with self.client.stream("GET", spec.url, headers=spec.headers()) as response:
                    outcome = Outcome(status_code=response.status_code)
                    await self.discard_body(response)
            except REQUEST_ERRORS as exc:
                logger.debug(f"Request to {spec.url} failed: {exc!r}")
                outcome = Outcome.failure(describe_error(exc))
        return spec, outcome

    async def discard_body(self, response: httpx.Response):
        """Drops the body. A failed read leaves the status already recorded untouched."""
        try:
            await drain(response)
        except httpx.HTTPError as exc:
            logger.debug(f"Reading body of {response.url} failed: {exc!r}")

    async def run(self, words: Iterable[str]) -> AsyncIterator[Tuple[RequestSpec, Outcome]]:
        """
        Fans out one task per word and yields (RequestSpec, Outcome) pairs in
        completion order. Every word yields exactly one pair.

        If the consumer stops early, pending tasks are cancelled and awaited.
        """
        tasks: List[asyncio.Task] = [asyncio.create_task(self.dispatch(word)) for word in words]
        logger.debug(f"Dispatching {len(tasks)} requests with {self.budget.limit} concurrent slots")
        try:
            for next_done in asyncio.as_completed(tasks):
                yield await next_done
        finally:
            for task in tasks:
                if not task.done():
                    task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
