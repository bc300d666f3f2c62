import logging
import random
from typing import Dict, Iterable, Optional, Sequence

import httpx

from core.classifier import ResponseClassifier
from core.dispatcher import DEFAULT_THREADS, ConcurrencyBudget, Dispatcher
from core.exceptions import ConfigurationError
from core.modes import Mode
from core.templater import get_templater
from core.utils import bare_host
from core.wordlists import expand_words
from reports.reporter import Reporter, RunState

DEFAULT_TIMEOUT = 10  # seconds, per request


def validate_mode_options(mode: Mode, extensions: Optional[Sequence[str]] = None, concurrency: int = DEFAULT_THREADS):
    """
    Rejects option combinations that make no sense for the mode.

    Raises:
        ConfigurationError: On extensions outside Dir/Fuzz mode or a
                            concurrency limit below 1.
    """
    mode = Mode(mode)
    if extensions and not mode.accepts_extensions:
        raise ConfigurationError(f"Extensions are not supported in {mode.label} mode")
    if concurrency < 1:
        raise ConfigurationError(f"Thread count must be at least 1, got {concurrency}")


class RunCoordinator:
    """
    Ties the templater, dispatcher, classifier and reporter together for one
    run and waits until every request has completed.
    """
    def __init__(self, reporter: Optional[Reporter] = None, classifier: Optional[ResponseClassifier] = None,
                 rng: Optional[random.Random] = None, timeout: float = DEFAULT_TIMEOUT,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        """
        Initializes the RunCoordinator.

        Args:
            reporter (Reporter, optional): Output sink. A default one writing to stdout is created if omitted.
            classifier (ResponseClassifier, optional): Defaults to suppressing 400 and 404.
            rng (random.Random, optional): Randomness source for User-Agent sampling.
            timeout (float): Per-request timeout in seconds.
            transport (httpx.AsyncBaseTransport, optional): Custom transport, mainly for tests.
        """
        self.logger = logging.getLogger(__name__)
        self.reporter = reporter if reporter is not None else Reporter()
        self.classifier = classifier if classifier is not None else ResponseClassifier()
        self.rng = rng
        self.timeout = timeout
        self.transport = transport

    def _build_client(self, headers: Dict[str, str]) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            headers=headers,
            timeout=self.timeout,
            follow_redirects=True,
            transport=self.transport,
        )

    async def execute(self, mode: Mode, target: str, words: Iterable[str],
                      user_agents: Optional[Sequence[str]] = None, headers: Optional[Dict[str, str]] = None,
                      concurrency: int = DEFAULT_THREADS, extensions: Optional[Sequence[str]] = None,
                      subdomains: bool = False) -> RunState:
        """
        Runs one enumeration from start to finish.

        Args:
            mode (Mode): Enumeration mode.
            target (str): Base target URL (must carry an http or https scheme).
            words (Iterable[str]): Substitution words.
            user_agents (Sequence[str], optional): User-Agent pool, sampled per request.
            headers (Dict[str, str], optional): Default headers sent with every request.
            concurrency (int): Maximum number of in-flight requests.
            extensions (Sequence[str], optional): '%' templates expanded against every word.
            subdomains (bool): Append the target's bare host to every word.

        Returns:
            RunState: Final counters of the run.

        Raises:
            ConfigurationError: Before any request is sent, on invalid options or target.
        """
        mode = Mode(mode)
        validate_mode_options(mode, extensions, concurrency)

        templater = get_templater(mode)
        url_template, _ = templater.derive_template(target)
        budget = ConcurrencyBudget(concurrency)

        words = expand_words(words, extensions, bare_host(target) if subdomains else None)
        self.logger.info(f"Starting {mode.label} run against {target} with {len(words)} words")

        # The client is built first so a bad default header fails before the bar opens
        async with self._build_client(dict(headers or {})) as client:
            dispatcher = Dispatcher(client, templater, url_template, budget, user_agents, self.rng)
            self.reporter.start(len(words))
            try:
                async for spec, outcome in dispatcher.run(words):
                    decision = self.classifier.classify(outcome)
                    self.reporter.report(spec, outcome, decision)
                    self.reporter.tick()
            finally:
                self.reporter.close()
        self.reporter.finish()

        self.logger.debug(f"Peak concurrency: {budget.peak}/{budget.limit}")
        return self.reporter.state
