import logging
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from core.exceptions import ConfigurationError
from core.modes import Mode
from core.utils import bare_host, extract_scheme

logger = logging.getLogger(__name__)

PLACEHOLDER = "{fuzz}"


@dataclass(frozen=True)
class RequestSpec:
    """
    Everything needed to issue the request for one word.

    Attributes:
        word (str): The substituted word.
        url (str): Concrete URL to request.
        user_agent (str, optional): User-Agent sampled for this request.
        host_override (str, optional): Host header value, VirtualHost mode only.
    """
    word: str
    url: str
    user_agent: Optional[str] = None
    host_override: Optional[str] = None

    @property
    def vhost(self) -> Optional[str]:
        """Label shown next to VirtualHost findings."""
        return self.host_override

    def headers(self) -> Dict[str, str]:
        headers = {}
        if self.user_agent:
            headers["User-Agent"] = self.user_agent
        if self.host_override:
            headers["Host"] = self.host_override
        return headers


class Templater:
    """
    Base strategy turning a target into a URL template and a word into a
    RequestSpec. One subclass per Mode.
    """
    mode: Mode

    def derive_template(self, target: str) -> Tuple[str, str]:
        """
        Builds the URL template for the run.

        Args:
            target (str): Base target URL.

        Returns:
            Tuple[str, str]: The URL template and the placeholder it uses.
        """
        raise NotImplementedError

    def derive_request_spec(self, url_template: str, word: str) -> RequestSpec:
        return RequestSpec(word=word, url=url_template.replace(PLACEHOLDER, word))


class DirectoryTemplater(Templater):
    """Appends the word as a new path segment: {target}/{fuzz}."""
    mode = Mode.DIR

    def derive_template(self, target: str) -> Tuple[str, str]:
        bare_host(target)
        if target.endswith(PLACEHOLDER):
            raise ConfigurationError(
                f"Target '{target}' already ends with {PLACEHOLDER}; use fuzz mode instead"
            )
        return f"{target.rstrip('/')}/{PLACEHOLDER}", PLACEHOLDER


class FuzzTemplater(Templater):
    """The caller places {fuzz} anywhere in the target; it is used as is."""
    mode = Mode.FUZZ

    def derive_template(self, target: str) -> Tuple[str, str]:
        bare_host(target)
        if PLACEHOLDER not in target:
            raise ConfigurationError(
                f"Fuzz mode needs a {PLACEHOLDER} marker in the target, got '{target}'"
            )
        return target, PLACEHOLDER


class VirtualHostTemplater(Templater):
    """
    Keeps the URL fixed and varies the Host header: each word becomes
    '<word>.<bare host of the target>'.
    """
    mode = Mode.VHOST

    def derive_template(self, target: str) -> Tuple[str, str]:
        bare_host(target)
        return target, PLACEHOLDER

    def derive_request_spec(self, url_template: str, word: str) -> RequestSpec:
        host = f"{word}.{bare_host(url_template)}"
        return RequestSpec(word=word, url=url_template, host_override=host)


class DnsTemplater(Templater):
    """Varies the leftmost DNS label: {scheme}{fuzz}.{bare host}, path dropped."""
    mode = Mode.DNS

    def derive_template(self, target: str) -> Tuple[str, str]:
        scheme = extract_scheme(target)
        return f"{scheme}{PLACEHOLDER}.{bare_host(target)}", PLACEHOLDER


_TEMPLATERS = {
    Mode.DIR: DirectoryTemplater,
    Mode.FUZZ: FuzzTemplater,
    Mode.VHOST: VirtualHostTemplater,
    Mode.DNS: DnsTemplater,
}


def get_templater(mode: Mode) -> Templater:
    """Returns the strategy for the given mode."""
    return _TEMPLATERS[Mode(mode)]()


def derive_template(target: str, mode: Mode) -> Tuple[str, str]:
    url_template, placeholder = get_templater(mode).derive_template(target)
    logger.debug(f"URL template for {Mode(mode).label}: {url_template}")
    return url_template, placeholder


def derive_request_spec(url_template: str, word: str, mode: Mode) -> RequestSpec:
    return get_templater(mode).derive_request_spec(url_template, word)
