class BusterError(Exception):
    """Base class for every error raised by BusterX."""


class ConfigurationError(BusterError):
    """
    Invalid mode/option combination or malformed input detected before any
    request is sent. Always fatal: the run does not start.
    """


class InvalidTargetError(ConfigurationError):
    """The target URL has no recognised scheme or no host."""

    def __init__(self, target: str, reason: str = "expected an http:// or https:// URL"):
        self.target = target
        self.reason = reason
        super().__init__(f"Invalid target '{target}': {reason}")


class ResourceError(BusterError):
    """A wordlist, extension or user-agent file could not be read."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Could not read '{path}': {reason}")


class TransportError(BusterError):
    """
    A single request failed at the transport level (connection refused,
    timeout, DNS or TLS failure). Never raised out of the dispatcher; it is
    carried inside an Outcome instead.
    """


class HeaderParseError(BusterError):
    """A custom header string is not of the form 'Key: Value'."""

    def __init__(self, raw: str):
        self.raw = raw
        super().__init__(f"Malformed header '{raw}', expected 'Key: Value'")
