from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional

from core.exceptions import TransportError

SUPPRESSED_STATUS_CODES = frozenset({400, 404})


class Severity(Enum):
    INFO = "info"
    SUCCESS = "success"
    REDIRECT = "redirect"
    CLIENT_ERROR = "client_error"
    SERVER_ERROR = "server_error"
    ERROR = "error"  # transport failure, no status code


@dataclass(frozen=True)
class Outcome:
    """Result of one request: a status code, or the transport error that prevented one."""
    status_code: Optional[int] = None
    error: Optional[TransportError] = None

    @classmethod
    def failure(cls, description: str) -> "Outcome":
        return cls(error=TransportError(description))

    @property
    def failed(self) -> bool:
        return self.status_code is None


@dataclass(frozen=True)
class ReportDecision:
    reportable: bool
    severity: Severity


class ResponseClassifier:
    """
    Maps an Outcome to a ReportDecision. Pure: no network, no shared state.
    """
    def __init__(self, suppressed: Iterable[int] = SUPPRESSED_STATUS_CODES):
        """
        Args:
            suppressed (Iterable[int]): Status codes that are never reported.
                                        Defaults to 400 and 404.
        """
        self.suppressed = frozenset(suppressed)

    @staticmethod
    def severity_for(status_code: int) -> Severity:
        if status_code < 200:
            return Severity.INFO
        if status_code < 300:
            return Severity.SUCCESS
        if status_code < 400:
            return Severity.REDIRECT
        if status_code < 500:
            return Severity.CLIENT_ERROR
        return Severity.SERVER_ERROR

    def classify(self, outcome: Outcome) -> ReportDecision:
        if outcome.failed:
            return ReportDecision(reportable=True, severity=Severity.ERROR)
        severity = self.severity_for(outcome.status_code)
        return ReportDecision(reportable=outcome.status_code not in self.suppressed, severity=severity)
