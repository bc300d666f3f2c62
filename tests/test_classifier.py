import pytest

from core.classifier import Outcome, ResponseClassifier, Severity


@pytest.fixture
def classifier():
    return ResponseClassifier()


@pytest.mark.parametrize("status", [400, 404])
def test_default_suppressed_codes(classifier, status):
    assert not classifier.classify(Outcome(status_code=status)).reportable


def test_success_and_server_error_are_reported_in_different_buckets(classifier):
    ok = classifier.classify(Outcome(status_code=200))
    unavailable = classifier.classify(Outcome(status_code=503))
    assert ok.reportable and unavailable.reportable
    assert ok.severity is Severity.SUCCESS
    assert unavailable.severity is Severity.SERVER_ERROR


@pytest.mark.parametrize("status, severity", [
    (101, Severity.INFO),
    (204, Severity.SUCCESS),
    (301, Severity.REDIRECT),
    (399, Severity.REDIRECT),
    (401, Severity.CLIENT_ERROR),
    (403, Severity.CLIENT_ERROR),
    (500, Severity.SERVER_ERROR),
])
def test_severity_buckets(classifier, status, severity):
    decision = classifier.classify(Outcome(status_code=status))
    assert decision.reportable
    assert decision.severity is severity


def test_transport_failure_is_reported_as_error(classifier):
    decision = classifier.classify(Outcome.failure("ConnectError: refused"))
    assert decision.reportable
    assert decision.severity is Severity.ERROR


def test_custom_suppressed_set():
    classifier = ResponseClassifier(suppressed={403})
    assert not classifier.classify(Outcome(status_code=403)).reportable
    assert classifier.classify(Outcome(status_code=404)).reportable
