import threading

from core.classifier import Outcome, ReportDecision, ResponseClassifier, Severity
from core.templater import RequestSpec

classifier = ResponseClassifier()


def report(reporter, spec, outcome):
    reporter.report(spec, outcome, classifier.classify(outcome))


def lines(output):
    return output.getvalue().splitlines()


def test_finding_line(reporter, output):
    report(reporter, RequestSpec(word="admin", url="http://example.com/admin"), Outcome(status_code=200))
    assert lines(output) == ["> Found: http://example.com/admin (200)"]
    assert reporter.state.found == 1


def test_vhost_finding_includes_label(reporter, output):
    spec = RequestSpec(word="intranet", url="http://10.0.0.1", host_override="intranet.10.0.0.1")
    report(reporter, spec, Outcome(status_code=302))
    assert lines(output) == ["> Found: http://10.0.0.1 (VHost: intranet.10.0.0.1) (302)"]


def test_suppressed_outcome_prints_nothing(reporter, output):
    report(reporter, RequestSpec(word="x", url="http://example.com/x"), Outcome(status_code=404))
    assert output.getvalue() == ""
    assert reporter.state.found == 0


def test_transport_failure_line(reporter, output):
    outcome = Outcome.failure("ConnectError: refused")
    report(reporter, RequestSpec(word="x", url="http://example.com/x"), outcome)
    assert lines(output) == ["Error: Request failed: http://example.com/x (ConnectError: refused)"]
    assert reporter.state.errors == 1
    assert reporter.state.found == 0


def test_unreportable_decision_is_respected(reporter, output):
    reporter.report(RequestSpec(word="x", url="http://example.com/x"), Outcome(status_code=200),
                    ReportDecision(reportable=False, severity=Severity.SUCCESS))
    assert output.getvalue() == ""


def test_finish_prints_single_summary(reporter, output):
    reporter.start(3)
    report(reporter, RequestSpec(word="a", url="http://example.com/a"), Outcome(status_code=200))
    for _ in range(3):
        reporter.tick()
    reporter.finish()
    assert lines(output)[-1] == "Done Busting completed (1 found, 0 errors, 3/3 requests)"
    assert sum(line.startswith("Done") for line in lines(output)) == 1


def test_close_drops_the_bar_without_a_summary(reporter, output):
    reporter.start(2)
    reporter.close()
    reporter.close()
    assert reporter._bar is None
    assert output.getvalue() == ""


def test_settings_banner(reporter, output):
    reporter.settings([("Mode", "Dir (Directory)"), ("Headers", ["X-A: 1", "X-B: 2"])])
    assert lines(output) == [
        "> Mode       Dir (Directory)",
        "> Headers   ",
        "    > X-A: 1",
        "    > X-B: 2",
    ]


def test_concurrent_reports_do_not_interleave(reporter, output):
    reporter.start(800)

    def worker(n):
        for i in range(100):
            spec = RequestSpec(word=f"{n}-{i}", url=f"http://example.com/{n}-{i}")
            report(reporter, spec, Outcome(status_code=200))
            reporter.tick()

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    printed = lines(output)
    assert len(printed) == 800
    assert all(line.startswith("> Found: http://example.com/") and line.endswith(" (200)") for line in printed)
    assert reporter.state.completed == 800
    assert reporter.state.found == 800
