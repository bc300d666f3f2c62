import io

import httpx
import pytest

from reports.reporter import Reporter


@pytest.fixture
def write_lines(tmp_path):
    """Writes the given lines to a file under tmp_path and returns its path."""
    def _write(name, lines):
        path = tmp_path / name
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return str(path)
    return _write


@pytest.fixture
def output():
    return io.StringIO()


@pytest.fixture
def reporter(output):
    return Reporter(stream=output, use_color=False, show_progress=False)


@pytest.fixture
def status_by_path():
    """Builds MockTransport handlers answering with routes[path], else `default`."""
    def build(routes, default=404):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(routes.get(request.url.path, default))
        return handler
    return build
