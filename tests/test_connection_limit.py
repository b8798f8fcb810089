"""Tests that the configured connection limit bounds concurrent requests."""

import io
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import pytest

from pyhttpget.config import Config, setup
from pyhttpget.http.transfer import get_stream, get_text


class SlowHandler(BaseHTTPRequestHandler):
    """Answers every GET after a delay and records peak concurrency."""

    delay = 0.2
    lock = threading.Lock()
    in_flight = 0
    max_in_flight = 0

    def do_GET(self):
        cls = type(self)
        with cls.lock:
            cls.in_flight += 1
            cls.max_in_flight = max(cls.max_in_flight, cls.in_flight)

        time.sleep(cls.delay)

        # Released before replying so the next request cannot overlap it
        with cls.lock:
            cls.in_flight -= 1

        body = b"ok"
        self.send_response(200)
        self.send_header("Content-Type", "text/plain; charset=utf-8")
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, format, *args):
        pass


@pytest.fixture
def slow_server():
    """Local threaded HTTP server; yields (base_url, handler_class)."""
    handler = type(
        "Handler",
        (SlowHandler,),
        {"lock": threading.Lock(), "in_flight": 0, "max_in_flight": 0},
    )
    server = ThreadingHTTPServer(("127.0.0.1", 0), handler)
    server.daemon_threads = True
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()

    host, port = server.server_address[:2]
    yield f"http://{host}:{port}/", handler

    server.shutdown()
    server.server_close()
    thread.join(timeout=5)


def run_concurrently(func, count):
    with ThreadPoolExecutor(max_workers=count) as pool:
        futures = [pool.submit(func) for _ in range(count)]
        return [future.result(timeout=30) for future in futures]


class TestConnectionLimit:
    """Test that setup() and Config limit concurrent requests."""

    def test_limit_of_one_serializes_requests(self, slow_server):
        url, handler = slow_server
        setup(1)

        results = run_concurrently(lambda: get_text(url), 4)

        assert results == ["ok"] * 4
        assert handler.max_in_flight == 1

    def test_limit_of_two(self, slow_server):
        url, handler = slow_server
        setup(2)

        results = run_concurrently(lambda: get_text(url), 6)

        assert results == ["ok"] * 6
        assert 1 <= handler.max_in_flight <= 2

    def test_streams_share_the_limit(self, slow_server):
        url, handler = slow_server
        setup(1)

        def fetch():
            sink = io.BytesIO()
            get_stream(url, sink)
            return sink.getvalue()

        assert run_concurrently(fetch, 3) == [b"ok"] * 3
        assert handler.max_in_flight == 1

    def test_explicit_config_is_limited(self, slow_server):
        url, handler = slow_server
        config = Config(connection_limit=1)

        results = run_concurrently(lambda: get_text(url, config=config), 3)

        assert results == ["ok"] * 3
        assert handler.max_in_flight == 1

    def test_higher_limit_allows_overlap(self, slow_server):
        url, handler = slow_server
        setup(4)

        # Hold the workers at a barrier so all four requests start together
        barrier = threading.Barrier(4)

        def fetch():
            barrier.wait(timeout=10)
            return get_text(url)

        assert run_concurrently(fetch, 4) == ["ok"] * 4
        assert handler.max_in_flight > 1
