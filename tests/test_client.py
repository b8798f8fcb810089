"""Tests for client creation and header/cookie files."""

import time

import httpx

from pyhttpget.config import Config
from pyhttpget.http.client import create_client
from pyhttpget.http.cookies import load_cookies_from_file
from pyhttpget.http.headers import load_headers_from_file


class TestLoadHeaders:
    """Test load_headers_from_file."""

    def test_parses_file(self, tmp_path):
        header_file = tmp_path / "headers.txt"
        header_file.write_text(
            "# comment\n"
            "\n"
            "Accept: text/html\n"
            "Referer: https://example.com/a:b\n"
            "no colon here\n"
            "accept: application/json\n"
        )

        headers = load_headers_from_file(str(header_file))
        assert headers == {
            "Referer": "https://example.com/a:b",
            "accept": "application/json",
        }

    def test_missing_file(self, tmp_path):
        assert load_headers_from_file(str(tmp_path / "missing.txt")) == {}


class TestLoadCookies:
    """Test load_cookies_from_file."""

    def test_parses_netscape_format(self, tmp_path):
        future = int(time.time()) + 3600
        cookie_file = tmp_path / "cookies.txt"
        cookie_file.write_text(
            "# Netscape HTTP Cookie File\n"
            f".example.com\tTRUE\t/\tFALSE\t{future}\tsessionid\tabc123\n"
            f"#HttpOnly_example.com\tFALSE\t/app\tTRUE\t0\ttoken\txyz\n"
            ".example.com\tTRUE\t/\tFALSE\t1\texpired\told\n"
            "broken line\n"
        )

        cookies = load_cookies_from_file(str(cookie_file))
        assert cookies.get("sessionid") == "abc123"
        assert cookies.get("token") == "xyz"
        assert cookies.get("expired") is None

    def test_missing_file(self, tmp_path):
        assert len(load_cookies_from_file(str(tmp_path / "missing.txt"))) == 0


class TestCreateClient:
    """Test create_client."""

    def test_applies_config(self, tmp_path):
        header_file = tmp_path / "headers.txt"
        header_file.write_text("X-Test: yes\n")
        cookie_file = tmp_path / "cookies.txt"
        cookie_file.write_text("example.com\tFALSE\t/\tFALSE\t0\tsid\t42\n")

        config = Config(
            header_file=str(header_file),
            cookie_file=str(cookie_file),
            user_agent="pyhttpget-test",
            timeout=12.5,
        )

        with create_client(config) as client:
            assert isinstance(client, httpx.Client)
            assert client.headers["User-Agent"] == "pyhttpget-test"
            assert client.headers["X-Test"] == "yes"
            assert client.cookies.get("sid") == "42"
            assert client.timeout.read == 12.5
            assert client.follow_redirects is True

    def test_cookies_are_sent(self, tmp_path):
        cookie_file = tmp_path / "cookies.txt"
        cookie_file.write_text("example.com\tFALSE\t/\tFALSE\t0\tsid\t42\n")

        with create_client(Config(cookie_file=str(cookie_file))) as client:
            request = client.build_request("GET", "http://example.com/")
        assert request.headers["Cookie"] == "sid=42"
