import tempfile
import unittest
import urllib.error
import urllib.request
from pathlib import Path

from lime.config import ServerConfig
from lime.pages import DEFAULT_INDEX_HTML, NOT_FOUND_HTML
from lime.service import PageServer, request_path_from_target


class RequestPathTests(unittest.TestCase):
    def test_strips_query_and_fragment(self) -> None:
        self.assertEqual("/about", request_path_from_target("/about?draft=1#top"))

    def test_percent_decodes_path(self) -> None:
        self.assertEqual("/my page", request_path_from_target("/my%20page"))
        self.assertEqual("/../secret.txt", request_path_from_target("/%2e%2e/secret.txt"))


class PageServerTests(unittest.TestCase):
    def setUp(self) -> None:
        self._temp_dir = tempfile.TemporaryDirectory()
        base = Path(self._temp_dir.name)
        self.base = base
        self.pages = base / "pages"
        self.static = base / "static"
        self.pages.mkdir()
        self.static.mkdir()
        config = ServerConfig(
            host="127.0.0.1",
            port=0,
            pages_dir=self.pages,
            static_dir=self.static,
        )
        self.server = PageServer(config)
        self.server.start()

    def tearDown(self) -> None:
        self.server.stop()
        self._temp_dir.cleanup()

    def _get(self, path: str) -> tuple[int, str, bytes]:
        url = f"http://127.0.0.1:{self.server.bound_port}{path}"
        try:
            with urllib.request.urlopen(url, timeout=5) as response:
                return response.status, response.headers["Content-Type"], response.read()
        except urllib.error.HTTPError as error:
            with error:
                return error.code, error.headers["Content-Type"], error.read()

    def test_reports_bound_port(self) -> None:
        self.assertTrue(self.server.is_running)
        self.assertIsNotNone(self.server.bound_port)
        self.assertNotEqual(0, self.server.bound_port)

    def test_root_serves_default_landing_page(self) -> None:
        status, content_type, body = self._get("/")

        self.assertEqual(200, status)
        self.assertEqual("text/html; charset=utf-8", content_type)
        self.assertEqual(DEFAULT_INDEX_HTML, body)

    def test_serves_page_and_static_asset(self) -> None:
        (self.pages / "about.html").write_text("<p>About</p>", encoding="utf-8")
        (self.static / "style.css").write_bytes(b"p { margin: 0; }")

        self.assertEqual(
            (200, "text/html; charset=utf-8", b"<p>About</p>"),
            self._get("/about?ref=nav"),
        )
        self.assertEqual((200, "text/css", b"p { margin: 0; }"), self._get("/style.css"))

    def test_missing_page_is_404(self) -> None:
        status, _, body = self._get("/missing-page")
        self.assertEqual(404, status)
        self.assertEqual(NOT_FOUND_HTML, body)

    def test_encoded_traversal_is_404(self) -> None:
        (self.base / "secret.txt").write_text("secret", encoding="utf-8")

        status, _, body = self._get("/%2e%2e/secret.txt")

        self.assertEqual(404, status)
        self.assertNotIn(b"secret", body)

    def test_stop_is_idempotent(self) -> None:
        self.server.stop()
        self.server.stop()
        self.assertFalse(self.server.is_running)


if __name__ == "__main__":
    unittest.main()
