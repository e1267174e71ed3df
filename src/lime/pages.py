"""Built-in HTML payloads served when no page on disk can answer a request."""

from __future__ import annotations

NOT_FOUND_OVERRIDE_FILE = "not-found.html"
INTERNAL_ERROR_OVERRIDE_FILE = "internal-error.html"

_STYLE = """
    <style>
      body {
        margin: 0;
        min-height: 100vh;
        display: flex;
        align-items: center;
        justify-content: center;
        font-family: system-ui, -apple-system, "Segoe UI", sans-serif;
        background: #f6fbf2;
        color: #1f2d16;
      }
      main { max-width: 36rem; padding: 2rem; text-align: center; }
      h1 { font-size: 2.5rem; margin: 0 0 0.5rem; color: #4d8a1f; }
      p { line-height: 1.5; }
      code { background: #e4f2d7; padding: 0.1rem 0.35rem; border-radius: 4px; }
    </style>"""


def _page(title: str, body: str) -> bytes:
    return (
        "<!DOCTYPE html>\n"
        '<html lang="en">\n'
        "  <head>\n"
        '    <meta charset="utf-8">\n'
        '    <meta name="viewport" content="width=device-width, initial-scale=1">\n'
        f"    <title>{title}</title>"
        f"{_STYLE}\n"
        "  </head>\n"
        "  <body>\n"
        f"    <main>\n{body}\n    </main>\n"
        "  </body>\n"
        "</html>\n"
    ).encode("utf-8")


DEFAULT_INDEX_HTML = _page(
    "Lime Web Server",
    """      <h1>Lime is running</h1>
      <p>There is no <code>index.html</code> in the pages directory yet.</p>
      <p>Add <code>pages/index.html</code> to replace this page, put other
      <code>.html</code> files next to it, and keep images, scripts and styles
      in the <code>static</code> directory.</p>
      <p>Directories can be changed in <code>lime.toml</code>.</p>""",
)

NOT_FOUND_HTML = _page(
    "404 Not Found",
    """      <h1>404</h1>
      <p>The page you are looking for does not exist.</p>
      <p><a href="/">Back to the home page</a></p>""",
)

INTERNAL_ERROR_HTML = _page(
    "500 Internal Server Error",
    """      <h1>500</h1>
      <p>Something went wrong while serving this page.</p>
      <p>Check the server log for details.</p>""",
)
