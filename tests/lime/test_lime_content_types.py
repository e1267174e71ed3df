import unittest

from lime.content_types import (
    CONTENT_TYPES,
    DEFAULT_CONTENT_TYPE,
    HTML_CONTENT_TYPE,
    classify,
)


class ClassifyTests(unittest.TestCase):
    def test_common_asset_types(self) -> None:
        expected = {
            "css": "text/css",
            "js": "text/javascript",
            "png": "image/png",
            "jpeg": "image/jpeg",
            "svg": "image/svg+xml",
            "woff2": "font/woff2",
            "wasm": "application/wasm",
            "pdf": "application/pdf",
            "json": "application/json",
            "mp4": "video/mp4",
        }
        for extension, mime_type in expected.items():
            with self.subTest(extension=extension):
                self.assertEqual(mime_type, classify(extension))

    def test_table_covers_required_extensions(self) -> None:
        required = (
            "jpg jpeg png gif svg webp ico bmp tiff avif css js mjs wasm ttf otf "
            "woff woff2 eot mp3 wav ogg m4a flac mp4 webm mov zip tar gz pdf txt "
            "csv xml json"
        ).split()
        missing = [extension for extension in required if extension not in CONTENT_TYPES]
        self.assertEqual([], missing)

    def test_classify_is_deterministic_for_every_entry(self) -> None:
        for extension, mime_type in CONTENT_TYPES.items():
            with self.subTest(extension=extension):
                self.assertEqual(mime_type, classify(extension))
                self.assertEqual(classify(extension), classify(extension))

    def test_accepts_leading_dot_and_any_case(self) -> None:
        self.assertEqual("text/css", classify(".CSS"))
        self.assertEqual("image/jpeg", classify("JpG"))

    def test_unknown_extension_falls_back_to_octet_stream(self) -> None:
        self.assertEqual(DEFAULT_CONTENT_TYPE, classify("unknownbinaryextension"))
        self.assertEqual(DEFAULT_CONTENT_TYPE, classify(""))

    def test_unlisted_extension_uses_mimetypes(self) -> None:
        self.assertEqual("text/html", classify("htm"))

    def test_html_content_type_carries_charset(self) -> None:
        self.assertEqual("text/html; charset=utf-8", HTML_CONTENT_TYPE)


if __name__ == "__main__":
    unittest.main()
