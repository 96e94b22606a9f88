import base64
import os
import tempfile
import unittest

from shop_qrcodes.services.qr_generator import (
    build_scan_url,
    generate_qr_code_blob,
    generate_qr_code_file,
    render_code,
)

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


class BuildScanUrlTests(unittest.TestCase):
    def test_scan_path(self):
        self.assertEqual(build_scan_url(7, "https://app.example"), "https://app.example/qrcodes/7/scan")

    def test_trailing_slash_on_app_url(self):
        self.assertEqual(build_scan_url(7, "https://app.example/"), "https://app.example/qrcodes/7/scan")


class QRImageTests(unittest.TestCase):
    def test_blob_is_png(self):
        self.assertTrue(generate_qr_code_blob("https://app.example/qrcodes/1/scan").startswith(PNG_SIGNATURE))

    def test_file_is_written(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "code.png")
            generate_qr_code_file(3, "https://app.example", path)
            with open(path, "rb") as f:
                self.assertTrue(f.read().startswith(PNG_SIGNATURE))


class RenderCodeTests(unittest.IsolatedAsyncioTestCase):
    async def test_returns_png_data_url(self):
        image = await render_code(5, "https://app.example")
        prefix = "data:image/png;base64,"
        self.assertTrue(image.startswith(prefix))
        self.assertTrue(base64.b64decode(image[len(prefix):]).startswith(PNG_SIGNATURE))

    async def test_same_id_renders_same_image(self):
        first = await render_code(5, "https://app.example")
        second = await render_code(5, "https://app.example")
        other = await render_code(6, "https://app.example")
        self.assertEqual(first, second)
        self.assertNotEqual(first, other)


if __name__ == "__main__":
    unittest.main()
