import os
import subprocess
import sys
import tempfile
import unittest

ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


class TestUsfxGeneration(unittest.TestCase):

    # run usx2usfx.py
    # test usfx file is created in output directory
    # Nothing is written to stdout
    def test_usfx_file_is_created(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            file_path = os.path.join(tmpdir, "TESTID.usfx.xml")
            result = subprocess.run(
                [sys.executable, "usx2usfx.py", "tests/test_data/usx", "-o", file_path],
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                cwd=ROOT,
                check=False,
            )
            self.assertEqual(result.returncode, 0)
            self.assertTrue(os.path.exists(file_path))
            self.assertEqual(result.stdout.decode(), "")
            self.assertIn("Unrecognized USX element name: sidebar", result.stderr.decode())
            self.assertNotIn("Skipping duplicate", result.stderr.decode())

    def test_verbose_output(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            result = subprocess.run(
                [
                    sys.executable,
                    "usx2usfx.py",
                    "-v",
                    "tests/test_data/usx",
                    "-o",
                    os.path.join(tmpdir, "out.xml"),
                ],
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                cwd=ROOT,
                check=False,
            )
            self.assertIn("Skipping duplicate book GEN", result.stderr.decode())
            self.assertIn("Converted 2, skipped 1, failed 0 file(s).", result.stderr.decode())

    def test_missing_directory(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            result = subprocess.run(
                [
                    sys.executable,
                    "usx2usfx.py",
                    os.path.join(tmpdir, "missing"),
                    "-o",
                    os.path.join(tmpdir, "out.xml"),
                ],
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                cwd=ROOT,
                check=False,
            )
            self.assertEqual(result.returncode, 1)
            self.assertFalse(os.path.exists(os.path.join(tmpdir, "out.xml")))


if __name__ == "__main__":
    unittest.main()
