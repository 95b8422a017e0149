import os
import shutil
import tempfile
import unittest
from pathlib import Path

from linebadge.file_utils import (
    LocalFileSystem,
    compile_name_matcher,
    decode_text,
    estimate_line_count,
    is_probably_text,
    line_count_from_bytes,
    normalize_posix_path,
)


class TestFileUtils(unittest.TestCase):
    def test_normalize_posix_path(self):
        self.assertEqual(normalize_posix_path(r"src\\main.py"), "src/main.py")
        self.assertEqual(normalize_posix_path("a/b/c.txt"), "a/b/c.txt")
        self.assertEqual(normalize_posix_path(Path("a") / "b.txt"), "a/b.txt")

    def test_name_matcher_exact_and_glob(self):
        match = compile_name_matcher(["node_modules", "*.egg-info", "Build/"])
        self.assertTrue(match("node_modules"))
        self.assertTrue(match("NODE_MODULES"))
        self.assertTrue(match("pkg.egg-info"))
        self.assertTrue(match("build"))
        self.assertFalse(match("src"))
        self.assertFalse(compile_name_matcher([])("anything"))

    def test_is_probably_text(self):
        self.assertTrue(is_probably_text(b"hello\nworld"))
        self.assertFalse(is_probably_text(b"abc\x00def"))

    def test_line_count_from_bytes(self):
        self.assertEqual(line_count_from_bytes(b""), 0)
        self.assertEqual(line_count_from_bytes(b"a"), 1)
        self.assertEqual(line_count_from_bytes(b"a\n"), 1)
        self.assertEqual(line_count_from_bytes(b"a\nb"), 2)

    def test_decode_text(self):
        self.assertEqual(decode_text("\ufeffhé\n".encode("utf-8")), "hé\n")
        self.assertIsNone(decode_text(b"\xff\xfe\xfa"))
        self.assertIsNone(decode_text(b"ok\x00"))

    def test_estimate_line_count(self):
        sample = b"0123456789\n" * 10  # 110 bytes, 10 lines
        self.assertEqual(estimate_line_count(1100, sample), 100)
        self.assertEqual(estimate_line_count(1105, sample), 101)
        self.assertEqual(estimate_line_count(5000, b"x" * 100), 1)
        self.assertEqual(estimate_line_count(0, b""), 0)
        # Whole file in the sample: exact.
        self.assertEqual(estimate_line_count(4, b"a\nb\n"), 2)


class TestLocalFileSystem(unittest.TestCase):
    def setUp(self):
        self.tmpdir = Path(tempfile.mkdtemp(prefix="linebadge_fs_"))
        self.fs = LocalFileSystem()

    def tearDown(self):
        shutil.rmtree(self.tmpdir, ignore_errors=True)

    def test_stat_regular_file_and_directory(self):
        path = self.tmpdir / "a.txt"
        path.write_bytes(b"abc\n")
        meta = self.fs.stat(path)
        self.assertEqual(meta.size_bytes, 4)
        self.assertTrue(meta.is_file)
        self.assertFalse(meta.is_symlink)
        self.assertGreater(meta.mtime_ms, 0)

        dir_meta = self.fs.stat(self.tmpdir)
        self.assertFalse(dir_meta.is_file)

    def test_stat_missing_raises(self):
        with self.assertRaises(OSError):
            self.fs.stat(self.tmpdir / "missing.txt")

    def test_stat_symlink(self):
        target = self.tmpdir / "target.py"
        target.write_text("x = 1\n", encoding="utf-8")
        link = self.tmpdir / "link.py"
        try:
            os.symlink(target, link)
        except (OSError, NotImplementedError):
            self.skipTest("symlinks not supported here")
        meta = self.fs.stat(link)
        self.assertTrue(meta.is_symlink)
        self.assertTrue(meta.is_file)
        self.assertEqual(meta.size_bytes, target.stat().st_size)

        target.unlink()
        dangling = self.fs.stat(link)
        self.assertTrue(dangling.is_symlink)
        self.assertFalse(dangling.is_file)

    def test_read_sample_is_bounded(self):
        path = self.tmpdir / "big.txt"
        path.write_bytes(b"x" * 100)
        self.assertEqual(len(self.fs.read_sample(path, 10)), 10)
        self.assertEqual(self.fs.read_bytes(path), b"x" * 100)


if __name__ == "__main__":
    unittest.main()
