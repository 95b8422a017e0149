import unittest

from linebadge.config import LineCountConfig
from linebadge.filters import PathFilter


class TestPathFilter(unittest.TestCase):
    def test_relative_paths_check_every_directory(self):
        path_filter = PathFilter(LineCountConfig())
        self.assertFalse(path_filter.is_eligible("node_modules/lib/index.js"))
        self.assertFalse(path_filter.is_eligible("src/build/gen.py"))
        self.assertTrue(path_filter.is_eligible("src/app/main.py"))

    def test_absolute_ancestors_are_not_checked_without_root(self):
        path_filter = PathFilter(LineCountConfig())
        self.assertTrue(path_filter.is_eligible("/srv/target/app/main.py"))
        self.assertTrue(path_filter.is_eligible("/home/u/build/proj/a.py"))

    def test_only_directories_below_root_are_checked(self):
        path_filter = PathFilter(LineCountConfig(), root="/home/u/build/proj")
        self.assertTrue(path_filter.is_eligible("/home/u/build/proj/src/a.py"))
        self.assertFalse(path_filter.is_eligible("/home/u/build/proj/dist/a.js"))
        self.assertIn("dist", path_filter.rejection_reason("/home/u/build/proj/dist/a.js"))
        # Outside the root: ancestors are not ours to judge.
        self.assertTrue(path_filter.is_eligible("/opt/vendor/lib/x.py"))

    def test_excluded_extension(self):
        path_filter = PathFilter(LineCountConfig(exclude_extensions=("lock",)))
        self.assertFalse(path_filter.is_eligible("/srv/app/poetry.lock"))
        self.assertTrue(path_filter.is_eligible("/srv/app/poetry.toml"))


if __name__ == "__main__":
    unittest.main()
