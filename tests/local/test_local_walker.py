import os
import tempfile
import unittest
from unittest.mock import patch

from sharemirror.errors import LocalReadError, NotADirectoryError, NotFoundError
from sharemirror.local import walk


def _touch(root: str, rel: str, data: str = "x") -> str:
    path = os.path.join(root, *rel.split("/"))
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(data)
    return path


class TestWalker(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = self._tmp.name

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_walk_returns_all_files_sorted(self) -> None:
        _touch(self.root, "b.txt")
        _touch(self.root, "a/z.txt")
        _touch(self.root, "a/b/c.txt")
        _touch(self.root, "c/d/e/f.txt")

        files = walk(self.root)
        rel = [os.path.relpath(f, self.root).replace(os.sep, "/") for f in files]
        self.assertEqual(rel, ["a/b/c.txt", "a/z.txt", "b.txt", "c/d/e/f.txt"])
        self.assertTrue(all(os.path.isabs(f) for f in files))

    def test_empty_directories_yield_nothing(self) -> None:
        os.makedirs(os.path.join(self.root, "empty", "deeper"))
        self.assertEqual(walk(self.root), [])

    def test_walk_is_deterministic(self) -> None:
        for name in ("q.txt", "a.txt", "m/n.txt", "m/a.txt"):
            _touch(self.root, name)
        self.assertEqual(walk(self.root), walk(self.root))

    def test_missing_root(self) -> None:
        with self.assertRaises(NotFoundError):
            walk(os.path.join(self.root, "nope"))

    def test_root_is_file(self) -> None:
        path = _touch(self.root, "file.txt")
        with self.assertRaises(NotADirectoryError):
            walk(path)

    def test_unlistable_subdirectory(self) -> None:
        _touch(self.root, "ok.txt")
        _touch(self.root, "secret/key.pem")
        real_scandir = os.scandir
        locked = os.path.join(self.root, "secret")

        def scandir(path):
            if path == locked:
                raise PermissionError(13, "Permission denied", path)
            return real_scandir(path)

        with patch("sharemirror.local.walker.os.scandir", side_effect=scandir):
            with self.assertRaises(LocalReadError) as ctx:
                walk(self.root)

        self.assertEqual(ctx.exception.details["path"], locked)
        self.assertIsInstance(ctx.exception.cause, PermissionError)

    @unittest.skipIf(not hasattr(os, "symlink"), "symlinks not supported")
    def test_symlinks_are_skipped(self) -> None:
        target = _touch(self.root, "real/data.txt")
        try:
            os.symlink(target, os.path.join(self.root, "link.txt"))
            os.symlink(os.path.join(self.root, "real"), os.path.join(self.root, "linkdir"))
        except (OSError, NotImplementedError):
            self.skipTest("cannot create symlinks here")

        files = walk(self.root)
        self.assertEqual(files, [target])


if __name__ == "__main__":
    unittest.main()
