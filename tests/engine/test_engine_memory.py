import unittest

from sharemirror.engine import InMemoryEngine
from sharemirror.errors import ConflictError, InvalidArgumentError, RemoteNotFoundError


class TestInMemoryEngine(unittest.TestCase):
    def test_create_directory_and_files(self) -> None:
        engine = InMemoryEngine("share")
        d = engine.create_directory("conf.d")
        engine.create_file("nginx.conf", None, "/src/nginx.conf", {d})
        engine.create_file("default.conf", d, "/src/conf.d/default.conf", {d})

        self.assertEqual(engine.file_paths(), ["conf.d/default.conf", "nginx.conf"])

    def test_handles_are_deterministic(self) -> None:
        self.assertEqual(
            InMemoryEngine("s").create_directory("a"),
            InMemoryEngine("s").create_directory("a"),
        )

    def test_file_before_dependency_fails(self) -> None:
        engine = InMemoryEngine()
        with self.assertRaises(RemoteNotFoundError):
            engine.create_file("x", None, "/src/x", {"dir_missing"})

    def test_unknown_parent_fails(self) -> None:
        engine = InMemoryEngine()
        with self.assertRaises(RemoteNotFoundError):
            engine.create_file("x", "nope", "/src/x", set())

    def test_duplicate_directory_conflicts(self) -> None:
        engine = InMemoryEngine()
        engine.create_directory("a")
        with self.assertRaises(ConflictError):
            engine.create_directory("a")

    def test_empty_directory_path_rejected(self) -> None:
        with self.assertRaises(InvalidArgumentError):
            InMemoryEngine().create_directory("")


if __name__ == "__main__":
    unittest.main()
