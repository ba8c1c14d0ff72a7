import os
import tempfile
import unittest

from sharemirror.apply import apply_plan
from sharemirror.engine import InMemoryEngine
from sharemirror.errors import AuthError, InvalidPlanError, RateLimitError
from sharemirror.models import MirrorPlan, RemoteDirectory, RemoteFile
from sharemirror.plan import plan


class FailingEngine(InMemoryEngine):
    def __init__(self, fail_on: str, exc: Exception) -> None:
        super().__init__("failing")
        self.fail_on = fail_on
        self.exc = exc

    def create_file(self, name, parent, source_path, depends_on):
        if name == self.fail_on:
            raise self.exc
        return super().create_file(name, parent, source_path, depends_on)


class TestApplyPlan(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = self._tmp.name
        for rel in ("nginx.conf", "conf.d/default.conf", "conf.d/extra.conf", "a/b/c.txt"):
            path = os.path.join(self.root, *rel.split("/"))
            os.makedirs(os.path.dirname(path), exist_ok=True)
            with open(path, "w", encoding="utf-8") as f:
                f.write(rel)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_apply_success(self) -> None:
        engine = InMemoryEngine("share")
        result = apply_plan(plan(self.root, "share"), engine)

        self.assertEqual(result.status, "success")
        self.assertIsNone(result.stopped_op_id)
        self.assertEqual(result.summary, {"success": 6, "failed": 0, "skipped": 0})
        self.assertEqual(
            engine.file_paths(),
            ["a/b/c.txt", "conf.d/default.conf", "conf.d/extra.conf", "nginx.conf"],
        )
        self.assertEqual(sorted(engine.directories.values()), ["a/b", "conf.d"])

    def test_directories_created_before_any_file(self) -> None:
        engine = InMemoryEngine("share")
        apply_plan(plan(self.root, "share"), engine)

        kinds = [call[0] for call in engine.calls]
        first_file = kinds.index("create_file")
        self.assertNotIn("create_directory", kinds[first_file:])

    def test_every_file_receives_all_directory_handles(self) -> None:
        engine = InMemoryEngine("share")
        apply_plan(plan(self.root, "share"), engine)

        dir_handles = frozenset(engine.directories)
        for call in engine.calls:
            if call[0] == "create_file":
                self.assertEqual(call[4], dir_handles)

    def test_fail_fast_on_provider_error(self) -> None:
        engine = FailingEngine("default.conf", RateLimitError("slow down"))
        result = apply_plan(plan(self.root, "share"), engine)

        self.assertEqual(result.status, "failed")
        failed = result.results[-1]
        self.assertEqual(failed.status, "failed")
        self.assertEqual(failed.error_type, "RateLimitError")
        self.assertEqual(result.stopped_op_id, failed.op_id)
        self.assertEqual(result.summary["failed"], 1)
        self.assertEqual(
            result.summary["success"] + result.summary["failed"] + result.summary["skipped"],
            6,
        )

    def test_auth_error_is_raised(self) -> None:
        engine = FailingEngine("nginx.conf", AuthError("expired"))
        with self.assertRaises(AuthError):
            apply_plan(plan(self.root, "share"), engine)

    def test_invalid_plan_rejected_before_engine_calls(self) -> None:
        bad = MirrorPlan(
            plan_id="bad",
            root=self.root,
            destination=None,
            directories=(RemoteDirectory("a"),),
            files=(RemoteFile(name="x", source_path="/x", remote_directory="b", depends_on=("a",)),),
        )
        engine = InMemoryEngine()
        with self.assertRaises(InvalidPlanError):
            apply_plan(bad, engine)
        self.assertEqual(engine.calls, [])

    def test_empty_plan(self) -> None:
        with tempfile.TemporaryDirectory() as empty:
            result = apply_plan(plan(empty), InMemoryEngine())
        self.assertEqual(result.status, "success")
        self.assertEqual(result.results, [])


if __name__ == "__main__":
    unittest.main()
