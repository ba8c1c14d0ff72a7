import contextlib
import io
import json
import os
import tempfile
import unittest
from unittest.mock import patch

from sharemirror.cli import main


def _touch(root: str, rel: str) -> None:
    path = os.path.join(root, *rel.split("/"))
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(rel)


def _run(argv):
    out, err = io.StringIO(), io.StringIO()
    with contextlib.redirect_stdout(out), contextlib.redirect_stderr(err):
        code = main(argv)
    return code, out.getvalue(), err.getvalue()


class TestCli(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.base = self._tmp.name
        self.nginx = os.path.join(self.base, "mountfiles", "nginx")
        _touch(self.nginx, "nginx.conf")
        _touch(self.nginx, "conf.d/default.conf")

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def _config(self, content: str) -> str:
        path = os.path.join(self.base, "mirror.yaml")
        with open(path, "w", encoding="utf-8") as f:
            f.write(content)
        return path

    def test_plan_prints_json(self) -> None:
        code, out, _ = _run(["plan", self.nginx, "--destination", "share"])
        self.assertEqual(code, 0)
        data = json.loads(out)
        self.assertEqual(data["directories"], ["conf.d"])
        self.assertEqual([f["name"] for f in data["files"]], ["nginx.conf", "default.conf"])

    def test_plan_missing_root(self) -> None:
        code, _, err = _run(["plan", os.path.join(self.base, "missing")])
        self.assertEqual(code, 1)
        self.assertIn("does not exist", err)

    def test_apply_dry_run(self) -> None:
        cfg = self._config(
            "destination: D\nshares:\n"
            "  - {name: nginx, local_dir: mountfiles/nginx}\n"
        )
        code, out, _ = _run(["apply", "--config", cfg, "--dry-run"])
        self.assertEqual(code, 0)
        self.assertIn("nginx: success (3 created, 0 skipped)", out)

    def test_apply_dry_run_reports_failed_share(self) -> None:
        cfg = self._config(
            "destination: D\nshares:\n"
            "  - {name: nginx, local_dir: mountfiles/nginx}\n"
            "  - {name: sandbox, local_dir: mountfiles/sandbox}\n"
        )
        code, out, _ = _run(["apply", "--config", cfg, "--dry-run"])
        self.assertEqual(code, 1)
        self.assertIn("sandbox: failed (NotFoundError", out)

    def test_apply_requires_auth_without_dry_run(self) -> None:
        cfg = self._config("destination: D\nshares:\n  - {name: nginx, local_dir: mountfiles/nginx}\n")
        code, _, err = _run(["apply", "--config", cfg])
        self.assertEqual(code, 1)
        self.assertIn("no auth", err)

    def test_os_error_is_reported(self) -> None:
        cfg = self._config("destination: D\n")
        with patch(
            "sharemirror.cli.load_config",
            side_effect=OSError(5, "Input/output error"),
        ):
            code, _, err = _run(["apply", "--config", cfg, "--dry-run"])
        self.assertEqual(code, 1)
        self.assertIn("error: ", err)
        self.assertIn("Input/output error", err)

    def test_env(self) -> None:
        cfg = self._config(
            "destination: D\nshares:\n  - {name: nginx, local_dir: mountfiles/nginx}\n"
            "env:\n  MODE: api\n  DB_PASSWORD: {secret: pg}\n"
        )
        code, out, _ = _run(["env", "--config", cfg])
        self.assertEqual(code, 0)
        data = json.loads(out)
        self.assertEqual(data["secrets"], ["pg"])
        self.assertEqual(data["env"][1], {"name": "DB_PASSWORD", "secretRef": "pg"})


if __name__ == "__main__":
    unittest.main()
