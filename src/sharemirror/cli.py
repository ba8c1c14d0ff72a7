"""Command line entry point for sharemirror."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Optional, Sequence

from sharemirror.compose import MirrorSet, ShareOutcome, ShareSpec, render_env, required_secrets
from sharemirror.config import load_config
from sharemirror.engine import InMemoryEngine, ProvisioningEngine
from sharemirror.errors import MirrorError
from sharemirror.plan import plan
from sharemirror.util.time import to_rfc3339


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sharemirror",
        description="Mirror local directory trees into a remote file store.",
    )
    parser.add_argument("-v", "--verbose", action="count", default=0, help="More logging (-vv for debug).")
    sub = parser.add_subparsers(dest="command", required=True)

    p_plan = sub.add_parser("plan", help="Print the mirror plan for a local directory as JSON.")
    p_plan.add_argument("root", help="Local directory to mirror.")
    p_plan.add_argument("--destination", default=None, help="Remote destination id.")

    p_apply = sub.add_parser("apply", help="Plan and apply every share in a config file.")
    p_apply.add_argument("--config", required=True, help="YAML or JSON config file.")
    p_apply.add_argument("--dry-run", action="store_true", help="Apply against an in-memory store.")

    p_env = sub.add_parser("env", help="Print rendered container environment variables.")
    p_env.add_argument("--config", required=True, help="YAML or JSON config file.")

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    _configure_logging(args.verbose)

    try:
        if args.command == "plan":
            return _cmd_plan(args)
        if args.command == "apply":
            return _cmd_apply(args)
        return _cmd_env(args)
    except (MirrorError, OSError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1


def _configure_logging(verbose: int) -> None:
    level = logging.WARNING
    if verbose == 1:
        level = logging.INFO
    elif verbose >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")


def _cmd_plan(args: argparse.Namespace) -> int:
    mirror_plan = plan(args.root, args.destination)
    print(json.dumps(mirror_plan.to_dict(), indent=2))
    return 0


def _cmd_apply(args: argparse.Namespace) -> int:
    config = load_config(args.config)

    if args.dry_run:
        def factory(share: ShareSpec) -> ProvisioningEngine:
            return InMemoryEngine(destination=share.destination)
    else:
        if config.auth is None:
            print("error: config has no auth section", file=sys.stderr)
            return 1
        from sharemirror.controller import GoogleDriveEngine

        auth = config.auth

        def factory(share: ShareSpec) -> ProvisioningEngine:
            return GoogleDriveEngine(auth, share.destination)

    outcomes = MirrorSet(config.shares).apply_all(factory)
    for outcome in outcomes:
        print(_describe(outcome))
    return 0 if all(o.ok for o in outcomes) else 1


def _cmd_env(args: argparse.Namespace) -> int:
    config = load_config(args.config)
    payload = {
        "env": render_env(config.env),
        "secrets": required_secrets(config.env),
    }
    print(json.dumps(payload, indent=2))
    return 0


def _describe(outcome: ShareOutcome) -> str:
    name = outcome.share.name
    if outcome.error is not None:
        return f"{name}: failed ({type(outcome.error).__name__}: {outcome.error})"
    if outcome.result is None:
        return f"{name}: planned"
    result = outcome.result
    text = (
        f"{name}: {result.status} "
        f"({result.summary.get('success', 0)} created, {result.summary.get('skipped', 0)} skipped)"
    )
    if result.finished_at is not None:
        text += f" at {to_rfc3339(result.finished_at)}"
    return text


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
