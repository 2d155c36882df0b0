from __future__ import annotations

import argparse
import logging
import sys
from typing import Any, Dict, Optional

from .errors import ProvisionError
from .layout import LAYOUT, Layout
from .lib.host import Host, SystemHost
from .logging_utils import DEFAULT_LOG_PATH, configure_logging
from .pipeline import ensure_defaults, run_pipeline
from .steps import (
    CreateAccountStep,
    CreateConfigDirsStep,
    CreateDataDirStep,
    RestrictDataDirStep,
)

logger = logging.getLogger(__name__)


def build_steps(host: Host, layout: Layout = LAYOUT):
    return [
        CreateAccountStep(host, layout),
        CreateDataDirStep(host, layout),
        CreateConfigDirsStep(host, layout),
        RestrictDataDirStep(host, layout),
    ]


def run(
    *,
    host: Optional[Host] = None,
    layout: Layout = LAYOUT,
    dry_run: bool = False,
    allow_existing_account: bool = False,
) -> Dict[str, Any]:
    """Provision the account and directories, stopping at the first failure."""

    if host is None:
        host = SystemHost(dry_run=dry_run)

    state: Dict[str, Any] = ensure_defaults({})
    state["config"] = {
        "dry_run": dry_run,
        "allow_existing_account": allow_existing_account,
    }

    try:
        result = run_pipeline(state=state, steps=build_steps(host, layout))
        logger.info("Pre-install complete: %s", ", ".join(result.ran_steps))
        return result.state
    except Exception:
        logger.exception("Pre-install failed at step %s", state["execution"]["current_step"])
        raise


def main(argv: Optional[list[str]] = None) -> int:
    p = argparse.ArgumentParser(
        prog="stalwart-jmap-preinst",
        description="Create the stalwart-jmap account and directories before package install.",
    )
    p.add_argument("--log", default=DEFAULT_LOG_PATH, help="Path to the hook log")
    p.add_argument("--dry-run", action="store_true", help="Log host operations without performing them")
    p.add_argument(
        "--allow-existing-account",
        action="store_true",
        help="Treat an existing stalwart-jmap account as success instead of failing",
    )
    p.add_argument("-v", "--verbose", action="store_true", help="Mirror the log to stderr")

    args = p.parse_args(argv)

    try:
        configure_logging(log_path=args.log, also_console=bool(args.verbose))
    except OSError as e:
        sys.stderr.write(f"{e}\n")
        return 1

    try:
        run(dry_run=bool(args.dry_run), allow_existing_account=bool(args.allow_existing_account))
    except ProvisionError as e:
        detail = e.detail if e.detail.endswith("\n") else e.detail + "\n"
        sys.stderr.write(detail)
        return e.exit_code
    return 0
