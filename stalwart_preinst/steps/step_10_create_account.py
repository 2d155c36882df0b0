from __future__ import annotations

from typing import Any, Dict

from ..layout import Layout
from ..lib.host import Host
from ..pipeline import record_decision


class CreateAccountStep:
    step_id = "10_create_account"

    def __init__(self, host: Host, layout: Layout) -> None:
        self.host = host
        self.layout = layout

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        cfg = state.get("config") or {}
        # Off by default: a second install must fail on the existing account.
        allow_existing = bool(cfg.get("allow_existing_account", False))

        created = self.host.ensure_account(
            self.layout.account,
            shell=self.layout.shell,
            create_home=False,
            allow_existing=allow_existing,
        )
        record_decision(state, "account", {"name": self.layout.account, "created": created})
        return state
