from __future__ import annotations

import logging
from typing import Any, Dict

from ..layout import Layout
from ..lib.host import Host
from ..pipeline import record_decision

logger = logging.getLogger(__name__)


class RestrictDataDirStep:
    step_id = "40_restrict_data_dir"

    def __init__(self, host: Host, layout: Layout) -> None:
        self.host = host
        self.layout = layout

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        account = self.layout.account
        data_dir = self.layout.data_dir

        # Owner first: an unresolved account must fail before any mode change.
        self.host.set_owner_recursive(data_dir, account, account)
        self.host.set_mode_recursive(data_dir, self.layout.data_mode)

        record_decision(
            state,
            "data_dir_access",
            {"owner": f"{account}:{account}", "mode": f"{self.layout.data_mode:o}"},
        )
        logger.info("Restricted %s to %s (mode %o)", data_dir, account, self.layout.data_mode)
        return state
