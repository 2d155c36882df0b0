from __future__ import annotations

import logging
from typing import Any, Dict

from ..layout import Layout
from ..lib.host import Host
from ..pipeline import record_decision

logger = logging.getLogger(__name__)


class CreateConfigDirsStep:
    """Create the certificate and private key directories under the config root.

    Ownership and mode are left to the package payload.
    """

    step_id = "30_create_config_dirs"

    def __init__(self, host: Host, layout: Layout) -> None:
        self.host = host
        self.layout = layout

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        created: Dict[str, bool] = {}
        for path in self.layout.config_dirs:
            created[path] = self.host.ensure_directory(path)

        record_decision(state, "config_dirs", created)
        logger.info("Config directories ready under %s", self.layout.config_root)
        return state
