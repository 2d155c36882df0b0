from __future__ import annotations

from typing import Any, Dict

from ..layout import Layout
from ..lib.host import Host
from ..pipeline import record_decision


class CreateDataDirStep:
    step_id = "20_create_data_dir"

    def __init__(self, host: Host, layout: Layout) -> None:
        self.host = host
        self.layout = layout

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        created = self.host.ensure_directory(self.layout.data_dir)
        record_decision(state, "data_dir", {"path": self.layout.data_dir, "created": created})
        return state
