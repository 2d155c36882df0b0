from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class Layout:
    account: str = "stalwart-jmap"
    shell: str = "/sbin/nologin"
    data_dir: str = "/var/lib/stalwart-jmap"
    config_root: str = "/etc/stalwart-jmap"
    config_subdirs: Tuple[str, ...] = ("certs", "private")
    data_mode: int = 0o770

    @property
    def config_dirs(self) -> list[str]:
        return [f"{self.config_root.rstrip('/')}/{d}" for d in self.config_subdirs]


LAYOUT = Layout()
