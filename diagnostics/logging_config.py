# MIT License © 2025 Motohiro Suzuki
from __future__ import annotations

import logging
import sys

from diagnostics.config import DiagnosticsConfig


def setup_logging(cfg: DiagnosticsConfig | None = None) -> None:
    level_name = (cfg or DiagnosticsConfig.from_env()).log_level
    logging.basicConfig(
        level=getattr(logging, level_name),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stdout,
    )
