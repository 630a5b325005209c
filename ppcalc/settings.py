from __future__ import annotations

from starlette.config import Config

cfg = Config(".env")

LOG_LEVEL: str = cfg("PPCALC_LOG_LEVEL", default="WARNING")
STRICT_CONVERSION: bool = cfg("PPCALC_STRICT_CONVERSION", cast=bool, default=True)
