from __future__ import annotations


class HudConfigError(ValueError):
    pass
