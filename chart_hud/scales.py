from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Literal, Sequence

import numpy as np

from chart_hud.errors import HudConfigError


FormatKind = Literal["auto", "comma", "fixed", "decimal", "expt", "percent", "dollar"]
FORMAT_KINDS: tuple[str, ...] = ("auto", "comma", "fixed", "decimal", "expt", "percent", "dollar")
MAX_DECIMALS = 12


@dataclass(frozen=True)
class TickFormat:
    kind: FormatKind = "comma"
    # minimum decimals (significant digits for "expt"); None derives it from the tick step
    precision: int | None = 2

    def __post_init__(self) -> None:
        if self.kind not in FORMAT_KINDS:
            raise HudConfigError(f"unsupported tick format: {self.kind}")
        if self.precision is not None and self.precision < 0:
            raise HudConfigError("TickFormat.precision must be >= 0")


def generate_nice_ticks(vmin: float, vmax: float, target: int) -> np.ndarray:
    """Rounded tick values covering [vmin, vmax] with 1/2/5 x 10^k steps."""

    if target <= 0:
        raise ValueError("target must be > 0")
    if vmin == vmax:
        return np.asarray([vmin], dtype=np.float64)

    span = _nice_number(vmax - vmin, round_result=False)
    step = _nice_number(span / max(target - 1, 1), round_result=True)
    tick_min = np.floor(vmin / step) * step
    tick_max = np.ceil(vmax / step) * step

    ticks = np.arange(tick_min, tick_max + 0.5 * step, step, dtype=np.float64)
    # Normalize floating-point drift so values like -4.44e-16 become 0.
    ticks = np.rint(ticks / step) * step
    ticks[np.isclose(ticks, 0.0, rtol=0.0, atol=step * 1e-9)] = 0.0
    return ticks


def ticks_within_range(ticks: np.ndarray, *, vmin: float, vmax: float) -> np.ndarray:
    if ticks.size == 0:
        return ticks
    step = float(abs(ticks[1] - ticks[0])) if ticks.size > 1 else max(1e-12, abs(vmax - vmin))
    eps = max(1e-12, step * 1e-6)
    mask = (ticks >= (vmin - eps)) & (ticks <= (vmax + eps))
    return ticks[mask]


def grid_exact(vmin: float, vmax: float, n: int) -> np.ndarray:
    if n <= 0:
        return np.asarray([], dtype=np.float64)
    return np.linspace(vmin, vmax, n, dtype=np.float64)


def format_tick(value: float, *, step: float | None = None) -> str:
    if not np.isfinite(value):
        return str(value)
    if step is not None and np.isfinite(step) and step > 0 and abs(value) <= step * 1e-9:
        value = 0.0
    abs_v = abs(value)
    decimals = _decimals_from_step(step) if step is not None else 6
    if abs_v != 0 and (abs_v >= 1e6 or (step is not None and abs(step) < 1e-4) or abs_v < 1e-6):
        return f"{value:.4e}"

    d = Decimal(str(value))
    quant = Decimal("1").scaleb(-decimals)
    try:
        q = d.quantize(quant)
    except InvalidOperation:
        q = d
    out = format(q, "f")
    # Only trim trailing zeros for fractional values (preserve integer zeros like 30, 40).
    if "." in out:
        out = out.rstrip("0").rstrip(".")
    if out == "-0":
        out = "0"
    return out


def format_ticks_for_axis(ticks: np.ndarray) -> list[str]:
    if ticks.size == 0:
        return []
    if ticks.size == 1:
        return [format_tick(float(ticks[0]))]
    step = float(abs(ticks[1] - ticks[0]))
    return [format_tick(float(v), step=step) for v in ticks]


def format_ticks(fmt: TickFormat, values: Sequence[float] | np.ndarray) -> list[str]:
    """Format a run of tick values, widening precision until labels are distinct."""

    ticks = np.asarray(values, dtype=np.float64)
    if ticks.size == 0:
        return []
    if fmt.kind == "auto":
        return format_ticks_for_axis(ticks)
    step = float(abs(ticks[1] - ticks[0])) if ticks.size > 1 else None
    decimals = fmt.precision if fmt.precision is not None else _decimals_from_step(step or 0.0)
    if fmt.precision is not None and fmt.kind in ("comma", "decimal", "percent", "dollar") and step is not None:
        decimals = min(decimals, _decimals_from_step(step * (100.0 if fmt.kind == "percent" else 1.0)))
    distinct = len(set(ticks.tolist()))
    while True:
        labels = [_format_one(fmt.kind, float(v), decimals) for v in ticks]
        if len(set(labels)) >= distinct or decimals >= MAX_DECIMALS:
            return labels
        decimals += 1


def _format_one(kind: str, value: float, decimals: int) -> str:
    if not np.isfinite(value):
        return str(value)
    if kind == "fixed":
        return _zero_sign(f"{value:.{decimals}f}")
    if kind == "expt":
        return f"{value:.{decimals}e}"
    if kind == "percent":
        return _trim(f"{value * 100.0:.{decimals}f}") + "%"
    if kind == "dollar":
        out = _trim(f"{abs(value):,.{decimals}f}")
        return "$" + out if value >= 0 or out == "0" else "-$" + out
    if kind == "comma":
        return _trim(f"{value:,.{decimals}f}")
    return _trim(f"{value:.{decimals}f}")


def _trim(out: str) -> str:
    if "." in out:
        out = out.rstrip("0").rstrip(".")
    return _zero_sign(out)


def _zero_sign(out: str) -> str:
    if out.startswith("-") and not out.strip("-0.,"):
        return out[1:]
    return out


def _nice_number(value: float, *, round_result: bool) -> float:
    exp = np.floor(np.log10(value))
    frac = value / (10**exp)

    if round_result:
        if frac < 1.5:
            nice_frac = 1.0
        elif frac < 3.0:
            nice_frac = 2.0
        elif frac < 7.0:
            nice_frac = 5.0
        else:
            nice_frac = 10.0
    else:
        if frac <= 1.0:
            nice_frac = 1.0
        elif frac <= 2.0:
            nice_frac = 2.0
        elif frac <= 5.0:
            nice_frac = 5.0
        else:
            nice_frac = 10.0

    return float(nice_frac * (10**exp))


def _decimals_from_step(step: float) -> int:
    if step <= 0 or not np.isfinite(step):
        return 6
    d = Decimal(str(step)).normalize()
    exp = d.as_tuple().exponent
    decimals = max(0, -int(exp))
    return min(MAX_DECIMALS, decimals)
