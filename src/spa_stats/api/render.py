"""JSON and XML rendering of staking statistics."""

from __future__ import annotations

import math
import xml.etree.ElementTree as ET
from decimal import Decimal

from spa_stats.models.stats import StakingStats

XML_ROOT = "stats"


def _json_number(value: float) -> float | None:
    # JSON has no Infinity/NaN; emit null like JSON.stringify does
    return value if math.isfinite(value) else None


def _xml_number(value: float) -> str:
    """Format like JavaScript's Number#toString (``1e-7``, ``2``, ``1e+21``)."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"

    sign = "-" if value < 0 else ""
    # repr gives the shortest round-tripping digits
    _, digit_tuple, exponent = Decimal(repr(abs(value))).normalize().as_tuple()
    digits = "".join(map(str, digit_tuple))
    k = len(digits)
    n = exponent + k  # value == 0.<digits> * 10**n

    if k <= n <= 21:
        text = digits + "0" * (n - k)
    elif 0 < n <= 21:
        text = f"{digits[:n]}.{digits[n:]}"
    elif -6 < n <= 0:
        text = "0." + "0" * -n + digits
    else:
        mantissa = digits if k == 1 else f"{digits[0]}.{digits[1:]}"
        text = f"{mantissa}e{n - 1:+d}"
    return sign + text


def stats_to_json(stats: StakingStats) -> dict[str, float | None]:
    return {key: _json_number(value) for key, value in stats.to_dict().items()}


def stats_to_xml(stats: StakingStats, root: str = XML_ROOT) -> bytes:
    """Render as ``<stats><stakingRebase>..</stakingRebase>..</stats>``."""
    root_el = ET.Element(root)
    for key, value in stats.to_dict().items():
        ET.SubElement(root_el, key).text = _xml_number(value)
    ET.indent(root_el)
    return ET.tostring(root_el, encoding="utf-8", xml_declaration=True)
