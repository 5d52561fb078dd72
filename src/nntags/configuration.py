"""Control configuration and raw parameter parsing.

Hosts hand over flags as the strings ``"0"`` and ``"1"``:

- ``disable_searchbox``: ``"0"`` shows the search box, ``"1"`` hides it.
- ``disable_subgrid``: ``"1"`` keeps tags clickable while the control is
  disabled, ``"0"`` blocks them.

Missing values default to ``"1"`` for both.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Literal, Optional

_logger = logging.getLogger(__name__)

FlagValue = Literal["0", "1"]

_HEX_PATTERN = re.compile(
    r"^\s*#?([0-9a-f]{3}|[0-9a-f]{4}|[0-9a-f]{6}|[0-9a-f]{8})\s*$", flags=re.IGNORECASE
)


@dataclass(frozen=True)
class ControlConfiguration:
    """Options that distinguish the search-box and disabled-mode variants."""

    enable_search: bool = False
    allow_click_when_disabled: bool = True
    associated_color: Optional[str] = None

    @classmethod
    def from_parameters(
        cls,
        *,
        disable_searchbox: Optional[str] = None,
        disable_subgrid: Optional[str] = None,
        associated_hex: Optional[str] = None,
    ) -> "ControlConfiguration":
        """Build a configuration from raw host parameters."""
        search_flag = _normalize_flag(disable_searchbox, name="disable_searchbox")
        click_flag = _normalize_flag(disable_subgrid, name="disable_subgrid")
        return cls(
            enable_search=search_flag == "0",
            allow_click_when_disabled=click_flag == "1",
            associated_color=_normalize_hex(associated_hex),
        )


def _normalize_flag(value: Optional[str], *, name: str) -> FlagValue:
    if value is None:
        return "1"
    text = str(value).strip()
    if text == "0":
        return "0"
    if text != "1":
        _logger.warning("Unrecognized %s value %r; using '1'.", name, value)
    return "1"


def _normalize_hex(value: object) -> Optional[str]:
    """Normalize a colour to ``#rrggbb`` when it is a hex string.

    Parameters
    ----------
    value
        Colour input. Hex strings (``#RGB``, ``#RGBA``, ``#RRGGBB``,
        ``#RRGGBBAA``, with or without ``#``) are normalized and the alpha is
        dropped. Any other non-blank string (``"teal"``, ``"rgb(0,0,0)"``) is
        passed through unchanged.

    Returns
    -------
    str or None
        The colour to apply, or ``None`` for blank or ``None`` input.

    Raises
    ------
    ValueError
        If the input is neither ``None`` nor a string.
    """
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValueError(f"Unsupported colour input {value!r}")
    if not value.strip():
        return None
    hex_match = _HEX_PATTERN.match(value)
    if not hex_match:
        return value.strip()
    hex_value = hex_match.group(1).lower()
    if len(hex_value) in (3, 4):
        hex_value = "".join(ch * 2 for ch in hex_value)
    if len(hex_value) == 8:
        hex_value = hex_value[:6]
    return f"#{hex_value}"


__all__ = ["ControlConfiguration", "FlagValue"]
