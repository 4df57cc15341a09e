"""Chain timestamp decoding."""
import string
from datetime import datetime, tzinfo
from typing import Optional

DISPLAY_FORMAT = "%Y-%m-%d %H:%M"
PARSE_FAILED = "Time parse failed"
INVALID_TIME = "Invalid time"


def format_timestamp(hex_timestamp: str, tz: Optional[tzinfo] = None) -> str:
    """
    Render a hex-encoded Unix timestamp for display.
    
    Args:
        hex_timestamp: Seconds since the epoch in base 16, ``0x`` prefix optional
        tz: Target zone; the local zone when omitted
        
    Returns:
        ``YYYY-MM-DD HH:MM`` in the target zone, or a failure string
    """
    digits = hex_timestamp[2:] if hex_timestamp.startswith("0x") else hex_timestamp
    if not digits or any(c not in string.hexdigits for c in digits):
        return PARSE_FAILED
    
    try:
        moment = datetime.fromtimestamp(int(digits, 16), tz=tz)
    except (OverflowError, OSError, ValueError):
        return INVALID_TIME
    return moment.strftime(DISPLAY_FORMAT)
