"""
Utilities
=========
URL helpers and number formatting.
"""

import math
import re
from typing import Optional


def strip_fragment(url: Optional[str]) -> str:
    """
    Remove everything from the first '#' onward.

    "https://www.instagram.com/p/ABC/#advertiser" -> "https://www.instagram.com/p/ABC/"

    Args:
        url: Post URL (None is treated as "")

    Returns:
        str: Permalink
    """
    url = url or ""
    idx = url.find("#")
    return url[:idx] if idx >= 0 else url


def extract_shortcode(url: str) -> Optional[str]:
    """
    Extract shortcode from Instagram URL.

    Supports:
        - instagram.com/p/ABC123/
        - instagram.com/reel/ABC123/
        - instagram.com/tv/ABC123/
        - instagr.am/p/ABC123/

    Returns:
        str: Shortcode or None
    """
    patterns = [
        r"instagram\.com/(?:p|reel|reels|tv)/([A-Za-z0-9_-]+)",
        r"instagr\.am/p/([A-Za-z0-9_-]+)",
    ]
    for pattern in patterns:
        match = re.search(pattern, url or "")
        if match:
            return match.group(1)
    return None


def format_count(count: Optional[float]) -> str:
    """
    Format number in compact form.

    Args:
        count: Number (None or NaN renders as "-")

    Returns:
        str: "30", "1.2K", "3.5M", "1.2B", etc.
    """
    if count is None or not math.isfinite(count):
        return "-"
    if abs(count) >= 1_000_000_000:
        return f"{count/1_000_000_000:.1f}B"
    elif abs(count) >= 1_000_000:
        return f"{count/1_000_000:.1f}M"
    elif abs(count) >= 1_000:
        return f"{count/1_000:.1f}K"
    if float(count).is_integer():
        return str(int(count))
    return f"{count:g}"
