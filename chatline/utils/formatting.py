"""Small presentation helpers shared by DTO mapping and channel descriptors."""

import hashlib
from typing import Optional


def formatted_size(size_bytes: Optional[int]) -> Optional[str]:
    """Human readable byte size, e.g. 1536 -> '1.5 KB'."""
    if not size_bytes:
        return None

    size = float(size_bytes)
    units = ["B", "KB", "MB", "GB"]
    i = 0
    while size > 1024 and i < len(units) - 1:
        size /= 1024
        i += 1
    return f"{round(size, 2):g} {units[i]}"


def gravatar_url(email: Optional[str], size: int = 150) -> Optional[str]:
    if not email:
        return None
    digest = hashlib.md5(email.strip().lower().encode("utf-8")).hexdigest()
    return f"https://www.gravatar.com/avatar/{digest}?d=identicon&s={size}"
