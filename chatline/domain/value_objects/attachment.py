"""
Attachment Value Object - metadata returned by the external blob storage.

The core never touches file bytes; it only records what storage reports.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Attachment:
    path: str
    name: str
    mime_type: str
    size_bytes: int

    def __post_init__(self):
        if not self.path or not self.name:
            raise ValueError("Attachment path and name are required")
        if self.size_bytes < 0:
            raise ValueError("Attachment size cannot be negative")

    @property
    def extension(self) -> Optional[str]:
        if "." not in self.name:
            return None
        return self.name.rsplit(".", 1)[-1].lower()

    @property
    def is_image(self) -> bool:
        return self.mime_type.startswith("image/")
