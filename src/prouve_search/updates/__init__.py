"""Content-update collaborator: pending changes, versions and validation."""

from .manager import (
    ContentUpdate,
    ContentUpdateManager,
    ContentValidator,
    ContentVersion,
    apply_version,
    generate_update_report,
)

__all__ = [
    "ContentUpdate",
    "ContentUpdateManager",
    "ContentValidator",
    "ContentVersion",
    "apply_version",
    "generate_update_report",
]
