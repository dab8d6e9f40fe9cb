"""Link health checker package."""

from content_eval.linkcheck.checker import (
    check_link_status,
    check_links,
    check_links_sync,
    is_working_status,
)
from content_eval.linkcheck.models import RESTRICTED_STATUSES, LinkCheckResult, LinkStatus

__all__ = [
    "check_links",
    "check_links_sync",
    "check_link_status",
    "is_working_status",
    "LinkStatus",
    "LinkCheckResult",
    "RESTRICTED_STATUSES",
]
