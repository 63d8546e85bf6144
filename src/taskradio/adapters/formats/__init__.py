"""
Formats - Codecs translating a Task to and from each channel's native form.
"""

from .gh_issues import (
    IssueContent,
    IssueSnapshot,
    compose_issue,
    derive_status,
    extract_task_from_issue,
)
from .os_fileops import compose_task_file, extract_task_from_file


__all__ = [
    "IssueContent",
    "IssueSnapshot",
    "compose_issue",
    "compose_task_file",
    "derive_status",
    "extract_task_from_file",
    "extract_task_from_issue",
]
