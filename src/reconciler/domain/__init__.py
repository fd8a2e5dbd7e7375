from .classification import ReportClassification, classify_report
from .expected_names import ExpectedNames, expected_names
from .identifier import extract_identifier
from .matching import match_work_item
from .models import (
    BatchResult,
    ClassifiedReport,
    ReportFile,
    ReportKind,
    ReviewEntry,
    UnmatchedReason,
    WorkItem,
    WorkItemStatus,
)
from .name_normalize import names_match, normalize

__all__ = [
    "BatchResult",
    "ClassifiedReport",
    "ExpectedNames",
    "ReportClassification",
    "ReportFile",
    "ReportKind",
    "ReviewEntry",
    "UnmatchedReason",
    "WorkItem",
    "WorkItemStatus",
    "classify_report",
    "expected_names",
    "extract_identifier",
    "match_work_item",
    "names_match",
    "normalize",
]
