from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class ReportKind(str, Enum):
    """Kinds of scanner report a file can be classified as."""

    SIMILARITY = "similarity"
    AI = "ai"
    UNKNOWN = "unknown"


class WorkItemStatus(str, Enum):
    OPEN = "open"
    RESOLVED = "resolved"


class UnmatchedReason(str, Enum):
    """Closed vocabulary of per-file outcomes that leave a report unattached."""

    DOWNLOAD_FAILED = "DownloadFailed"
    UNKNOWN_REPORT_TYPE = "UnknownReportType"
    NO_IDENTIFIER_EXTRACTED = "NoIdentifierExtracted"
    NO_MATCHING_WORK_ITEM = "NoMatchingWorkItem"
    DUPLICATE_SLOT = "DuplicateSlot"
    UPDATE_FAILED = "UpdateFailed"
    PROCESSING_ERROR = "ProcessingError"


@dataclass(frozen=True)
class ReportFile:
    file_name: str
    storage_path: str


@dataclass
class WorkItem:
    item_id: str
    declared_file_name: str
    original_is_pdf: bool
    owner_id: str | None = None
    similarity_report_path: str | None = None
    ai_report_path: str | None = None
    similarity_percentage: int | None = None
    ai_percentage: int | None = None
    status: WorkItemStatus = WorkItemStatus.OPEN
    resolved_at: str | None = None

    def report_path(self, kind: ReportKind) -> str | None:
        if kind == ReportKind.SIMILARITY:
            return self.similarity_report_path
        if kind == ReportKind.AI:
            return self.ai_report_path
        return None

    def has_both_reports(self) -> bool:
        return bool(self.similarity_report_path) and bool(self.ai_report_path)


@dataclass(frozen=True)
class ClassifiedReport:
    identifier: str | None
    kind: ReportKind
    score: int | None


@dataclass(frozen=True)
class MatchOutcome:
    work_item_id: str | None = None
    reason: UnmatchedReason | None = None

    @classmethod
    def matched(cls, work_item_id: str) -> MatchOutcome:
        return cls(work_item_id=work_item_id)

    @classmethod
    def unmatched(cls, reason: UnmatchedReason) -> MatchOutcome:
        return cls(reason=reason)

    @property
    def is_matched(self) -> bool:
        return self.work_item_id is not None


@dataclass
class ReviewEntry:
    file_name: str
    best_guess_identifier: str | None
    storage_path: str
    kind: ReportKind
    reason: UnmatchedReason
    resolved: bool = False
    matched_work_item_id: str | None = None
    uploaded_by: str | None = None
    created_at: datetime | None = None


@dataclass(frozen=True)
class Caller:
    user_id: str
    role: str


@dataclass
class ProcessedReport:
    file_name: str
    file_path: str
    document_name: str | None = None
    report_type: ReportKind = ReportKind.UNKNOWN
    percentage: int | None = None
    matched_document_id: str | None = None
    error: str | None = None

    def to_dict(self) -> dict:
        payload = {
            "fileName": self.file_name,
            "filePath": self.file_path,
            "documentName": self.document_name,
            "reportType": self.report_type.value,
            "percentage": self.percentage,
            "matchedDocumentId": self.matched_document_id,
        }
        if self.error is not None:
            payload["error"] = self.error
        return payload


@dataclass(frozen=True)
class MappedReport:
    document_id: str
    file_name: str
    report_type: ReportKind
    percentage: int | None

    def to_dict(self) -> dict:
        return {
            "documentId": self.document_id,
            "fileName": self.file_name,
            "reportType": self.report_type.value,
            "percentage": self.percentage,
        }


@dataclass(frozen=True)
class UnmatchedReport:
    file_name: str
    document_name: str | None
    reason: UnmatchedReason

    def to_dict(self) -> dict:
        return {
            "fileName": self.file_name,
            "documentName": self.document_name,
            "reason": self.reason.value,
        }


@dataclass
class BatchStats:
    total_reports: int = 0
    mapped_count: int = 0
    unmatched_count: int = 0
    completed_count: int = 0
    unknown_type_count: int = 0

    def to_dict(self) -> dict[str, int]:
        return {
            "totalReports": self.total_reports,
            "mappedCount": self.mapped_count,
            "unmatchedCount": self.unmatched_count,
            "completedCount": self.completed_count,
            "unknownTypeCount": self.unknown_type_count,
        }


@dataclass
class BatchResult:
    success: bool = True
    processed: list[ProcessedReport] = field(default_factory=list)
    mapped: list[MappedReport] = field(default_factory=list)
    unmatched: list[UnmatchedReport] = field(default_factory=list)
    completed_documents: list[str] = field(default_factory=list)
    stats: BatchStats = field(default_factory=BatchStats)

    def to_dict(self) -> dict:
        return {
            "success": self.success,
            "processed": [item.to_dict() for item in self.processed],
            "mapped": [item.to_dict() for item in self.mapped],
            "unmatched": [item.to_dict() for item in self.unmatched],
            "completedDocuments": list(self.completed_documents),
            "stats": self.stats.to_dict(),
        }
