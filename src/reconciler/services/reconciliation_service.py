from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from datetime import datetime, timezone

from reconciler.domain.classification import classify_report
from reconciler.domain.errors import (
    BatchInProgressError,
    CallerLookupError,
    ForbiddenError,
    UnauthorizedError,
    WorkItemPoolError,
)
from reconciler.domain.identifier import extract_identifier
from reconciler.domain.matching import match_work_item
from reconciler.domain.models import (
    BatchResult,
    BatchStats,
    Caller,
    ClassifiedReport,
    MappedReport,
    MatchOutcome,
    ProcessedReport,
    ReportFile,
    ReportKind,
    ReviewEntry,
    UnmatchedReason,
    UnmatchedReport,
    WorkItem,
    WorkItemStatus,
)
from reconciler.domain.payload import parse_report_files
from reconciler.ports.auth_port import AuthPort
from reconciler.ports.notification_port import NotificationPort
from reconciler.ports.pdf_text_port import PdfTextPort
from reconciler.ports.report_storage_port import ReportStoragePort
from reconciler.ports.review_queue_port import ReviewQueuePort
from reconciler.ports.user_notification_port import UserNotificationPort
from reconciler.ports.work_item_store_port import WorkItemStorePort
from reconciler.settings import EXTRACTION_TIMEOUT_SECONDS, SCANNER_VENDOR_NAME

logger = logging.getLogger(__name__)

ALLOWED_ROLES = frozenset({"staff", "admin"})

REASON_MESSAGES = {
    UnmatchedReason.DOWNLOAD_FAILED: "Failed to download file",
    UnmatchedReason.UNKNOWN_REPORT_TYPE: "Could not determine report type from PDF content",
    UnmatchedReason.NO_IDENTIFIER_EXTRACTED: "Could not extract a document identifier",
    UnmatchedReason.NO_MATCHING_WORK_ITEM: "No matching document found",
    UnmatchedReason.UPDATE_FAILED: "Failed to update document",
}


class ReconciliationService:
    """Attach a batch of scanner reports to the open work items they belong to."""

    def __init__(
        self,
        auth: AuthPort,
        report_storage: ReportStoragePort,
        pdf_text: PdfTextPort,
        work_items: WorkItemStorePort,
        review_queue: ReviewQueuePort,
        notifier: NotificationPort,
        user_notifications: UserNotificationPort | None = None,
        vendor_name: str | None = SCANNER_VENDOR_NAME,
        extraction_timeout: float = EXTRACTION_TIMEOUT_SECONDS,
    ) -> None:
        self._auth = auth
        self._report_storage = report_storage
        self._pdf_text = pdf_text
        self._work_items = work_items
        self._review_queue = review_queue
        self._notifier = notifier
        self._user_notifications = user_notifications
        self._vendor_name = vendor_name
        self._extraction_timeout = extraction_timeout
        self._batch_lock = threading.Lock()

    def process_batch(
        self,
        caller_token: str | None,
        reports: object,
        progress_callback: Callable[[dict], None] | None = None,
    ) -> BatchResult:
        caller = self._authorize(caller_token)
        report_files = parse_report_files(reports)
        if not self._batch_lock.acquire(blocking=False):
            raise BatchInProgressError("Another reconciliation batch is already running")
        try:
            pool = self._load_pool()
            result = BatchResult(stats=BatchStats(total_reports=len(report_files)))
            newly_resolved: list[WorkItem] = []
            logger.info(
                "Processing %d reports against %d open work items",
                len(report_files),
                len(pool),
            )
            self._emit_progress(progress_callback, stage="start", total=len(report_files))
            for position, report in enumerate(report_files, start=1):
                processed = self._process_report(report, pool, result, caller, newly_resolved)
                self._emit_progress(
                    progress_callback,
                    stage="report_done",
                    file_name=report.file_name,
                    index=position,
                    total=len(report_files),
                    error=processed.error,
                )
        finally:
            self._batch_lock.release()

        self._notify_completed(newly_resolved)
        stats = result.stats
        logger.info(
            "Batch complete: total=%d mapped=%d unmatched=%d completed=%d unknown_type=%d",
            stats.total_reports,
            stats.mapped_count,
            stats.unmatched_count,
            stats.completed_count,
            stats.unknown_type_count,
        )
        self._emit_progress(progress_callback, stage="complete", **stats.to_dict())
        return result

    def classify(self, pdf_bytes: bytes) -> ClassifiedReport:
        page1_text = self._page_text(pdf_bytes, 1)
        page2_text = self._page_text(pdf_bytes, 2)
        classification = classify_report(page2_text)
        return ClassifiedReport(
            identifier=extract_identifier(page1_text, self._vendor_name),
            kind=classification.kind,
            score=classification.score,
        )

    def _authorize(self, caller_token: str | None) -> Caller:
        if not caller_token or not caller_token.strip():
            raise UnauthorizedError("Unauthorized")
        try:
            caller = self._auth.resolve_caller(caller_token.strip())
        except Exception as exc:
            raise CallerLookupError("Failed to resolve caller") from exc
        if caller is None:
            raise UnauthorizedError("Unauthorized")
        if caller.role not in ALLOWED_ROLES:
            raise ForbiddenError("Forbidden - Staff or Admin only")
        return caller

    def _load_pool(self) -> dict[str, WorkItem]:
        try:
            items = self._work_items.list_open_work_items()
        except Exception as exc:
            raise WorkItemPoolError("Failed to fetch open work items") from exc
        return {item.item_id: item for item in items}

    def _process_report(
        self,
        report: ReportFile,
        pool: dict[str, WorkItem],
        result: BatchResult,
        caller: Caller,
        newly_resolved: list[WorkItem],
    ) -> ProcessedReport:
        processed = ProcessedReport(file_name=report.file_name, file_path=report.storage_path)
        try:
            outcome = self._reconcile(report, pool, result, caller, processed, newly_resolved)
        except Exception as exc:
            logger.exception("Unexpected error while processing %s", report.file_name)
            processed.error = str(exc) or type(exc).__name__
            self._queue_review(
                ReviewEntry(
                    file_name=report.file_name,
                    best_guess_identifier=processed.document_name,
                    storage_path=report.storage_path,
                    kind=processed.report_type,
                    reason=UnmatchedReason.PROCESSING_ERROR,
                    matched_work_item_id=processed.matched_document_id,
                    uploaded_by=caller.user_id,
                    created_at=datetime.now(timezone.utc),
                )
            )
            result.unmatched.append(
                UnmatchedReport(
                    file_name=report.file_name,
                    document_name=processed.document_name,
                    reason=UnmatchedReason.PROCESSING_ERROR,
                )
            )
            result.stats.unmatched_count += 1
        else:
            if not outcome.is_matched:
                logger.debug("%s left unattached: %s", report.file_name, outcome.reason)
        result.processed.append(processed)
        return processed

    def _reconcile(
        self,
        report: ReportFile,
        pool: dict[str, WorkItem],
        result: BatchResult,
        caller: Caller,
        processed: ProcessedReport,
        newly_resolved: list[WorkItem],
    ) -> MatchOutcome:
        try:
            pdf_bytes = self._report_storage.download_report(report.storage_path)
        except Exception as exc:
            logger.warning("Failed to download %s: %s", report.storage_path, exc)
            return self._route_to_review(
                report, None, UnmatchedReason.DOWNLOAD_FAILED, result, caller, processed
            )

        classified = self.classify(pdf_bytes)
        processed.document_name = classified.identifier
        processed.report_type = classified.kind
        processed.percentage = classified.score
        logger.info(
            "Classified %s: kind=%s score=%s identifier=%r",
            report.file_name,
            classified.kind.value,
            classified.score,
            classified.identifier,
        )

        if classified.kind == ReportKind.UNKNOWN:
            result.stats.unknown_type_count += 1
            return self._route_to_review(
                report, classified, UnmatchedReason.UNKNOWN_REPORT_TYPE, result, caller, processed
            )
        if classified.identifier is None:
            return self._route_to_review(
                report,
                classified,
                UnmatchedReason.NO_IDENTIFIER_EXTRACTED,
                result,
                caller,
                processed,
            )

        item_id = match_work_item(classified.identifier, classified.kind, pool.values())
        if item_id is None:
            return self._route_to_review(
                report,
                classified,
                UnmatchedReason.NO_MATCHING_WORK_ITEM,
                result,
                caller,
                processed,
            )
        processed.matched_document_id = item_id
        item = pool[item_id]

        if item.report_path(classified.kind):
            # A filled slot is never overwritten and gets no review entry.
            logger.warning(
                "Work item %s already has a %s report; dropping %s without review",
                item_id,
                classified.kind.value,
                report.file_name,
            )
            processed.error = f"Document already has {classified.kind.value} report"
            return MatchOutcome.unmatched(UnmatchedReason.DUPLICATE_SLOT)

        fields = self._slot_fields(item, classified, report.storage_path)
        try:
            self._work_items.update_work_item(item_id, fields)
        except Exception as exc:
            logger.warning("Failed to update work item %s: %s", item_id, exc)
            return self._route_to_review(
                report,
                classified,
                UnmatchedReason.UPDATE_FAILED,
                result,
                caller,
                processed,
                matched_work_item_id=item_id,
            )

        self._apply_fields(item, fields)
        result.mapped.append(
            MappedReport(
                document_id=item_id,
                file_name=report.file_name,
                report_type=classified.kind,
                percentage=classified.score,
            )
        )
        result.stats.mapped_count += 1
        logger.info(
            "Mapped %s to work item %s as %s", report.file_name, item_id, classified.kind.value
        )
        if item.status == WorkItemStatus.RESOLVED:
            result.completed_documents.append(item_id)
            result.stats.completed_count += 1
            newly_resolved.append(item)
            logger.info("Work item %s resolved", item_id)
        return MatchOutcome.matched(item_id)

    @staticmethod
    def _slot_fields(item: WorkItem, classified: ClassifiedReport, storage_path: str) -> dict:
        fields: dict = {}
        if classified.kind == ReportKind.SIMILARITY:
            fields["similarity_report_path"] = storage_path
            if classified.score is not None:
                fields["similarity_percentage"] = classified.score
            other_filled = bool(item.ai_report_path)
        else:
            fields["ai_report_path"] = storage_path
            if classified.score is not None:
                fields["ai_percentage"] = classified.score
            other_filled = bool(item.similarity_report_path)
        if other_filled:
            fields["status"] = WorkItemStatus.RESOLVED.value
            fields["resolved_at"] = datetime.now(timezone.utc).isoformat()
        return fields

    @staticmethod
    def _apply_fields(item: WorkItem, fields: dict) -> None:
        for name, value in fields.items():
            if name == "status":
                value = WorkItemStatus(value)
            setattr(item, name, value)

    def _route_to_review(
        self,
        report: ReportFile,
        classified: ClassifiedReport | None,
        reason: UnmatchedReason,
        result: BatchResult,
        caller: Caller,
        processed: ProcessedReport,
        matched_work_item_id: str | None = None,
    ) -> MatchOutcome:
        identifier = classified.identifier if classified is not None else None
        kind = classified.kind if classified is not None else ReportKind.UNKNOWN
        processed.error = REASON_MESSAGES[reason]
        entry = ReviewEntry(
            file_name=report.file_name,
            best_guess_identifier=identifier,
            storage_path=report.storage_path,
            kind=kind,
            reason=reason,
            matched_work_item_id=matched_work_item_id,
            uploaded_by=caller.user_id,
            created_at=datetime.now(timezone.utc),
        )
        self._queue_review(entry)
        result.unmatched.append(
            UnmatchedReport(file_name=report.file_name, document_name=identifier, reason=reason)
        )
        result.stats.unmatched_count += 1
        logger.warning("Queued %s for review: %s", report.file_name, reason.value)
        return MatchOutcome.unmatched(reason)

    def _queue_review(self, entry: ReviewEntry) -> None:
        try:
            self._review_queue.insert_review_entry(entry)
        except Exception as exc:
            logger.warning("Failed to queue %s for review: %s", entry.file_name, exc)

    def _page_text(self, pdf_bytes: bytes, page_number: int) -> str:
        if self._extraction_timeout <= 0:
            return self._pdf_text.extract_page_text(pdf_bytes, page_number)
        outcome: dict[str, object] = {}

        def _run() -> None:
            try:
                outcome["text"] = self._pdf_text.extract_page_text(pdf_bytes, page_number)
            except Exception as exc:
                outcome["error"] = exc

        # Daemon so a stuck parse never holds the interpreter open at exit.
        worker = threading.Thread(
            target=_run, name=f"page-text-{page_number}", daemon=True
        )
        worker.start()
        worker.join(self._extraction_timeout)
        if worker.is_alive():
            logger.warning(
                "Text extraction for page %d timed out after %.1fs",
                page_number,
                self._extraction_timeout,
            )
            return ""
        if "error" in outcome:
            raise outcome["error"]
        return outcome.get("text") or ""

    def _notify_completed(self, items: list[WorkItem]) -> None:
        for item in items:
            if not item.owner_id:
                continue
            payload = {
                "userId": item.owner_id,
                "title": "Document Ready",
                "body": f'Your document "{item.declared_file_name}" is ready for download.',
                "documentId": item.item_id,
            }
            for channel, send in (
                ("in-app", self._send_in_app),
                ("push", self._notifier.send_push),
                ("email", self._notifier.send_email),
            ):
                try:
                    send(dict(payload))
                except Exception as exc:
                    logger.warning(
                        "Failed to send %s notification for work item %s: %s",
                        channel,
                        item.item_id,
                        exc,
                    )

    def _send_in_app(self, payload: dict) -> None:
        if self._user_notifications is None:
            return
        self._user_notifications.insert_user_notification(
            payload["userId"], payload["title"], payload["body"]
        )

    @staticmethod
    def _emit_progress(
        callback: Callable[[dict], None] | None,
        **payload: object,
    ) -> None:
        if callback is None:
            return
        try:
            callback(dict(payload))
        except Exception:
            logger.exception("Progress callback failed at stage %s", payload.get("stage"))
