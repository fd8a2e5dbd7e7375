from unittest.mock import Mock

from reconciler.domain.errors import InvalidPayloadError, UnauthorizedError
from reconciler.domain.models import BatchResult, BatchStats
from reconciler.services.reconciliation_facade import ReconciliationFacade
from reconciler.services.reconciliation_service import ReconciliationService


def test_handle_returns_result_dict_on_success() -> None:
    service = Mock()
    service.process_batch.return_value = BatchResult(stats=BatchStats(total_reports=1))
    facade = ReconciliationFacade(service)
    reports = [{"fileName": "a.pdf", "storagePath": "batch/a.pdf"}]

    status, body = facade.handle("Bearer  abc ", {"reports": reports})

    assert status == 200
    assert body["success"] is True
    assert body["stats"]["totalReports"] == 1
    service.process_batch.assert_called_once_with("abc", reports)


def test_handle_maps_rejections_to_status_codes() -> None:
    service = Mock()
    service.process_batch.side_effect = UnauthorizedError("Unauthorized")
    facade = ReconciliationFacade(service)

    assert facade.handle(None, {"reports": []}) == (
        401,
        {"success": False, "error": "Unauthorized"},
    )
    service.process_batch.assert_called_once_with(None, [])


def test_handle_passes_missing_reports_through() -> None:
    service = Mock()
    service.process_batch.side_effect = InvalidPayloadError("No reports provided")
    facade = ReconciliationFacade(service)

    status, body = facade.handle("Bearer abc", "not a dict")

    assert status == 400
    assert body == {"success": False, "error": "No reports provided"}
    service.process_batch.assert_called_once_with("abc", None)


def test_handle_returns_500_when_auth_store_fails() -> None:
    auth = Mock()
    auth.resolve_caller.side_effect = RuntimeError("Failed to resolve caller")
    service = ReconciliationService(
        auth=auth,
        report_storage=Mock(),
        pdf_text=Mock(),
        work_items=Mock(),
        review_queue=Mock(),
        notifier=Mock(),
        extraction_timeout=0,
    )
    facade = ReconciliationFacade(service)

    status, body = facade.handle(
        "Bearer abc", {"reports": [{"fileName": "a.pdf", "storagePath": "a.pdf"}]}
    )

    assert status == 500
    assert body == {"success": False, "error": "Failed to resolve caller"}
