from __future__ import annotations

from reconciler.domain.errors import BatchRejectedError
from reconciler.services.reconciliation_service import ReconciliationService


class ReconciliationFacade:
    def __init__(self, reconciliation_service: ReconciliationService) -> None:
        self._reconciliation_service = reconciliation_service

    def handle(self, authorization: str | None, payload: object) -> tuple[int, dict]:
        token = _bearer_token(authorization)
        reports = payload.get("reports") if isinstance(payload, dict) else None
        try:
            result = self._reconciliation_service.process_batch(token, reports)
        except BatchRejectedError as exc:
            return exc.status_code, {"success": False, "error": str(exc)}
        return 200, result.to_dict()


def _bearer_token(authorization: str | None) -> str | None:
    if not authorization:
        return None
    value = authorization.strip()
    if value.lower().startswith("bearer "):
        value = value[len("bearer ") :]
    return value.strip() or None
