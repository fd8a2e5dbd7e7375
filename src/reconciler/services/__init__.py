from .reconciliation_facade import ReconciliationFacade
from .reconciliation_service import ReconciliationService

__all__ = ["ReconciliationFacade", "ReconciliationService"]
