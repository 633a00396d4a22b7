from .visit_status_sync import VisitStatusSync, VisitStatusSyncResult

__all__ = ["VisitStatusSync", "VisitStatusSyncResult"]
