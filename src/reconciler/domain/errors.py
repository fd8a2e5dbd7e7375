from __future__ import annotations


class BatchRejectedError(RuntimeError):
    """A failure that aborts the whole batch before any file is processed."""

    status_code = 500


class UnauthorizedError(BatchRejectedError):
    status_code = 401


class ForbiddenError(BatchRejectedError):
    status_code = 403


class InvalidPayloadError(BatchRejectedError):
    status_code = 400


class WorkItemPoolError(BatchRejectedError):
    status_code = 500


class BatchInProgressError(BatchRejectedError):
    status_code = 409


class CallerLookupError(BatchRejectedError):
    status_code = 500
