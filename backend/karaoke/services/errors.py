"""Error taxonomy for queue operations.

Each condition is its own ``HTTPException`` subclass so routers can let it
propagate untouched while callers (and tests) can still tell them apart.
"""
from fastapi import HTTPException, status


class NotFound(HTTPException):
    def __init__(self, detail: str = "Not found"):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class RequestValidationFailed(HTTPException):
    """Nickname or song title empty after trimming."""

    def __init__(self, detail: str):
        super().__init__(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=detail)


class SubmissionsClosed(HTTPException):
    def __init__(self, detail: str = "This event is not accepting new requests"):
        super().__init__(status_code=status.HTTP_409_CONFLICT, detail=detail)


class StoreUnavailable(HTTPException):
    def __init__(self, detail: str = "The queue store is unavailable, please retry"):
        super().__init__(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=detail)


class OperatorRequired(HTTPException):
    def __init__(self, detail: str = "Operator credentials required"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "X-Operator-Token"},
        )


class JoinCodesExhausted(StoreUnavailable):
    """Every drawn join code was taken by an active event.

    Not a backend failure, but the remedy is the same: retry the creation.
    """

    def __init__(self):
        super().__init__(detail="Could not allocate a free join code, please retry")
