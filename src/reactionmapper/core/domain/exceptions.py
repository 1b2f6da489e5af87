"""Error hierarchy for atom-atom mapping."""

from typing import Any, Dict


class MappingError(Exception):
    """Base class for all mapping errors.

    Attributes:
        code: Machine-readable error code
        message: Human-readable error description
    """

    code = "MAPPING_ERROR"

    def __init__(self, message: str, code: str = None):
        self.message = message
        if code is not None:
            self.code = code
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        return {"code": self.code, "message": self.message}


class StandardizationError(MappingError):
    """Raised when a reaction fails preprocessing."""

    code = "STANDARDIZATION_FAILED"


class MatchTaskError(MappingError):
    """Raised when a single (reactant, product) matching call fails."""

    code = "MATCH_TASK_FAILED"

    def __init__(self, message: str, row_index: int = -1, col_index: int = -1):
        super().__init__(message)
        self.row_index = row_index
        self.col_index = col_index

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["job"] = [self.row_index, self.col_index]
        return data


class OrderingMismatchError(MappingError):
    """Raised when a matrix reorder request does not fit the matrix atoms."""

    code = "ORDERING_MISMATCH"


class InterruptedWaitError(MappingError):
    """Raised when the wait on a batch of workers is interrupted."""

    code = "INTERRUPTED_WAIT"
