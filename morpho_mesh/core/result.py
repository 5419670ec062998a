"""
Exceptions raised by the conversion and the result object reported by the
export API.

The builders raise; only the API layer turns exceptions into an
OperationResult.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Any, Optional
from enum import Enum


class OperationStatus(Enum):
    SUCCESS = "success"
    PARTIAL_SUCCESS = "partial_success"
    FAILURE = "failure"


class ErrorCode(Enum):
    """Machine-readable reason of a failed conversion."""
    INVALID_MORPHOLOGY = "INVALID_MORPHOLOGY"
    BRANCH_NOT_FOUND = "BRANCH_NOT_FOUND"
    EMPTY_SOMA = "EMPTY_SOMA"
    MISSING_PARENT = "MISSING_PARENT"
    EMPTY_PARENT_PIPE = "EMPTY_PARENT_PIPE"
    POINT_NOT_FOUND = "POINT_NOT_FOUND"
    INVALID_CIRCLE = "INVALID_CIRCLE"
    EMPTY_CATALOG = "EMPTY_CATALOG"
    INVALID_PARAMETER = "INVALID_PARAMETER"
    GMSH_EXPORT_FAILED = "GMSH_EXPORT_FAILED"


class MorphologyError(ValueError):
    """Structural problem in the morphology or in a catalog lookup."""

    def __init__(self, message: str, code: ErrorCode = ErrorCode.INVALID_MORPHOLOGY):
        super().__init__(message)
        self.code = code


class PointNotFoundError(MorphologyError, KeyError):
    """A point was referenced by value but never inserted in the catalog."""

    def __init__(self, message: str):
        super().__init__(message, ErrorCode.POINT_NOT_FOUND)

    def __str__(self) -> str:
        # KeyError would quote the message
        return self.args[0]


class GeometryError(RuntimeError):
    """Numeric failure while constructing geometry."""

    def __init__(self, message: str, code: ErrorCode = ErrorCode.INVALID_CIRCLE):
        super().__init__(message)
        self.code = code


@dataclass
class OperationResult:
    """
    Outcome of an export.

    Attributes
    ----------
    status : OperationStatus
        PARTIAL_SUCCESS when the files were written but warnings were raised
    message : str
        One-line summary
    warnings : list of str
        Recoverable anomalies (e.g. skipped duplicated points)
    errors : list of str
        Fatal problems; nothing was written when there is any
    error_codes : list of str
        ErrorCode values matching the errors
    metadata : dict
        Mode, entity counts and written paths
    """

    status: OperationStatus
    message: str = ""
    warnings: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)
    error_codes: List[str] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)

    def is_success(self) -> bool:
        """True for SUCCESS and PARTIAL_SUCCESS."""
        return self.status != OperationStatus.FAILURE

    def is_failure(self) -> bool:
        return self.status == OperationStatus.FAILURE

    def add_warning(self, warning: str) -> None:
        self.warnings.append(warning)

    def add_error(self, error: str, code: Optional[ErrorCode] = None) -> None:
        """Record an error, and its code when given."""
        self.errors.append(error)
        if code is not None:
            self.error_codes.append(code.value)

    def to_dict(self) -> dict:
        """JSON-safe view, e.g. for logging an export report."""
        return {
            "status": self.status.value,
            "message": self.message,
            "warnings": list(self.warnings),
            "errors": list(self.errors),
            "error_codes": list(self.error_codes),
            "metadata": dict(self.metadata),
        }

    @classmethod
    def success(cls, message: str = "", **kwargs) -> "OperationResult":
        return cls(OperationStatus.SUCCESS, message, **kwargs)

    @classmethod
    def partial_success(cls, message: str = "", **kwargs) -> "OperationResult":
        return cls(OperationStatus.PARTIAL_SUCCESS, message, **kwargs)

    @classmethod
    def failure(cls, message: str = "", **kwargs) -> "OperationResult":
        return cls(OperationStatus.FAILURE, message, **kwargs)
