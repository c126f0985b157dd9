"""
Error taxonomy for the analysis handlers
"""
from typing import Optional


class HealthAnalysisError(Exception):
    """Base error that maps onto a failure envelope"""

    status_code = 500

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class InputValidationError(HealthAnalysisError):
    """Missing or malformed request input"""

    status_code = 400


class SoftAnalysisFailure(HealthAnalysisError):
    """The model answered but could not analyze the image"""

    status_code = 400


class HardAnalysisFailure(HealthAnalysisError):
    """The model call itself failed"""

    status_code = 500


class PersistenceFailure(HealthAnalysisError):
    pass


class LookupFailure(HealthAnalysisError):
    pass
