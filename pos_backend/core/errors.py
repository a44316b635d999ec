"""
Error taxonomy shared by services and endpoints

Services raise these; main.py renders them as {"message", "code"} JSON.
"""
from fastapi import status


class PosError(Exception):
    """Base class for all domain errors"""
    code = "POS_ERROR"
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"message": self.message, "code": self.code}


class ValidationError(PosError):
    """Malformed or missing input, rejected before persistence"""
    code = "VALIDATION_ERROR"
    status_code = status.HTTP_400_BAD_REQUEST


class EmptyOrderError(ValidationError):
    """Order submitted with zero line items"""
    code = "EMPTY_ORDER"

    def __init__(self, message: str = "Order must contain at least one item"):
        super().__init__(message)


class NotFoundError(PosError):
    """Reference to a nonexistent entity"""
    code = "NOT_FOUND"
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, entity: str, identifier):
        super().__init__(f"{entity} {identifier} not found")
        self.entity = entity
        self.identifier = identifier


class PersistenceError(PosError):
    """Storage-layer failure; the cause is kept on __cause__"""
    code = "PERSISTENCE_ERROR"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
