"""
Custom exceptions
"""


class ExpenseTrackerError(Exception):
    """Base error for the service"""
    pass


class ValidationError(ExpenseTrackerError):
    """Malformed period, window or filter input"""
    pass


class NotFoundError(ExpenseTrackerError):
    """Owner or expense record does not exist"""
    pass


class ConfigurationError(ExpenseTrackerError):
    """Owner configuration cannot be used, e.g. a non-positive budget limit"""
    pass


class ConflictError(ExpenseTrackerError):
    """Document already exists"""
    pass


class AuthenticationError(ExpenseTrackerError):
    """Identity token missing, invalid or without a subject"""
    pass


class FirestoreError(ExpenseTrackerError):
    """Firestore unavailable or a Firestore call failed"""
    pass
