"""Exception hierarchy for Escala."""


class EscalaError(Exception):
    """Base exception for Escala operations"""
    pass


class StoreError(EscalaError):
    """Raised when a table store read or write fails"""
    pass


class SchemaMismatchError(StoreError):
    """Raised when the store lacks a table or column the application needs"""

    def __init__(self, message: str, remediation: str = ""):
        super().__init__(message)
        self.remediation = remediation


class AuthError(EscalaError):
    """Raised when sign-in or sign-up fails; the message is user-facing"""
    pass
