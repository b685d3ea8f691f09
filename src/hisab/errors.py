class LedgerError(Exception):
    """Base class for rejected ledger operations."""


class ValidationError(LedgerError):
    pass


class NotFoundError(LedgerError):
    pass


class DuplicateTagError(LedgerError):
    pass
