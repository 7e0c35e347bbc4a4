"""
Analytics Errors

Exception hierarchy raised by the query/aggregation engine.
"""


class AnalyticsError(Exception):
    """Base class for all analytics engine errors"""


class InvalidUuidFormat(AnalyticsError, ValueError):
    """A UUID string does not hold exactly 32 hex digits once hyphens are removed"""

    def __init__(self, value: object):
        self.value = value
        super().__init__(f"Invalid UUID format: {value!r}")


class InvalidBinaryLength(AnalyticsError, ValueError):
    """A stored binary key is not exactly 16 bytes long"""

    def __init__(self, length: int):
        self.length = length
        super().__init__(f"UUID binary must be 16 bytes, got {length}")


class InvalidDateFormat(AnalyticsError, ValueError):
    """A date boundary could not be parsed"""

    def __init__(self, value: object):
        self.value = value
        super().__init__(f"Invalid date: {value!r}")


class MalformedProductList(AnalyticsError, ValueError):
    """
    A legacy product list string could not be parsed.

    Only raised under the strict normalization policy; the four query
    operations degrade to an empty list instead.
    """


class StoreUnavailable(AnalyticsError):
    """
    The document store could not be reached or timed out.

    Retryable from the caller's point of view. The engine itself never retries.
    """

    retryable = True

    def __init__(self, operation: str, cause: Exception):
        self.operation = operation
        self.cause = cause
        super().__init__(f"Document store unavailable during {operation}: {cause}")
