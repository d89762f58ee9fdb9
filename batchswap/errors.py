"""Batch swap error classes.

Every failure raised by this package derives from BatchSwapError so callers
can translate them into exit codes or diagnostics in one place.
"""


class BatchSwapError(Exception):
    """Base error for batch swap operations."""

    pass


class SolverFailure(BatchSwapError):
    """The route query failed or returned no viable route (returnAmount <= 0)."""

    pass


class EncodingFailure(BatchSwapError):
    """Arguments do not fit the ABI layout the vault adapter expects."""

    pass


class QueryFailure(BatchSwapError):
    """An external read (balance, adapter query) failed.

    Classified as transient. Nothing in this package retries it.
    """

    transient = True


class InvalidRoute(BatchSwapError):
    """The route cannot be turned into limits (e.g. tokenIn == tokenOut)."""

    pass


class UnsupportedNetwork(BatchSwapError):
    """No network descriptor is registered for the chain id."""

    pass
