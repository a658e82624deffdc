"""Errors raised at the edges of the analyzer.

The decoder and the aggregator never fail; everything here comes from
reading the trace, writing the report, or strict-mode checks.
"""


class TraceError(Exception):
    """Base class for every fatal analyzer error."""


class InputUnavailable(TraceError):
    pass


class OutputUnavailable(TraceError):
    pass


class MalformedTrace(TraceError):
    def __init__(self, message: str, line_no: int = 0):
        self.line_no = line_no
        if line_no:
            message = f"line {line_no}: {message}"
        super().__init__(message)


class StatsInvariantError(TraceError):
    pass
