"""
Diagnostic sinks for swallowed failures

Storage failures are never raised to the caller. A sink gives the host a
hook to forward them to whatever error tracker it uses.
"""

from typing import Any, Protocol

from budget_alerts.kernel.logging import get_logger, redact_context


class DiagnosticSink(Protocol):
    """Receives failures that were handled and degraded"""

    def report(
        self, operation: str, error: BaseException, context: dict[str, Any]
    ) -> None:
        ...


class NullDiagnosticSink:
    """Default sink - drops every report"""

    def report(
        self, operation: str, error: BaseException, context: dict[str, Any]
    ) -> None:
        return None


class LoggingDiagnosticSink:
    """Sink that logs each report as a structured error event"""

    def __init__(self, logger_name: str = "budget_alerts.diagnostics") -> None:
        self.logger = get_logger(logger_name)

    def report(
        self, operation: str, error: BaseException, context: dict[str, Any]
    ) -> None:
        self.logger.error(
            "Alert storage failure reported",
            operation=operation,
            error_type=type(error).__name__,
            error=str(error),
            **redact_context(context),
        )


class RecordingDiagnosticSink:
    """Sink that keeps reports in memory, for tests and debugging hosts"""

    def __init__(self) -> None:
        self.reports: list[tuple[str, BaseException, dict[str, Any]]] = []

    def report(
        self, operation: str, error: BaseException, context: dict[str, Any]
    ) -> None:
        self.reports.append((operation, error, dict(context)))

    @property
    def operations(self) -> list[str]:
        return [operation for operation, _, _ in self.reports]
