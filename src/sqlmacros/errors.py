from __future__ import annotations

from dataclasses import dataclass, asdict
from enum import Enum
from typing import Any, Dict, Iterable, Optional


class ExitCode(int, Enum):
    OK = 0
    USAGE_ERROR = 2
    CONFIG_INVALID = 10
    UNSUPPORTED = 20
    INTERNAL_ERROR = 50


@dataclass(frozen=True)
class MacroProblem:
    code: str                 # stable machine code, e.g. "SQLMACROS_UNSUPPORTED_DIALECT"
    category: str             # "config" | "unsupported" | "internal"
    message: str              # short human message
    details: Dict[str, Any]   # structured details for debugging the call site
    remediation: Optional[str] = None  # actionable next step


class MacroException(Exception):
    def __init__(
        self,
        problem: MacroProblem,
        exit_code: ExitCode,
        *,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(problem.message)
        self.problem = problem
        self.exit_code = exit_code
        if cause is not None:
            self.__cause__ = cause


class UnsupportedDialect(MacroException):
    def __init__(self, dialect: Any, operation: Any, *, supported: Iterable[str] = ()) -> None:
        op = getattr(operation, "value", operation)
        supported = sorted(supported)
        super().__init__(
            MacroProblem(
                code="SQLMACROS_UNSUPPORTED_DIALECT",
                category="unsupported",
                message=f"Database type {dialect} not supported for {op}",
                details={"dialect": str(dialect), "operation": str(op), "supported": supported},
                remediation="Use one of the supported dialects or add templates for this dialect.",
            ),
            ExitCode.UNSUPPORTED,
        )
        self.dialect = dialect
        self.operation = op


class UnsupportedValidationType(MacroException):
    def __init__(self, validation_type: Any, *, supported: Iterable[str] = ()) -> None:
        supported = sorted(supported)
        super().__init__(
            MacroProblem(
                code="SQLMACROS_UNSUPPORTED_VALIDATION_TYPE",
                category="unsupported",
                message=f"Validation type {validation_type} not supported",
                details={"validation_type": str(validation_type), "supported": supported},
                remediation="Use one of: " + ", ".join(supported) if supported else None,
            ),
            ExitCode.UNSUPPORTED,
        )
        self.validation_type = validation_type


class ConfigError(MacroException):
    def __init__(
        self,
        code: str,
        message: str,
        *,
        details: Dict[str, Any],
        remediation: Optional[str] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(
            MacroProblem(
                code=code,
                category="config",
                message=message,
                details=details,
                remediation=remediation,
            ),
            ExitCode.CONFIG_INVALID,
            cause=cause,
        )


def problem_to_dict(p: MacroProblem) -> Dict[str, Any]:
    d = asdict(p)
    if d.get("remediation") is None:
        d.pop("remediation", None)
    return d
