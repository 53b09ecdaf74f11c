# cli/ui - 콘솔 출력 컴포넌트 (rich)
"""
콘솔 출력 모듈

CLI 전용 출력 헬퍼들 (성공/에러/경고 메시지, JSON 출력, Rich 로그 핸들러)
"""

# Direct imports (rich is always used by the CLI, no lazy import needed)
from .console import (
    INDENT,
    SYMBOL_ERROR,
    SYMBOL_INFO,
    SYMBOL_SUCCESS,
    SYMBOL_WARNING,
    console,
    err_console,
    get_console,
    get_logger,
    print_error,
    print_field,
    print_info,
    print_json,
    print_sub_info,
    print_success,
    print_warning,
)

__all__ = [
    "INDENT",
    "SYMBOL_ERROR",
    "SYMBOL_INFO",
    "SYMBOL_SUCCESS",
    "SYMBOL_WARNING",
    "console",
    "err_console",
    "get_console",
    "get_logger",
    "print_error",
    "print_field",
    "print_info",
    "print_json",
    "print_sub_info",
    "print_success",
    "print_warning",
]
