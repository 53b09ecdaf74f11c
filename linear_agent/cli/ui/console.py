"""
cli/ui/console.py - Rich 콘솔 유틸리티

일관된 콘솔 출력을 위한 함수들

사람이 읽는 출력은 stdout 콘솔로, 로그와 에러는 stderr 콘솔로 보냅니다.
--json 모드에서 stdout에는 JSON 문서 하나만 남도록 하기 위함입니다.
"""

import json
import logging
import platform
from typing import Any

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

# HTTP 클라이언트 노이즈 로그 제한
logging.getLogger("urllib3.connectionpool").setLevel(logging.WARNING)
logging.getLogger("keyring.backend").setLevel(logging.WARNING)


def get_console(stderr: bool = False) -> Console:
    """Rich Console 인스턴스를 생성하고 반환합니다."""
    is_windows = platform.system().lower() == "windows"

    return Console(
        stderr=stderr,
        color_system="auto",
        highlight=False,
        soft_wrap=True,
        markup=True,
        emoji=not is_windows,
    )


# 전역 콘솔 인스턴스
console = get_console()
err_console = get_console(stderr=True)


def get_logger(name: str = "linear_agent", level: int = logging.INFO) -> logging.Logger:
    """Rich 핸들러가 설정된 logger를 반환합니다.

    핸들러는 stderr 콘솔에 연결되며, 루트 logger로 전파하지 않습니다.

    Args:
        name: logger 이름 (기본값: "linear_agent")
        level: 로그 레벨

    Returns:
        logging.Logger: 설정된 logger 인스턴스
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # 이미 핸들러가 설정되어 있으면 반환
    if any(isinstance(h, RichHandler) for h in logger.handlers):
        return logger

    handler = RichHandler(console=err_console, rich_tracebacks=True, show_path=False)
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s", datefmt="[%X]"))
    logger.addHandler(handler)
    logger.propagate = False

    return logger


# =============================================================================
# 표준 출력 스타일 (이모지 없이 Rich 스타일만 사용)
# =============================================================================

# 상태 심볼
SYMBOL_SUCCESS = "✓"  # 완료
SYMBOL_ERROR = "✗"  # 에러
SYMBOL_WARNING = "!"  # 경고
SYMBOL_INFO = "•"  # 정보

# 하위 항목 들여쓰기
INDENT = "  "


def print_success(message: str) -> None:
    """성공 메시지 출력 (초록색 체크마크)

    Args:
        message: 출력할 메시지
    """
    console.print(f"[green]{SYMBOL_SUCCESS} {escape(message)}[/green]")


def print_error(message: str) -> None:
    """에러 메시지 출력 (빨간색 X, stderr)

    Args:
        message: 출력할 메시지
    """
    err_console.print(f"[red]{SYMBOL_ERROR} {escape(message)}[/red]")


def print_warning(message: str) -> None:
    """경고 메시지 출력 (노란색 경고)

    Args:
        message: 출력할 메시지
    """
    console.print(f"[yellow]{SYMBOL_WARNING} {escape(message)}[/yellow]")


def print_info(message: str) -> None:
    """정보 메시지 출력 (파란색 정보)

    Args:
        message: 출력할 메시지
    """
    console.print(f"[blue]{SYMBOL_INFO} {escape(message)}[/blue]")


def print_sub_info(message: str) -> None:
    """하위 정보 출력 (들여쓰기, 흐린 색)"""
    console.print(f"{INDENT}[dim]{escape(message)}[/dim]")


def print_field(label: str, value: Any) -> None:
    """'라벨: 값' 형식의 하위 항목 출력"""
    console.print(f"{INDENT}[cyan]{escape(label)}:[/cyan] {escape(str(value))}")


def print_json(data: Any) -> None:
    """JSON 문서 출력 (stdout)

    Args:
        data: 출력할 데이터 (JSON 직렬화 가능)
    """
    console.print_json(json.dumps(data, ensure_ascii=False, default=str))
