"""
core/exceptions.py - 통합 예외 계층 구조

애플리케이션 전체에서 사용되는 예외 클래스들을 정의합니다.
모든 예외는 사람이 읽을 메시지와 함께 기계가 읽을 수 있는 분류 코드(code),
해결 방법(remediation)을 제공합니다. CLI를 호출하는 쪽이 자동화 도구(에이전트)인
경우에도 에러를 해석 없이 처리할 수 있도록 하기 위함입니다.

예외 계층 구조:
    LinearAgentError (베이스)
    ├── AuthError (인증 관련) - core.auth.types에서 정의
    │   ├── NotAuthenticatedError
    │   ├── TokenExchangeError
    │   ├── ClientCredentialsError
    │   ├── TokenRefreshError
    │   ├── InvalidCredentialsError
    │   ├── SecureStoreError
    │   └── LogoutError
    └── ConfigError (설정 관련)

Usage:
    from linear_agent.core.exceptions import LinearAgentError, format_error_for_user

    try:
        credential = resolver.resolve()
    except LinearAgentError as e:
        print(format_error_for_user(e))
        print(e.to_dict())
"""

from typing import Any, Dict, Optional

# =============================================================================
# 베이스 예외
# =============================================================================


class LinearAgentError(Exception):
    """linear-agent 기본 예외 클래스

    모든 커스텀 예외의 베이스 클래스입니다.

    Attributes:
        message: 에러 메시지
        cause: 원인 예외 (체이닝용)
        details: 추가 상세 정보
        code: 기계 판독용 분류 코드 (예: "not_authenticated")
        remediation: 문제 해결을 위해 실행할 명령 또는 안내
    """

    code: str = "error"
    remediation: Optional[str] = None

    def __init__(
        self,
        message: str,
        cause: Optional[Exception] = None,
        details: Optional[Dict[str, Any]] = None,
        code: Optional[str] = None,
        remediation: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.details = details or {}
        if code is not None:
            self.code = code
        if remediation is not None:
            self.remediation = remediation

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        """예외 정보를 딕셔너리로 반환"""
        return {
            "error_type": self.__class__.__name__,
            "code": self.code,
            "message": str(self),
            "remediation": self.remediation,
            "cause": str(self.cause) if self.cause else None,
            "details": self.details,
        }


# =============================================================================
# 설정 관련 예외
# =============================================================================


class ConfigError(LinearAgentError):
    """설정 관련 예외"""

    code = "config_error"

    def __init__(
        self,
        key: str,
        message: str,
        cause: Optional[Exception] = None,
    ):
        full_message = f"설정 오류 [{key}]: {message}"
        super().__init__(full_message, cause)
        self.config_key = key
        self.details["config_key"] = key


# =============================================================================
# 예외 유틸리티 함수
# =============================================================================


def format_error_for_user(error: Exception) -> str:
    """사용자에게 표시할 에러 메시지 포맷팅

    커스텀 예외는 메시지 뒤에 해결 방법을 덧붙입니다.

    Args:
        error: 예외

    Returns:
        사용자 친화적인 에러 메시지
    """
    if isinstance(error, LinearAgentError):
        if error.remediation:
            return f"{error}\n  → {error.remediation}"
        return str(error)

    return str(error) or error.__class__.__name__
