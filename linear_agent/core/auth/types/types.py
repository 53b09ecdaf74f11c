# core/auth/types/types.py
"""
core/auth/types/types.py - 인증 모듈의 핵심 타입 정의

이 모듈은 인증 시스템 전체에서 사용되는 기본 타입들을 정의합니다.

포함 항목:
    - AuthMethod: 인증 방식 열거형 (NONE, STATIC_KEY, EXCHANGED_TOKEN)
    - CredentialSource: 자격 증명 출처 열거형 (ENVIRONMENT, SECURE_STORE, LEGACY_FILE)
    - Credential: 원격 서비스에 제시할 단일 자격 증명
    - TokenInfo: 토큰 엔드포인트에서 교환한 단기 액세스 토큰 정보
    - AuthStatus: 네트워크 호출 없이 계산한 인증 상태
    - 에러 클래스: AuthError, NotAuthenticatedError, TokenExchangeError,
      ClientCredentialsError, TokenRefreshError, InvalidCredentialsError,
      SecureStoreError, LogoutError
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any

from linear_agent.core.exceptions import LinearAgentError

logger = logging.getLogger(__name__)


# =============================================================================
# Enums
# =============================================================================


class AuthMethod(Enum):
    """인증 방식을 나타내는 열거형

    - NONE: 사용 가능한 자격 증명 없음
    - STATIC_KEY: 만료되지 않는 개인 API 키
    - EXCHANGED_TOKEN: client credentials로 교환한 단기 토큰

    값은 기계 판독용 출력에 그대로 사용됩니다.
    """

    NONE = "none"
    STATIC_KEY = "api_key"
    EXCHANGED_TOKEN = "client_credentials"

    def __str__(self) -> str:
        return self.value


class CredentialSource(Enum):
    """자격 증명의 출처

    보안 경계가 아니라 출처 정보입니다. 갱신된 토큰을 어디에 다시 저장할지는
    이 값으로 결정됩니다 (SECURE_STORE 출처만 갱신 후 재저장).
    """

    ENVIRONMENT = "env"
    SECURE_STORE = "keychain"
    LEGACY_FILE = "config"

    def __str__(self) -> str:
        return self.value


# =============================================================================
# Credential
# =============================================================================


@dataclass(frozen=True)
class Credential:
    """원격 서비스에 제시할 bearer 자격 증명

    Attributes:
        token: bearer 값 (repr에 노출되지 않음)
        method: 인증 방식
        source: 출처
        expires_at: 만료 시간 (UTC, 교환 토큰에만 존재)
    """

    token: str = field(repr=False)
    method: AuthMethod
    source: CredentialSource
    expires_at: datetime | None = None

    def __post_init__(self):
        if not self.token:
            raise ValueError("자격 증명 값이 비어 있습니다")
        if self.method is AuthMethod.NONE:
            raise ValueError("method=none 인 Credential은 만들 수 없습니다")
        if self.method is AuthMethod.EXCHANGED_TOKEN and self.expires_at is None:
            raise ValueError("교환 토큰에는 expires_at이 필요합니다")
        if self.method is AuthMethod.STATIC_KEY and self.expires_at is not None:
            raise ValueError("정적 키에는 expires_at을 지정할 수 없습니다")

    def authorization_header(self) -> dict[str, str]:
        """요청에 붙일 Authorization 헤더"""
        return {"Authorization": self.token}

    def to_dict(self) -> dict[str, Any]:
        """기계 판독용 딕셔너리 (토큰 값은 포함하지 않음)"""
        return {
            "method": self.method.value,
            "source": self.source.value,
            "expires_at": self.expires_at.isoformat() if self.expires_at else None,
        }


# =============================================================================
# Token Info
# =============================================================================


def _parse_timestamp(value: str) -> datetime:
    """RFC 3339 문자열을 UTC datetime으로 변환

    Raises:
        ValueError: 형식이 잘못된 경우
    """
    if not isinstance(value, str):
        raise ValueError(f"타임스탬프가 문자열이 아닙니다: {value!r}")
    # Python 3.11+ fromisoformat은 "Z" 접미사를 처리함
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


@dataclass
class TokenInfo:
    """교환된 액세스 토큰 정보 (SecureStore의 token_info 항목)

    Attributes:
        access_token: 액세스 토큰
        token_type: 토큰 타입 (예: "Bearer")
        expires_in: 발급 시점 기준 유효 시간 (초)
        expires_at: 만료 시간 (UTC)
        scope: 부여된 scope (옵션)
    """

    access_token: str = field(repr=False)
    token_type: str
    expires_in: int
    expires_at: datetime
    scope: str = ""

    def is_fresh(self, now: datetime, buffer: timedelta) -> bool:
        """버퍼를 고려해 아직 사용 가능한지 확인

        now + buffer 가 만료 시간보다 엄격하게 이전이어야 유효합니다.
        """
        return now + buffer < self.expires_at

    def to_dict(self) -> dict[str, Any]:
        """딕셔너리로 변환 (JSON 저장용)"""
        data: dict[str, Any] = {
            "access_token": self.access_token,
            "token_type": self.token_type,
            "expires_in": self.expires_in,
            "expires_at": self.expires_at.isoformat(),
        }
        if self.scope:
            data["scope"] = self.scope
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TokenInfo:
        """딕셔너리에서 생성 (JSON 로드용)

        Raises:
            ValueError: 필수 필드가 없거나 형식이 잘못된 경우
        """
        if not isinstance(data, dict):
            raise ValueError("token_info 형식이 올바르지 않습니다")
        access_token = data.get("access_token")
        if not access_token:
            raise ValueError("access_token 누락")
        try:
            expires_in = int(data.get("expires_in", 0))
        except (TypeError, ValueError, OverflowError) as e:
            raise ValueError(f"expires_in 형식 오류: {data.get('expires_in')!r}") from e
        return cls(
            access_token=access_token,
            token_type=data.get("token_type", ""),
            expires_in=expires_in,
            expires_at=_parse_timestamp(data.get("expires_at")),
            scope=data.get("scope") or "",
        )

    @classmethod
    def from_response(cls, payload: dict[str, Any], now: datetime) -> TokenInfo:
        """토큰 엔드포인트 성공 응답에서 생성

        Args:
            payload: {access_token, token_type, expires_in, scope?}
            now: 응답 수신 시각 (expires_at 계산 기준)

        Raises:
            ValueError: 응답 형식이 잘못된 경우
        """
        if not isinstance(payload, dict) or not payload.get("access_token"):
            raise ValueError("응답에 access_token이 없습니다")
        try:
            expires_in = int(payload.get("expires_in", 0))
            expires_at = now + timedelta(seconds=expires_in)
        except (TypeError, ValueError, OverflowError) as e:
            # 날짜 범위를 벗어나는 expires_in 포함
            raise ValueError(f"expires_in 형식 오류: {payload.get('expires_in')!r}") from e
        return cls(
            access_token=payload["access_token"],
            token_type=payload.get("token_type", ""),
            expires_in=expires_in,
            expires_at=expires_at,
            scope=payload.get("scope") or "",
        )


# =============================================================================
# Auth Status
# =============================================================================


@dataclass
class AuthStatus:
    """현재 인증 상태

    get_status()가 네트워크 호출 없이 계산합니다.

    Attributes:
        authenticated: 사용 가능한 자격 증명이 있어 보이는지
        method: 선택될 인증 방식
        source: 출처 (없으면 None)
        source_detail: 환경 변수 이름, 설정 파일 경로 등
        expires_at: 저장된 토큰의 만료 시간
        needs_refresh: 다음 resolve 시 토큰 교환이 필요한지
    """

    authenticated: bool = False
    method: AuthMethod = AuthMethod.NONE
    source: CredentialSource | None = None
    source_detail: str | None = None
    expires_at: datetime | None = None
    needs_refresh: bool = False

    def source_label(self) -> str:
        """표시용 출처 문자열 (예: "env:LINEAR_API_KEY", "keychain")"""
        if self.source is None:
            return ""
        if self.source_detail:
            return f"{self.source.value}:{self.source_detail}"
        return self.source.value

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "authenticated": self.authenticated,
            "method": self.method.value,
            "source": self.source_label(),
        }
        if self.expires_at is not None:
            data["expires_at"] = self.expires_at.isoformat()
        if self.needs_refresh:
            data["needs_refresh"] = True
        return data


# =============================================================================
# Error Classes
# =============================================================================


class AuthError(LinearAgentError):
    """인증 관련 기본 에러 클래스

    모든 인증 에러의 부모 클래스입니다.
    원인 예외(cause)를 체이닝하여 디버깅을 용이하게 합니다.
    """

    code = "auth_error"


class NotAuthenticatedError(AuthError):
    """사용 가능한 자격 증명이 어디에도 없을 때 발생하는 에러"""

    code = "not_authenticated"
    remediation = (
        "'linear-agent auth login' 을 실행하거나 LINEAR_API_KEY 환경 변수를 설정하세요 "
        "(키 발급: https://linear.app/settings/api)"
    )

    def __init__(self, message: str = "인증되지 않았습니다", cause: Exception | None = None):
        super().__init__(message, cause)


class TokenExchangeError(AuthError):
    """토큰 엔드포인트와의 교환이 실패했을 때 발생하는 에러

    Attributes:
        status_code: HTTP 상태 코드 (네트워크 오류면 None)
        error_code: 응답의 error 필드 (예: "invalid_client")
    """

    code = "token_exchange_failed"

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        error_code: str | None = None,
        cause: Exception | None = None,
        code: str | None = None,
    ):
        super().__init__(message, cause, code=code)
        self.status_code = status_code
        self.error_code = error_code
        if status_code is not None:
            self.details["status_code"] = status_code
        if error_code:
            self.details["error_code"] = error_code


class ClientCredentialsError(AuthError):
    """환경 변수의 client credentials로 교환이 실패했을 때 발생하는 에러

    환경 변수 설정은 저장소를 덮어쓰겠다는 의도이므로 저장된 자격 증명으로
    대체하지 않고 그대로 실패합니다.
    """

    code = "client_credentials_failed"
    remediation = "LINEAR_CLIENT_ID / LINEAR_CLIENT_SECRET 값을 확인하거나 두 변수를 해제하세요"


class TokenRefreshError(AuthError):
    """저장된 토큰 갱신이 실패했을 때 발생하는 에러"""

    code = "refresh_failed"
    remediation = "'linear-agent auth login --client-credentials' 로 다시 로그인하세요"


class InvalidCredentialsError(AuthError):
    """로그인 시 입력한 자격 증명이 유효하지 않을 때 발생하는 에러"""

    code = "invalid_credentials"
    remediation = "https://linear.app/settings/api 에서 키를 확인한 뒤 'linear-agent auth login' 을 다시 실행하세요"


class SecureStoreError(AuthError):
    """보안 저장소(OS 자격 증명 보관소) 작업이 실패했을 때 발생하는 에러

    Attributes:
        secret_name: 실패한 항목 이름
        operation: 실패한 작업 (set, get, delete)
    """

    code = "secure_store_error"
    remediation = "시스템 키체인이 잠겨 있지 않은지 확인하세요"

    def __init__(
        self,
        secret_name: str,
        operation: str,
        message: str,
        cause: Exception | None = None,
    ):
        full_message = f"[{secret_name}] {operation}: {message}"
        super().__init__(full_message, cause)
        self.secret_name = secret_name
        self.operation = operation
        self.details.update({"secret_name": secret_name, "operation": operation})


class LogoutError(AuthError):
    """로그아웃 중 일부 항목 삭제가 실패했을 때 발생하는 에러

    모든 항목 삭제를 시도한 뒤 실패들을 모아서 한 번에 보고합니다.

    Attributes:
        errors: 항목별 실패 목록
    """

    code = "logout_incomplete"
    remediation = "키체인 잠금을 해제한 뒤 'linear-agent auth logout' 을 다시 실행하세요"

    def __init__(self, errors: list[SecureStoreError]):
        names = ", ".join(e.secret_name for e in errors)
        super().__init__(f"로그아웃이 일부 실패했습니다 ({names})")
        self.errors = errors
        self.details["errors"] = [str(e) for e in errors]
