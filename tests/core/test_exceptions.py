# tests/core/test_exceptions.py
"""
core/exceptions.py 단위 테스트

예외 계층, 직렬화, 사용자 메시지 포맷팅 테스트.
"""

import pytest

from linear_agent.core.auth import (
    AuthError,
    ClientCredentialsError,
    NotAuthenticatedError,
    SecureStoreError,
    TokenExchangeError,
)
from linear_agent.core.exceptions import (
    ConfigError,
    LinearAgentError,
    format_error_for_user,
)

# =============================================================================
# LinearAgentError 테스트
# =============================================================================


class TestLinearAgentError:
    """베이스 예외 테스트"""

    def test_message_only(self):
        """메시지만 있는 경우"""
        error = LinearAgentError("문제 발생")

        assert str(error) == "문제 발생"
        assert error.code == "error"
        assert error.remediation is None
        assert error.details == {}

    def test_cause_chaining(self):
        """원인 예외가 문자열에 포함됨"""
        error = LinearAgentError("요청 실패", cause=ValueError("bad value"))

        assert str(error) == "요청 실패: bad value"

    def test_code_and_remediation_override(self):
        """인스턴스별 code/remediation 지정"""
        error = LinearAgentError("x", code="custom", remediation="다시 시도하세요")

        assert error.code == "custom"
        assert error.remediation == "다시 시도하세요"
        # 클래스 기본값은 바뀌지 않음
        assert LinearAgentError.code == "error"

    def test_to_dict(self):
        """기계 판독용 딕셔너리"""
        error = LinearAgentError("실패", cause=RuntimeError("boom"), details={"k": "v"})
        data = error.to_dict()

        assert data == {
            "error_type": "LinearAgentError",
            "code": "error",
            "message": "실패: boom",
            "remediation": None,
            "cause": "boom",
            "details": {"k": "v"},
        }

    def test_details_not_shared(self):
        """details 기본값이 인스턴스 간에 공유되지 않음"""
        first = LinearAgentError("a")
        second = LinearAgentError("b")
        first.details["x"] = 1

        assert second.details == {}


# =============================================================================
# 하위 예외 테스트
# =============================================================================


class TestSubclasses:
    """설정/인증 예외 테스트"""

    def test_config_error(self):
        """ConfigError 메시지와 details"""
        error = ConfigError("secure_store", "알 수 없는 백엔드")

        assert "설정 오류 [secure_store]" in str(error)
        assert error.code == "config_error"
        assert error.details["config_key"] == "secure_store"

    @pytest.mark.parametrize(
        "error,code",
        [
            (NotAuthenticatedError(), "not_authenticated"),
            (ClientCredentialsError("x"), "client_credentials_failed"),
            (TokenExchangeError("x"), "token_exchange_failed"),
            (TokenExchangeError("x", code="timeout"), "timeout"),
            (SecureStoreError("api_key", "get", "locked"), "secure_store_error"),
        ],
    )
    def test_auth_error_codes(self, error, code):
        """인증 예외 분류 코드"""
        assert isinstance(error, AuthError)
        assert isinstance(error, LinearAgentError)
        assert error.code == code


# =============================================================================
# format_error_for_user 테스트
# =============================================================================


class TestFormatErrorForUser:
    """사용자 메시지 포맷팅 테스트"""

    def test_with_remediation(self):
        """해결 방법이 다음 줄에 붙음"""
        message = format_error_for_user(NotAuthenticatedError())

        first, second = message.split("\n")
        assert first == "인증되지 않았습니다"
        assert "linear-agent auth login" in second
        assert "https://linear.app/settings/api" in second

    def test_without_remediation(self):
        """해결 방법이 없으면 메시지만"""
        assert format_error_for_user(LinearAgentError("실패")) == "실패"

    def test_plain_exception(self):
        """일반 예외"""
        assert format_error_for_user(OSError("disk full")) == "disk full"
        assert format_error_for_user(KeyError()) == "KeyError"
