# tests/cli/test_cli_app.py
"""
cli/app.py 단위 테스트

auth / cache 명령어 테스트.
키체인 대신 MemorySecureStore를 사용하는 Resolver를 주입합니다.
"""

import json
from datetime import timedelta
from unittest.mock import patch

import pytest
from click.testing import CliRunner
from conftest import make_token

from linear_agent import __version__
from linear_agent.cli.app import cli
from linear_agent.core.auth import MemorySecureStore, SecureStoreError, TokenExchangeError
from linear_agent.core.auth.store import API_KEY, CLIENT_ID, CLIENT_SECRET
from linear_agent.core.tools.cache import ExpiringCache


class LockedStore(MemorySecureStore):
    """조회가 실패하는 키체인"""

    def get_secret(self, name):
        raise SecureStoreError(name, "get", "keychain locked")


@pytest.fixture
def runner():
    """Click CliRunner"""
    return CliRunner()


@pytest.fixture
def use_resolver(make_resolver):
    """create_resolver()가 테스트용 Resolver를 반환하도록 패치"""

    def _use(environ=None, store=None):
        resolver = make_resolver(environ=environ, store=store)
        patcher = patch("linear_agent.cli.app.create_resolver", return_value=resolver)
        patcher.start()
        return resolver

    yield _use
    patch.stopall()


# =============================================================================
# CLI 그룹 테스트
# =============================================================================


class TestCLI:
    """CLI 그룹 테스트"""

    def test_version_option(self, runner):
        """--version 옵션"""
        result = runner.invoke(cli, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output

    def test_help_option(self, runner):
        """--help 옵션"""
        result = runner.invoke(cli, ["--help"])

        assert result.exit_code == 0
        assert "auth" in result.output
        assert "cache" in result.output

    def test_invalid_lang(self, runner):
        """지원하지 않는 언어"""
        result = runner.invoke(cli, ["--lang", "fr", "auth", "status"])

        assert result.exit_code == 2


# =============================================================================
# auth status 테스트
# =============================================================================


class TestAuthStatus:
    """auth status 명령어 테스트"""

    def test_json_env_key(self, runner, use_resolver):
        """JSON 출력 - 환경 변수 키"""
        use_resolver(environ={"LINEAR_API_KEY": "lin_api_env"})

        result = runner.invoke(cli, ["--json", "auth", "status"])

        assert result.exit_code == 0
        assert json.loads(result.output) == {
            "authenticated": True,
            "method": "api_key",
            "source": "env:LINEAR_API_KEY",
        }

    def test_human_authenticated(self, runner, use_resolver, memory_store, clock):
        """사람용 출력 - 저장된 토큰"""
        memory_store.set_token_info(make_token(clock.now + timedelta(days=3)))
        use_resolver()

        result = runner.invoke(cli, ["--lang", "en", "auth", "status"])

        assert result.exit_code == 0
        assert "Authenticated" in result.output
        assert "client_credentials" in result.output
        assert "keychain" in result.output

    def test_human_not_authenticated(self, runner, use_resolver):
        """미인증 상태도 종료 코드 0"""
        use_resolver()

        result = runner.invoke(cli, ["--lang", "en", "auth", "status"])

        assert result.exit_code == 0
        assert "Not authenticated" in result.output
        assert "LINEAR_API_KEY" in result.output

    def test_store_read_failure_reports_not_authenticated(self, runner, use_resolver):
        """키체인 조회 실패는 미인증으로 보고, 종료 코드 0"""
        use_resolver(store=LockedStore())

        result = runner.invoke(cli, ["--json", "auth", "status"])

        assert result.exit_code == 0
        assert json.loads(result.output)["authenticated"] is False



# =============================================================================
# auth login 테스트
# =============================================================================


class TestAuthLogin:
    """auth login 명령어 테스트"""

    def test_api_key_from_stdin(self, runner, use_resolver, memory_store):
        """stdin에서 API 키 읽기"""
        use_resolver()

        result = runner.invoke(cli, ["--json", "auth", "login", "--stdin"], input="lin_api_piped\n")

        assert result.exit_code == 0
        assert json.loads(result.output) == {"success": True, "method": "api_key", "storage": "keychain"}
        assert memory_store.get_secret(API_KEY) == "lin_api_piped"

    def test_api_key_prompt(self, runner, use_resolver, memory_store):
        """숨김 입력 프롬프트"""
        use_resolver()

        result = runner.invoke(cli, ["--lang", "en", "auth", "login", "--with-token"], input="lin_api_typed\n")

        assert result.exit_code == 0
        assert "Authentication successful" in result.output
        assert "lin_api_typed" not in result.output
        assert memory_store.get_secret(API_KEY) == "lin_api_typed"

    def test_invalid_api_key(self, runner, use_resolver, memory_store):
        """잘못된 키는 해결 방법과 함께 종료 코드 1"""
        use_resolver()

        result = runner.invoke(cli, ["auth", "login", "--stdin"], input="sk_wrong\n")

        assert result.exit_code == 1
        assert "lin_api_" in result.output
        assert "https://linear.app/settings/api" in result.output
        assert len(memory_store) == 0

    def test_invalid_api_key_json(self, runner, use_resolver):
        """JSON 에러 출력"""
        use_resolver()

        result = runner.invoke(cli, ["--json", "auth", "login", "--stdin"], input="\n")

        assert result.exit_code == 1
        error = json.loads(result.output)["error"]
        assert error["code"] == "invalid_credentials"
        assert error["remediation"]

    def test_client_credentials_from_stdin(self, runner, use_resolver, memory_store, refresher):
        """stdin에서 client id/secret 두 줄 읽기"""
        use_resolver()

        result = runner.invoke(
            cli,
            ["--json", "auth", "login", "--client-credentials", "--stdin"],
            input="my-client\nmy-secret\n",
        )

        assert result.exit_code == 0
        output = json.loads(result.output)
        assert output["method"] == "client_credentials"
        assert "expires_at" in output
        refresher.exchange.assert_called_once_with("my-client", "my-secret", timeout=30.0)
        assert memory_store.get_secret(CLIENT_ID) == "my-client"
        assert memory_store.get_secret(CLIENT_SECRET) == "my-secret"

    def test_client_credentials_rejected(self, runner, use_resolver, memory_store, refresher):
        """교환 거부"""
        refresher.exchange.side_effect = TokenExchangeError("invalid_client: bad secret", status_code=401)
        use_resolver()

        result = runner.invoke(
            cli,
            ["--json", "auth", "login", "--client-credentials", "--stdin"],
            input="my-client\nbad\n",
        )

        assert result.exit_code == 1
        error = json.loads(result.output)["error"]
        assert error["code"] == "invalid_credentials"
        assert "invalid_client" in error["message"]
        assert len(memory_store) == 0

    def test_conflicting_flags(self, runner, use_resolver):
        """--with-token 과 --client-credentials 동시 사용 불가"""
        use_resolver()

        result = runner.invoke(cli, ["auth", "login", "--with-token", "--client-credentials"])

        assert result.exit_code == 2


# =============================================================================
# auth logout 테스트
# =============================================================================


class TestAuthLogout:
    """auth logout 명령어 테스트"""

    def test_logout(self, runner, use_resolver, memory_store):
        """키체인 항목 삭제"""
        memory_store.set_secret(API_KEY, "lin_api_x")
        use_resolver()

        result = runner.invoke(cli, ["--lang", "en", "auth", "logout"])

        assert result.exit_code == 0
        assert "Logged out" in result.output
        assert len(memory_store) == 0

    def test_logout_warns_about_env(self, runner, use_resolver):
        """환경 변수가 남아 있으면 안내"""
        use_resolver(environ={"LINEAR_API_KEY": "lin_api_env"})

        result = runner.invoke(cli, ["--json", "auth", "logout"])

        assert result.exit_code == 0
        assert json.loads(result.output)["env_overrides"] == ["LINEAR_API_KEY"]


# =============================================================================
# auth token 테스트
# =============================================================================


class TestAuthToken:
    """auth token 명령어 테스트"""

    def test_prints_token_without_newline(self, runner, use_resolver):
        """개행 없이 토큰만 출력"""
        use_resolver(environ={"LINEAR_API_KEY": "lin_api_env"})

        result = runner.invoke(cli, ["auth", "token"])

        assert result.exit_code == 0
        assert result.output == "lin_api_env"

    def test_json(self, runner, use_resolver):
        """JSON 출력"""
        use_resolver(environ={"LINEAR_API_KEY": "lin_api_env"})

        result = runner.invoke(cli, ["--json", "auth", "token"])

        assert json.loads(result.output) == {
            "token": "lin_api_env",
            "method": "api_key",
            "source": "env",
            "expires_at": None,
        }

    def test_not_authenticated(self, runner, use_resolver):
        """자격 증명이 없으면 종료 코드 1"""
        use_resolver()

        result = runner.invoke(cli, ["--json", "auth", "token"])

        assert result.exit_code == 1
        output = json.loads(result.output)
        assert output["success"] is False
        assert output["error"]["code"] == "not_authenticated"
        assert "linear-agent auth login" in output["error"]["remediation"]


# =============================================================================
# cache clear 테스트
# =============================================================================


class TestCacheClear:
    """cache clear 명령어 테스트"""

    def test_clear_key(self, runner):
        """한 항목 삭제"""
        cache = ExpiringCache()
        cache.write("users-workspace", ["u1"])
        cache.write("labels-team-t1", ["bug"])

        result = runner.invoke(cli, ["--json", "cache", "clear", "users-workspace"])

        assert result.exit_code == 0
        assert json.loads(result.output) == {"success": True, "key": "users-workspace"}
        assert cache.read("users-workspace") is None
        assert cache.read("labels-team-t1") == ["bug"]

    def test_clear_all(self, runner):
        """모든 항목 삭제"""
        cache = ExpiringCache()
        cache.write("a", 1)
        cache.write("b", 2)

        result = runner.invoke(cli, ["--lang", "en", "cache", "clear", "--all"])

        assert result.exit_code == 0
        assert "Removed 2 cache entries" in result.output

    def test_requires_key_or_all(self, runner):
        """키나 --all 이 없으면 사용법 오류"""
        result = runner.invoke(cli, ["cache", "clear"])

        assert result.exit_code == 2

    def test_invalid_key(self, runner):
        """경로 구분자가 있는 키"""
        result = runner.invoke(cli, ["--json", "cache", "clear", "../etc"])

        assert result.exit_code == 1
        assert json.loads(result.output)["error"]["error_type"] == "ValueError"
