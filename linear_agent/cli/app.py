"""
cli/app.py - 메인 CLI 엔트리포인트

Click 기반의 CLI 애플리케이션 진입점입니다.

명령어 구조:
    linear-agent auth status                # 인증 상태 (네트워크 호출 없음)
    linear-agent auth login                 # API 키 입력 (숨김 입력)
    linear-agent auth login --client-credentials
    linear-agent auth logout                # 키체인의 자격 증명 삭제
    linear-agent auth token                 # 현재 bearer 값 출력 (개행 없음)
    linear-agent cache clear KEY            # 캐시 항목 하나 삭제
    linear-agent cache clear --all          # 모든 캐시 삭제

전역 옵션:
    --json          기계 판독용 JSON 출력 (에이전트용)
    --lang ko|en    메시지 언어
    -v, --verbose   디버그 로그 (stderr)

에러 출력:
    사람용: 메시지 + 해결 방법, 종료 코드 1
    JSON:   {"success": false, "error": {...}}, 종료 코드 1

Usage:
    $ linear-agent --json auth status
    $ echo "$LINEAR_API_KEY" | linear-agent auth login --stdin
    $ curl -H "Authorization: $(linear-agent auth token)" https://api.linear.app/graphql

    # 모듈로 실행
    $ python -m linear_agent
"""

import logging
from typing import NoReturn

import click
from click import Context

from linear_agent import __version__
from linear_agent.cli.i18n import set_lang, t
from linear_agent.cli.ui import (
    get_logger,
    print_error,
    print_field,
    print_info,
    print_json,
    print_sub_info,
    print_success,
    print_warning,
)
from linear_agent.core.auth import DEFAULT_CLIENT_ID, AuthMethod, create_resolver
from linear_agent.core.exceptions import LinearAgentError, format_error_for_user
from linear_agent.core.tools.cache import ExpiringCache

# Keep lightweight, centralized logging config
# WARNING 레벨로 설정하여 INFO 로그가 명령 출력에 섞이지 않도록 함
logging.basicConfig(
    level=logging.WARNING,
    format="%(asctime)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

# 토큰 교환 요청 제한 시간 (초)
REQUEST_TIMEOUT = 30.0


# =============================================================================
# 공통 헬퍼
# =============================================================================


def _json_mode(ctx: Context) -> bool:
    obj = ctx.find_root().obj or {}
    return bool(obj.get("json"))


def _error_dict(error: Exception) -> dict:
    if isinstance(error, LinearAgentError):
        return error.to_dict()
    return {
        "error_type": error.__class__.__name__,
        "code": "error",
        "message": str(error),
        "remediation": None,
    }


def _fail(ctx: Context, error: Exception) -> NoReturn:
    """에러 출력 후 종료 코드 1로 종료"""
    if _json_mode(ctx):
        print_json({"success": False, "error": _error_dict(error)})
    else:
        print_error(format_error_for_user(error))
    ctx.exit(1)


def _read_stdin_lines(count: int) -> list[str]:
    """stdin에서 최대 count줄을 읽어 공백 제거 후 반환 (부족한 줄은 빈 문자열)"""
    stream = click.get_text_stream("stdin")
    return [stream.readline().strip() for _ in range(count)]


# =============================================================================
# 루트 그룹
# =============================================================================


@click.group()
@click.version_option(__version__, prog_name="linear-agent")
@click.option("--json", "as_json", is_flag=True, help="JSON 형식으로 출력 / machine-readable output")
@click.option(
    "--lang",
    type=click.Choice(["ko", "en"]),
    default="ko",
    help="UI 언어 설정 / UI language (ko: 한국어, en: English)",
)
@click.option("-v", "--verbose", is_flag=True, help="디버그 로그 출력 (stderr)")
@click.pass_context
def cli(ctx: Context, as_json: bool, lang: str, verbose: bool) -> None:
    """linear-agent - Linear 이슈 트래커용 에이전트 친화적 CLI"""
    set_lang(lang)

    ctx.ensure_object(dict)
    ctx.obj["lang"] = lang
    ctx.obj["json"] = as_json

    if verbose:
        get_logger("linear_agent", logging.DEBUG)


# =============================================================================
# auth 명령어
# =============================================================================


@cli.group("auth")
def auth_cmd() -> None:
    """인증 관리

    \b
    자격 증명 우선순위:
      1. 환경 변수 LINEAR_API_KEY
      2. 환경 변수 LINEAR_CLIENT_ID + LINEAR_CLIENT_SECRET
      3. 시스템 키체인 (API 키, client credentials 토큰)
      4. 레거시 설정 파일 (.linear.toml)
    """
    pass


@auth_cmd.command("status")
@click.pass_context
def auth_status(ctx: Context) -> None:
    """인증 상태 조회 (네트워크 호출 없음)"""
    try:
        status = create_resolver().get_status()
    except LinearAgentError as e:
        _fail(ctx, e)

    if _json_mode(ctx):
        print_json(status.to_dict())
        return

    if not status.authenticated:
        print_error(t("cli.not_authenticated"))
        print_sub_info(t("cli.login_hint"))
        if status.needs_refresh:
            print_sub_info(t("cli.needs_refresh"))
        return

    print_success(t("cli.authenticated"))
    print_field(t("common.method"), status.method)
    print_field(t("common.source"), status.source_label())
    if status.expires_at is not None:
        print_field(t("common.expires"), status.expires_at.strftime("%Y-%m-%d %H:%M:%S %Z"))
    if status.needs_refresh:
        print_sub_info(t("cli.needs_refresh"))


@auth_cmd.command("login")
@click.option("--with-token", is_flag=True, help="개인 API 키로 로그인")
@click.option("--client-credentials", is_flag=True, help="OAuth client credentials로 로그인 (에이전트/자동화용)")
@click.option(
    "--stdin",
    "from_stdin",
    is_flag=True,
    help="stdin에서 읽기 (API 키 한 줄, 또는 client id/secret 두 줄)",
)
@click.pass_context
def auth_login(ctx: Context, with_token: bool, client_credentials: bool, from_stdin: bool) -> None:
    """Linear 인증

    \b
    Examples:
        linear-agent auth login                          # API 키 입력
        linear-agent auth login --client-credentials     # client credentials 설정
        echo $TOKEN | linear-agent auth login --stdin    # 스크립트용
    """
    if with_token and client_credentials:
        raise click.UsageError(t("cli.login_conflicting_flags"))

    as_json = _json_mode(ctx)
    token_info = None

    try:
        resolver = create_resolver()
        if client_credentials:
            if from_stdin:
                client_id, client_secret = _read_stdin_lines(2)
            else:
                if not as_json:
                    print_info(t("cli.client_credentials_intro"))
                client_id = click.prompt(t("cli.prompt_client_id"), default=DEFAULT_CLIENT_ID)
                client_secret = click.prompt(t("cli.prompt_client_secret"), hide_input=True)
            token_info = resolver.login_with_client_credentials(client_id, client_secret, timeout=REQUEST_TIMEOUT)
            method = AuthMethod.EXCHANGED_TOKEN
        else:
            if from_stdin:
                (api_key,) = _read_stdin_lines(1)
            else:
                if not as_json:
                    print_info(t("cli.api_key_url"))
                api_key = click.prompt(t("cli.prompt_api_key"), hide_input=True)
            resolver.login_with_api_key(api_key)
            method = AuthMethod.STATIC_KEY
    except LinearAgentError as e:
        _fail(ctx, e)

    if as_json:
        result = {"success": True, "method": method.value, "storage": "keychain"}
        if token_info is not None:
            result["expires_at"] = token_info.expires_at.isoformat()
        print_json(result)
        return

    print_success(t("cli.auth_success"))
    print_sub_info(t("cli.stored_in_keychain"))
    if token_info is not None:
        print_sub_info(t("cli.token_expires_at", expires_at=token_info.expires_at.strftime("%Y-%m-%d %H:%M:%S %Z")))


@auth_cmd.command("logout")
@click.pass_context
def auth_logout(ctx: Context) -> None:
    """키체인에 저장된 자격 증명 삭제

    환경 변수는 영향을 받지 않습니다.
    """
    try:
        resolver = create_resolver()
        resolver.logout()
    except LinearAgentError as e:
        _fail(ctx, e)

    remaining = resolver.env_overrides()

    if _json_mode(ctx):
        print_json(
            {
                "success": True,
                "message": "credentials removed from keychain",
                "env_overrides": remaining,
            }
        )
        return

    print_success(t("cli.logged_out"))
    print_sub_info(t("cli.removed_from_keychain"))
    for name in remaining:
        print_warning(t("cli.env_still_set", name=name))


@auth_cmd.command("token")
@click.pass_context
def auth_token(ctx: Context) -> None:
    """현재 액세스 토큰 출력 (개행 없음, 파이프용)

    \b
    Example:
        curl -H "Authorization: $(linear-agent auth token)" https://api.linear.app/graphql
    """
    try:
        credential = create_resolver().resolve(timeout=REQUEST_TIMEOUT)
    except LinearAgentError as e:
        _fail(ctx, e)

    if _json_mode(ctx):
        print_json({"token": credential.token, **credential.to_dict()})
        return

    click.echo(credential.token, nl=False)


# =============================================================================
# cache 명령어
# =============================================================================


@cli.group("cache")
def cache_cmd() -> None:
    """로컬 캐시 관리

    \b
    팀 라벨, 워크플로 상태, 사용자 목록 등을 24시간 동안 캐시합니다.
    위치: $XDG_CACHE_HOME/agent-linear-cli (기본: ~/.cache/agent-linear-cli)
    """
    pass


@cache_cmd.command("clear")
@click.argument("key", required=False)
@click.option("--all", "clear_all", is_flag=True, help="모든 캐시 항목 삭제")
@click.pass_context
def cache_clear(ctx: Context, key: str | None, clear_all: bool) -> None:
    """캐시 항목 삭제"""
    if not key and not clear_all:
        raise click.UsageError(t("cli.cache_key_or_all"))

    cache = ExpiringCache()
    try:
        if clear_all:
            count = cache.clear_all()
        else:
            cache.clear(key)
    except (OSError, ValueError) as e:
        _fail(ctx, e)

    if clear_all:
        if _json_mode(ctx):
            print_json({"success": True, "cleared": count})
        else:
            print_success(t("cli.cache_cleared_all", count=count))
    elif _json_mode(ctx):
        print_json({"success": True, "key": key})
    else:
        print_success(t("cli.cache_cleared", key=key))


def main() -> None:
    """콘솔 스크립트 진입점"""
    cli()


if __name__ == "__main__":
    main()
