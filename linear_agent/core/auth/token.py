# core/auth/token.py
"""
client credentials 토큰 교환 (TokenRefresher)

저장된 장기 자격 증명(client id + client secret)을 토큰 엔드포인트에 제시하여
단기 액세스 토큰을 받아옵니다. 한 번의 네트워크 왕복만 수행하며 재시도하지 않습니다.

Wire 형식:
    POST {token_endpoint}
    Content-Type: application/x-www-form-urlencoded

    grant_type=client_credentials&client_id=...&client_secret=...

    성공: {"access_token", "token_type", "expires_in", "scope"?}
    실패: {"error", "error_description"?}

Note:
    토큰 저장은 이 모듈의 책임이 아닙니다. 저장 여부는 CredentialResolver가
    자격 증명 출처에 따라 결정합니다.
"""

from __future__ import annotations

import contextlib
import logging
from collections.abc import Callable
from datetime import datetime, timezone

import requests

from .config.loader import TOKEN_ENDPOINT
from .types import TokenExchangeError, TokenInfo

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TokenRefresher:
    """client credentials grant로 액세스 토큰을 교환

    Args:
        token_endpoint: 토큰 엔드포인트 URL
        session: requests.Session (None이면 requests 모듈 함수 사용)
        clock: 현재 시각 함수 (UTC, 테스트 주입용)
    """

    def __init__(
        self,
        token_endpoint: str = TOKEN_ENDPOINT,
        session: requests.Session | None = None,
        clock: Callable[[], datetime] | None = None,
    ):
        self.token_endpoint = token_endpoint
        self._session = session
        self._clock = clock or _utcnow

    def exchange(
        self,
        client_id: str,
        client_secret: str,
        timeout: float | None = None,
    ) -> TokenInfo:
        """client credentials를 액세스 토큰으로 교환

        Args:
            client_id: OAuth client id
            client_secret: OAuth client secret
            timeout: 호출자가 지정한 제한 시간 (초). None이면 제한 없음

        Returns:
            TokenInfo (expires_at = 수신 시각 + expires_in)

        Raises:
            TokenExchangeError: 네트워크 오류, 타임아웃, 비정상 응답
        """
        http = self._session or requests
        form = {
            "grant_type": "client_credentials",
            "client_id": client_id,
            "client_secret": client_secret,
        }

        logger.debug("토큰 교환 요청: %s (client_id=%s)", self.token_endpoint, client_id)

        try:
            response = http.post(
                self.token_endpoint,
                data=form,
                headers={"Content-Type": "application/x-www-form-urlencoded"},
                timeout=timeout,
            )
        except requests.Timeout as e:
            raise TokenExchangeError("토큰 요청 시간이 초과되었습니다", cause=e, code="timeout") from e
        except requests.RequestException as e:
            raise TokenExchangeError("토큰 요청을 보낼 수 없습니다", cause=e, code="network_error") from e

        if not 200 <= response.status_code < 300:
            raise self._error_from_response(response)

        try:
            payload = response.json()
        except ValueError as e:
            raise TokenExchangeError(
                "토큰 응답을 해석할 수 없습니다",
                status_code=response.status_code,
                cause=e,
                code="invalid_response",
            ) from e

        try:
            token_info = TokenInfo.from_response(payload, self._clock())
        except ValueError as e:
            raise TokenExchangeError(
                "토큰 응답 형식이 올바르지 않습니다",
                status_code=response.status_code,
                cause=e,
                code="invalid_response",
            ) from e

        logger.debug("토큰 교환 성공 (expires_in=%s)", token_info.expires_in)
        return token_info

    @staticmethod
    def _error_from_response(response: requests.Response) -> TokenExchangeError:
        """비정상 응답을 TokenExchangeError로 변환

        구조화된 에러 본문이 있으면 원격 메시지를 그대로 사용하고,
        없으면 상태 코드 기반의 일반 메시지를 사용합니다.
        """
        error_code = None
        description = None
        with contextlib.suppress(ValueError):
            body = response.json()
            if isinstance(body, dict):
                error_code = body.get("error") or None
                description = body.get("error_description") or None

        if error_code and description:
            message = f"{error_code}: {description}"
        elif error_code:
            message = str(error_code)
        else:
            message = f"token request failed with status {response.status_code}"

        return TokenExchangeError(message, status_code=response.status_code, error_code=error_code)
