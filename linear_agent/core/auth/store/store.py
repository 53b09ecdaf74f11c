# core/auth/store/store.py
"""
보안 저장소(SecureStore) 구현

- SecureStore: 이름 있는 secret을 저장/조회/삭제하는 추상 인터페이스
- KeyringSecureStore: OS 자격 증명 보관소 (macOS Keychain, Windows Credential
  Manager, Secret Service) - keyring 라이브러리 사용
- MemorySecureStore: 메모리 기반 (테스트 및 일회성 실행용)
- create_secure_store(): 백엔드 이름으로 구현체를 명시적으로 선택

설계 원칙:
- 저장소는 단순 저장만 담당. 만료 판단은 CredentialResolver가 수행
- 모든 접근은 저장소를 다시 읽음 (프로세스 내 캐시 없음)
- 없는 항목 삭제는 에러가 아님 (로그아웃을 여러 번 호출해도 안전)
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod

import keyring
from keyring.errors import KeyringError, PasswordDeleteError

from linear_agent.core.exceptions import ConfigError

from ..config.loader import SERVICE_NAME
from ..types import SecureStoreError, TokenInfo

logger = logging.getLogger(__name__)

# =============================================================================
# Secret 이름
# =============================================================================

API_KEY = "api_key"
CLIENT_ID = "client_id"
CLIENT_SECRET = "client_secret"
TOKEN_INFO = "token_info"

# 로그아웃 시 삭제 순서
SECRET_NAMES = (API_KEY, TOKEN_INFO, CLIENT_ID, CLIENT_SECRET)


# =============================================================================
# SecureStore Interface
# =============================================================================


class SecureStore(ABC):
    """보안 저장소 추상 기본 클래스

    구현체는 세 가지 기본 연산만 제공하면 되며,
    token_info의 JSON 인코딩은 기본 클래스가 처리합니다.
    """

    @abstractmethod
    def set_secret(self, name: str, value: str) -> None:
        """secret 저장 (기존 값 덮어쓰기)

        Raises:
            SecureStoreError: 저장 실패 시
        """
        pass

    @abstractmethod
    def get_secret(self, name: str) -> str | None:
        """secret 조회

        Returns:
            저장된 값 또는 None (없는 경우)

        Raises:
            SecureStoreError: 조회 실패 시 (없는 경우 제외)
        """
        pass

    @abstractmethod
    def delete_secret(self, name: str) -> None:
        """secret 삭제 (없는 항목이면 아무것도 하지 않음)

        Raises:
            SecureStoreError: 삭제 실패 시
        """
        pass

    def get_token_info(self) -> TokenInfo | None:
        """저장된 토큰 정보 조회

        JSON이 깨졌거나 필드가 누락된 경우 없는 것으로 취급합니다.
        """
        raw = self.get_secret(TOKEN_INFO)
        if not raw:
            return None

        try:
            return TokenInfo.from_dict(json.loads(raw))
        except (json.JSONDecodeError, ValueError) as e:
            logger.debug("저장된 token_info 파싱 실패, 무시: %s", e)
            return None

    def set_token_info(self, token_info: TokenInfo) -> None:
        """토큰 정보 저장"""
        self.set_secret(TOKEN_INFO, json.dumps(token_info.to_dict()))


# =============================================================================
# Keyring 구현
# =============================================================================


class KeyringSecureStore(SecureStore):
    """OS 자격 증명 보관소 기반 저장소

    모든 secret은 service_name 네임스페이스 아래 secret 이름을 username으로
    저장됩니다.
    """

    def __init__(self, service_name: str = SERVICE_NAME):
        self.service_name = service_name

    def set_secret(self, name: str, value: str) -> None:
        try:
            keyring.set_password(self.service_name, name, value)
        except KeyringError as e:
            raise SecureStoreError(name, "set", "키체인 저장 실패", cause=e) from e

    def get_secret(self, name: str) -> str | None:
        try:
            return keyring.get_password(self.service_name, name)
        except KeyringError as e:
            raise SecureStoreError(name, "get", "키체인 조회 실패", cause=e) from e

    def delete_secret(self, name: str) -> None:
        try:
            keyring.delete_password(self.service_name, name)
        except PasswordDeleteError:
            # 없는 항목
            return
        except KeyringError as e:
            raise SecureStoreError(name, "delete", "키체인 삭제 실패", cause=e) from e


# =============================================================================
# Memory 구현
# =============================================================================


class MemorySecureStore(SecureStore):
    """메모리 기반 저장소

    프로세스 종료 시 내용이 사라집니다.
    """

    def __init__(self, initial: dict[str, str] | None = None):
        self._secrets: dict[str, str] = dict(initial or {})

    def set_secret(self, name: str, value: str) -> None:
        self._secrets[name] = value

    def get_secret(self, name: str) -> str | None:
        return self._secrets.get(name)

    def delete_secret(self, name: str) -> None:
        self._secrets.pop(name, None)

    def __contains__(self, name: str) -> bool:
        return name in self._secrets

    def __len__(self) -> int:
        return len(self._secrets)


# =============================================================================
# Factory
# =============================================================================

_BACKENDS = {
    "keyring": KeyringSecureStore,
    "memory": MemorySecureStore,
}


def create_secure_store(backend: str = "keyring", service_name: str = SERVICE_NAME) -> SecureStore:
    """백엔드 이름으로 저장소 생성

    프로세스 시작 시 한 번 호출하여 Resolver에 주입합니다.

    Args:
        backend: "keyring" 또는 "memory"
        service_name: keyring 네임스페이스

    Raises:
        ConfigError: 알 수 없는 백엔드인 경우
    """
    if backend not in _BACKENDS:
        raise ConfigError(
            "secure_store",
            f"알 수 없는 저장소 백엔드: {backend} (가능: {', '.join(_BACKENDS)})",
        )

    if backend == "keyring":
        return KeyringSecureStore(service_name)
    return MemorySecureStore()
