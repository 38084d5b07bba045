"""
인증 정보 저장소 (Credential Store)
이메일을 키로 사용자 인증 레코드를 보관

주요 기능:
1. 사용자 생성 (이메일 중복 거부)
2. 이메일 / 토큰 subject로 조회
3. Refresh Token 갱신 (토큰 + 만료 시간 동시 기록)

동시성:
- 요청마다 별도 워커에서 호출됨
- 단일 Lock이 개별 연산 동안만 전체 맵을 보호
- bcrypt 해싱 같은 느린 작업은 Lock 밖에서 수행해야 함
"""
import threading
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Dict, Optional

from .models import IdentityRecord


# ============================================================
# 저장소 예외
# ============================================================

class DuplicateEmailError(Exception):
    """이미 등록된 이메일로 생성 시도"""

    def __init__(self, email: str):
        super().__init__(f"Email already registered: {email}")
        self.email = email


class IdentityNotFoundError(Exception):
    """존재하지 않는 이메일에 대한 갱신 시도"""

    def __init__(self, email: str):
        super().__init__(f"No identity for email: {email}")
        self.email = email


# ============================================================
# 저장소 인터페이스
# ============================================================

class CredentialStore(ABC):
    """
    인증 레코드 저장소 추상화

    라우터는 이 인터페이스에만 의존
    → 영속 저장소(PostgreSQL 등)로 교체해도 워크플로우 변경 불필요
    """

    @abstractmethod
    def create(self, email: str, password_hash: str) -> IdentityRecord:
        """새 레코드 생성. 중복 시 DuplicateEmailError"""

    @abstractmethod
    def find_by_email(self, email: str) -> Optional[IdentityRecord]:
        """이메일로 조회. 없으면 None"""

    def find_by_subject(self, subject: str) -> Optional[IdentityRecord]:
        """
        토큰 검증 후 subject(이메일)로 조회

        find_by_email과 의미상 동일
        """
        return self.find_by_email(subject)

    @abstractmethod
    def set_refresh_token(self, email: str, token: str, expires_at: datetime) -> None:
        """Refresh Token과 만료 시간을 한 번에 갱신. 없으면 IdentityNotFoundError"""


# ============================================================
# 인메모리 구현
# ============================================================

class InMemoryCredentialStore(CredentialStore):
    """
    Lock으로 보호되는 dict 기반 저장소

    프로세스 수명 동안만 유지 (재시작 시 초기화)
    """

    def __init__(self) -> None:
        self._records: Dict[str, IdentityRecord] = {}
        self._lock = threading.Lock()

    def create(self, email: str, password_hash: str) -> IdentityRecord:
        with self._lock:
            if email in self._records:
                raise DuplicateEmailError(email)

            # id는 저장소 크기 기준으로 1부터 순차 할당 (삭제가 없으므로 고유)
            record = IdentityRecord(
                id=len(self._records) + 1,
                email=email,
                password_hash=password_hash,
            )
            self._records[email] = record
            return record.model_copy()

    def find_by_email(self, email: str) -> Optional[IdentityRecord]:
        with self._lock:
            record = self._records.get(email)
            return record.model_copy() if record is not None else None

    def set_refresh_token(self, email: str, token: str, expires_at: datetime) -> None:
        with self._lock:
            record = self._records.get(email)
            if record is None:
                raise IdentityNotFoundError(email)

            # 두 필드를 새 레코드로 교체 → 부분 갱신 상태가 외부에 보이지 않음
            self._records[email] = record.model_copy(
                update={
                    "refresh_token": token,
                    "refresh_token_expires_at": expires_at,
                }
            )

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)
