"""
schemas/common.py

- 프로젝트 전반에서 재사용할 공용 스키마 모음
- Pydantic v2 기준
- 포함 내용:
  1) 공용 베이스: CamelModel (JSON 필드는 camelCase, 파이썬 속성은 snake_case)
  2) 에러 응답 표준: ErrorResponse
"""

from __future__ import annotations

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field


# =========================================================
# 1) 공용 베이스
# =========================================================

def to_camel(name: str) -> str:
    """snake_case → camelCase (숫자 뒤 글자는 그대로: swimming25m, running500m1000m)"""
    head, *rest = name.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


class CamelModel(BaseModel):
    """
    모든 요청/응답 스키마의 베이스
    - 응답은 camelCase 로 직렬화 (studentId, periodId ...)
    - 요청은 camelCase / snake_case 모두 허용
    - ORM 객체에서 바로 변환 가능(from_attributes)
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        use_enum_values=True,
    )


# =========================================================
# 2) 에러 응답 표준
# =========================================================

class ErrorResponse(BaseModel):
    """
    전역 에러 핸들러에서 내려주는 표준 에러 응답
    - message: 사람이 읽을 수 있는 메시지
    - errors: 검증 실패 시 필드 단위 상세 (400 전용)
    """
    message: str = Field(..., description="에러 메시지")
    errors: Optional[List[Any]] = Field(default=None, description="필드 단위 검증 오류 목록")

    model_config = ConfigDict(extra="ignore")
