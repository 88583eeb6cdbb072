# src/clip_aggregator/models.py
from pydantic import BaseModel, ConfigDict, Field
from typing import FrozenSet, List, Optional


class ExclusionRules(BaseModel):
    """디렉토리 순회 중 건너뛸 항목 이름과 확장자 목록 (읽기 전용)"""
    names: FrozenSet[str]        # 정확히 일치하는 이름 (.git, node_modules ...)
    extensions: FrozenSet[str]   # 대소문자 구분, 접미사 일치 (.class, .xml ...)

    model_config = ConfigDict(extra='forbid', frozen=True)


class ClipboardCommand(BaseModel):
    """플랫폼별 클립보드 명령어"""
    platform: str
    argv: List[str] = Field(min_length=1)

    model_config = ConfigDict(extra='forbid', frozen=True)


class ClipboardResult(BaseModel):
    """클립보드 전송 결과. 실패 시 error 에 진단 메시지가 담김"""
    ok: bool
    command: List[str]
    error: Optional[str] = None

    model_config = ConfigDict(extra='forbid')
