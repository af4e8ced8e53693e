"""
Fetch outcome types for crimenearby.

A single (tile, month) query against the incident source yields exactly
one of these values. Expected conditions are returned, not raised.
"""

from typing import List, Literal, Union
from pydantic import BaseModel, Field

from .models import IncidentRecord

# 진단용 본문 발췌 최대 길이
EXCERPT_LIMIT = 200

class IncidentBatch(BaseModel):
    """2xx + 파싱 성공 (빈 목록 가능)"""
    kind: Literal["ok"] = "ok"
    records: List[IncidentRecord] = Field(default_factory=list)

class NoDataForMonth(BaseModel):
    """404: 해당 월 데이터가 아직 없음 (정상 상황)"""
    kind: Literal["no_data"] = "no_data"
    month: str

class HttpError(BaseModel):
    """404 이외의 비정상 상태 코드"""
    kind: Literal["http_error"] = "http_error"
    status: int

class MalformedBody(BaseModel):
    """2xx 이지만 레코드 목록으로 해석 불가"""
    kind: Literal["malformed_body"] = "malformed_body"
    excerpt: str = ""

FetchOutcome = Union[IncidentBatch, NoDataForMonth, HttpError, MalformedBody]

def excerpt(body: str, limit: int = EXCERPT_LIMIT) -> str:
    return body[:limit]
