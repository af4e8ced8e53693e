"""
Normalization functions for crimenearby.

This module contains pure functions for converting raw police API
payload entries into internal domain models. Malformed fields are
repaired with fixed fallbacks instead of rejecting the entry.
"""

import uuid
from typing import Any, Dict, List
from .models import IncidentRecord, IncidentLocation, Street

UNKNOWN_CATEGORY = "unknown"
UNKNOWN_MONTH = "----"

def _incident_id(raw: Dict[str, Any]) -> str:
    # 문자열 id → 정수 id → persistent_id → UUID 순
    rid = raw.get("id")
    if isinstance(rid, str) and rid:
        return rid
    if isinstance(rid, int) and not isinstance(rid, bool):
        return str(rid)
    pid = raw.get("persistent_id")
    if isinstance(pid, str) and pid:
        return pid
    return str(uuid.uuid4())

def _street(raw: Any) -> Street | None:
    if not isinstance(raw, dict):
        return None
    sid = raw.get("id")
    name = raw.get("name")
    return Street(
        id=sid if isinstance(sid, int) and not isinstance(sid, bool) else None,
        name=name if isinstance(name, str) else None,
    )

def _location(raw: Any) -> IncidentLocation:
    if isinstance(raw, dict):
        lat = raw.get("latitude")
        lon = raw.get("longitude")
        if isinstance(lat, str) and isinstance(lon, str):
            return IncidentLocation(latitude=lat, longitude=lon, street=_street(raw.get("street")))
    return IncidentLocation(latitude="0", longitude="0", street=None)

def to_incident(raw: Dict[str, Any]) -> IncidentRecord:
    category = raw.get("category")
    month = raw.get("month")
    return IncidentRecord(
        id=_incident_id(raw),
        category=category if isinstance(category, str) else UNKNOWN_CATEGORY,
        month=month if isinstance(month, str) else UNKNOWN_MONTH,
        location=_location(raw.get("location")),
    )

def to_incidents(payload: Any) -> List[IncidentRecord]:
    """
    응답 본문(JSON 디코딩 결과)을 레코드 목록으로 변환합니다.
    
    Args:
        payload: json.loads 결과
        
    Returns:
        IncidentRecord 목록
        
    Raises:
        ValueError: 배열이 아니거나 객체가 아닌 항목이 있는 경우
    """
    if not isinstance(payload, list):
        raise ValueError(f"레코드 배열이 아님: {type(payload).__name__}")
    records = []
    for i, entry in enumerate(payload):
        if not isinstance(entry, dict):
            raise ValueError(f"{i}번째 항목이 객체가 아님: {type(entry).__name__}")
        records.append(to_incident(entry))
    return records
