#!/usr/bin/env python3
"""
JSON 안전 저장 유틸리티
Numpy/Enum/frozenset 타입 자동 변환으로 JSON 직렬화 오류 방지
"""

import json
from enum import Enum
from pathlib import Path
import numpy as np
import pandas as pd
from typing import Any, Dict, Union
import logging

logger = logging.getLogger(__name__)

def convert_to_python_types(data: Any) -> Any:
    """Numpy/Enum/집합 타입을 재귀적으로 Python 기본 타입으로 변환"""
    if isinstance(data, dict):
        return {key: convert_to_python_types(value) for key, value in data.items()}
    elif isinstance(data, (list, tuple)):
        return [convert_to_python_types(item) for item in data]
    elif isinstance(data, (set, frozenset)):
        return sorted(convert_to_python_types(item) for item in data)
    elif isinstance(data, Enum):
        return data.value
    elif isinstance(data, np.integer):
        return int(data)
    elif isinstance(data, np.floating):
        return float(data)
    elif isinstance(data, np.ndarray):
        return data.tolist()
    elif isinstance(data, (pd.Timestamp, pd.Timedelta)):
        return str(data)
    elif hasattr(data, 'isoformat'):  # datetime objects
        return data.isoformat()
    else:
        return data

def to_json(data: Any, **kwargs) -> str:
    """JSON 문자열 변환"""
    return json.dumps(convert_to_python_types(data), ensure_ascii=False, **kwargs)

def safe_json_dump(data: Dict[str, Any], filepath: Union[str, Path], **kwargs) -> bool:
    """안전한 JSON 저장 (타입 변환 자동 처리)"""
    try:
        safe_data = convert_to_python_types(data)

        with open(filepath, 'w', encoding='utf-8') as f:
            json.dump(safe_data, f, ensure_ascii=False, indent=2, **kwargs)

        logger.info(f"JSON 저장 완료: {filepath}")
        return True

    except (OSError, TypeError, ValueError) as e:
        logger.error(f"JSON 저장 실패 ({filepath}): {e}")
        return False
