"""
공통 유틸리티 함수들
"""

import os
import json
import logging
import sys
import numpy as np
from typing import Any, Dict, Optional, Union

from utils.constants import AU, LOGGING_PARAMS


def setup_logging(log_level: str = "INFO", log_file: Optional[str] = None) -> logging.Logger:
    """
    로깅 설정

    Args:
        log_level: 로그 레벨 ("DEBUG", "INFO", "WARNING", "ERROR")
        log_file: 로그 파일 경로 (None이면 콘솔만)

    Returns:
        설정된 로거
    """
    logger = logging.getLogger(LOGGING_PARAMS["logger_name"])
    logger.setLevel(getattr(logging, log_level.upper()))

    # 기존 핸들러 제거
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    # 포매터 설정
    formatter = logging.Formatter(LOGGING_PARAMS["format"])

    # 콘솔 핸들러
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    # 파일 핸들러 (선택적)
    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str) -> logging.Logger:
    """패키지 로거 하위의 로거 반환"""
    return logging.getLogger(f"{LOGGING_PARAMS['logger_name']}.{name}")


def save_json(data: Dict[str, Any], filepath: str, indent: int = 2):
    """
    JSON 파일 저장

    Args:
        data: 저장할 데이터
        filepath: 파일 경로
        indent: 들여쓰기 레벨
    """
    dirpath = os.path.dirname(filepath)
    if dirpath:
        os.makedirs(dirpath, exist_ok=True)

    with open(filepath, 'w', encoding='utf-8') as f:
        json.dump(data, f, indent=indent, ensure_ascii=False, default=str)


def load_json(filepath: str) -> Dict[str, Any]:
    """
    JSON 파일 로드

    Args:
        filepath: 파일 경로

    Returns:
        로드된 데이터
    """
    with open(filepath, 'r', encoding='utf-8') as f:
        return json.load(f)


def normalize_angle(angle: float) -> float:
    """
    각도를 [0, 2π) 범위로 정규화

    Args:
        angle: 입력 각도 (라디안)

    Returns:
        정규화된 각도
    """
    wrapped = float(angle % (2 * np.pi))
    # 부동소수점 반올림으로 2π가 나오는 경우
    return 0.0 if wrapped >= 2 * np.pi else wrapped


def clamp(value: Union[float, np.ndarray], min_val: float, max_val: float) -> Union[float, np.ndarray]:
    """
    값을 지정된 범위로 제한

    Args:
        value: 입력 값
        min_val: 최소값
        max_val: 최대값

    Returns:
        제한된 값
    """
    if isinstance(value, np.ndarray):
        return np.clip(value, min_val, max_val)
    return max(min_val, min(max_val, value))


def format_distance(meters: float) -> str:
    """
    거리를 읽기 쉬운 단위로 변환

    Args:
        meters: 거리 (m)

    Returns:
        포맷된 문자열 (km 또는 AU)
    """
    if abs(meters) >= 0.01 * AU:
        return f"{meters / AU:.4f} AU"
    return f"{meters / 1000:,.0f} km"
