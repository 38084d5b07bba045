"""
로깅 설정 모듈
애플리케이션 전체에서 사용하는 로거 포맷/레벨 설정
"""
import logging
import sys
from typing import Union


LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: Union[int, str] = logging.INFO, name: str = "chirpy") -> logging.Logger:
    """
    로거 설정

    Args:
        level: 로그 레벨 (int 또는 "INFO" 같은 문자열)
        name: 설정할 상위 로거 이름

    Returns:
        설정된 로거
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logger = logging.getLogger(name)
    logger.setLevel(level)

    # 중복 핸들러 방지 (create_app이 여러 번 호출될 수 있음)
    if logger.handlers:
        return logger

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(handler)
    return logger


def get_logger(name: str) -> logging.Logger:
    """chirpy 하위 로거 반환 (예: chirpy.auth)"""
    return logging.getLogger(f"chirpy.{name}")
