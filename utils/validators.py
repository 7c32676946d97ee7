"""
데이터 검증 로직

이 모듈은 커피챗 참여 가능 여부, 게시글 필수 입력값,
페이지네이션 파라미터 등 비즈니스 로직 검증을 수행합니다.
"""

import math

from models import STATUS_OPEN, STATUS_FULL


DEFAULT_PAGE = 1
DEFAULT_LIMIT = 20
MAX_LIMIT = 100

MSG_CHAT_NOT_JOINABLE = "참여할 수 없는 커피챗입니다."
MSG_CHAT_FULL = "참여 인원이 가득 찼습니다."
MSG_MISSING_FIELDS = "필수 필드가 누락되었습니다."


def next_status(current_participants, max_participants):
    """
    참여 인원에 따른 상태 계산

    Example:
        >>> next_status(8, 8)
        'FULL'
        >>> next_status(7, 8)
        'OPEN'
    """
    if current_participants >= max_participants:
        return STATUS_FULL
    return STATUS_OPEN


def validate_join(status, current_participants, max_participants):
    """
    커피챗 참여 가능 여부 검증

    Args:
        status (str): 현재 상태
        current_participants (int): 현재 참여 인원
        max_participants (int): 최대 참여 인원

    Returns:
        tuple: (is_valid: bool, error_message: str or None, repaired_status: str or None)
            repaired_status는 OPEN 상태인데 이미 정원이 찬 경우 'FULL'

    Example:
        >>> validate_join('OPEN', 3, 8)
        (True, None, None)

        >>> validate_join('FULL', 6, 6)
        (False, '참여할 수 없는 커피챗입니다.', None)

        >>> validate_join('OPEN', 6, 6)
        (False, '참여 인원이 가득 찼습니다.', 'FULL')
    """
    if status != STATUS_OPEN:
        return (False, MSG_CHAT_NOT_JOINABLE, None)

    if current_participants >= max_participants:
        return (False, MSG_CHAT_FULL, STATUS_FULL)

    return (True, None, None)


def validate_required_fields(payload, fields):
    """
    필수 입력값 검증 (None, 빈 문자열, 문자열이 아닌 값은 누락으로 처리)

    Args:
        payload (dict): 요청 본문
        fields (iterable): 필수 필드 이름

    Returns:
        tuple: (is_valid: bool, error_message: str or None)

    Example:
        >>> validate_required_fields({'title': '제목'}, ['title', 'content'])
        (False, '필수 필드가 누락되었습니다.')
    """
    for field in fields:
        value = payload.get(field)
        if not isinstance(value, str) or not value:
            return (False, MSG_MISSING_FIELDS)

    return (True, None)


def _positive_int(value, default):
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return number if number > 0 else default


def parse_pagination(page, limit):
    """
    page / limit 쿼리 파라미터 정규화

    숫자가 아니거나 1보다 작은 값은 기본값(page=1, limit=20)으로,
    limit은 최대 100으로 제한합니다.

    Example:
        >>> parse_pagination('2', '10')
        (2, 10)
        >>> parse_pagination('abc', '500')
        (1, 100)
    """
    page_num = _positive_int(page, DEFAULT_PAGE)
    limit_num = min(_positive_int(limit, DEFAULT_LIMIT), MAX_LIMIT)
    return (page_num, limit_num)


def total_pages(total, limit):
    """
    전체 페이지 수 (올림)

    Example:
        >>> total_pages(45, 20)
        3
        >>> total_pages(0, 20)
        0
    """
    return math.ceil(total / limit)
