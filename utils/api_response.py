"""
REST API 응답 템플릿 함수

에러/안내 메시지 응답의 반복되는 JSON 구조를
템플릿 함수로 추상화합니다.
"""

MSG_SERVER_ERROR = "서버 오류가 발생했습니다."


def simple_message(text):
    """
    메시지 응답 생성

    Args:
        text (str): 클라이언트에 그대로 표시할 메시지

    Returns:
        dict: {"message": text}

    Example:
        >>> simple_message("게시글이 삭제되었습니다.")
        {'message': '게시글이 삭제되었습니다.'}
    """
    return {"message": text}


def server_error():
    """500 응답 (본문, 상태 코드)"""
    return simple_message(MSG_SERVER_ERROR), 500


def request_payload(request):
    """
    JSON 요청 본문 추출

    본문이 없거나 JSON 객체가 아니면 빈 dict를 반환합니다.
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        return {}
    return data
