"""
익명 게시글 삭제 비밀번호 인코딩

저장 형식은 평문 UTF-8 바이트의 base64 문자열입니다.
암호학적 해시가 아니므로 삭제 권한 확인 용도로만 사용합니다.
"""

import base64
import hmac


def encode_password(plain):
    """
    비밀번호 인코딩

    Example:
        >>> encode_password("1234")
        'MTIzNA=='
    """
    return base64.b64encode(plain.encode('utf-8')).decode('ascii')


def verify_password(plain, encoded):
    """입력 비밀번호의 인코딩 값이 저장 값과 같은지 확인"""
    if not isinstance(plain, str) or not isinstance(encoded, str):
        return False
    return hmac.compare_digest(
        encode_password(plain).encode('ascii'),
        encoded.encode('utf-8')
    )
