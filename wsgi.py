"""
WSGI 진입점

gunicorn 등 WSGI 서버에서 참조합니다.
    gunicorn wsgi:application

DB 접속 정보, CORS_ORIGINS 등은 환경 변수 또는 .env 파일로 설정합니다.
"""

from app import create_app

application = create_app()
