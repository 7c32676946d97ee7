"""
로그 로테이션 및 레벨 설정

이 모듈은 Flask 앱의 로깅을 설정하며,
개발/프로덕션 환경에 따라 자동으로 로그 레벨을 전환합니다.
"""

import os
import logging
from logging.handlers import RotatingFileHandler


LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def setup_logging(app):
    """
    Flask 앱 로깅 설정

    Args:
        app (Flask): Flask 앱 객체

    Note:
        - 개발 환경 (DEBUG=True): DEBUG 레벨
        - 그 외: INFO 레벨
        - 로그 로테이션: <LOG_DIR>/error.log, 10MB × 5개 백업
        - 테스트 환경: 파일 핸들러를 붙이지 않음

    Example:
        >>> from flask import Flask
        >>> app = Flask(__name__)
        >>> setup_logging(app)
        >>> app.logger.info("API Call: /api/coffee-chats")  # INFO 레벨 기록
    """
    if app.config.get('DEBUG'):
        log_level = logging.DEBUG
        app.logger.info("🔧 Development mode: DEBUG logging enabled")
    else:
        log_level = logging.INFO
        app.logger.info("🚀 Production mode: INFO logging enabled")

    app.logger.setLevel(log_level)

    if app.config.get('TESTING'):
        return

    # 로그 디렉토리 생성
    log_dir = app.config.get('LOG_DIR', 'logs')
    os.makedirs(log_dir, exist_ok=True)
    log_file = os.path.join(log_dir, 'error.log')

    # 10MB 초과 시 자동으로 error.log.1, error.log.2... 생성
    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=10 * 1024 * 1024,  # 10MB
        backupCount=5,              # 최대 5개 백업 파일
        encoding='utf-8'
    )

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
    file_handler.setFormatter(formatter)
    file_handler.setLevel(log_level)

    app.logger.addHandler(file_handler)

    # 시작 메시지
    app.logger.info('=' * 50)
    app.logger.info('TripChat API Starting')
    app.logger.info(f'Log level: {logging.getLevelName(log_level)}')
    app.logger.info(f'Log file: {log_file}')
    app.logger.info('=' * 50)
