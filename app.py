"""
Flask 메인 애플리케이션

트립챗(해외 취업 커피챗 커뮤니티) REST API 서버입니다.
"""

from flask import Flask
from flask_cors import CORS
from werkzeug.exceptions import HTTPException
from config import config
from utils.db import create_connection_pool
from utils.logging_setup import setup_logging
from utils.api_response import simple_message, server_error
import utils.db as db_module
import os


def create_app(config_name=None):
    """
    Flask 앱 팩토리

    Args:
        config_name (str): 설정 이름 ('development', 'production', 'testing')

    Returns:
        Flask: 설정된 Flask 앱 객체
    """
    app = Flask(__name__)

    # 환경 설정 로드
    if config_name is None:
        config_name = os.environ.get('FLASK_ENV', 'production')

    app_config = config.get(config_name, config['default'])

    # 설정 적용
    app.config.from_object(app_config)
    app_config.init_app(app)

    # 로깅 설정
    setup_logging(app)

    # CORS (허용 origin 목록)
    CORS(app, resources={r"/api/*": {"origins": app.config['CORS_ORIGINS']}})

    # Connection Pool 초기화 (테스트는 가짜 연결 사용)
    if not app.config['TESTING']:
        try:
            db_module.connection_pool = create_connection_pool(
                app_config.database_settings(),
                pool_size=app.config['DB_POOL_SIZE']
            )
            app.logger.info("✅ MySQL Connection Pool initialized")
        except Exception as e:
            app.logger.error(f"❌ Failed to initialize Connection Pool: {e}")
            raise

    # 라우트 등록
    from routes import coffee_chat_routes, anonymous_post_routes, web_routes

    app.register_blueprint(coffee_chat_routes.bp)
    app.register_blueprint(anonymous_post_routes.bp)
    app.register_blueprint(web_routes.bp)

    app.logger.info("✅ All routes registered")

    # 헬스 체크 엔드포인트
    @app.route('/health')
    def health_check():
        """서버 상태 확인"""
        return {
            "status": "healthy",
            "service": "tripchat-api",
            "version": "1.0.0"
        }, 200

    # 에러 핸들러
    @app.errorhandler(HTTPException)
    def handle_http_error(e):
        """404(없는 경로), 405 등 Flask 기본 에러를 JSON 메시지로 변환"""
        return simple_message(e.description), e.code

    @app.errorhandler(Exception)
    def handle_error(e):
        """
        전역 에러 핸들러

        라우트 밖에서 발생한 예외를 로그에 기록하고
        사용자에게는 통일된 에러 메시지를 반환합니다.
        """
        app.logger.error(f"Unhandled exception: {str(e)}", exc_info=True)
        return server_error()

    return app


if __name__ == '__main__':
    # 로컬 개발 서버 실행 (개발 전용)
    # 프로덕션에서는 WSGI 서버 사용
    app = create_app()
    app.run(host=app.config['HOST'], port=app.config['PORT'], debug=app.config['DEBUG'])
