"""
웹페이지 라우트

- 커피챗 현황 (색상 코딩)
"""

from flask import Blueprint, render_template, current_app
from models import CoffeeChat, STATUS_FULL, STATUS_COMPLETED
from repositories import coffee_chats as chat_repo
from utils.db import get_db_connection, release_connection

bp = Blueprint('web', __name__, url_prefix='/web')


def status_class(chat):
    """
    현황표 색상 클래스 결정

    - 종료 (COMPLETED): 회색
    - 마감 (FULL 또는 정원 도달): 빨강
    - 모집중: 초록
    """
    if chat.status == STATUS_COMPLETED:
        return 'completed'
    if chat.status == STATUS_FULL or chat.current_participants >= chat.max_participants:
        return 'full'
    return 'available'


@bp.route('/coffee-chats')
def coffee_chats_page():
    """
    커피챗 현황 웹페이지

    Returns:
        HTML: 커피챗 테이블 (최신순)
    """
    conn = None
    cursor = None

    try:
        conn = get_db_connection()
        cursor = conn.cursor(dictionary=True)

        rows = chat_repo.find_all(cursor)

        chat_list = []
        for row in rows:
            chat = CoffeeChat.from_row(row)
            chat_list.append({
                'chat': chat,
                'status_class': status_class(chat),
            })

        return render_template('coffee_chats.html', chats=chat_list)

    except Exception as e:
        current_app.logger.error(f"Coffee chat page error: {str(e)}", exc_info=True)
        return "<h1>서버 에러</h1><p>잠시 후 다시 시도해주세요.</p>", 500

    finally:
        release_connection(cursor, conn)
