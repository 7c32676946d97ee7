"""
샘플 커피챗 데이터 시드

기존 커피챗을 모두 삭제하고 샘플 3건을 등록합니다.

실행 방법:
  python seed.py
"""

import sys
import uuid

from config import config
from models import CoffeeChat, STATUS_OPEN, STATUS_FULL
from repositories import coffee_chats as chat_repo
import utils.db as db_module


SAMPLE_CHATS = [
    {
        'title': '도쿄 IT 업계 취업 성공기',
        'host': '김민수',
        'country': '일본',
        'city': '도쿄',
        'job': '프론트엔드 개발자',
        'company': 'LINE',
        'experience': '3년차',
        'date': '2024-01-15',
        'time': '19:00',
        'max_participants': 8,
        'current_participants': 3,
        'description': '일본 IT 업계에서 취업하기까지의 과정과 현재 생활에 대해 이야기해요. '
                       '일본어 공부법부터 이력서 작성 팁까지!',
        'tags': ['일본', 'IT', '취업', '일본어'],
        'status': STATUS_OPEN,
    },
    {
        'title': '런던 금융권 취업 후기',
        'host': '박지영',
        'country': '영국',
        'city': '런던',
        'job': '데이터 분석가',
        'company': 'Goldman Sachs',
        'experience': '2년차',
        'date': '2024-01-20',
        'time': '20:00',
        'max_participants': 6,
        'current_participants': 6,
        'description': '영국 금융권에서 일하는 것에 대해 궁금한 점들을 자유롭게 물어보세요. '
                       '비자 신청부터 일상생활까지!',
        'tags': ['영국', '금융', '런던', '비자'],
        'status': STATUS_FULL,
    },
    {
        'title': '베를린 스타트업 생태계',
        'host': '이준호',
        'country': '독일',
        'city': '베를린',
        'job': '프로덕트 매니저',
        'company': 'N26',
        'experience': '4년차',
        'date': '2024-01-25',
        'time': '18:30',
        'max_participants': 10,
        'current_participants': 7,
        'description': '독일 스타트업에서 일하는 것의 장단점과 베를린의 멋진 문화에 대해 이야기해요.',
        'tags': ['독일', '스타트업', '베를린', 'PM'],
        'status': STATUS_OPEN,
    },
]


def seed(conn):
    """
    샘플 데이터 등록

    Args:
        conn: DB 연결 (커밋까지 수행)

    Returns:
        int: 등록한 커피챗 수
    """
    cursor = conn.cursor(dictionary=True)

    try:
        deleted = chat_repo.delete_all(cursor)
        print(f"기존 커피챗 {deleted}건 삭제")

        for data in SAMPLE_CHATS:
            chat_repo.insert(cursor, CoffeeChat(id=str(uuid.uuid4()), **data))

        conn.commit()
        return len(SAMPLE_CHATS)
    except Exception:
        conn.rollback()
        raise
    finally:
        cursor.close()


def main():
    """메인 실행 함수"""
    print('데이터베이스 시드 시작...')

    app_config = config['default']
    db_module.connection_pool = db_module.create_connection_pool(
        app_config.database_settings(),
        pool_size=1
    )

    conn = db_module.get_db_connection()
    try:
        count = seed(conn)
    except Exception as e:
        print(f"❌ 시드 실패: {str(e)}")
        return 1
    finally:
        conn.close()

    print(f'데이터베이스 시드 완료! ({count}건)')
    return 0


if __name__ == '__main__':
    sys.exit(main())
