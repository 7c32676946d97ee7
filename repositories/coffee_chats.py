"""
커피챗 테이블 쿼리

모든 함수는 호출 측에서 연 dictionary cursor를 받아
파라미터 바인딩된 SQL만 실행합니다. 커밋/롤백은 라우트에서 처리합니다.
"""

import json


COLUMNS = """
    id, title, host, country, city, job, company, experience,
    date, time, description, max_participants, current_participants,
    tags, status, created_at, updated_at
"""


def find_all(cursor, country=None, job=None):
    """
    커피챗 목록 조회 (최신순)

    Args:
        cursor: dictionary cursor
        country (str, optional): 국가 (대소문자 무시 완전 일치)
        job (str, optional): 직무 (대소문자 무시 부분 일치)

    Returns:
        list[dict]: coffee_chats 행 목록
    """
    conditions = []
    params = []

    if country:
        conditions.append("LOWER(country) = LOWER(%s)")
        params.append(country)

    if job:
        conditions.append("LOWER(job) LIKE CONCAT('%%', LOWER(%s), '%%')")
        params.append(escape_like(job))

    sql = f"SELECT {COLUMNS} FROM coffee_chats"
    if conditions:
        sql += " WHERE " + " AND ".join(conditions)
    sql += " ORDER BY created_at DESC"

    cursor.execute(sql, tuple(params))
    return cursor.fetchall()


def find_by_id(cursor, chat_id, for_update=False):
    """
    커피챗 단건 조회

    for_update=True면 트랜잭션 종료 시까지 행을 잠급니다 (참여 처리용).
    """
    sql = f"SELECT {COLUMNS} FROM coffee_chats WHERE id = %s"
    if for_update:
        sql += " FOR UPDATE"

    cursor.execute(sql, (chat_id,))
    return cursor.fetchone()


def insert(cursor, chat):
    """CoffeeChat 모델 INSERT"""
    cursor.execute("""
        INSERT INTO coffee_chats
        (id, title, host, country, city, job, company, experience,
         date, time, description, max_participants, current_participants,
         tags, status)
        VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s)
    """, (
        chat.id,
        chat.title,
        chat.host,
        chat.country,
        chat.city,
        chat.job,
        chat.company,
        chat.experience,
        chat.date,
        chat.time,
        chat.description,
        chat.max_participants,
        chat.current_participants,
        json.dumps(chat.tags, ensure_ascii=False),
        chat.status,
    ))


def update_participants(cursor, chat_id, current_participants, status):
    """참여 인원 / 상태 갱신"""
    cursor.execute("""
        UPDATE coffee_chats
        SET current_participants = %s,
            status = %s
        WHERE id = %s
    """, (current_participants, status, chat_id))
    return cursor.rowcount


def update_status(cursor, chat_id, status):
    """상태만 갱신 (정원이 찼는데 OPEN으로 남아 있는 행 보정)"""
    cursor.execute(
        "UPDATE coffee_chats SET status = %s WHERE id = %s",
        (status, chat_id)
    )
    return cursor.rowcount


def delete_all(cursor):
    """전체 삭제 (시드 스크립트 전용)"""
    cursor.execute("DELETE FROM coffee_chats")
    return cursor.rowcount


def escape_like(value):
    """LIKE 패턴 특수문자(%, _, \\) 이스케이프"""
    return (
        value.replace('\\', '\\\\')
        .replace('%', '\\%')
        .replace('_', '\\_')
    )
