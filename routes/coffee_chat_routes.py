"""
커피챗 라우트

- GET  /api/coffee-chats: 전체 목록 (?country, ?job 필터)
- GET  /api/coffee-chats/<id>: 상세 조회
- POST /api/coffee-chats: 커피챗 생성
- POST /api/coffee-chats/<id>/join: 참여
- GET  /api/coffee-chats/country/<country>: 국가별 목록
- GET  /api/coffee-chats/job/<job>: 직무별 목록
"""

import uuid

from flask import Blueprint, request, current_app
from models import CoffeeChat
from repositories import coffee_chats as chat_repo
from utils.db import get_db_connection, release_connection, rollback_quietly
from utils.api_response import simple_message, server_error, request_payload
from utils.validators import next_status, validate_join

bp = Blueprint('coffee_chats', __name__, url_prefix='/api/coffee-chats')

MSG_CHAT_NOT_FOUND = "커피챗을 찾을 수 없습니다."


def _list_chats(endpoint, country=None, job=None):
    """목록 조회 공통 처리"""
    conn = None
    cursor = None

    try:
        current_app.logger.info(
            f"API Call: {endpoint} | Params: country={country}, job={job}"
        )

        conn = get_db_connection()
        cursor = conn.cursor(dictionary=True)

        rows = chat_repo.find_all(cursor, country=country, job=job)

        return [CoffeeChat.from_row(row).to_dict() for row in rows], 200

    except Exception as e:
        current_app.logger.error(f"커피챗 목록 조회 실패: {str(e)}", exc_info=True)
        return server_error()

    finally:
        release_connection(cursor, conn)


@bp.route('', methods=['GET'])
def list_coffee_chats():
    """
    커피챗 목록 API

    쿼리 파라미터:
    - country: 국가 (대소문자 무시 완전 일치, 선택)
    - job: 직무 (대소문자 무시 부분 일치, 선택)
    """
    country = request.args.get('country') or None
    job = request.args.get('job') or None
    return _list_chats('/api/coffee-chats', country=country, job=job)


@bp.route('/country/<country>', methods=['GET'])
def list_by_country(country):
    """국가별 커피챗 목록 API"""
    return _list_chats('/api/coffee-chats/country', country=country)


@bp.route('/job/<job>', methods=['GET'])
def list_by_job(job):
    """직무별 커피챗 목록 API"""
    return _list_chats('/api/coffee-chats/job', job=job)


@bp.route('/<chat_id>', methods=['GET'])
def get_coffee_chat(chat_id):
    """커피챗 상세 조회 API"""
    conn = None
    cursor = None

    try:
        current_app.logger.info(f"API Call: /api/coffee-chats/{chat_id}")

        conn = get_db_connection()
        cursor = conn.cursor(dictionary=True)

        row = chat_repo.find_by_id(cursor, chat_id)

        if not row:
            current_app.logger.warning(f"커피챗 없음: {chat_id}")
            return simple_message(MSG_CHAT_NOT_FOUND), 404

        return CoffeeChat.from_row(row).to_dict(), 200

    except Exception as e:
        current_app.logger.error(f"커피챗 조회 실패: {str(e)}", exc_info=True)
        return server_error()

    finally:
        release_connection(cursor, conn)


@bp.route('', methods=['POST'])
def create_coffee_chat():
    """
    커피챗 생성 API

    본문: title, host, country, city, job, company, experience,
          date, time, maxParticipants, description, tags

    currentParticipants=0, status=OPEN으로 고정 생성합니다.
    필드 검증은 DB 제약 조건에 맡깁니다.
    """
    conn = None
    cursor = None

    try:
        payload = request_payload(request)

        current_app.logger.info(
            f"API Call: POST /api/coffee-chats | "
            f"Params: title={payload.get('title')}, host={payload.get('host')}, "
            f"max={payload.get('maxParticipants')}"
        )

        chat = CoffeeChat.from_payload(str(uuid.uuid4()), payload)

        conn = get_db_connection()
        cursor = conn.cursor(dictionary=True)

        chat_repo.insert(cursor, chat)
        conn.commit()

        # created_at/updated_at 포함된 저장 결과 조회
        created = chat_repo.find_by_id(cursor, chat.id)

        current_app.logger.info(f"✅ 커피챗 생성 완료 | ID: {chat.id}")

        return CoffeeChat.from_row(created).to_dict(), 201

    except Exception as e:
        rollback_quietly(conn, current_app.logger)
        current_app.logger.error(f"커피챗 생성 실패: {str(e)}", exc_info=True)
        return server_error()

    finally:
        release_connection(cursor, conn)


@bp.route('/<chat_id>/join', methods=['POST'])
def join_coffee_chat(chat_id):
    """
    커피챗 참여 API

    행을 잠근 상태(SELECT ... FOR UPDATE)에서 정원 확인 후 인원을 늘리므로
    동시 요청에도 최대 인원을 넘지 않습니다.

    - 없는 커피챗: 404
    - OPEN이 아닌 커피챗: 400
    - 정원 초과: 400 (OPEN으로 남아 있던 행은 FULL로 보정)
    """
    conn = None
    cursor = None

    try:
        current_app.logger.info(f"API Call: /api/coffee-chats/{chat_id}/join")

        conn = get_db_connection()
        cursor = conn.cursor(dictionary=True)

        row = chat_repo.find_by_id(cursor, chat_id, for_update=True)

        if not row:
            conn.rollback()
            current_app.logger.warning(f"커피챗 없음: {chat_id}")
            return simple_message(MSG_CHAT_NOT_FOUND), 404

        chat = CoffeeChat.from_row(row)

        is_valid, error_message, repaired_status = validate_join(
            chat.status, chat.current_participants, chat.max_participants
        )

        if not is_valid:
            if repaired_status:
                chat_repo.update_status(cursor, chat_id, repaired_status)
                conn.commit()
            else:
                conn.rollback()

            current_app.logger.warning(
                f"참여 거부: Chat={chat_id}, Status={chat.status}, "
                f"Count={chat.current_participants}/{chat.max_participants}"
            )
            return simple_message(error_message), 400

        new_count = chat.current_participants + 1
        new_status = next_status(new_count, chat.max_participants)

        chat_repo.update_participants(cursor, chat_id, new_count, new_status)
        conn.commit()

        updated = chat_repo.find_by_id(cursor, chat_id)

        current_app.logger.info(
            f"참여 완료: Chat={chat_id}, "
            f"Count={new_count}/{chat.max_participants}, Status={new_status}"
        )

        return CoffeeChat.from_row(updated).to_dict(), 200

    except Exception as e:
        rollback_quietly(conn, current_app.logger)
        current_app.logger.error(f"커피챗 참여 실패: {str(e)}", exc_info=True)
        return server_error()

    finally:
        release_connection(cursor, conn)
