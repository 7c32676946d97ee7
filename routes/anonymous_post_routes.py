"""
익명 게시판 라우트

- GET    /api/anonymous-posts: 목록 (?category, ?page, ?limit)
- GET    /api/anonymous-posts/<id>: 상세 조회 (조회수 증가)
- POST   /api/anonymous-posts: 게시글 작성
- DELETE /api/anonymous-posts/<id>: 게시글 삭제 (비밀번호 확인)
"""

import uuid

from flask import Blueprint, request, current_app
from models import AnonymousPost, DEFAULT_CATEGORY
from repositories import anonymous_posts as post_repo
from utils.db import get_db_connection, release_connection, rollback_quietly
from utils.api_response import simple_message, server_error, request_payload
from utils.password import encode_password, verify_password
from utils.validators import (
    validate_required_fields,
    parse_pagination,
    total_pages
)

bp = Blueprint('anonymous_posts', __name__, url_prefix='/api/anonymous-posts')

REQUIRED_FIELDS = ('title', 'content', 'nickname', 'password')

MSG_POST_NOT_FOUND = "게시글을 찾을 수 없습니다."
MSG_PASSWORD_REQUIRED = "비밀번호를 입력해주세요."
MSG_PASSWORD_MISMATCH = "비밀번호가 일치하지 않습니다."
MSG_POST_DELETED = "게시글이 삭제되었습니다."


@bp.route('', methods=['GET'])
def list_posts():
    """
    익명 게시글 목록 API

    쿼리 파라미터:
    - category: 카테고리 (선택, 완전 일치)
    - page: 페이지 번호 (기본 1)
    - limit: 페이지당 개수 (기본 20, 최대 100)

    응답: {posts, total, page, totalPages}
    """
    conn = None
    cursor = None

    try:
        category = request.args.get('category') or None
        page, limit = parse_pagination(
            request.args.get('page'),
            request.args.get('limit')
        )

        current_app.logger.info(
            f"API Call: /api/anonymous-posts | "
            f"Params: category={category}, page={page}, limit={limit}"
        )

        conn = get_db_connection()
        cursor = conn.cursor(dictionary=True)

        rows = post_repo.find_page(
            cursor,
            category=category,
            offset=(page - 1) * limit,
            limit=limit
        )
        total = post_repo.count(cursor, category=category)

        return {
            "posts": [AnonymousPost.from_row(row).to_summary_dict() for row in rows],
            "total": total,
            "page": page,
            "totalPages": total_pages(total, limit)
        }, 200

    except Exception as e:
        current_app.logger.error(f"익명 게시글 목록 조회 실패: {str(e)}", exc_info=True)
        return server_error()

    finally:
        release_connection(cursor, conn)


@bp.route('/<post_id>', methods=['GET'])
def get_post(post_id):
    """
    익명 게시글 상세 조회 API

    호출할 때마다 조회수를 1 증가시키고, 증가된 값을 포함해 응답합니다.
    비밀번호는 응답에서 제외합니다.
    """
    conn = None
    cursor = None

    try:
        current_app.logger.info(f"API Call: /api/anonymous-posts/{post_id}")

        conn = get_db_connection()
        cursor = conn.cursor(dictionary=True)

        updated = post_repo.increment_view_count(cursor, post_id)

        if not updated:
            conn.rollback()
            current_app.logger.warning(f"게시글 없음: {post_id}")
            return simple_message(MSG_POST_NOT_FOUND), 404

        conn.commit()

        row = post_repo.find_by_id(cursor, post_id)

        # 커밋과 재조회 사이에 삭제된 경우
        if not row:
            return simple_message(MSG_POST_NOT_FOUND), 404

        return AnonymousPost.from_row(row).to_dict(), 200

    except Exception as e:
        rollback_quietly(conn, current_app.logger)
        current_app.logger.error(f"익명 게시글 조회 실패: {str(e)}", exc_info=True)
        return server_error()

    finally:
        release_connection(cursor, conn)


@bp.route('', methods=['POST'])
def create_post():
    """
    익명 게시글 작성 API

    본문:
    - title, content, nickname, password (필수)
    - category (선택, 기본 '일반')
    """
    conn = None
    cursor = None

    try:
        payload = request_payload(request)

        # 비밀번호는 로그에 남기지 않음
        current_app.logger.info(
            f"API Call: POST /api/anonymous-posts | "
            f"Params: title={payload.get('title')}, nickname={payload.get('nickname')}, "
            f"category={payload.get('category')}"
        )

        is_valid, error_message = validate_required_fields(payload, REQUIRED_FIELDS)
        if not is_valid:
            current_app.logger.warning("게시글 작성 파라미터 누락")
            return simple_message(error_message), 400

        category = payload.get('category')
        if not isinstance(category, str) or not category.strip():
            category = DEFAULT_CATEGORY

        post = AnonymousPost(
            id=str(uuid.uuid4()),
            title=payload['title'],
            content=payload['content'],
            nickname=payload['nickname'],
            category=category,
            password=encode_password(payload['password'])
        )

        conn = get_db_connection()
        cursor = conn.cursor(dictionary=True)

        post_repo.insert(cursor, post)
        conn.commit()

        created = post_repo.find_by_id(cursor, post.id)

        current_app.logger.info(f"✅ 게시글 작성 완료 | ID: {post.id}")

        return AnonymousPost.from_row(created).to_dict(), 201

    except Exception as e:
        rollback_quietly(conn, current_app.logger)
        current_app.logger.error(f"익명 게시글 작성 실패: {str(e)}", exc_info=True)
        return server_error()

    finally:
        release_connection(cursor, conn)


@bp.route('/<post_id>', methods=['DELETE'])
def delete_post(post_id):
    """
    익명 게시글 삭제 API

    본문: {"password": "..."}

    - 비밀번호 누락: 400
    - 없는 게시글: 404
    - 비밀번호 불일치: 401
    """
    conn = None
    cursor = None

    try:
        payload = request_payload(request)
        password = payload.get('password')

        current_app.logger.info(f"API Call: DELETE /api/anonymous-posts/{post_id}")

        if not isinstance(password, str) or not password:
            return simple_message(MSG_PASSWORD_REQUIRED), 400

        conn = get_db_connection()
        cursor = conn.cursor(dictionary=True)

        row = post_repo.find_by_id(cursor, post_id)

        if not row:
            current_app.logger.warning(f"게시글 없음: {post_id}")
            return simple_message(MSG_POST_NOT_FOUND), 404

        if not verify_password(password, row['password']):
            current_app.logger.warning(f"비밀번호 불일치: Post={post_id}")
            return simple_message(MSG_PASSWORD_MISMATCH), 401

        post_repo.delete(cursor, post_id)
        conn.commit()

        current_app.logger.info(f"✅ 게시글 삭제 완료 | ID: {post_id}")

        return simple_message(MSG_POST_DELETED), 200

    except Exception as e:
        rollback_quietly(conn, current_app.logger)
        current_app.logger.error(f"익명 게시글 삭제 실패: {str(e)}", exc_info=True)
        return server_error()

    finally:
        release_connection(cursor, conn)
