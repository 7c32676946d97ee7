"""
익명 게시글 테이블 쿼리

커밋/롤백은 라우트에서 처리합니다.
"""


SUMMARY_COLUMNS = "id, title, nickname, category, view_count, created_at, updated_at"
DETAIL_COLUMNS = (
    "id, title, content, nickname, category, password, "
    "view_count, created_at, updated_at"
)


def find_page(cursor, category=None, offset=0, limit=20):
    """
    게시글 목록 한 페이지 조회 (최신순, 본문/비밀번호 제외)

    Returns:
        list[dict]: anonymous_posts 요약 행 목록
    """
    sql = f"SELECT {SUMMARY_COLUMNS} FROM anonymous_posts"
    params = []

    if category:
        sql += " WHERE category = %s"
        params.append(category)

    sql += " ORDER BY created_at DESC LIMIT %s OFFSET %s"
    params.extend([limit, offset])

    cursor.execute(sql, tuple(params))
    return cursor.fetchall()


def count(cursor, category=None):
    """게시글 수 (카테고리 필터 동일 적용)"""
    if category:
        cursor.execute(
            "SELECT COUNT(*) AS total FROM anonymous_posts WHERE category = %s",
            (category,)
        )
    else:
        cursor.execute("SELECT COUNT(*) AS total FROM anonymous_posts")

    row = cursor.fetchone()
    return row['total'] if row else 0


def find_by_id(cursor, post_id):
    """게시글 단건 조회 (비밀번호 포함 - 응답 직렬화 시 제외할 것)"""
    cursor.execute(
        f"SELECT {DETAIL_COLUMNS} FROM anonymous_posts WHERE id = %s",
        (post_id,)
    )
    return cursor.fetchone()


def increment_view_count(cursor, post_id):
    """
    조회수 1 증가

    Returns:
        int: 갱신된 행 수 (0이면 게시글 없음)
    """
    cursor.execute("""
        UPDATE anonymous_posts
        SET view_count = view_count + 1
        WHERE id = %s
    """, (post_id,))
    return cursor.rowcount


def insert(cursor, post):
    """AnonymousPost 모델 INSERT (password는 인코딩된 값)"""
    cursor.execute("""
        INSERT INTO anonymous_posts
        (id, title, content, nickname, category, password, view_count)
        VALUES (%s, %s, %s, %s, %s, %s, 0)
    """, (
        post.id,
        post.title,
        post.content,
        post.nickname,
        post.category,
        post.password,
    ))


def delete(cursor, post_id):
    """게시글 삭제"""
    cursor.execute("DELETE FROM anonymous_posts WHERE id = %s", (post_id,))
    return cursor.rowcount
