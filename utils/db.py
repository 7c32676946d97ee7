"""
MySQL Connection Pool 관리

이 모듈은 MySQL 연결 풀을 생성하고,
연결 풀 부족 시 대기+재시도 로직을 제공합니다.
"""

import time
import mysql.connector
from mysql.connector import pooling
from mysql.connector.errors import PoolError


def create_connection_pool(settings, pool_size=5):
    """
    MySQL Connection Pool 생성

    Args:
        settings (dict): host, port, user, password, database
            (Config.database_settings() 반환값)
        pool_size (int): 최대 동시 연결 수

    Returns:
        MySQLConnectionPool: mysql-connector-python 연결 풀 객체

    Raises:
        mysql.connector.Error: DB 연결 실패 시

    Note:
        - pool_reset_session=True: 연결 재사용 시 세션 초기화
        - autocommit=False: 트랜잭션 명시적 제어 (참여 처리 시 행 잠금)
    """
    try:
        pool = pooling.MySQLConnectionPool(
            pool_name="tripchat_pool",
            pool_size=pool_size,
            pool_reset_session=True,
            host=settings['host'],
            port=int(settings['port']),
            user=settings['user'],
            password=settings['password'],
            database=settings['database'],
            autocommit=False,  # 트랜잭션 수동 제어
            get_warnings=True,
            charset='utf8mb4',
            collation='utf8mb4_unicode_ci'
        )
        return pool
    except mysql.connector.Error as err:
        print(f"❌ MySQL Connection Pool 생성 실패: {err}")
        raise


# 글로벌 연결 풀 객체 (app.py에서 초기화)
connection_pool = None


def get_db_connection(max_retries=3, retry_delay=0.1):
    """
    Connection Pool에서 연결 가져오기 (대기+재시도 로직)

    Args:
        max_retries (int): 최대 재시도 횟수 (기본 3회)
        retry_delay (float): 재시도 대기 시간(초) (기본 0.1초)

    Returns:
        mysql.connector.connection.MySQLConnection: DB 연결 객체

    Raises:
        RuntimeError: 연결 풀이 초기화되지 않은 경우
        PoolError: 재시도 후에도 연결 풀 부족 시

    Example:
        >>> conn = get_db_connection()
        >>> cursor = conn.cursor(dictionary=True)
        >>> cursor.execute("SELECT * FROM coffee_chats")
        >>> conn.close()
    """
    if connection_pool is None:
        raise RuntimeError("Connection pool not initialized. Call create_connection_pool() first.")

    for attempt in range(max_retries):
        try:
            return connection_pool.get_connection()
        except PoolError as e:
            if attempt < max_retries - 1:
                # 연결 풀 부족, 대기 후 재시도
                time.sleep(retry_delay)
            else:
                raise PoolError(
                    f"Connection pool exhausted after {max_retries} retries. "
                    f"Error: {str(e)}"
                )


def release_connection(cursor, conn):
    """요청 종료 시 커서와 연결 반납 (None 허용)"""
    if cursor:
        cursor.close()
    if conn:
        conn.close()


def rollback_quietly(conn, logger):
    """
    실패한 트랜잭션 롤백

    롤백 자체가 실패해도 원래 에러 응답을 유지하기 위해
    예외를 로그로만 남깁니다.
    """
    if conn is None:
        return
    try:
        conn.rollback()
    except mysql.connector.Error as e:
        logger.warning(f"롤백 실패: {str(e)}")
