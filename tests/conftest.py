from __future__ import annotations

import json
from datetime import datetime, timedelta

import pytest

from app import create_app
from routes import coffee_chat_routes, anonymous_post_routes, web_routes


BASE_TIME = datetime(2024, 1, 1, 9, 0, 0)


class FakeCursor:
    def __init__(self):
        self.closed = False

    def close(self):
        self.closed = True


class FakeConnection:
    """get_db_connection() 대체. 커밋/롤백 횟수만 기록"""

    def __init__(self):
        self.commits = 0
        self.rollbacks = 0
        self.closed = False

    def cursor(self, dictionary=False):
        return FakeCursor()

    def commit(self):
        self.commits += 1

    def rollback(self):
        self.rollbacks += 1

    def close(self):
        self.closed = True


class InMemoryCoffeeChats:
    """repositories.coffee_chats 와 같은 함수 시그니처의 메모리 저장소"""

    def __init__(self):
        self.rows = {}
        self._clock = 0

    def _tick(self):
        self._clock += 1
        return BASE_TIME + timedelta(minutes=self._clock)

    def add(self, **overrides):
        """테스트 데이터 직접 등록 (참여 인원/상태 지정 가능)"""
        now = self._tick()
        row = {
            'id': f"chat-{len(self.rows) + 1}",
            'title': '도쿄 IT 업계 취업 성공기',
            'host': '김민수',
            'country': 'Japan',
            'city': 'Tokyo',
            'job': 'Frontend Developer',
            'company': 'LINE',
            'experience': '3년차',
            'date': '2024-01-15',
            'time': '19:00',
            'description': '일본 IT 업계 이야기',
            'max_participants': 8,
            'current_participants': 0,
            'tags': ['일본', 'IT'],
            'status': 'OPEN',
            'created_at': now,
            'updated_at': now,
        }
        row.update(overrides)
        row['tags'] = json.dumps(row['tags'], ensure_ascii=False)
        self.rows[row['id']] = row
        return row

    def find_all(self, cursor, country=None, job=None):
        rows = list(self.rows.values())
        if country:
            rows = [r for r in rows if r['country'].lower() == country.lower()]
        if job:
            rows = [r for r in rows if job.lower() in r['job'].lower()]
        return sorted(rows, key=lambda r: r['created_at'], reverse=True)

    def find_by_id(self, cursor, chat_id, for_update=False):
        row = self.rows.get(chat_id)
        return dict(row) if row else None

    def insert(self, cursor, chat):
        now = self._tick()
        self.rows[chat.id] = {
            'id': chat.id,
            'title': chat.title,
            'host': chat.host,
            'country': chat.country,
            'city': chat.city,
            'job': chat.job,
            'company': chat.company,
            'experience': chat.experience,
            'date': chat.date,
            'time': chat.time,
            'description': chat.description,
            'max_participants': chat.max_participants,
            'current_participants': chat.current_participants,
            'tags': json.dumps(chat.tags, ensure_ascii=False),
            'status': chat.status,
            'created_at': now,
            'updated_at': now,
        }

    def update_participants(self, cursor, chat_id, current_participants, status):
        row = self.rows[chat_id]
        row['current_participants'] = current_participants
        row['status'] = status
        return 1

    def update_status(self, cursor, chat_id, status):
        self.rows[chat_id]['status'] = status
        return 1


class InMemoryAnonymousPosts:
    """repositories.anonymous_posts 와 같은 함수 시그니처의 메모리 저장소"""

    def __init__(self):
        self.rows = {}
        self._clock = 0

    def _tick(self):
        self._clock += 1
        return BASE_TIME + timedelta(minutes=self._clock)

    def add(self, **overrides):
        from utils.password import encode_password

        now = self._tick()
        row = {
            'id': f"post-{len(self.rows) + 1}",
            'title': '비자 질문',
            'content': '워킹홀리데이 비자 준비 어떻게 하셨나요?',
            'nickname': '익명',
            'category': '일반',
            'password': encode_password('1234'),
            'view_count': 0,
            'created_at': now,
            'updated_at': now,
        }
        row.update(overrides)
        self.rows[row['id']] = row
        return row

    def _filtered(self, category):
        rows = list(self.rows.values())
        if category:
            rows = [r for r in rows if r['category'] == category]
        return rows

    def find_page(self, cursor, category=None, offset=0, limit=20):
        rows = sorted(self._filtered(category), key=lambda r: r['created_at'], reverse=True)
        summary_keys = ('id', 'title', 'nickname', 'category',
                        'view_count', 'created_at', 'updated_at')
        return [{k: r[k] for k in summary_keys} for r in rows[offset:offset + limit]]

    def count(self, cursor, category=None):
        return len(self._filtered(category))

    def find_by_id(self, cursor, post_id):
        row = self.rows.get(post_id)
        return dict(row) if row else None

    def increment_view_count(self, cursor, post_id):
        row = self.rows.get(post_id)
        if not row:
            return 0
        row['view_count'] += 1
        return 1

    def insert(self, cursor, post):
        now = self._tick()
        self.rows[post.id] = {
            'id': post.id,
            'title': post.title,
            'content': post.content,
            'nickname': post.nickname,
            'category': post.category,
            'password': post.password,
            'view_count': 0,
            'created_at': now,
            'updated_at': now,
        }

    def delete(self, cursor, post_id):
        return 1 if self.rows.pop(post_id, None) else 0


@pytest.fixture
def app():
    return create_app('testing')


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def connections(monkeypatch):
    """라우트가 빌려간 가짜 연결 목록"""
    opened = []

    def fake_get_db_connection():
        conn = FakeConnection()
        opened.append(conn)
        return conn

    for module in (coffee_chat_routes, anonymous_post_routes, web_routes):
        monkeypatch.setattr(module, 'get_db_connection', fake_get_db_connection)

    return opened


@pytest.fixture
def chat_store(monkeypatch, connections):
    store = InMemoryCoffeeChats()
    monkeypatch.setattr(coffee_chat_routes, 'chat_repo', store)
    monkeypatch.setattr(web_routes, 'chat_repo', store)
    return store


@pytest.fixture
def post_store(monkeypatch, connections):
    store = InMemoryAnonymousPosts()
    monkeypatch.setattr(anonymous_post_routes, 'post_repo', store)
    return store
