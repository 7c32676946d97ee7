from __future__ import annotations

import json

import pytest

from seed import SAMPLE_CHATS, seed


class RecordingCursor:
    def __init__(self):
        self.executed = []
        self.rowcount = 0
        self.closed = False

    def execute(self, sql, params=()):
        self.executed.append((" ".join(sql.split()), params))

    def close(self):
        self.closed = True


class RecordingConnection:
    def __init__(self):
        self.cursor_obj = RecordingCursor()
        self.commits = 0
        self.rollbacks = 0

    def cursor(self, dictionary=False):
        return self.cursor_obj

    def commit(self):
        self.commits += 1

    def rollback(self):
        self.rollbacks += 1


def test_seed_clears_table_then_inserts_samples():
    conn = RecordingConnection()

    assert seed(conn) == 3

    executed = conn.cursor_obj.executed
    assert executed[0] == ('DELETE FROM coffee_chats', ())
    inserts = [params for sql, params in executed[1:] if sql.startswith('INSERT INTO coffee_chats')]
    assert len(inserts) == len(SAMPLE_CHATS) == 3
    assert conn.commits == 1
    assert conn.cursor_obj.closed


def test_seed_london_chat_is_full():
    conn = RecordingConnection()
    seed(conn)

    inserts = [params for sql, params in conn.cursor_obj.executed[1:]]
    london = next(params for params in inserts if params[4] == '런던')

    # max_participants, current_participants, tags, status
    assert london[11:] == (6, 6, json.dumps(['영국', '금융', '런던', '비자'], ensure_ascii=False), 'FULL')


def test_seed_rolls_back_on_failure():
    conn = RecordingConnection()

    def broken(sql, params=()):
        raise RuntimeError("Table 'tripchat.coffee_chats' doesn't exist")

    conn.cursor_obj.execute = broken

    with pytest.raises(RuntimeError):
        seed(conn)

    assert conn.rollbacks == 1
    assert conn.commits == 0
    assert conn.cursor_obj.closed
