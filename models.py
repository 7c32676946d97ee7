"""
데이터베이스 모델

raw SQL 조회 결과(dictionary cursor 행)를 API 응답 형태로
변환하기 위한 모델입니다. 테이블 구조는 schema.sql 참고.
"""

import json
from datetime import datetime


STATUS_OPEN = 'OPEN'
STATUS_FULL = 'FULL'
STATUS_COMPLETED = 'COMPLETED'

DEFAULT_CATEGORY = '일반'


def _isoformat(value):
    if isinstance(value, datetime):
        return value.isoformat()
    return value


def _load_tags(value):
    """JSON 컬럼 값을 문자열 리스트로 변환"""
    if value is None:
        return []
    if isinstance(value, (bytes, bytearray)):
        value = value.decode('utf-8')
    if isinstance(value, str):
        try:
            value = json.loads(value)
        except ValueError:
            return []
    if not isinstance(value, list):
        return []
    return [str(tag) for tag in value]


class CoffeeChat:
    """
    커피챗 모델

    Attributes:
        id (str): 커피챗 고유 ID (UUID)
        title, host, country, city, job, company,
        experience, date, time, description (str): 모집 정보
        max_participants (int): 최대 참여 인원
        current_participants (int): 현재 참여 인원
        tags (list): 태그 목록
        status (str): 'OPEN' | 'FULL' | 'COMPLETED'
        created_at, updated_at (datetime): 생성/수정 시간
    """

    TEXT_FIELDS = (
        'title', 'host', 'country', 'city', 'job', 'company',
        'experience', 'date', 'time', 'description',
    )

    def __init__(self, id, title, host, country, city, job, company,
                 experience, date, time, description, max_participants,
                 current_participants=0, tags=None, status=STATUS_OPEN,
                 created_at=None, updated_at=None):
        self.id = id
        self.title = title
        self.host = host
        self.country = country
        self.city = city
        self.job = job
        self.company = company
        self.experience = experience
        self.date = date
        self.time = time
        self.description = description
        self.max_participants = max_participants
        self.current_participants = current_participants
        self.tags = tags or []
        self.status = status
        self.created_at = created_at
        self.updated_at = updated_at

    @classmethod
    def from_row(cls, row):
        """coffee_chats 테이블 행(dict) → CoffeeChat"""
        return cls(
            id=row['id'],
            title=row['title'],
            host=row['host'],
            country=row['country'],
            city=row['city'],
            job=row['job'],
            company=row['company'],
            experience=row['experience'],
            date=row['date'],
            time=row['time'],
            description=row['description'],
            max_participants=row['max_participants'],
            current_participants=row['current_participants'],
            tags=_load_tags(row.get('tags')),
            status=row['status'],
            created_at=row.get('created_at'),
            updated_at=row.get('updated_at'),
        )

    @classmethod
    def from_payload(cls, chat_id, payload):
        """
        생성 요청 본문 → 새 CoffeeChat

        참여 인원과 상태는 요청 값과 무관하게 0 / OPEN으로 고정합니다.
        """
        values = {field: payload.get(field) for field in cls.TEXT_FIELDS}
        tags = payload.get('tags')

        return cls(
            id=chat_id,
            max_participants=payload.get('maxParticipants'),
            current_participants=0,
            tags=tags if isinstance(tags, list) else [],
            status=STATUS_OPEN,
            **values
        )

    def to_dict(self):
        return {
            'id': self.id,
            'title': self.title,
            'host': self.host,
            'country': self.country,
            'city': self.city,
            'job': self.job,
            'company': self.company,
            'experience': self.experience,
            'date': self.date,
            'time': self.time,
            'maxParticipants': self.max_participants,
            'currentParticipants': self.current_participants,
            'description': self.description,
            'tags': self.tags,
            'status': self.status,
            'createdAt': _isoformat(self.created_at),
            'updatedAt': _isoformat(self.updated_at),
        }


class AnonymousPost:
    """
    익명 게시글 모델

    Attributes:
        id (str): 게시글 고유 ID (UUID)
        title (str): 제목
        content (str): 본문 (목록 조회 시 None)
        nickname (str): 작성자 닉네임
        category (str): 카테고리 (기본 '일반')
        password (str): base64 인코딩된 삭제 비밀번호 (응답에 포함하지 않음)
        view_count (int): 조회수
        created_at, updated_at (datetime): 생성/수정 시간
    """

    def __init__(self, id, title, nickname, category=DEFAULT_CATEGORY,
                 content=None, password=None, view_count=0,
                 created_at=None, updated_at=None):
        self.id = id
        self.title = title
        self.content = content
        self.nickname = nickname
        self.category = category
        self.password = password
        self.view_count = view_count
        self.created_at = created_at
        self.updated_at = updated_at

    @classmethod
    def from_row(cls, row):
        """anonymous_posts 테이블 행(dict) → AnonymousPost"""
        return cls(
            id=row['id'],
            title=row['title'],
            content=row.get('content'),
            nickname=row['nickname'],
            category=row['category'],
            password=row.get('password'),
            view_count=row['view_count'],
            created_at=row.get('created_at'),
            updated_at=row.get('updated_at'),
        )

    def to_summary_dict(self):
        """목록용 (본문, 비밀번호 제외)"""
        return {
            'id': self.id,
            'title': self.title,
            'nickname': self.nickname,
            'category': self.category,
            'viewCount': self.view_count,
            'createdAt': _isoformat(self.created_at),
            'updatedAt': _isoformat(self.updated_at),
        }

    def to_dict(self):
        """상세용 (비밀번호 제외)"""
        data = self.to_summary_dict()
        data['content'] = self.content
        return data
