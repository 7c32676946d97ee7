from __future__ import annotations

from utils.password import encode_password


def test_create_post_encodes_password_and_hides_it(client, post_store):
    res = client.post('/api/anonymous-posts', json={
        'title': '런던 집 구하기',
        'content': '플랫 구할 때 주의할 점 공유합니다.',
        'nickname': '런던러',
        'password': 'secret',
    })

    assert res.status_code == 201
    body = res.get_json()
    assert 'password' not in body
    assert body['category'] == '일반'
    assert body['viewCount'] == 0
    assert body['content'] == '플랫 구할 때 주의할 점 공유합니다.'
    assert post_store.rows[body['id']]['password'] == encode_password('secret')


def test_create_post_keeps_given_category(client, post_store):
    res = client.post('/api/anonymous-posts', json={
        'title': '질문', 'content': '본문', 'nickname': '닉', 'password': 'pw',
        'category': '비자',
    })

    assert res.get_json()['category'] == '비자'


def test_create_post_requires_fields(client, post_store):
    for missing in ('title', 'content', 'nickname', 'password'):
        payload = {'title': '제목', 'content': '본문', 'nickname': '닉', 'password': 'pw'}
        payload[missing] = ''

        res = client.post('/api/anonymous-posts', json=payload)

        assert res.status_code == 400
        assert res.get_json() == {'message': '필수 필드가 누락되었습니다.'}

    assert post_store.rows == {}


def test_create_post_without_json_body_is_400(client, post_store):
    res = client.post('/api/anonymous-posts', data='not json', content_type='text/plain')

    assert res.status_code == 400


def test_list_paginates_and_hides_content(client, post_store):
    for i in range(45):
        post_store.add(title=f"글 {i}")

    res = client.get('/api/anonymous-posts?page=1&limit=20')

    body = res.get_json()
    assert res.status_code == 200
    assert body['total'] == 45
    assert body['page'] == 1
    assert body['totalPages'] == 3
    assert len(body['posts']) == 20
    assert body['posts'][0]['title'] == '글 44'
    assert 'content' not in body['posts'][0]
    assert 'password' not in body['posts'][0]

    last = client.get('/api/anonymous-posts?page=3&limit=20').get_json()
    assert len(last['posts']) == 5


def test_list_defaults_and_invalid_params(client, post_store):
    post_store.add()

    body = client.get('/api/anonymous-posts?page=abc&limit=-5').get_json()

    assert body['page'] == 1
    assert body['totalPages'] == 1


def test_list_empty_has_zero_pages(client, post_store):
    body = client.get('/api/anonymous-posts').get_json()

    assert body == {'posts': [], 'total': 0, 'page': 1, 'totalPages': 0}


def test_list_filters_by_category(client, post_store):
    post_store.add(category='비자')
    post_store.add(category='일반')
    post_store.add(category='비자')

    body = client.get('/api/anonymous-posts', query_string={'category': '비자'}).get_json()

    assert body['total'] == 2
    assert {p['category'] for p in body['posts']} == {'비자'}


def test_get_post_increments_view_count_each_call(client, post_store):
    post = post_store.add()

    first = client.get(f"/api/anonymous-posts/{post['id']}")
    second = client.get(f"/api/anonymous-posts/{post['id']}")

    assert first.status_code == 200
    assert first.get_json()['viewCount'] == 1
    assert second.get_json()['viewCount'] == 2
    assert 'password' not in second.get_json()
    assert post_store.rows[post['id']]['view_count'] == 2


def test_get_unknown_post_returns_404(client, post_store):
    res = client.get('/api/anonymous-posts/missing')

    assert res.status_code == 404
    assert res.get_json() == {'message': '게시글을 찾을 수 없습니다.'}


def test_delete_with_correct_password(client, post_store):
    post = post_store.add(password=encode_password('1234'))

    res = client.delete(f"/api/anonymous-posts/{post['id']}", json={'password': '1234'})

    assert res.status_code == 200
    assert res.get_json() == {'message': '게시글이 삭제되었습니다.'}
    assert client.get(f"/api/anonymous-posts/{post['id']}").status_code == 404


def test_delete_with_wrong_password_keeps_post(client, post_store):
    post = post_store.add(password=encode_password('1234'))

    res = client.delete(f"/api/anonymous-posts/{post['id']}", json={'password': '0000'})

    assert res.status_code == 401
    assert res.get_json() == {'message': '비밀번호가 일치하지 않습니다.'}
    assert post['id'] in post_store.rows


def test_delete_requires_password(client, post_store):
    post = post_store.add()

    res = client.delete(f"/api/anonymous-posts/{post['id']}", json={})

    assert res.status_code == 400
    assert res.get_json() == {'message': '비밀번호를 입력해주세요.'}


def test_delete_unknown_post_returns_404(client, post_store):
    res = client.delete('/api/anonymous-posts/missing', json={'password': '1234'})

    assert res.status_code == 404


def test_store_failure_returns_500(client, post_store, monkeypatch):
    def broken(*args, **kwargs):
        raise RuntimeError("Lost connection to MySQL server")

    monkeypatch.setattr(post_store, 'find_page', broken)

    res = client.get('/api/anonymous-posts')

    assert res.status_code == 500
    assert res.get_json() == {'message': '서버 오류가 발생했습니다.'}


def test_create_post_accepts_whitespace_only_values(client, post_store):
    res = client.post('/api/anonymous-posts', json={
        'title': ' ', 'content': '본문', 'nickname': '닉', 'password': ' ',
    })

    assert res.status_code == 201
    body = res.get_json()
    assert body['title'] == ' '
    assert post_store.rows[body['id']]['password'] == encode_password(' ')

    deleted = client.delete(f"/api/anonymous-posts/{body['id']}", json={'password': ' '})
    assert deleted.status_code == 200
