import pytest


@pytest.fixture
def editor(signed_in):
    client, _ = signed_in('lecturer')
    return client


def _publish(client, title, type='news', is_published=True):
    response = client.post('/api/news-events', json={
        'title': title,
        'content': f'{title} body',
        'type': type,
        'isPublished': is_published,
    })
    assert response.status_code == 201
    return response.get_json()


def test_lecturer_creates_news(editor):
    item = _publish(editor, 'Exam timetable', type='announcement')
    assert item['type'] == 'announcement'
    assert item['isPublished'] is True
    assert item['authorId'] is not None


def test_public_list_shows_published_newest_first(editor, client):
    _publish(editor, 'First')
    _publish(editor, 'Draft', is_published=False)
    _publish(editor, 'Second', type='event')

    response = client.get('/api/news-events')
    assert response.status_code == 200
    assert [i['title'] for i in response.get_json()] == ['Second', 'First']


def test_list_filters_by_type_and_limit(editor, client):
    _publish(editor, 'Open day', type='event')
    _publish(editor, 'Library hours', type='news')
    _publish(editor, 'Sports day', type='event')

    events = client.get('/api/news-events?type=event').get_json()
    assert [i['title'] for i in events] == ['Sports day', 'Open day']

    assert len(client.get('/api/news-events?limit=1').get_json()) == 1
    assert client.get('/api/news-events?limit=0').status_code == 400
    assert client.get('/api/news-events?type=gossip').status_code == 400


def test_unpublished_items_are_hidden_from_public(editor, client, signed_in):
    draft = _publish(editor, 'Draft', is_published=False)
    student, _ = signed_in('student')

    assert client.get(f"/api/news-events/{draft['id']}").status_code == 404
    assert student.get(f"/api/news-events/{draft['id']}").status_code == 404
    assert editor.get(f"/api/news-events/{draft['id']}").status_code == 200


def test_publish_via_update(editor, client):
    draft = _publish(editor, 'Draft', is_published=False)
    response = editor.put(f"/api/news-events/{draft['id']}", json={'isPublished': True, 'title': 'Final'})
    assert response.status_code == 200
    assert client.get(f"/api/news-events/{draft['id']}").get_json()['title'] == 'Final'


def test_writes_require_editor(client, signed_in, editor):
    item = _publish(editor, 'Notice')
    student, _ = signed_in('student')
    body = {'title': 'Spam', 'type': 'news'}

    assert client.post('/api/news-events', json=body).status_code == 401
    assert student.post('/api/news-events', json=body).status_code == 403
    assert student.put(f"/api/news-events/{item['id']}", json={'title': 'x'}).status_code == 403
    assert student.delete(f"/api/news-events/{item['id']}").status_code == 403


def test_type_is_validated(editor):
    response = editor.post('/api/news-events', json={'title': 'Odd', 'type': 'rumour'})
    assert response.status_code == 400


def test_delete_news(editor, client):
    item = _publish(editor, 'Old notice')
    assert editor.delete(f"/api/news-events/{item['id']}").status_code == 200
    assert client.get(f"/api/news-events/{item['id']}").status_code == 404


def test_update_rejects_null_publish_flag(editor):
    item = _publish(editor, 'Notice')
    response = editor.put(f"/api/news-events/{item['id']}", json={'isPublished': None})
    assert response.status_code == 400
