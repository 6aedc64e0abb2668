import pytest

from clinic.models import Message

pytestmark = pytest.mark.django_db


def make_message(user, content='Hello', is_read=False):
    return Message.objects.create(user=user, subject='Question', content=content, is_read=is_read)


def test_user_sends_message(client_for, patient, other_patient):
    r = client_for(patient).post(
        '/api/messages',
        {'subject': 'Parking', 'content': 'Where do I park?', 'userId': other_patient.id, 'isRead': True},
        format='json',
    )
    assert r.status_code == 201
    body = r.json()
    assert body['userId'] == patient.id
    assert body['isRead'] is False
    assert body['subject'] == 'Parking'


def test_subject_is_optional(client_for, patient):
    r = client_for(patient).post('/api/messages', {'content': 'No subject'}, format='json')
    assert r.status_code == 201
    assert r.json()['subject'] is None


def test_subject_length_limit(client_for, patient):
    client = client_for(patient)
    assert client.post('/api/messages', {'subject': 'x' * 100, 'content': 'ok'}, format='json').status_code == 201
    r = client.post('/api/messages', {'subject': 'x' * 101, 'content': 'ok'}, format='json')
    assert r.status_code == 400
    assert 'subject' in r.json()['error']['fields']


@pytest.mark.parametrize('content', ['', '   ', '<p></p>'])
def test_empty_content_is_rejected(client_for, patient, content):
    r = client_for(patient).post('/api/messages', {'content': content}, format='json')
    assert r.status_code == 400
    assert not Message.objects.exists()


def test_sending_requires_session(anon_client):
    assert anon_client.post('/api/messages', {'content': 'hi'}, format='json').status_code == 401


def test_only_admin_lists_messages(client_for, patient, anon_client):
    make_message(patient)
    r = client_for(patient).get('/api/messages')
    assert r.status_code == 403
    assert r.json()['error']['code'] == 'permission_denied'
    assert anon_client.get('/api/messages').status_code == 401


def test_admin_lists_messages_newest_first_with_sender(client_for, admin, patient, other_patient):
    older = make_message(patient, 'first')
    newer = make_message(other_patient, 'second')
    listed = client_for(admin).get('/api/messages').json()
    assert [m['id'] for m in listed] == [newer.id, older.id]
    assert listed[0]['user']['email'] == other_patient.email
    assert 'password' not in listed[0]['user']


def test_unread_filter(client_for, admin, patient):
    make_message(patient, 'seen', is_read=True)
    unread = make_message(patient, 'new')
    listed = client_for(admin).get('/api/messages?unread=1').json()
    assert [m['id'] for m in listed] == [unread.id]


def test_mark_read_is_idempotent(client_for, admin, patient):
    msg = make_message(patient)
    client = client_for(admin)
    for _ in range(2):
        r = client.patch(f'/api/messages/{msg.id}/read')
        assert r.status_code == 200
        assert r.json()['isRead'] is True
    msg.refresh_from_db()
    assert msg.is_read


def test_mark_read_missing(client_for, admin):
    assert client_for(admin).patch('/api/messages/9999/read').status_code == 404


def test_mark_read_requires_admin(client_for, patient):
    msg = make_message(patient)
    assert client_for(patient).patch(f'/api/messages/{msg.id}/read').status_code == 403
    msg.refresh_from_db()
    assert not msg.is_read


def test_delete_message(client_for, admin, patient):
    msg = make_message(patient)
    client = client_for(admin)
    assert client.delete(f'/api/messages/{msg.id}').status_code == 204
    assert not Message.objects.filter(pk=msg.id).exists()
    r = client.delete(f'/api/messages/{msg.id}')
    assert r.status_code == 404
    assert r.json()['error']['code'] == 'not_found'


def test_delete_requires_admin(client_for, patient):
    msg = make_message(patient)
    assert client_for(patient).delete(f'/api/messages/{msg.id}').status_code == 403
    assert Message.objects.filter(pk=msg.id).exists()


def test_plain_text_round_trips_unescaped(client_for, patient):
    r = client_for(patient).post(
        '/api/messages', {'subject': 'A & B', 'content': 'pain < 5 & fever > 38'}, format='json',
    )
    assert r.status_code == 201
    assert r.json()['subject'] == 'A & B'
    assert r.json()['content'] == 'pain < 5 & fever > 38'
    stored = Message.objects.get(pk=r.json()['id'])
    assert stored.content == 'pain < 5 & fever > 38'


def test_subject_limit_counts_typed_characters(client_for, patient):
    client = client_for(patient)
    r = client.post('/api/messages', {'subject': '&' * 100, 'content': 'ok'}, format='json')
    assert r.status_code == 201
    assert r.json()['subject'] == '&' * 100
    assert client.post('/api/messages', {'subject': '&' * 101, 'content': 'ok'}, format='json').status_code == 400


def test_markup_is_removed_from_content(client_for, patient):
    r = client_for(patient).post('/api/messages', {'content': '<em>very</em> <a href="x">urgent</a>'}, format='json')
    assert r.status_code == 201
    assert r.json()['content'] == 'very urgent'
