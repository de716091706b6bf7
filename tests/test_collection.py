import json

import pytest
import snowcord

import payloads


def make_user(state: snowcord.State, id: str, name: str = 'user') -> snowcord.User:
    return state.parser.parse_user(payloads.user(id, name))


def test_set_and_add(state):
    users = snowcord.Collection()
    a = make_user(state, '1', 'a')
    b = make_user(state, '2', 'b')

    users.set('1', a)
    assert users.add(b) is b
    assert users.has('1')
    assert users.has('2')
    assert not users.has('3')
    assert list(users) == ['1', '2']

    with pytest.raises(ValueError):
        users.set('3', a)


def test_upsert_keeps_position(state):
    users = snowcord.Collection()
    users.add(make_user(state, '1', 'a'))
    users.add(make_user(state, '2', 'b'))
    users.add(make_user(state, '3', 'c'))

    renamed = make_user(state, '2', 'renamed')
    users.add(renamed)

    assert list(users) == ['1', '2', '3']
    assert users['2'] is renamed


def test_delete(state):
    users = snowcord.Collection()
    users.add(make_user(state, '1'))

    assert users.delete('1') is True
    assert users.delete('1') is False
    assert len(users) == 0


def test_lookup_helpers(state):
    users = snowcord.Collection()
    assert users.first() is None

    for i, name in enumerate(('alice', 'bob', 'carol', 'bart')):
        users.add(make_user(state, str(i), name))

    assert users.first().name == 'alice'
    assert users.find(lambda u: u.name.startswith('b')).name == 'bob'
    assert users.find(lambda u: u.name == 'dave') is None

    filtered = users.filter(lambda u: u.name.startswith('b'))
    assert isinstance(filtered, snowcord.Collection)
    assert [u.name for u in filtered.values()] == ['bob', 'bart']
    assert len(users) == 4


def test_to_json(state):
    users = snowcord.Collection()
    users.add(make_user(state, '2', 'b'))
    users.add(make_user(state, '1', 'a'))

    data = json.loads(users.to_json(indent=2))
    assert list(data) == ['2', '1']
    assert data['1']['username'] == 'a'
    assert data['2']['id'] == '2'
