def test_index_and_health(client):
    assert client.get('/').status_code == 200
    assert client.get('/health').get_json() == {'status': 'ok'}


def test_join_and_state(client):
    res = client.post('/api/tournament/join', json={'name': 'Alice'})
    assert res.status_code == 201
    alice = res.get_json()
    assert alice['name'] == 'Alice'

    res = client.get(f"/api/tournament/state?player_id={alice['player_id']}")
    assert res.status_code == 200
    state = res.get_json()
    assert state['phase'] == 'waiting'
    assert state['time_left'] == 0
    assert state['player']['id'] == alice['player_id']
    assert state['durations'] == {'picking': 10, 'review': 5}
    assert [p['name'] for p in state['rankings']] == ['Alice']


def test_join_without_name_gets_default(client):
    res = client.post('/api/tournament/join')
    assert res.status_code == 201
    data = res.get_json()
    assert data['name'] == f"P{data['player_id']}"


def test_full_round_over_http(client, clock):
    a = client.post('/api/tournament/join', json={'name': 'Alice'}).get_json()
    b = client.post('/api/tournament/join', json={'name': 'Bob'}).get_json()

    state = client.get(f"/api/tournament/state?player_id={a['player_id']}").get_json()
    assert state['phase'] == 'picking'
    assert state['time_left'] == 10
    assert state['opponent']['name'] == 'Bob'
    assert state['opponent_move'] is None

    assert client.post('/api/tournament/pick', json={'player_id': a['player_id'], 'move': 'rock'}).status_code == 200
    assert client.post('/api/tournament/pick', json={'player_id': b['player_id'], 'move': 'scissors'}).status_code == 200
    # Second pick is accepted but ignored
    assert client.post('/api/tournament/pick', json={'player_id': a['player_id'], 'move': 'paper'}).status_code == 200

    clock.advance(11)
    state = client.get(f"/api/tournament/state?player_id={b['player_id']}").get_json()
    assert state['phase'] == 'review'
    assert state['time_left'] == 5
    assert state['player_move'] == 'scissors'
    assert state['opponent_move'] == 'rock'
    assert state['winner'] == a['player_id']
    assert [p['name'] for p in state['rankings']] == ['Alice', 'Bob']
    assert [p['wins'] for p in state['rankings']] == [1, 0]


def test_pick_validation(client):
    a = client.post('/api/tournament/join', json={'name': 'Alice'}).get_json()
    res = client.post('/api/tournament/pick', json={'player_id': a['player_id'], 'move': 'lizard'})
    assert res.status_code == 400
    assert 'error' in res.get_json()
    assert client.post('/api/tournament/pick', json={'move': 'rock'}).status_code == 400
    res = client.post('/api/tournament/pick', json={'player_id': 999, 'move': 'rock'})
    assert res.status_code == 404
    assert res.get_json()['player_id'] == 999


def test_state_requires_known_player(client):
    assert client.get('/api/tournament/state').status_code == 400
    assert client.get('/api/tournament/state?player_id=abc').status_code == 400
    assert client.get('/api/tournament/state?player_id=77').status_code == 404


def test_leave_while_waiting_removes_player(client):
    a = client.post('/api/tournament/join', json={'name': 'Alice'}).get_json()
    res = client.post('/api/tournament/leave', json={'player_id': a['player_id']})
    assert res.status_code == 200
    # Leaving twice is harmless
    assert client.post('/api/tournament/leave', json={'player_id': a['player_id']}).status_code == 200
    assert client.get(f"/api/tournament/state?player_id={a['player_id']}").status_code == 404
    assert client.post('/api/tournament/leave', json={}).status_code == 400


def test_leave_mid_round_is_deferred(client, clock):
    a = client.post('/api/tournament/join', json={'name': 'Alice'}).get_json()
    b = client.post('/api/tournament/join', json={'name': 'Bob'}).get_json()
    client.post('/api/tournament/leave', json={'player_id': b['player_id']})

    state = client.get(f"/api/tournament/state?player_id={a['player_id']}").get_json()
    assert state['opponent']['id'] == b['player_id']
    assert state['opponent']['disconnected'] is True

    clock.advance(11)
    client.get(f"/api/tournament/state?player_id={a['player_id']}")
    clock.advance(6)
    state = client.get(f"/api/tournament/state?player_id={a['player_id']}").get_json()
    assert state['phase'] == 'waiting'
    assert state['opponent'] is None
    assert [p['id'] for p in state['rankings']] == [a['player_id']]
    assert client.get(f"/api/tournament/state?player_id={b['player_id']}").status_code == 404


def test_screen_endpoint(client):
    a = client.post('/api/tournament/join', json={'name': 'Alice'}).get_json()
    res = client.get(f"/api/tournament/screen?player_id={a['player_id']}")
    assert res.status_code == 200
    frame = res.get_json()
    assert frame['phase'] == 'waiting'
    assert any(e['text'] == 'Alice*' for e in frame['elements'])
    assert client.get('/api/tournament/screen?player_id=555').status_code == 404


def test_pick_after_leaving_is_ignored(client, clock):
    a = client.post('/api/tournament/join', json={'name': 'Alice'}).get_json()
    b = client.post('/api/tournament/join', json={'name': 'Bob'}).get_json()
    client.post('/api/tournament/leave', json={'player_id': b['player_id']})

    res = client.post('/api/tournament/pick', json={'player_id': b['player_id'], 'move': 'paper'})
    assert res.status_code == 200
    client.post('/api/tournament/pick', json={'player_id': a['player_id'], 'move': 'rock'})

    clock.advance(11)
    state = client.get(f"/api/tournament/state?player_id={a['player_id']}").get_json()
    assert state['phase'] == 'review'
    assert state['opponent_move'] is None
    assert state['winner'] == a['player_id']


def test_non_object_json_body(client):
    res = client.post('/api/tournament/join', json=['Alice'])
    assert res.status_code == 201
    player_id = res.get_json()['player_id']
    assert res.get_json()['name'] == f"P{player_id}"
    assert client.post('/api/tournament/pick', json=['rock']).status_code == 400
    assert client.post('/api/tournament/leave', json='Alice').status_code == 400
