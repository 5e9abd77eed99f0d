"""
Tests for the REST client, against fake sessions and the real Flask app
"""
import pytest
import requests

from api_client import RemoteComputeClient
from calculator import Calculator
from errors import RemoteRejected, RemoteUnavailable

BASE_URL = "http://calc.test"


class FakeResponse:
    def __init__(self, status_code, body=None, text=None):
        self.status_code = status_code
        self._body = body
        self.text = text

    def json(self):
        if self._body is None:
            raise ValueError("No JSON object could be decoded")
        return self._body


class FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.requests = []

    def request(self, method, url, timeout=None, **kwargs):
        self.requests.append((method, url, kwargs))
        if self.error is not None:
            raise self.error
        return self.response


class FlaskSession:
    """Routes requests calls into a Flask test client"""

    def __init__(self, client):
        self.client = client

    def request(self, method, url, timeout=None, json=None, params=None):
        path = url[len(BASE_URL):]
        response = self.client.open(path, method=method, json=json, query_string=params)
        return FakeResponse(response.status_code, response.get_json())


def make_client(session):
    return RemoteComputeClient(BASE_URL, timeout=1, session=session)


def test_add_posts_operands():
    session = FakeSession(FakeResponse(200, {'success': True,
                                             'data': {'result': 5, 'expression': '2 + 3'}}))
    result = make_client(session).add(2, 3)
    assert result == {'result': 5, 'expression': '2 + 3'}
    assert session.requests == [("POST", f"{BASE_URL}/api/add", {'json': {'x': 2, 'y': 3}})]


def test_connection_error_is_unavailable():
    session = FakeSession(error=requests.ConnectionError("refused"))
    with pytest.raises(RemoteUnavailable):
        make_client(session).multiply(2, 3)


def test_rejection_is_remote_rejected():
    session = FakeSession(FakeResponse(400, {'success': False, 'error': 'Cannot divide 1 by zero'}))
    with pytest.raises(RemoteRejected) as excinfo:
        make_client(session).divide(1, 0)
    assert excinfo.value.status_code == 400


def test_server_error_is_unavailable_not_rejected():
    session = FakeSession(FakeResponse(500, {'success': False, 'error': 'boom'}))
    with pytest.raises(RemoteUnavailable) as excinfo:
        make_client(session).add(1, 1)
    assert not isinstance(excinfo.value, RemoteRejected)


def test_non_json_body_is_unavailable():
    session = FakeSession(FakeResponse(502, None, text="Bad Gateway"))
    with pytest.raises(RemoteUnavailable):
        make_client(session).subtract(1, 1)


def test_malformed_payload_is_unavailable():
    session = FakeSession(FakeResponse(200, {'success': True, 'data': []}))
    with pytest.raises(RemoteUnavailable):
        make_client(session).add(1, 1)


def test_non_integer_result_is_unavailable():
    session = FakeSession(FakeResponse(200, {'success': True, 'data': {'result': 'oops'}}))
    with pytest.raises(RemoteUnavailable):
        make_client(session).add(2, 3)


def test_calculator_survives_non_integer_result():
    session = FakeSession(FakeResponse(200, {'success': True, 'data': {'result': 'oops'}}))
    calc = Calculator(make_client(session))
    for button in ["2", "+", "3", "="]:
        calc.press(button)
    assert calc.state.is_error
    assert not calc.calculating


def test_ping():
    assert make_client(FakeSession(FakeResponse(200, {'success': True}))).ping() is True
    assert make_client(FakeSession(error=requests.Timeout("slow"))).ping() is False


def test_wait_until_available_gives_up():
    client = make_client(FakeSession(error=requests.ConnectionError("refused")))
    assert client.wait_until_available(timeout=0, interval=0) is False


def test_against_flask_app(client, history_manager):
    remote = make_client(FlaskSession(client))
    assert remote.add(40, 2) == {'result': 42, 'expression': '40 + 2'}
    assert remote.get_history(days=7) == [('40 + 2', '42')]
    with pytest.raises(RemoteRejected):
        remote.divide(1, 0)
    remote.clear_history()
    assert remote.get_history() == []
    assert history_manager.get_history() == []


def test_calculator_over_http(client, history_manager):
    calc = Calculator(make_client(FlaskSession(client)))
    for button in ["1", "0", "÷", "3", "="]:
        calc.press(button)
    assert calc.state.display == "3.3333333333"
    assert calc.state.expression == "10 ÷ 3 = 3.3333333333"
    for button in ["*", "2", "="]:
        calc.press(button)
    # the previous result is truncated to 3 before it reaches the service
    assert calc.state.display == "6"
    assert history_manager.get_history() == [("3 × 2", "6"), ("10 ÷ 3", "3")]
