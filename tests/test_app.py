import pytest
from streamlit.testing.v1 import AppTest

from humanizer import llm_client

APP = '../app.py'
TEXT = 'este texto fue escrito por una maquina'


def reply(content):
    return 200, {'choices': [{'message': {'content': content}}]}


class Response:
    def __init__(self, status_code, body):
        self.status_code = status_code
        self.ok = 200 <= status_code < 400
        self.body = body
        self.text = body if isinstance(body, str) else ''

    def json(self):
        return self.body


@pytest.fixture
def endpoint(monkeypatch):
    """Queue of (status, body) replies; records the Authorization header of each call."""
    replies = []
    headers = []

    def fake_post(url, **kwargs):
        headers.append(kwargs['headers']['Authorization'])
        return Response(*replies.pop(0))

    monkeypatch.setattr(llm_client.requests, 'post', fake_post)
    return replies, headers


@pytest.fixture
def no_env_key(monkeypatch):
    monkeypatch.delenv('OPENAI_API_KEY', raising=False)


def test_initial_render():
    at = AppTest.from_file(APP).run()
    assert not at.exception
    assert at.title[0].value == 'Humanizador avanzado + Detector de IA'


def test_empty_input_shows_warning():
    at = AppTest.from_file(APP).run()
    at.button(key='run').click().run()
    assert not at.exception
    assert [w.value for w in at.warning] == ['Pega o escribe un texto primero.']
    assert not at.error


def test_copy_without_result_warns():
    at = AppTest.from_file(APP).run()
    at.button(key='copy').click().run()
    assert [w.value for w in at.warning] == ['No hay texto para copiar.']


def test_full_run_renders_score(monkeypatch, endpoint):
    replies, headers = endpoint
    replies.extend([reply('Texto reescrito.'), reply('{"probability": 87, "explanation": "Frases repetitivas."}')])
    monkeypatch.setenv('OPENAI_API_KEY', 'sk-test')

    at = AppTest.from_file(APP).run()
    at.text_area(key='source_text').input(TEXT).run()
    at.button(key='run').click().run()

    assert not at.exception
    assert at.metric[0].value == '87%'
    assert headers == ['Bearer sk-test', 'Bearer sk-test']
    assert replies == []


def test_missing_key_shows_notice(no_env_key, endpoint):
    _, headers = endpoint

    at = AppTest.from_file(APP).run()
    at.text_area(key='source_text').input(TEXT).run()
    at.button(key='run').click().run()

    assert not at.exception
    assert [i.value for i in at.info] == ['Introduce tu API Key de OpenAI en la barra lateral para continuar.']
    assert not at.error
    assert headers == []


def test_retyped_key_replaces_rejected_one(no_env_key, endpoint):
    replies, headers = endpoint
    replies.append((401, 'invalid api key'))

    at = AppTest.from_file(APP).run()
    at.text_input(key='api_key_input').input('sk-typo').run()
    at.text_area(key='source_text').input(TEXT).run()
    at.button(key='run').click().run()

    assert [e.value for e in at.error] == ['Error: OpenAI error: 401 invalid api key']

    replies.extend([reply('Texto reescrito.'), reply('{"probability": 12, "explanation": "Variado."}')])
    at.text_input(key='api_key_input').input('sk-fixed').run()
    at.button(key='run').click().run()

    assert not at.exception
    assert headers == ['Bearer sk-typo', 'Bearer sk-fixed', 'Bearer sk-fixed']
    assert at.metric[0].value == '12%'
    assert not at.error


def test_detection_failure_shows_error_and_kept_rewrite(monkeypatch, endpoint):
    replies, _ = endpoint
    replies.extend([reply('Texto reescrito.'), (500, 'server error')])
    monkeypatch.setenv('OPENAI_API_KEY', 'sk-test')

    at = AppTest.from_file(APP).run()
    at.text_area(key='source_text').input(TEXT).run()
    at.button(key='run').click().run()

    assert not at.exception
    assert [e.value for e in at.error] == ['Error: OpenAI error: 500 server error']
    assert [t.value for t in at.text] == ['Texto reescrito.']
    assert not at.metric
