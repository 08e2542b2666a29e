import io
import json

import pytest
from PIL import Image

from config import TestingConfig
from ekheti import create_app
from ekheti.ai import knowledge_base
from ekheti.extensions import db

KEYWORDS = ['wheat', 'rice', 'fertilizer', 'mango', 'apple', 'citrus', 'rust', 'pest']


def keyword_vector(text):
    """Stand-in embedding: one dimension per keyword."""
    text = text.lower()
    return [float(text.count(word)) for word in KEYWORDS] + [0.1]


class FakeModel:
    """Records prompts and answers with queued JSON replies."""

    def __init__(self):
        self.replies = []
        self.calls = []

    def reply_with(self, *payloads):
        self.replies.extend(payloads)

    def __call__(self, contents, json_output=True):
        self.calls.append(contents)
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply if isinstance(reply, str) else json.dumps(reply)

    @property
    def last_prompt(self):
        return self.calls[-1][0]


@pytest.fixture
def app():
    app = create_app(TestingConfig)
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def auth_client(client):
    response = client.post('/auth/signup', json={
        'name': 'Ramesh Kumar',
        'email': 'ramesh@example.com',
        'password': 'secret123',
    })
    assert response.status_code == 201
    return client


@pytest.fixture
def fake_model(monkeypatch):
    model = FakeModel()
    monkeypatch.setattr('ekheti.ai.gemini.generate', model)
    return model


@pytest.fixture(autouse=True)
def fake_embeddings(monkeypatch):
    calls = []

    def embed(texts, task_type):
        calls.append(task_type)
        return [keyword_vector(text) for text in texts]

    monkeypatch.setattr('ekheti.ai.gemini.embed', embed)
    for kb in knowledge_base.KNOWLEDGE_BASES.values():
        monkeypatch.setattr(kb, 'vectors', None)
    return calls


@pytest.fixture
def png_bytes():
    buffer = io.BytesIO()
    Image.new('RGB', (8, 8), color=(30, 160, 60)).save(buffer, format='PNG')
    return buffer.getvalue()
