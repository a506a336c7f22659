"""
Test Configuration and Fixtures
"""
import io

import pytest

from doc_summarizer import create_app, db
from doc_summarizer.models import User

TEST_EMAIL = "test@example.com"
TEST_PASSWORD = "testpassword123"


@pytest.fixture()
def app():
    """Create application for testing (fresh in-memory database per test)"""
    app = create_app("testing")

    yield app

    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app):
    """Create test client"""
    return app.test_client()


@pytest.fixture()
def test_user(app):
    """Create test user, returns its id"""
    with app.app_context():
        user = User(email=TEST_EMAIL)
        user.set_password(TEST_PASSWORD)
        db.session.add(user)
        db.session.commit()
        return user.id


@pytest.fixture()
def authenticated_client(client, test_user):
    """Create authenticated test client"""
    client.post("/login", data={
        "email": TEST_EMAIL,
        "password": TEST_PASSWORD,
    })
    return client


def make_docx(*paragraphs):
    import docx

    document = docx.Document()
    for text in paragraphs:
        document.add_paragraph(text)
    buf = io.BytesIO()
    document.save(buf)
    return buf.getvalue()


@pytest.fixture()
def docx_bytes():
    return make_docx
