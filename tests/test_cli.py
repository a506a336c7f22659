"""
CLI command tests
"""
from doc_summarizer.models import User


def test_create_user(app):
    runner = app.test_cli_runner()
    result = runner.invoke(args=["create-user", "Cli@Example.com", "--password", "clipassword1"])

    assert result.exit_code == 0
    assert "Created cli@example.com" in result.output
    with app.app_context():
        user = User.query.filter_by(email="cli@example.com").first()
        assert user.check_password("clipassword1")


def test_create_user_duplicate(app, test_user):
    runner = app.test_cli_runner()
    result = runner.invoke(args=["create-user", "test@example.com", "--password", "x"])
    assert result.exit_code != 0
    assert "already exists" in result.output


def test_disable_user(app, test_user, client):
    runner = app.test_cli_runner()
    result = runner.invoke(args=["disable-user", "test@example.com"])
    assert result.exit_code == 0

    response = client.post("/login", data={"email": "test@example.com", "password": "testpassword123"})
    assert response.status_code == 403
