from shared import auth


def test_token_is_empty_without_file():
    assert auth.get_token() == ''


def test_save_and_read_token(token_file):
    auth.save_token('  abc123  ')
    assert auth.get_token() == 'abc123'
    assert 'MAGALU_API_TOKEN=abc123' in token_file.read_text()


def test_save_replaces_previous_token():
    auth.save_token('first')
    auth.save_token('second')
    assert auth.get_token() == 'second'


def test_empty_token_clears_saved_one():
    auth.save_token('abc123')
    auth.save_token('   ')
    assert auth.get_token() == ''


def test_clear_token_without_file(token_file):
    auth.clear_token()
    assert not token_file.exists()


def test_environment_token_wins(monkeypatch):
    auth.save_token('from-file')
    monkeypatch.setenv('MAGALU_API_TOKEN', ' from-env ')
    assert auth.get_token() == 'from-env'


def test_token_required_passes_token():
    @auth.token_required
    def view(token):
        return token

    assert view() == ({'message': auth.TOKEN_MISSING_MESSAGE}, 401)
    auth.save_token('abc123')
    assert view() == 'abc123'
