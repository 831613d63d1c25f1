from app.core.security import generate_activation_token, hash_activation_token


def test_activation_tokens_are_unique_and_url_safe():
    tokens = {generate_activation_token() for _ in range(200)}
    assert len(tokens) == 200
    for token in tokens:
        assert len(token) >= 40
        assert all(ch.isalnum() or ch in "-_" for ch in token)


def test_digest_is_deterministic_and_not_the_token():
    token = generate_activation_token()
    digest = hash_activation_token(token)
    assert digest == hash_activation_token(token)
    assert digest != token
    assert token not in digest
    assert len(digest) == 64
    assert hash_activation_token("fake_token") != digest
