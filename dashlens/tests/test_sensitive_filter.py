from dashlens.shared.logging import sanitize_message


def test_masks_encoded_hashes() -> None:
    message = "stored $argon2id$v=19$m=65536,t=3,p=4$c2FsdHNhbHQ$ZGlnZXN0ZGlnZXN0 for alice"

    sanitized = sanitize_message(message)

    assert "c2FsdHNhbHQ" not in sanitized
    assert sanitized.endswith("for alice")


def test_masks_passwords() -> None:
    sanitized = sanitize_message("payload password=hunter22 username=alice")

    assert "hunter22" not in sanitized
    assert "username=alice" in sanitized


def test_leaves_ordinary_messages_alone() -> None:
    message = "auth.login: ok user_id=1"

    assert sanitize_message(message) == message
