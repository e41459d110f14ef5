from placement_portal.core.security import BcryptVerifier, PlaintextVerifier


def test_bcrypt_hash_is_salted():
    verifier = BcryptVerifier(rounds=4)

    first = verifier.hash("abc123")
    second = verifier.hash("abc123")

    assert first != "abc123"
    assert first != second
    assert verifier.verify("abc123", first)
    assert verifier.verify("abc123", second)
    assert not verifier.verify("abc124", first)


def test_bcrypt_rounds_are_configurable():
    assert BcryptVerifier(rounds=5).hash("x").startswith("$2b$05$")


def test_plaintext_verifier():
    verifier = PlaintextVerifier()

    assert verifier.hash("abc123") == "abc123"
    assert verifier.verify("abc123", "abc123")
    assert not verifier.verify("abc123", "ABC123")
    assert not verifier.verify("pässword", "password")
    assert not verifier.verify("abc123", None)
