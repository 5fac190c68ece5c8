import pytest

from user_api.validation import is_valid_email


@pytest.mark.parametrize(
    "email",
    [
        "john@x.com",
        "first.last@example.com",
        "a+tag@mail.example.org",
        "Mixed.Case@Example.COM",
        "admin@localhost",
        "john@intranet",
        "a@host.local",
        "a@b.test",
        "a@[127.0.0.1]",
    ],
)
def test_valid_emails(email):
    assert is_valid_email(email)


@pytest.mark.parametrize(
    "email",
    [
        "",
        "plainaddress",
        "@example.com",
        "john@",
        "john@@example.com",
        "John Doe <john@example.com>",
        " john@example.com",
        "john@example.com ",
        "john doe@example.com",
    ],
)
def test_invalid_emails(email):
    assert not is_valid_email(email)
