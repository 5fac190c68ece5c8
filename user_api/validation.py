from email_validator import EmailNotValidError, validate_email


def is_valid_email(email: str) -> bool:
    """Return True if `email` is a bare, well-formed address.

    Only syntax is checked: single-label hosts such as `localhost`, special-use
    domains and bracketed IP literals are accepted. The parsed form must match
    the input exactly, so display names, comments and surrounding whitespace
    are rejected rather than silently stripped. The domain is compared
    case-insensitively, because the parser lowercases it.
    """
    try:
        info = validate_email(
            email,
            check_deliverability=False,
            globally_deliverable=False,
            allow_domain_literal=True,
        )
    except EmailNotValidError:
        return False

    local_part, _, domain = email.rpartition("@")
    return info.local_part == local_part and info.domain.lower() == domain.lower()
