from bucketwise.errors import EmptyNameError


def derive_key(name: str) -> str:
    """Bucket key for a file name: its first character, lowercased."""
    if not name:
        raise EmptyNameError()
    return name[0].lower()
