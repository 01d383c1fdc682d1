import hashlib

SHORT_CODE_LENGTH = 7
# MD5 hex digest: 128 bits, 32 characters
DIGEST_LENGTH = 32


def url_digest(url: str) -> str:
    """Full hex digest of the URL; every short code is a prefix of it."""
    return hashlib.md5(url.encode("utf-8")).hexdigest()


def generate_short_code(url: str, length: int = SHORT_CODE_LENGTH) -> str:
    """Deterministic fixed-length code for a URL (lowercase hex)."""
    if not 1 <= length <= DIGEST_LENGTH:
        raise ValueError(f"length must be between 1 and {DIGEST_LENGTH}, got {length}")
    return url_digest(url)[:length]


def candidate_codes(url: str, length: int, max_length: int):
    """Yield the code for `url` at `length`, then each longer prefix up to `max_length`.

    Concurrent requests for the same URL walk the same sequence.
    """
    if length < 1:
        raise ValueError(f"length must be at least 1, got {length}")
    digest = url_digest(url)
    for size in range(length, min(max_length, DIGEST_LENGTH) + 1):
        yield digest[:size]
