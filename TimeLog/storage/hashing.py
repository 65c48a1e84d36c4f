import hashlib


def fingerprint(text: str) -> str:
    """SHA-256 hex digest of ``text`` encoded as UTF-8.

    Records that code context existed without persisting it. Not used for
    any kind of authentication.
    """
    return hashlib.sha256(text.encode("utf-8", errors="surrogatepass")).hexdigest()
