from urllib.parse import urlparse


def is_http_url(v: str) -> bool:
    parsed = urlparse(v.strip())
    return parsed.scheme in ("https", "http") and bool(parsed.netloc)


def validate_http_url(v: str | None) -> str | None:
    """Validate that a URL uses http or https scheme."""
    if v is not None and not is_http_url(v):
        raise ValueError("URL must be a valid http:// or https:// URL")
    return v
