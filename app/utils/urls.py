"""URL helpers for Vercel host strings."""

_SCHEMES = ("https://", "http://")


def with_scheme(host: str | None) -> str | None:
    """Prefix a bare Vercel host with ``https://``.

    Values that already carry a scheme are returned unchanged, so applying
    this twice never doubles the prefix. ``None`` and empty strings stay
    absent.
    """
    if not host:
        return None
    if host.lower().startswith(_SCHEMES):
        return host
    return f"https://{host}"
