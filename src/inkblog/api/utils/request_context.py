from fastapi import Request


def extract_client_ip(request: Request) -> str | None:
    """
    Extract the client IP from the request.
    Priority:
      1) X-Forwarded-For (first IP)
      2) X-Real-IP
      3) CF-Connecting-IP
      4) request.client.host
    """
    xff = request.headers.get("x-forwarded-for")
    ip: str | None = None
    if xff:
        parts = [p.strip() for p in xff.split(",") if p.strip()]
        if parts:
            ip = parts[0]
    if not ip:
        ip = request.headers.get("x-real-ip") or request.headers.get("cf-connecting-ip")
    if not ip and request.client:
        ip = request.client.host
    return ip


def parse_int(value: str | None, default: int) -> int:
    """Lenient integer query parsing: anything non-numeric yields ``default``."""
    if value is None:
        return default
    try:
        return int(value.strip())
    except ValueError:
        return default


def parse_flag(value: str | None) -> bool:
    return (value or "").strip().lower() in ("1", "true", "yes")
