import re
from typing import Any, Iterable, Tuple

# Everything outside this set (besides space) is percent-encoded byte by byte
_UNSAFE = re.compile(rb"[^ a-zA-Z0-9_.\-]+")


def _percent_encode(match: re.Match) -> bytes:
    return b"".join(b"%%%02X" % byte for byte in match.group(0))


def form_escape(value: Any) -> str:
    """Form-encode a value: unreserved characters pass, space becomes '+'"""
    text = "" if value is None else str(value)
    escaped = _UNSAFE.sub(_percent_encode, text.encode("utf-8"))
    return escaped.decode("ascii").replace(" ", "+")


def to_query_string(params: Iterable[Tuple[str, Any]]) -> str:
    """Join (key, value) pairs in the given order"""
    return "&".join(f"{form_escape(key)}={form_escape(value)}" for key, value in params)
