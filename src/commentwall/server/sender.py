"""Write a ``Response`` to the ASGI ``send`` channel.

Every response goes out as exactly two messages: the start message with
status and headers, then the whole body.
"""

from commentwall._internal.asgi import Send
from commentwall.http.response import Response

_BODYLESS_STATUSES = frozenset({204, 304})


def _body_for(response: Response) -> bytes:
    if response.status < 200 or response.status in _BODYLESS_STATUSES:
        return b""
    return response.body_bytes


def encode_headers(response: Response, content_length: int) -> list[tuple[bytes, bytes]]:
    """Header pairs for the start message, names lower-cased, latin-1 encoded."""
    pairs = [("content-type", response.content_type), *response.headers]
    pairs.extend(("set-cookie", cookie.to_header_value()) for cookie in response.cookies)
    pairs.append(("content-length", str(content_length)))
    return [(name.lower().encode("latin-1"), value.encode("latin-1")) for name, value in pairs]


async def send_response(response: Response, send: Send) -> None:
    body = _body_for(response)
    await send(
        {
            "type": "http.response.start",
            "status": response.status,
            "headers": encode_headers(response, len(body)),
        }
    )
    await send({"type": "http.response.body", "body": body, "more_body": False})
