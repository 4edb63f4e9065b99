"""HTML form bodies.

Both forms in the app post ``application/x-www-form-urlencoded``;
that is the only encoding understood here.
"""

from collections.abc import Iterator, Mapping
from urllib.parse import parse_qs

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


class FormData(Mapping[str, str]):
    """Read-only form fields.

    Indexing and ``get`` give the first value sent for a field;
    ``get_list`` gives all of them.
    """

    __slots__ = ("_fields",)

    def __init__(self, fields: dict[str, list[str]] | None = None) -> None:
        self._fields = fields or {}

    def __getitem__(self, key: str) -> str:
        return self._fields[key][0]

    def __iter__(self) -> Iterator[str]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __repr__(self) -> str:
        return f"FormData({dict(self)!r})"

    def get_list(self, key: str) -> list[str]:
        return list(self._fields.get(key, ()))


def parse_form_data(body: bytes, content_type: str | None) -> FormData:
    """Parse *body* as a URL-encoded form.

    No content type counts as URL-encoded. Any other content type gives an
    empty form, so handlers see every field as missing. Invalid UTF-8 is
    replaced with U+FFFD.
    """
    media_type = (content_type or FORM_CONTENT_TYPE).partition(";")[0].strip().lower()
    if media_type != FORM_CONTENT_TYPE:
        return FormData()
    return FormData(parse_qs(body.decode("utf-8", errors="replace"), keep_blank_values=True))
