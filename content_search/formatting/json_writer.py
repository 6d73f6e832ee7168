"""Streaming, append-only JSON writer."""

import json
from typing import Any, List, Mapping, TextIO

from content_search.errors import FormattingFailure

_ARRAY = "array"
_OBJECT = "object"


class JSONWriter:
    """Emit JSON to a text stream one token at a time.

    Nothing already written is ever revisited: if a caller stops half way the
    stream holds a truncated document.
    """

    def __init__(self, stream: TextIO):
        self._stream = stream
        self._stack: List[str] = []
        self._first: List[bool] = []
        self._key_pending = False
        self._done = False

    # -- containers ---------------------------------------------------------

    def array(self) -> "JSONWriter":
        self._before_value()
        self._open(_ARRAY, "[")
        return self

    def end_array(self) -> "JSONWriter":
        self._close(_ARRAY, "]")
        return self

    def object(self) -> "JSONWriter":
        self._before_value()
        self._open(_OBJECT, "{")
        return self

    def end_object(self) -> "JSONWriter":
        if self._key_pending:
            raise FormattingFailure("Object closed while a key is awaiting its value")
        self._close(_OBJECT, "}")
        return self

    # -- members ------------------------------------------------------------

    def key(self, name: str) -> "JSONWriter":
        if not self._stack or self._stack[-1] != _OBJECT:
            raise FormattingFailure("A key can only be written inside an object")
        if self._key_pending:
            raise FormattingFailure(f"Key {name!r} written before the previous key's value")
        self._separator()
        self._stream.write(_encode(str(name)) + ":")
        self._key_pending = True
        return self

    def value(self, value: Any) -> "JSONWriter":
        encoded = _encode(value)
        self._before_value()
        self._stream.write(encoded)
        self._after_value()
        return self

    def write_value_map(self, mapping: Mapping[str, Any]) -> "JSONWriter":
        """Write *mapping* as one flat object.

        Every member is encoded before anything reaches the stream, so an
        unserializable value leaves no partial object behind.
        """
        members = [_encode(str(k)) + ":" + _encode(v) for k, v in mapping.items()]
        self._before_value()
        self._stream.write("{" + ",".join(members) + "}")
        self._after_value()
        return self

    # -- internals ----------------------------------------------------------

    def _open(self, kind: str, token: str) -> None:
        self._stream.write(token)
        self._stack.append(kind)
        self._first.append(True)

    def _close(self, kind: str, token: str) -> None:
        if not self._stack or self._stack[-1] != kind:
            raise FormattingFailure(f"Unbalanced end of {kind}")
        self._stack.pop()
        self._first.pop()
        self._stream.write(token)
        self._after_value()

    def _before_value(self) -> None:
        if self._done:
            raise FormattingFailure("The top-level value has already been written")
        if not self._stack:
            return
        if self._stack[-1] == _OBJECT:
            if not self._key_pending:
                raise FormattingFailure("A value inside an object needs a key first")
            self._key_pending = False
        else:
            self._separator()

    def _after_value(self) -> None:
        if not self._stack:
            self._done = True

    def _separator(self) -> None:
        if self._first[-1]:
            self._first[-1] = False
        else:
            self._stream.write(",")


def _encode(value: Any) -> str:
    try:
        return json.dumps(value, ensure_ascii=False, allow_nan=False)
    except (TypeError, ValueError) as exc:
        raise FormattingFailure(f"Value is not JSON serializable: {value!r}") from exc
