from urllib.parse import urlencode

from .params import ParameterSet

_SEP = "\t"


def to_wire_form(params: ParameterSet) -> str:
    """Encode parameters as an ``application/x-www-form-urlencoded`` body.

    Pairs are emitted in ascending key order and joined by ``&``.
    """
    return urlencode(list(params.items()))


def serialize(params: ParameterSet) -> str:
    """Serialize parameters as ``key<TAB>value<TAB>`` for each pair.

    Raises:
        ValueError: If a key or value contains a tab
    """
    parts: list[str] = []
    for key, value in params.items():
        if _SEP in key or _SEP in value:
            raise ValueError(f"cannot serialize parameter {key!r}: tab characters are not allowed")
        parts.append(f"{key}{_SEP}{value}{_SEP}")
    return "".join(parts)


def deserialize(text: str) -> ParameterSet:
    """Rebuild a ParameterSet from the output of :func:`serialize`.

    A single trailing tab terminates the last pair. A dangling key without a
    value is treated as corruption.

    Raises:
        ValueError: If the token count is odd
    """
    if text.endswith(_SEP):
        text = text[:-1]
    if not text:
        return ParameterSet()

    tokens = text.split(_SEP)
    if len(tokens) % 2:
        raise ValueError(f"malformed parameter serialization: dangling key {tokens[-1]!r}")

    return ParameterSet(zip(tokens[0::2], tokens[1::2]))
