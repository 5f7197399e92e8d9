"""Registry of supported text encodings for string-based lookup.

This module enables encoding selection by name from configs.
"""

from typing import Union

from filelog.utils.utils import TextEncoding


def _normalize(name: str) -> str:
    return name.strip().lower().replace("-", "").replace("_", "")


ENCODING_REGISTRY = {_normalize(encoding.value): encoding for encoding in TextEncoding}

ENCODING_ALIASES = {
    "utf": TextEncoding.UTF8,
    "usascii": TextEncoding.ASCII,
    "iso88591": TextEncoding.LATIN1,
    "latin": TextEncoding.LATIN1,
    "windows1252": TextEncoding.CP1252,
}


def load_encoding(name: Union[str, TextEncoding]) -> TextEncoding:
    """Resolve an encoding name against the registry.

    Lookup ignores case, hyphens and underscores, so ``"UTF_8"`` and
    ``"utf-8"`` resolve to the same encoding.

    Args:
        name (Union[str, TextEncoding]): Encoding name, or an already resolved encoding.

    Returns:
        The matching ``TextEncoding``.

    Raises:
        ValueError: If the encoding is not supported.
    """
    if isinstance(name, TextEncoding):
        return name
    key = _normalize(name)
    if key in ENCODING_REGISTRY:
        return ENCODING_REGISTRY[key]
    if key in ENCODING_ALIASES:
        return ENCODING_ALIASES[key]
    raise ValueError(f"Unsupported encoding: {name}")
