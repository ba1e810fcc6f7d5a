"""Chat color code translation."""

from typing import Final


COLOR_CHAR: Final[str] = "§"
ALL_CODES: Final[str] = "0123456789AaBbCcDdEeFfKkLlMmNnOoRrXx"


def translate_alternate_color_codes(alt_char: str, text: str) -> str:
    """Replace ``alt_char`` followed by a format code with the real color char.

    ``"&aHello"`` becomes ``"\\u00a7aHello"``. Codes are lower-cased; an
    ``alt_char`` not followed by a valid code is left alone.
    """
    chars = list(text)
    for i in range(len(chars) - 1):
        if chars[i] == alt_char and chars[i + 1] in ALL_CODES:
            chars[i] = COLOR_CHAR
            chars[i + 1] = chars[i + 1].lower()
    return "".join(chars)


def strip_color(text: str) -> str:
    """Remove all color sequences, for logging."""
    result = []
    skip = False
    for i, char in enumerate(text):
        if skip:
            skip = False
            continue
        if char == COLOR_CHAR and i + 1 < len(text) and text[i + 1].lower() in ALL_CODES.lower():
            skip = True
            continue
        result.append(char)
    return "".join(result)
