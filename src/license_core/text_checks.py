from __future__ import annotations

import io

# U+FFFD is what a decoder leaves behind when the source bytes were not valid
# in the declared encoding.
INVALID_TEXT_CHARS: frozenset[str] = frozenset({"\ufffd"})


def check_text(text: str | None, description: str) -> list[str]:
    """Return one warning per invalid character found in ``text``.

    Line numbers are 1-based, character locations 0-based. ``description``
    names the text in the warning (e.g. ``License text for MIT``).
    """
    warnings: list[str] = []
    if not text:
        return warnings
    try:
        with io.StringIO(text, newline=None) as reader:
            for line_number, raw_line in enumerate(reader, 1):
                line = raw_line.rstrip("\n")
                for index, char in enumerate(line):
                    if char in INVALID_TEXT_CHARS:
                        warnings.append(
                            f"Invalid character in {description} at line number "
                            f'{line_number} "{line}" at character location {index}'
                        )
    except (OSError, ValueError):
        warnings.append("IO error reading text")
    return warnings
