"""Terminal message helpers for the STORYLINE CLI.

User-visible status lines go to **stderr**, so stdout stays free for anything
a caller may want to pipe. Emoji glyphs fall back to ASCII on terminals that
cannot encode them.
"""

import click

WARNING_GLYPHS = ("⚠️", "[!]")  # pragma: no mutate
SUCCESS_GLYPHS = ("✅", "[OK]")  # pragma: no mutate
ERROR_GLYPHS = ("❌", "[X]")  # pragma: no mutate


def _supports_character(character: str) -> bool:
    """Return True if `character` can be encoded on stderr's current encoding."""
    stream = click.get_text_stream("stderr")
    encoding = getattr(stream, "encoding", None) or "ascii"
    try:
        character.encode(encoding)
    except UnicodeEncodeError:
        return False
    return True


def glyph(choices: tuple[str, str]) -> str:
    """Pick the emoji of an ``(emoji, ascii)`` pair if stderr can show it."""
    emoji, fallback = choices
    return emoji if _supports_character(emoji) else fallback


def warn(msg: str) -> None:
    """Emit a yellow, bold warning line to stderr."""
    click.secho(f"{glyph(WARNING_GLYPHS)}  {msg}", fg="yellow", bold=True, err=True)


def success(msg: str) -> None:
    """Emit a green, bold success line to stderr."""
    click.secho(f"{glyph(SUCCESS_GLYPHS)}  {msg}", fg="green", bold=True, err=True)


def error(msg: str) -> None:
    """Emit a red, bold error line to stderr."""
    click.secho(f"{glyph(ERROR_GLYPHS)}  {msg}", fg="red", bold=True, err=True)
