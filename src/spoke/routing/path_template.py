"""Route templates with literal, parameter and verb-suffixed segments.

A template is a ``/``-separated sequence of segments:

- ``plans`` is a literal segment and matches byte for byte.
- ``:planId`` is a parameter and matches any single non-empty path segment.
- ``stops:import`` is a literal too: a colon that does not start the segment
  is part of the resource name (a custom verb in Google API style).
- ``:planId:optimize`` is a parameter followed by a literal verb suffix. The
  path segment must end with ``:optimize`` and what precedes it is the
  parameter value, which must not be empty.

A backslash escapes the next character, so ``\\:import`` is always a literal
colon, even at the start of a segment.
"""

from typing import Any, ClassVar, Self, override

from pydantic import BaseModel, ConfigDict, PrivateAttr

PARAMETER_MARKER = ":"
ESCAPE_CHAR = "\\"


class LiteralSegment(BaseModel):
    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)

    text: str

    def match(self, segment: str) -> str | None:
        return "" if segment == self.text else None


class ParameterSegment(BaseModel):
    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)

    name: str
    suffix: str = ""

    def match(self, segment: str) -> str | None:
        """Return the bound value, or None if the segment does not match."""
        if not segment.endswith(self.suffix):
            return None

        value = segment[: len(segment) - len(self.suffix)]
        return value or None


Segment = LiteralSegment | ParameterSegment


def _unescape(text: str) -> str:
    chars: list[str] = []
    escaped = False
    for char in text:
        if escaped:
            chars.append(char)
            escaped = False
        elif char == ESCAPE_CHAR:
            escaped = True
        else:
            chars.append(char)

    if escaped:
        # A trailing backslash escapes nothing and is kept as is.
        chars.append(ESCAPE_CHAR)
    return "".join(chars)


def _parse_segment(raw: str) -> Segment:
    if not raw.startswith(PARAMETER_MARKER):
        return LiteralSegment(text=_unescape(raw))

    end = 1
    while end < len(raw) and (raw[end].isalnum() or raw[end] == "_"):
        end += 1

    name = raw[1:end]
    if not name:
        raise ValueError(f"Parameter segment '{raw}' has no name")

    return ParameterSegment(name=name, suffix=_unescape(raw[end:]))


class PathTemplate(BaseModel):
    """A parsed route template, matched segment by segment against a pathname."""

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)

    template: str

    _segments: tuple[Segment, ...] = PrivateAttr()

    @override
    def model_post_init(self, context: Any, /) -> None:
        if not self.template.startswith("/"):
            raise ValueError(f"Path template '{self.template}' must start with '/'")

        self._segments = tuple(
            _parse_segment(raw) for raw in self.template.split("/")[1:]
        )
        super().model_post_init(context)

    @classmethod
    def parse(cls, template: str) -> Self:
        return cls(template=template)

    @property
    def segments(self) -> tuple[Segment, ...]:
        return self._segments

    def match(self, path: str) -> dict[str, str] | None:
        """Match a pathname (no query string) against the template.

        Parameters
        ----------
        path : str
            The pathname to match, starting with ``/``.

        Returns
        -------
        dict[str, str] | None
            The parameter bindings if the path matches, otherwise None.
        """
        if not path.startswith("/"):
            return None

        parts = path.split("/")[1:]
        if len(parts) != len(self._segments):
            return None

        bindings: dict[str, str] = {}
        for segment, part in zip(self._segments, parts):
            value = segment.match(part)
            if value is None:
                return None
            if isinstance(segment, ParameterSegment):
                bindings[segment.name] = value

        return bindings

    def matches(self, path: str) -> bool:
        return self.match(path) is not None

    def __str__(self) -> str:
        return self.template


def has_custom_verb(path: str) -> bool:
    """Whether the last segment of a pathname ends in a custom verb (``stops:import``)."""
    last = path.rsplit("/", 1)[-1]
    return last.find(PARAMETER_MARKER) > 0
