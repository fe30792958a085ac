"""Segment pattern compilation.

A node's ``url_match`` is resolved once, at build time, into a tagged
pattern spec and a compiled ``Matcher``:

    None             -> CompiledMatcher(MATCH_ALL)
    "posts"          -> LiteralPattern("posts")
    ":year-:month"   -> NamedPattern(":year-:month", ("year", "month"))
    re.compile(...)  -> CompiledMatcher(regex, kwarg_keys)

Patterns only ever see a single segment, so there is no splat syntax.
"""

import re
from dataclasses import dataclass

from perch.errors import ConfigurationError

# A ``:name`` token; the name is captured
NAMED_PARAM = re.compile(r":(\w+)")

# Captures one or more characters of a single segment
SEGMENT_WILDCARD = r"([^/]+)"

# Default matcher: accepts any segment, including the empty one
MATCH_ALL = re.compile(r"^.*$")


@dataclass(frozen=True, slots=True)
class LiteralPattern:
    """A segment that must equal ``text`` exactly."""

    text: str


@dataclass(frozen=True, slots=True)
class NamedPattern:
    """A segment template with ``:name`` tokens."""

    text: str
    param_names: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class CompiledMatcher:
    """A pre-built regex, applied verbatim to the segment."""

    regex: re.Pattern[str]
    param_names: tuple[str, ...] = ()


type PatternSpec = LiteralPattern | NamedPattern | CompiledMatcher


@dataclass(frozen=True, slots=True)
class Matcher:
    """A compiled segment matcher.

    ``param_names`` align positionally with the regex groups. Captures
    beyond ``len(param_names)`` are positional.
    """

    spec: PatternSpec
    regex: re.Pattern[str]
    param_names: tuple[str, ...] = ()

    def match(self, segment: str) -> tuple[str | None, ...] | None:
        """Return the captures for *segment*, or ``None`` if it doesn't match.

        The full match is discarded; unmatched optional groups are ``None``.
        """
        match self.spec:
            case CompiledMatcher():
                result = self.regex.search(segment)
            case _:
                result = self.regex.fullmatch(segment)
        if result is None:
            return None
        return result.groups()

    def describe(self) -> str:
        """Human-readable form of the pattern, used by ``perch tree``."""
        match self.spec:
            case LiteralPattern(text=text) | NamedPattern(text=text):
                return repr(text)
            case CompiledMatcher(regex=regex):
                if regex is MATCH_ALL:
                    return "*"
                return f"re({regex.pattern!r})"


def parse_named(text: str) -> LiteralPattern | NamedPattern:
    """Parse a literal pattern string into a spec.

    Raises ``ConfigurationError`` when a ``:`` is not followed by an
    identifier, or when a name is used twice.
    """
    names: list[str] = []
    pos = 0
    while True:
        colon = text.find(":", pos)
        if colon == -1:
            break
        token = NAMED_PARAM.match(text, colon)
        if token is None:
            msg = (
                f"Malformed parameter in pattern {text!r} at position {colon}: "
                "':' must be followed by a name (e.g. ':id')"
            )
            raise ConfigurationError(msg)
        name = token.group(1)
        if name in names:
            msg = f"Duplicate parameter {name!r} in pattern {text!r}"
            raise ConfigurationError(msg)
        names.append(name)
        pos = token.end()

    if not names:
        return LiteralPattern(text)
    return NamedPattern(text, tuple(names))


def _named_regex(text: str) -> re.Pattern[str]:
    """Build the anchored regex for a named pattern, escaping literal text."""
    parts: list[str] = []
    pos = 0
    for token in NAMED_PARAM.finditer(text):
        parts.append(re.escape(text[pos : token.start()]))
        parts.append(SEGMENT_WILDCARD)
        pos = token.end()
    parts.append(re.escape(text[pos:]))
    return re.compile("^" + "".join(parts) + "$")


def compile_spec(spec: PatternSpec) -> Matcher:
    """Compile a pattern spec into a ``Matcher``."""
    match spec:
        case LiteralPattern(text=text):
            return Matcher(spec, re.compile("^" + re.escape(text) + "$"))
        case NamedPattern(text=text, param_names=names):
            parsed = parse_named(text)
            if parsed != spec:
                msg = f"param_names {names!r} do not match the tokens in pattern {text!r}"
                raise ConfigurationError(msg)
            return Matcher(spec, _named_regex(text), names)
        case CompiledMatcher(regex=regex, param_names=names):
            if len(names) > regex.groups:
                msg = (
                    f"{len(names)} kwarg_keys given for pattern {regex.pattern!r}, "
                    f"which only has {regex.groups} group(s)"
                )
                raise ConfigurationError(msg)
            return Matcher(spec, regex, names)
    msg = f"Unsupported pattern spec: {spec!r}"
    raise ConfigurationError(msg)


def compile_pattern(
    url_match: str | re.Pattern[str] | PatternSpec | None,
    kwarg_keys: tuple[str, ...] | None = None,
) -> Matcher:
    """Resolve a node's ``url_match`` (and ``kwarg_keys``) into a ``Matcher``.

    Strings derive their parameter names from ``:name`` tokens, so
    passing ``kwarg_keys`` with a string is a ``ConfigurationError``.
    Regexes take ``kwarg_keys`` as-is; without them every capture is
    positional.
    """
    match url_match:
        case None:
            if kwarg_keys:
                msg = "kwarg_keys require a url_match pattern with groups"
                raise ConfigurationError(msg)
            return compile_spec(CompiledMatcher(MATCH_ALL))
        case str():
            if kwarg_keys is not None:
                msg = (
                    f"kwarg_keys cannot be combined with the string pattern {url_match!r}; "
                    "name the parameters with ':name' tokens instead"
                )
                raise ConfigurationError(msg)
            return compile_spec(parse_named(url_match))
        case re.Pattern():
            return compile_spec(CompiledMatcher(url_match, tuple(kwarg_keys or ())))
        case LiteralPattern() | NamedPattern() | CompiledMatcher():
            if kwarg_keys is not None:
                msg = "kwarg_keys cannot be combined with a pattern spec; set param_names on it"
                raise ConfigurationError(msg)
            return compile_spec(url_match)
    msg = f"url_match must be a string, a compiled regex or None, got {type(url_match).__name__}"
    raise ConfigurationError(msg)
