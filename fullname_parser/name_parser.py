"""
Full Name Parsing Module

This module splits a single free-text personal name into its canonical parts: leading
initial, first name, middle name, last name, nicknames, academic title and suffix.

## Overview

The core functionality is provided by the `FullNameParser` class, which runs an ordered
pipeline of extraction stages over a shared "remaining text" buffer. Each stage matches its
own pattern, stores what it found and cuts the matched text out before the next stage runs:

1. **Academic title**: "Mr.", "Dr", "Prof." at the start of the name
2. **Nicknames**: bracketed or quoted spans, e.g. `(Martin)` or `"O. J."`
3. **Suffix**: "Jr.", "Esq.", numerals, plus trailing comma-separated extras
4. **Comma flip**: "Last, First Middle" is reordered to "First Middle Last"
5. **Last name**: the final token together with any prefix particles ("van der", "de la")
6. **Leading initial**: a one-letter initial in front of a real first name
7. **First name**: the first remaining token
8. **Middle name**: whatever is left

## Architecture

- **NormalizationService**: Pure whitespace/comma hygiene and the fix-case pass
- **NameParserConfig**: Immutable configuration (lexical tables, flags, requested part)
- **ParserPatterns**: Regexes compiled once per configuration
- **FullNameParser**: The stage pipeline and the central error handler
- **ParsedName**: Result record with the seven parts and the collected error messages

## Usage Examples

```python
from fullname_parser.name_parser import FullNameParser, NameParserConfig, parse_name

parsed = parse_name("Dr. John P. Doe-Ray, Jr.")
# parsed.academic_title == "Dr.", parsed.first_name == "John", parsed.middle_name == "P."
# parsed.last_name == "Doe-Ray", parsed.suffix == "Jr."

parse_name("Davis, David", part="last")
# Returns: "Davis"

parser = FullNameParser(NameParserConfig.create_default().with_stop_on_error(False))
parser.parse(None).errors
# Returns: ["Incorrect input to parse."]
```

## Error Handling

Every problem found during a parse is recorded on `ParsedName.errors`. Hard errors
(`IncorrectInputError`, `FirstNameNotFoundError`, `LastNameNotFoundError`,
`FlipFailureError`, `MultipleMatchesError`) are also raised when `stop_on_error` is set,
which is the default. `ManyMiddleNamesError` is a soft warning: it is recorded and logged
but never raised.

## Thread Safety

A configured parser holds no per-parse state. Each call to `parse` works on its own buffer
and result record, so one parser (and one config) can be shared between threads.
"""

from __future__ import annotations
import logging
import re
from dataclasses import dataclass, field, replace
from functools import cached_property
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from fullname_parser.name_parser_data import (
    ACADEMIC_TITLES,
    DEFAULT_PART,
    ERROR_MESSAGES,
    FORCED_CASE_LOOKUP,
    NAME_PARTS,
    NUMERAL_SUFFIXES,
    PART_ATTRIBUTES,
    PREFIXES,
    SUFFIXES,
)


# ════════════════════════════════════════════════════════════════════════════════
# COMPILED REGEX PATTERNS
# ════════════════════════════════════════════════════════════════════════════════

# Everything matched by a stage pattern is removed from the buffer, but only the
# designated group is stored. Each pattern assumes the earlier stages already ran.

_NBSP = "\u00a0"
_WHITESPACE_PATTERN = re.compile(r"\s+")
_EDGE_PATTERN = re.compile(r"^[\s,]+|[\s,]+$")
_COMMA_RUN_PATTERN = re.compile(r"(?:, ?){2,}")

# Opening delimiter, shortest inner text, closing delimiter
_NICKNAMES_PATTERN = re.compile(r"([\[('‘“\"]+)(.+?)(['’”\"\])]+)", re.IGNORECASE)

# Lookahead is neither returned nor removed
_LEADING_INITIAL_PATTERN = re.compile(r"^(.\.*)(?= [^\W\d_]{2})", re.IGNORECASE)

_FIRST_NAME_PATTERN = re.compile(r"^[^ ]+", re.IGNORECASE)

# One ", TOKEN" step of a trailing suffix list such as "Jr., CLU, CFP, LUTC"
_EXTRA_SUFFIX_PATTERN = re.compile(r",+ +\S+?(?=,+ |$)")

# Templates filled in with the configured lexical tables.
# A title cannot be the last word: it needs a trailing space.
_TITLE_TEMPLATE = r"((^| )({titles})\.* )"
# Ordinary suffixes may carry dots, numeral suffixes may not
_SUFFIX_TEMPLATE = r" ((?:{suffixes})\.*|(?:{numerals}))(?=$| |,)"
_SUFFIX_REMOVAL_TEMPLATE = r" ({suffix})($| |,)"
# Never at the start of the buffer: a last name follows at least a first name or initial
_LAST_NAME_TEMPLATE = r"(?!^)\b(([^ ]+ y|{prefixes})\.? )*[^ ]+$"


def _alternation(entries: Iterable[str]) -> str:
    """Join lexical entries into a regex alternation, keeping their order."""
    escaped = [re.escape(entry) for entry in entries if entry]
    # An empty table must never match
    return "|".join(escaped) if escaped else "(?!)"


# ════════════════════════════════════════════════════════════════════════════════
# ERROR TYPES
# ════════════════════════════════════════════════════════════════════════════════

HARD = "hard"
SOFT = "soft"


class NameParsingError(Exception):
    """Any condition raised while parsing a name."""

    message_template = ""
    severity = HARD

    def __init__(self, message: Optional[str] = None, **payload: Any):
        self.payload = payload
        self.message = message or self.format_message(**payload)
        super().__init__(self.message)

    @classmethod
    def format_message(cls, **payload: Any) -> str:
        return cls.message_template.format(**payload)

    @property
    def is_soft(self) -> bool:
        return self.severity == SOFT


class IncorrectInputError(NameParsingError):
    """The value handed to `parse` is not a string."""

    message_template = ERROR_MESSAGES["incorrect_input"]


class FirstNameNotFoundError(NameParsingError):
    message_template = ERROR_MESSAGES["first_name_not_found"]


class LastNameNotFoundError(NameParsingError):
    message_template = ERROR_MESSAGES["last_name_not_found"]


class FlipFailureError(NameParsingError):
    """More than one delimiter left, so "Last, First" order cannot be undone."""

    message_template = ERROR_MESSAGES["flip_failure"]

    def __init__(self, delimiter: str, full_name: Optional[str], message: Optional[str] = None):
        self.delimiter = delimiter
        self.full_name = full_name
        super().__init__(message, delimiter=delimiter, full_name=full_name)


class MultipleMatchesError(NameParsingError):
    """A single removal step cut more than one occurrence out of the buffer."""

    message_template = ERROR_MESSAGES["multiple_matches"]


class ManyMiddleNamesError(NameParsingError):
    """Soft warning: the middle name has more than two words, the input is probably garbled."""

    message_template = ERROR_MESSAGES["many_middle_names"]
    severity = SOFT

    def __init__(self, count: int, message: Optional[str] = None):
        self.count = count
        super().__init__(message, count=count)


# ════════════════════════════════════════════════════════════════════════════════
# RESULT TYPES
# ════════════════════════════════════════════════════════════════════════════════


@dataclass
class ParsedName:
    """Parts of one parsed name plus the messages of every error met on the way."""

    full_name: Optional[str] = None
    leading_initial: Optional[str] = None
    first_name: Optional[str] = None
    middle_name: Optional[str] = None
    last_name: Optional[str] = None
    nicknames: Optional[str] = None
    academic_title: Optional[str] = None
    suffix: Optional[str] = None
    errors: List[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.errors

    def add_error(self, error: NameParsingError) -> "ParsedName":
        self.errors.append(error.message)
        return self

    def get_part(self, part: str) -> Union["ParsedName", Optional[str], List[str]]:
        """
        Return a single part of the name.

        Args:
            part: One of "title", "first", "middle", "last", "nick", "suffix", "error".
                "all" (or anything unrecognised) returns the whole record.

        Returns:
            The record itself, the requested field, or the error list for "error"
        """
        attribute = PART_ATTRIBUTES.get(part)
        if attribute is None:
            return self
        return getattr(self, attribute)

    def to_dict(self) -> Dict[str, Union[Optional[str], List[str]]]:
        return {
            "full_name": self.full_name,
            "leading_initial": self.leading_initial,
            "first_name": self.first_name,
            "middle_name": self.middle_name,
            "last_name": self.last_name,
            "nicknames": self.nicknames,
            "academic_title": self.academic_title,
            "suffix": self.suffix,
            "errors": list(self.errors),
        }


# ════════════════════════════════════════════════════════════════════════════════
# IMMUTABLE CONFIGURATION DATA
# ════════════════════════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class ParserPatterns:
    """Stage patterns built from one configuration's lexical tables."""

    title: re.Pattern[str]
    suffix: re.Pattern[str]
    last_name: re.Pattern[str]

    @classmethod
    def compile(cls, config: "NameParserConfig") -> "ParserPatterns":
        return cls(
            title=re.compile(_TITLE_TEMPLATE.format(titles=_alternation(config.academic_titles)), re.IGNORECASE),
            suffix=re.compile(
                _SUFFIX_TEMPLATE.format(
                    suffixes=_alternation(config.suffixes), numerals=_alternation(config.numeral_suffixes)
                ),
                re.IGNORECASE,
            ),
            last_name=re.compile(_LAST_NAME_TEMPLATE.format(prefixes=_alternation(config.prefixes)), re.IGNORECASE),
        )


@dataclass(frozen=True)
class NameParserConfig:
    """Immutable parser configuration, safe to share between parsers and threads."""

    # Lexical tables (case-insensitive, order is the regex alternation order)
    suffixes: Tuple[str, ...] = SUFFIXES
    numeral_suffixes: Tuple[str, ...] = NUMERAL_SUFFIXES
    prefixes: Tuple[str, ...] = PREFIXES
    academic_titles: Tuple[str, ...] = ACADEMIC_TITLES

    # Missing mandatory parts are errors, missing optional parts are just absent
    mandatory_first_name: bool = True
    mandatory_last_name: bool = True

    # Part returned by `parse`
    part: str = DEFAULT_PART

    fix_case: bool = False
    stop_on_error: bool = True

    def __post_init__(self) -> None:
        for table in ("suffixes", "numeral_suffixes", "prefixes", "academic_titles"):
            object.__setattr__(self, table, tuple(getattr(self, table)))
        for flag in ("mandatory_first_name", "mandatory_last_name", "fix_case", "stop_on_error"):
            object.__setattr__(self, flag, bool(getattr(self, flag)))

        part = str(self.part).lower()
        if part not in NAME_PARTS:
            logging.debug(f"Unknown name part '{self.part}', falling back to '{DEFAULT_PART}'")
            part = DEFAULT_PART
        object.__setattr__(self, "part", part)

    @classmethod
    def create_default(cls) -> "NameParserConfig":
        """Factory method for the default configuration."""
        return cls()

    @classmethod
    def from_options(cls, options: Optional[Mapping[str, Any]] = None) -> "NameParserConfig":
        """
        Build a configuration from a loose options mapping.

        Recognised keys: suffixes, numeral_suffixes, prefixes, academic_titles,
        mandatory_first_name, mandatory_last_name, part, fix_case, throws
        (alias stop_on_error). Lexical lists replace the defaults wholesale;
        unknown keys are ignored.
        """
        options = dict(options or {})
        if "throws" in options and "stop_on_error" not in options:
            options["stop_on_error"] = options.pop("throws")

        known = {name: options[name] for name in cls.__dataclass_fields__ if options.get(name) is not None}
        ignored = set(options) - set(cls.__dataclass_fields__) - {"throws"}
        if ignored:
            logging.debug(f"Ignoring unknown parser options: {sorted(ignored)}")
        return cls(**known)

    def with_part(self, part: str) -> "NameParserConfig":
        """Immutable update method."""
        return replace(self, part=part)

    def with_stop_on_error(self, stop_on_error: bool) -> "NameParserConfig":
        return replace(self, stop_on_error=stop_on_error)

    def with_fix_case(self, fix_case: bool) -> "NameParserConfig":
        return replace(self, fix_case=fix_case)

    def with_mandatory_parts(self, first_name: bool = True, last_name: bool = True) -> "NameParserConfig":
        return replace(self, mandatory_first_name=first_name, mandatory_last_name=last_name)

    def with_lexicon(self, **tables: Iterable[str]) -> "NameParserConfig":
        """Replace one or more lexical tables (suffixes, numeral_suffixes, prefixes, academic_titles)."""
        unknown = set(tables) - {"suffixes", "numeral_suffixes", "prefixes", "academic_titles"}
        if unknown:
            raise ValueError(f"Unknown lexical tables: {sorted(unknown)}")
        return replace(self, **tables)

    @cached_property
    def patterns(self) -> ParserPatterns:
        return ParserPatterns.compile(self)


# ════════════════════════════════════════════════════════════════════════════════
# NORMALIZATION SERVICE
# ════════════════════════════════════════════════════════════════════════════════


class NormalizationService:
    """Pure string hygiene used by every stage, plus the fix-case pass."""

    def __init__(self, forced_case: Mapping[str, str] = FORCED_CASE_LOOKUP):
        self._forced_case = forced_case

    def normalize(self, text: str) -> str:
        """
        Remove extra whitespace and punctuation from a string.

        Trims whitespace and commas from both ends and collapses internal whitespace
        runs to one space, unless the string holds a non-breaking space, in which case
        the internal spacing is left alone. Runs of two or more commas become ", ".
        Idempotent: normalize(normalize(s)) == normalize(s).
        """
        text = _EDGE_PATTERN.sub("", text)
        if _NBSP not in text:
            text = _WHITESPACE_PATTERN.sub(" ", text)
        text = _COMMA_RUN_PATTERN.sub(", ", text)
        return _EDGE_PATTERN.sub("", text)

    def fix_case(self, word: str) -> str:
        """Capitalize a word, except for entries of the forced-case list which keep their own casing."""
        forced = self._forced_case.get(word.lower())
        if forced is not None:
            return forced
        lowered = word.lower()
        return lowered[:1].upper() + lowered[1:]

    def fix_case_words(self, text: str) -> str:
        return " ".join(self.fix_case(word) for word in text.split(" "))


# ════════════════════════════════════════════════════════════════════════════════
# MAIN PARSER CLASS
# ════════════════════════════════════════════════════════════════════════════════


@dataclass
class _ParseState:
    """Working state of one parse: the remaining buffer and the record being filled."""

    result: ParsedName
    buffer: str = ""


class FullNameParser:
    """Splits a name string into its parts with an ordered pipeline of extraction stages."""

    def __init__(self, config: Optional[NameParserConfig] = None):
        self._config = config or NameParserConfig.create_default()
        self._patterns = self._config.patterns
        self._normalizer = NormalizationService()

        # Order matters: every stage relies on the text cut out by the ones before it
        self._stages: Tuple[Callable[[_ParseState], None], ...] = (
            self._find_academic_title,
            self._find_nicknames,
            self._find_suffix,
            self._flip_name_token,
            self._find_last_name,
            self._find_leading_initial,
            self._find_first_name,
            self._find_middle_name,
        )

    @property
    def config(self) -> NameParserConfig:
        return self._config

    def parse(self, name: Any) -> Union[ParsedName, Optional[str], List[str]]:
        """
        Main API method: parse a name into its constituent parts.

        Returns the full `ParsedName`, or the single part selected by `config.part`.
        Raises a `NameParsingError` subclass on hard errors when `config.stop_on_error`
        is set; otherwise the errors are only collected on the result.
        """
        state = _ParseState(result=ParsedName())

        if not isinstance(name, str):
            self._handle_error(state, IncorrectInputError())
            return state.result.get_part(self._config.part)

        full_name = self._normalizer.normalize(name)
        if self._config.fix_case:
            full_name = self._normalizer.fix_case_words(full_name)
        state.result.full_name = full_name
        state.buffer = full_name

        for stage in self._stages:
            stage(state)

        return state.result.get_part(self._config.part)

    def _handle_error(self, state: _ParseState, error: NameParsingError) -> None:
        """Record the error, then raise it if it is hard and the parser stops on errors."""
        state.result.add_error(error)
        if error.is_soft:
            logging.warning(f"{error.message} in '{state.result.full_name}'")
            return
        if self._config.stop_on_error:
            raise error
        logging.debug(f"Recorded parse error: {error.message}")

    # ────────────────────────────────────────────────────────────────────
    # Buffer primitives
    # ────────────────────────────────────────────────────────────────────

    def _find_with_pattern(self, state: _ParseState, pattern: re.Pattern[str], group: int = 0) -> str:
        """Return the normalized group of the first match, or an empty string."""
        match = pattern.search(state.buffer)
        if match is None:
            return ""
        # No need for commas and spaces around name parts
        return self._normalizer.normalize(match.group(group) or "")

    def _remove_with_pattern(self, state: _ParseState, pattern: re.Pattern[str], replacement: str = " ") -> None:
        remaining, count = pattern.subn(replacement, state.buffer)
        if count > 1:
            self._handle_error(state, MultipleMatchesError())
        state.buffer = self._normalizer.normalize(remaining)

    # ────────────────────────────────────────────────────────────────────
    # Stages
    # ────────────────────────────────────────────────────────────────────

    def _find_academic_title(self, state: _ParseState) -> None:
        match = self._patterns.title.search(state.buffer)
        if match is None:
            return
        title = self._normalizer.normalize(match.group(1))
        if not title:
            return
        state.result.academic_title = title
        # Not re-normalized: the separator left behind keeps a lone following word
        # ("Mr. Hyde") off the start of the buffer, so it can still be a last name.
        state.buffer = state.buffer[: match.start(1)] + " " + state.buffer[match.end(1) :]

    def _find_nicknames(self, state: _ParseState) -> None:
        nicknames = self._find_with_pattern(state, _NICKNAMES_PATTERN, 2)
        if not nicknames:
            return
        # The global case pass saw a bracket or quote as the first character
        if self._config.fix_case:
            nicknames = self._normalizer.fix_case(nicknames)
        state.result.nicknames = nicknames
        self._remove_with_pattern(state, _NICKNAMES_PATTERN)

    def _find_suffix(self, state: _ParseState) -> None:
        match = self._patterns.suffix.search(state.buffer)
        if match is None:
            return
        extras = self._consume_extra_suffixes(state.buffer[match.end() :])
        suffix = self._normalizer.normalize(match.group(1) + extras)
        if not suffix:
            return

        removal = re.compile(_SUFFIX_REMOVAL_TEMPLATE.format(suffix=re.escape(suffix)), re.IGNORECASE)
        # Keep the boundary character that followed the suffix
        self._remove_with_pattern(state, removal, r"\2")
        state.result.suffix = suffix

    def _consume_extra_suffixes(self, rest: str) -> str:
        """
        Return `rest` if it is made only of ", TOKEN" steps, otherwise an empty string.

        Extra suffixes ("CLU", "CFP" in "Jr., CLU, CFP") only count when they run up to
        the end of the name. Every step consumes at least three characters, so the loop
        ends after at most one step per remaining comma-separated token.
        """
        position = 0
        while position < len(rest):
            step = _EXTRA_SUFFIX_PATTERN.match(rest, position)
            if step is None:
                return ""
            position = step.end()
        return rest

    def _flip_name_token(self, state: _ParseState, delimiter: str = ",") -> None:
        """Flip the front and back parts of the buffer around a single delimiter."""
        parts = state.buffer.split(delimiter)
        if len(parts) == 2:
            state.buffer = self._normalizer.normalize(f"{parts[1]} {parts[0]}")
        elif len(parts) > 2:
            self._handle_error(state, FlipFailureError(delimiter, state.result.full_name))

    def _find_last_name(self, state: _ParseState) -> None:
        last_name = self._find_with_pattern(state, self._patterns.last_name)
        if last_name:
            state.result.last_name = last_name
            self._remove_with_pattern(state, self._patterns.last_name)
        elif self._config.mandatory_last_name:
            self._handle_error(state, LastNameNotFoundError())

    def _find_leading_initial(self, state: _ParseState) -> None:
        leading_initial = self._find_with_pattern(state, _LEADING_INITIAL_PATTERN, 1)
        if leading_initial:
            state.result.leading_initial = leading_initial
            self._remove_with_pattern(state, _LEADING_INITIAL_PATTERN)

    def _find_first_name(self, state: _ParseState) -> None:
        first_name = self._find_with_pattern(state, _FIRST_NAME_PATTERN)
        if first_name:
            state.result.first_name = first_name
            self._remove_with_pattern(state, _FIRST_NAME_PATTERN)
        elif self._config.mandatory_first_name:
            self._handle_error(state, FirstNameNotFoundError())

    def _find_middle_name(self, state: _ParseState) -> None:
        middle_name = self._normalizer.normalize(state.buffer)
        count = len(middle_name.split(" "))
        if count > 2:
            self._handle_error(state, ManyMiddleNamesError(count))
        if middle_name:
            state.result.middle_name = middle_name


# ════════════════════════════════════════════════════════════════════════════════
# MODULE-LEVEL CONVENIENCE FUNCTIONS
# ════════════════════════════════════════════════════════════════════════════════

# Global parser instance for module-level functions
_global_parser: Optional[FullNameParser] = None


def _get_global_parser() -> FullNameParser:
    """Get or create the global default parser."""
    global _global_parser
    if _global_parser is None:
        _global_parser = FullNameParser()
    return _global_parser


def parse_name(name: Any, **options: Any) -> Union[ParsedName, Optional[str], List[str]]:
    """
    Module-level convenience function for name parsing.

    Args:
        name: Input name string
        **options: Parser options, see `NameParserConfig.from_options`

    Returns:
        ParsedName, or the part selected with the `part` option
    """
    if not options:
        return _get_global_parser().parse(name)
    return FullNameParser(NameParserConfig.from_options(options)).parse(name)


def normalize(text: str) -> str:
    """Normalize a name string the way every parser stage does."""
    return NormalizationService().normalize(text)
