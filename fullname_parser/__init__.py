from fullname_parser.name_parser import (
    FirstNameNotFoundError,
    FlipFailureError,
    FullNameParser,
    IncorrectInputError,
    LastNameNotFoundError,
    ManyMiddleNamesError,
    MultipleMatchesError,
    NameParserConfig,
    NameParsingError,
    NormalizationService,
    ParsedName,
    normalize,
    parse_name,
)

__all__ = [
    "FirstNameNotFoundError",
    "FlipFailureError",
    "FullNameParser",
    "IncorrectInputError",
    "LastNameNotFoundError",
    "ManyMiddleNamesError",
    "MultipleMatchesError",
    "NameParserConfig",
    "NameParsingError",
    "NormalizationService",
    "ParsedName",
    "normalize",
    "parse_name",
]
