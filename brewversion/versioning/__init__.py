"""
Version detection and comparison for brewversion.

This package infers a release version from a download URL or filename and
orders version strings, including prerelease markers (alpha, beta, pre, rc),
patch/post markers, a NULL "no version" sentinel and HEAD development
snapshots.

Modules
-------
tokens : module
    Typed version tokens, the tokenizer and token-level ordering.
version : module
    The Version value type and whole-version comparison.
rules : module
    The ordered cascade of URL/filename extraction rules.

Public API
----------
Version : class
    Immutable version value; ``Version.detect`` / ``Version.parse`` run the
    extraction cascade.
Token, TokenKind : classes
    Tokens produced by ``tokenize``.
tokenize : function
    Split a version string into tokens.
compare_tokens : function
    Order two tokens.
match_spec : function
    Run the cascade and report which rule matched.
VERSION_RULES : tuple
    The extraction rule table, in priority order.

Examples
--------
Detect and compare:

    >>> from brewversion.versioning import Version
    >>> v = Version.detect("https://github.com/org/project/archive/v1.2.3.tar.gz")
    >>> str(v)
    '1.2.3'
    >>> v < Version("1.2.4")
    True

Prerelease handling:

    >>> Version("1.0.0-alpha1") < Version("1.0.0-beta1") < Version("1.0.0-rc1")
    True
    >>> Version("1.0.0-rc1") < Version("1.0.0")
    True

Notes
-----
- Pure string processing: no network or file I/O
- Precedence follows packaging heuristics, not strict semver
"""

from .rules import VERSION_RULES, ExtractionRule, RuleMatch, match_spec, parse_spec
from .tokens import NULL_TOKEN, Token, TokenKind, compare_tokens, tokenize
from .version import Version

__all__ = [
    "VERSION_RULES",
    "ExtractionRule",
    "RuleMatch",
    "match_spec",
    "parse_spec",
    "NULL_TOKEN",
    "Token",
    "TokenKind",
    "compare_tokens",
    "tokenize",
    "Version",
]
