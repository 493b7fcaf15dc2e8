# Copyright 2025 Roger Cibrian
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Version tokens and the tokenizer.

A version string is scanned left to right into typed tokens. Each token has
a kind (numeric run, letter run, or one of six release-marker families) and
keeps its raw text. Characters that start no token (".", "-", "_", "+", ...)
are skipped.

Classification priority at every position is fixed:

    ALPHA > BETA > PRE > RC > PATCH > POST > NUMERIC > STRING

so "beta2" is one BETA token, never STRING "beta" followed by NUMERIC "2".

Token ordering:
    - NULL (padding for the shorter side of a comparison) equals NUMERIC 0,
      sorts above ALPHA/BETA/PRE/RC and below everything else.
    - NUMERIC beats every textual kind.
    - Marker families rank ALPHA < BETA < PRE < RC < PATCH < POST. Two
      markers of one family compare by revision (missing revision is 0);
      different families ignore the revision.
    - Everything else compares the raw text lexically.

Example:
    >>> from brewversion.versioning.tokens import tokenize
    >>> [str(t) for t in tokenize("1.0.0-beta2")]
    ['1', '0', '0', 'beta2']
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import re


class TokenKind(Enum):
    """Kinds of version tokens."""

    NULL = "null"
    NUMERIC = "numeric"
    STRING = "string"
    ALPHA = "alpha"
    BETA = "beta"
    PRE = "pre"
    RC = "rc"
    PATCH = "patch"
    POST = "post"


# Scan order is classification priority.
_TOKEN_PATTERNS: tuple[tuple[TokenKind, str], ...] = (
    (TokenKind.ALPHA, r"alpha[0-9]*|a[0-9]+"),
    (TokenKind.BETA, r"beta[0-9]*|b[0-9]+"),
    (TokenKind.PRE, r"pre[0-9]*"),
    (TokenKind.RC, r"rc[0-9]*"),
    (TokenKind.PATCH, r"p[0-9]*"),
    (TokenKind.POST, r".post[0-9]+"),
    (TokenKind.NUMERIC, r"[0-9]+"),
    (TokenKind.STRING, r"[a-z]+"),
)

SCAN_PATTERN = re.compile(
    "|".join(f"(?P<{kind.name}>{pattern})" for kind, pattern in _TOKEN_PATTERNS),
    re.IGNORECASE,
)

_FULL_PATTERNS: tuple[tuple[TokenKind, re.Pattern[str]], ...] = tuple(
    (kind, re.compile(pattern, re.IGNORECASE)) for kind, pattern in _TOKEN_PATTERNS
)

# Low -> high; a final release (padding NULL) ranks above ALPHA..RC.
_MARKER_RANK: dict[TokenKind, int] = {
    TokenKind.ALPHA: 0,
    TokenKind.BETA: 1,
    TokenKind.PRE: 2,
    TokenKind.RC: 3,
    TokenKind.PATCH: 4,
    TokenKind.POST: 5,
}
_PRERELEASE_KINDS = frozenset(
    {TokenKind.ALPHA, TokenKind.BETA, TokenKind.PRE, TokenKind.RC}
)

_DIGITS = re.compile(r"[0-9]+")


@dataclass(frozen=True, eq=False)
class Token:
    """One classified unit of a version string.

    Attributes:
        kind: The token kind.
        text: Raw matched text ("" for the NULL token).

    Use ``Token.create`` to classify arbitrary text; constructing a Token
    directly trusts the given kind.
    """

    kind: TokenKind
    text: str

    @classmethod
    def create(cls, text: str) -> Token:
        """Classify a single token's text using the scan priority.

        Raises:
            ValueError: If the whole text matches no token pattern.
        """
        for kind, pattern in _FULL_PATTERNS:
            if pattern.fullmatch(text):
                return cls(kind, text)
        raise ValueError(f"Cannot find a matching token pattern for {text!r}")

    @property
    def value(self) -> int | str | None:
        """Integer for NUMERIC tokens, None for NULL, raw text otherwise."""
        if self.kind is TokenKind.NUMERIC:
            return int(self.text)
        if self.kind is TokenKind.NULL:
            return None
        return self.text

    @property
    def revision(self) -> int:
        """Revision number of a marker token (first digit run, default 0)."""
        m = _DIGITS.search(self.text)
        return int(m.group(0)) if m else 0

    @property
    def is_numeric(self) -> bool:
        return self.kind is TokenKind.NUMERIC

    @property
    def is_null(self) -> bool:
        return self.kind is TokenKind.NULL

    @property
    def is_marker(self) -> bool:
        return self.kind in _MARKER_RANK

    def __str__(self) -> str:
        if self.kind is TokenKind.NUMERIC:
            return str(int(self.text))
        return self.text

    def __repr__(self) -> str:
        if self.is_null:
            return "Token.NULL"
        return f"Token({self.kind.name}, {self.text!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Token):
            return NotImplemented
        return compare_tokens(self, other) == 0

    def __lt__(self, other: Token) -> bool:
        if not isinstance(other, Token):
            return NotImplemented
        return compare_tokens(self, other) < 0

    def __le__(self, other: Token) -> bool:
        if not isinstance(other, Token):
            return NotImplemented
        return compare_tokens(self, other) <= 0

    def __gt__(self, other: Token) -> bool:
        if not isinstance(other, Token):
            return NotImplemented
        return compare_tokens(self, other) > 0

    def __ge__(self, other: Token) -> bool:
        if not isinstance(other, Token):
            return NotImplemented
        return compare_tokens(self, other) >= 0

    def __hash__(self) -> int:
        return hash(self.equality_key())

    def equality_key(self) -> tuple[object, ...]:
        """Key shared by every token that compares equal to this one.

        NULL and NUMERIC 0 share a key; markers of one family share a key per
        revision.
        """
        if self.kind is TokenKind.NULL or (self.is_numeric and self.value == 0):
            return (TokenKind.NULL,)
        if self.is_numeric:
            return (TokenKind.NUMERIC, self.value)
        if self.is_marker:
            return (self.kind, self.revision)
        return (TokenKind.STRING, self.text)


NULL_TOKEN = Token(TokenKind.NULL, "")


def _cmp(a, b) -> int:
    return (a > b) - (a < b)


def _compare_null_to(other: Token) -> int:
    """Order the NULL token against ``other``."""
    if other.kind is TokenKind.NULL:
        return 0
    if other.kind is TokenKind.NUMERIC:
        return 0 if other.value == 0 else -1
    if other.kind in _PRERELEASE_KINDS:
        # "1.0" is newer than "1.0alpha": a missing component beats an
        # explicit early prerelease marker.
        return 1
    return -1


def compare_tokens(left: Token, right: Token) -> int:
    """Compare two tokens, returning -1, 0 or 1.

    Args:
        left: Left-hand token.
        right: Right-hand token.

    Returns:
        Negative, zero or positive as ``left`` sorts before, equal to, or
        after ``right``.
    """
    if left.kind is TokenKind.NULL:
        return _compare_null_to(right)
    if right.kind is TokenKind.NULL:
        return -_compare_null_to(left)

    if left.is_numeric and right.is_numeric:
        return _cmp(left.value, right.value)
    if left.is_numeric:
        return 1
    if right.is_numeric:
        return -1

    if left.is_marker and right.is_marker:
        if left.kind is right.kind:
            return _cmp(left.revision, right.revision)
        return _cmp(_MARKER_RANK[left.kind], _MARKER_RANK[right.kind])

    return _cmp(left.text, right.text)


def tokenize(text: str) -> tuple[Token, ...]:
    """Split a version string into tokens.

    Unmatched characters (separators, punctuation) are skipped, so the
    result may be empty.

    Args:
        text: Version string to scan.

    Returns:
        Tokens in input order.
    """
    return tuple(
        Token(TokenKind[m.lastgroup], m.group(0)) for m in SCAN_PATTERN.finditer(text)
    )
