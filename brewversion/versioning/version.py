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

"""The Version value type and whole-version comparison.

A Version is one of three things:

- ``Version.NULL``: no version could be determined. Equal only to itself and
  lower than every other version.
- A HEAD form (``"HEAD"`` or ``"HEAD-<commit>"``): a development snapshot,
  higher than every concrete version. All HEAD forms are equal.
- A concrete version string such as ``"1.2.3-beta1"``.

Versions are immutable. Tokens are computed lazily on first comparison or
decomposition and cached on the instance; two threads racing on the first
access simply compute the same tuple twice.

Comparison merges the two token sequences left to right with independent
cursors, padding the shorter side with the NULL token. A numeric token that
meets a non-numeric one wins outright unless it is zero, in which case it is
skipped; this makes "1.0" and "1" equal while "1.0.1" still beats "1.0a".

Example:
    >>> from brewversion.versioning import Version
    >>> Version("1.0.0-rc1") < Version("1.0.0")
    True
    >>> Version("HEAD-abc123") > Version("99.0")
    True
    >>> Version("1.2.3-beta1").major_minor_patch
    Version('1.2.3')
"""

from __future__ import annotations

from functools import cached_property
import math
import operator
import re
from typing import Callable, ClassVar

from brewversion.exceptions import (
    IncomparableOperands,
    InvalidCommitMutation,
    InvalidVersion,
)
from brewversion.versioning.tokens import (
    NULL_TOKEN,
    Token,
    compare_tokens,
    tokenize,
)

HEAD_VERSION_REGEX = re.compile(r"HEAD(?:-(?P<commit>.*))?")

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")
_LEADING_FLOAT = re.compile(r"\s*([+-]?\d+(?:\.\d+)?(?:[eE][+-]?\d+)?)")

_COMPARATORS: dict[str, Callable[[object, object], bool]] = {
    ">=": operator.ge,
    ">": operator.gt,
    "<": operator.lt,
    "<=": operator.le,
    "==": operator.eq,
    "!=": operator.ne,
}


def _compare_token_sequences(
    left: tuple[Token, ...], right: tuple[Token, ...]
) -> int:
    """Merge two token sequences into a single ordering decision."""
    li = 0
    ri = 0
    while li < len(left) or ri < len(right):
        a = left[li] if li < len(left) else NULL_TOKEN
        b = right[ri] if ri < len(right) else NULL_TOKEN

        if a == b:
            li += 1
            ri += 1
        elif a.is_numeric and not b.is_numeric:
            if a > NULL_TOKEN:
                return 1
            li += 1
        elif b.is_numeric and not a.is_numeric:
            if b > NULL_TOKEN:
                return -1
            ri += 1
        else:
            return compare_tokens(a, b)
    return 0


class Version:
    """A detected or literal software version.

    Args:
        value: Version text. Must contain a non-whitespace character.
        detected_from_url: Whether the text was extracted from a URL.

    Raises:
        InvalidVersion: If ``value`` is empty or blank.
        TypeError: If ``value`` is not a string.

    Note:
        ``Version("1.0") == "1.0"`` holds because strings, ints and tokens
        are coerced before comparing, but the hash only agrees with other
        ``Version`` objects. Use ``Version`` keys, not raw strings, when
        mixing them in sets and dicts.
    """

    NULL: ClassVar[Version]

    def __init__(self, value: str, *, detected_from_url: bool = False) -> None:
        if not isinstance(value, str):
            raise TypeError(
                f"Version value must be a str, not {type(value).__name__}"
            )
        if not value.strip():
            raise InvalidVersion("Version must not be empty")
        self._value: str | None = value
        self._detected_from_url = detected_from_url

    @classmethod
    def _make_null(cls) -> Version:
        null = cls.__new__(cls)
        null._value = None
        null._detected_from_url = False
        return null

    # ------------------------------------------------------------------
    # Construction from specs
    # ------------------------------------------------------------------

    @classmethod
    def detect(cls, url: str, *, tag: str | None = None) -> Version:
        """Detect a version from a download URL (or from ``tag`` when given).

        Returns:
            The detected version, or ``Version.NULL`` if no rule matched.
        """
        from brewversion.versioning.rules import parse_spec

        return parse_spec(tag if tag is not None else url, detected_from_url=True)

    @classmethod
    def parse(cls, spec: str, *, detected_from_url: bool = False) -> Version:
        """Run the extraction cascade over ``spec``.

        Returns:
            The extracted version, or ``Version.NULL`` if no rule matched.
        """
        from brewversion.versioning.rules import parse_spec

        return parse_spec(spec, detected_from_url=detected_from_url)

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def is_null(self) -> bool:
        return self._value is None

    @property
    def detected_from_url(self) -> bool:
        return self._detected_from_url

    @property
    def is_head(self) -> bool:
        return self._value is not None and bool(
            HEAD_VERSION_REGEX.fullmatch(self._value)
        )

    @property
    def commit(self) -> str | None:
        """Commit/ref suffix of a HEAD version ("HEAD-abc" -> "abc")."""
        if self._value is None:
            return None
        m = HEAD_VERSION_REGEX.fullmatch(self._value)
        return m.group("commit") if m else None

    def with_commit(self, commit: str | None) -> Version:
        """Return a HEAD version carrying ``commit`` (plain "HEAD" for None).

        Raises:
            InvalidCommitMutation: If this version is not a HEAD form.
        """
        if not self.is_head:
            raise InvalidCommitMutation("Cannot update commit for non-HEAD version.")
        value = f"HEAD-{commit}" if commit else "HEAD"
        return Version(value, detected_from_url=self._detected_from_url)

    @cached_property
    def tokens(self) -> tuple[Token, ...]:
        if self._value is None:
            return ()
        return tokenize(self._value)

    # ------------------------------------------------------------------
    # Decomposition
    # ------------------------------------------------------------------

    def _token_at(self, index: int) -> Token:
        tokens = self.tokens
        return tokens[index] if index < len(tokens) else NULL_TOKEN

    @property
    def major(self) -> Token:
        return self._token_at(0)

    @property
    def minor(self) -> Token:
        return self._token_at(1)

    @property
    def patch(self) -> Token:
        return self._token_at(2)

    def _truncated(self, count: int) -> Version:
        if self.is_null:
            return self
        head = self.tokens[:count]
        if not head:
            return Version.NULL
        return Version(".".join(str(t) for t in head))

    @property
    def major_minor(self) -> Version:
        return self._truncated(2)

    @property
    def major_minor_patch(self) -> Version:
        return self._truncated(3)

    # ------------------------------------------------------------------
    # Comparison
    # ------------------------------------------------------------------

    def compare_to(self, other: object) -> int | None:
        """Compare against another version-like value.

        Accepts Version, str, int and Token operands. Empty strings, the NULL
        token and the NULL version rank below any concrete version.

        Returns:
            -1, 0 or 1, or None when the operands have no defined order
            (unsupported type, or NULL compared with an empty operand).
        """
        if isinstance(other, Version):
            if other.is_null:
                return 0 if self.is_null else 1
        elif isinstance(other, Token):
            if other.is_null:
                return None if self.is_null else 1
            other = Version(str(other))
        elif isinstance(other, str):
            if not other.strip():
                return None if self.is_null else 1
            other = Version(other)
        elif isinstance(other, int) and not isinstance(other, bool):
            other = Version(str(other))
        else:
            return None

        if self.is_null:
            return -1
        if self._value == other._value:
            return 0
        if self.is_head:
            return 0 if other.is_head else 1
        if other.is_head:
            return -1

        return _compare_token_sequences(self.tokens, other.tokens)

    def _ordered(self, other: object) -> int:
        result = self.compare_to(other)
        if result is None:
            raise IncomparableOperands(f"Cannot compare {self!r} with {other!r}")
        return result

    def __eq__(self, other: object) -> bool:
        result = self.compare_to(other)
        if result is None:
            return NotImplemented
        return result == 0

    def __lt__(self, other: object) -> bool:
        return self._ordered(other) < 0

    def __le__(self, other: object) -> bool:
        return self._ordered(other) <= 0

    def __gt__(self, other: object) -> bool:
        return self._ordered(other) > 0

    def __ge__(self, other: object) -> bool:
        return self._ordered(other) >= 0

    def __hash__(self) -> int:
        # Consistent with == between Versions only; see the class note.
        if self.is_null:
            return hash(None)
        if self.is_head:
            return hash("HEAD")
        # Zero tokens are skipped by the merge, so they cannot affect equality.
        return hash(
            tuple(
                t.equality_key()
                for t in self.tokens
                if not (t.is_numeric and t.value == 0)
            )
        )

    def compare(self, comparator: str, other: object) -> bool:
        """Evaluate ``self <comparator> other``.

        Args:
            comparator: One of ">=", ">", "<", "<=", "==", "!=".
            other: Version-like operand.

        Raises:
            ValueError: If the comparator is unknown.
            IncomparableOperands: If an ordering comparator meets unordered
                operands.
        """
        try:
            op = _COMPARATORS[comparator]
        except KeyError:
            raise ValueError(f"Unknown comparator: {comparator}") from None
        return op(self, other)

    # ------------------------------------------------------------------
    # Conversions
    # ------------------------------------------------------------------

    def __str__(self) -> str:
        return self._value or ""

    def __repr__(self) -> str:
        if self.is_null:
            return "Version.NULL"
        return f"Version({self._value!r})"

    def __int__(self) -> int:
        m = _LEADING_INT.match(self._value or "")
        return int(m.group(1)) if m else 0

    def __float__(self) -> float:
        if self.is_null:
            return math.nan
        m = _LEADING_FLOAT.match(self._value)
        return float(m.group(1)) if m else 0.0


Version.NULL = Version._make_null()
