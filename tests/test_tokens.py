"""
Tests for brewversion.versioning.tokens module.

Tests tokenization and token ordering including:
- Classification priority (markers before numbers before words)
- Separator skipping
- NULL token ordering against every kind
- Marker family precedence and revisions
- Hash consistency with equality
"""

from __future__ import annotations

import pytest

from brewversion.versioning.tokens import (
    NULL_TOKEN,
    Token,
    TokenKind,
    compare_tokens,
    tokenize,
)


def kinds(text: str) -> list[TokenKind]:
    return [t.kind for t in tokenize(text)]


class TestTokenize:
    """Tests for splitting version strings into tokens."""

    def test_dotted_numeric(self):
        """Test that separators are skipped and numbers become NUMERIC."""
        tokens = tokenize("1.2.3")
        assert [t.text for t in tokens] == ["1", "2", "3"]
        assert kinds("1.2.3") == [TokenKind.NUMERIC] * 3

    def test_prerelease_marker_is_single_token(self):
        """Test that 'beta2' is one BETA token, not STRING + NUMERIC."""
        assert kinds("1.0.0-beta2") == [
            TokenKind.NUMERIC,
            TokenKind.NUMERIC,
            TokenKind.NUMERIC,
            TokenKind.BETA,
        ]
        assert tokenize("1.0.0-beta2")[-1].text == "beta2"

    def test_marker_families(self):
        """Test classification of every marker family."""
        assert kinds("a1") == [TokenKind.ALPHA]
        assert kinds("alpha") == [TokenKind.ALPHA]
        assert kinds("b2") == [TokenKind.BETA]
        assert kinds("pre3") == [TokenKind.PRE]
        assert kinds("rc1") == [TokenKind.RC]
        assert kinds("p4") == [TokenKind.PATCH]
        assert kinds("1.0.post1")[-1] == TokenKind.POST

    def test_markers_are_case_insensitive(self):
        """Test that upper-case markers are recognized."""
        assert kinds("RC1") == [TokenKind.RC]
        assert kinds("Beta") == [TokenKind.BETA]

    def test_bare_letter_is_string(self):
        """Test that a lone 'a' or 'b' without digits is a plain word."""
        assert kinds("a") == [TokenKind.STRING]
        assert kinds("b") == [TokenKind.STRING]

    def test_word_tokens(self):
        """Test that ordinary words become STRING tokens."""
        tokens = tokenize("1.2-stable")
        assert tokens[-1].kind is TokenKind.STRING
        assert tokens[-1].text == "stable"

    def test_no_tokens(self):
        """Test that punctuation-only text yields no tokens."""
        assert tokenize("") == ()
        assert tokenize("-._+") == ()


class TestTokenCreate:
    """Tests for classifying a single token's text."""

    def test_create_uses_scan_priority(self):
        """Test that create picks the same kind the scanner would."""
        assert Token.create("beta2").kind is TokenKind.BETA
        assert Token.create("42").kind is TokenKind.NUMERIC
        assert Token.create("foo").kind is TokenKind.STRING

    def test_create_rejects_unmatched_text(self):
        """Test that text matching no pattern raises ValueError."""
        with pytest.raises(ValueError, match="Cannot find a matching token"):
            Token.create("1-2")
        with pytest.raises(ValueError):
            Token.create("")

    def test_numeric_value_and_str(self):
        """Test that numeric tokens render without leading zeros."""
        token = Token.create("007")
        assert token.value == 7
        assert str(token) == "7"

    def test_revision(self):
        """Test marker revision numbers."""
        assert Token.create("rc").revision == 0
        assert Token.create("rc12").revision == 12
        assert Token.create("alpha3").revision == 3

    def test_null_token(self):
        """Test NULL token properties."""
        assert NULL_TOKEN.is_null
        assert NULL_TOKEN.value is None
        assert str(NULL_TOKEN) == ""
        assert repr(NULL_TOKEN) == "Token.NULL"


class TestTokenOrdering:
    """Tests for compare_tokens."""

    def test_numeric_by_value(self):
        """Test that numbers compare numerically, not lexically."""
        assert compare_tokens(Token.create("2"), Token.create("10")) == -1
        assert compare_tokens(Token.create("010"), Token.create("10")) == 0

    def test_numeric_beats_text(self):
        """Test that NUMERIC outranks every textual kind."""
        one = Token.create("1")
        for text in ("foo", "alpha", "beta1", "pre", "rc1", "p1"):
            assert compare_tokens(one, Token.create(text)) == 1
            assert compare_tokens(Token.create(text), one) == -1

    def test_marker_family_precedence(self):
        """Test alpha < beta < pre < rc < patch < post."""
        ordered = [
            Token.create("alpha9"),
            Token.create("beta1"),
            Token.create("pre1"),
            Token.create("rc1"),
            Token(TokenKind.PATCH, "p1"),
            Token(TokenKind.POST, ".post1"),
        ]
        for lower, higher in zip(ordered, ordered[1:]):
            assert compare_tokens(lower, higher) == -1
            assert compare_tokens(higher, lower) == 1

    def test_same_family_compares_revision(self):
        """Test that revisions order markers within one family."""
        assert compare_tokens(Token.create("rc1"), Token.create("rc2")) == -1
        assert compare_tokens(Token.create("beta"), Token.create("beta0")) == 0

    def test_marker_spellings_are_equal(self):
        """Test that 'a1' and 'alpha1' are the same marker."""
        assert Token.create("a1") == Token.create("alpha1")
        assert hash(Token.create("a1")) == hash(Token.create("alpha1"))

    def test_null_equals_zero(self):
        """Test that the NULL token equals NUMERIC 0."""
        zero = Token.create("0")
        assert compare_tokens(NULL_TOKEN, zero) == 0
        assert NULL_TOKEN == zero
        assert hash(NULL_TOKEN) == hash(zero)

    def test_null_against_other_kinds(self):
        """Test NULL ordering against numbers, prereleases and words."""
        assert compare_tokens(NULL_TOKEN, NULL_TOKEN) == 0
        assert compare_tokens(NULL_TOKEN, Token.create("1")) == -1
        assert compare_tokens(NULL_TOKEN, Token.create("alpha")) == 1
        assert compare_tokens(NULL_TOKEN, Token.create("rc1")) == 1
        assert compare_tokens(NULL_TOKEN, Token.create("p1")) == -1
        assert compare_tokens(NULL_TOKEN, Token.create("foo")) == -1
        assert compare_tokens(Token.create("rc1"), NULL_TOKEN) == -1

    def test_strings_compare_lexically(self):
        """Test that plain words compare by text."""
        assert compare_tokens(Token.create("abc"), Token.create("abd")) == -1
        assert Token.create("foo") < Token.create("fop")

    def test_rich_comparisons(self):
        """Test that operators follow compare_tokens."""
        assert Token.create("1") > Token.create("rc1")
        assert Token.create("rc1") <= Token.create("rc1")
        assert Token.create("alpha") < NULL_TOKEN
        assert (Token.create("1") == "1") is False
