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

"""
Version extraction from download URLs and filenames.

This module holds the ordered cascade of heuristic extraction rules. Each
rule is a regular expression whose first capture group is the candidate
version. Rules are tried strictly in table order and the first non-empty
capture wins, so the position of a rule in ``VERSION_RULES`` matters as
much as its pattern.

Rule Modes
----------
url
    The pattern is searched in the whole (normalized) spec: scheme, host,
    path and query are all visible.
stem
    The pattern is searched in the filename stem: the last path segment with
    its query/fragment and one archive extension removed. SourceForge
    ".../download" links use the parent segment instead.

Functions
---------
normalize_spec : function
    Percent-decode URL specs, falling back to the raw spec when malformed.
stem_of : function
    Derive the filename stem used by ``stem`` rules.
match_spec : function
    Run the cascade and report which rule matched.
parse_spec : function
    Run the cascade and return a Version (``Version.NULL`` when nothing matched).

Examples
--------
    >>> from brewversion.versioning.rules import match_spec, parse_spec
    >>> str(parse_spec("https://example.com/foo-1.2.3.tar.gz"))
    '1.2.3'
    >>> match_spec("https://example.com/boost_1_39_0.tar.bz2").rule.name
    'underscore-separated'

Notes
-----
- This is pure string extraction; no network calls are made
- The rule table is built once at import time and never mutated
"""

from __future__ import annotations

from dataclasses import dataclass
import posixpath
import re
from typing import Callable, Literal
from urllib.parse import unquote_plus

from brewversion.exceptions import MalformedSpec
from brewversion.versioning.version import Version

RuleMode = Literal["url", "stem"]

# ----------------------------
# Spec normalization
# ----------------------------

_BAD_PERCENT_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def _decode_form_component(spec: str) -> str:
    """Decode a form-encoded component ("+" is a space).

    Raises:
        MalformedSpec: On a stray "%" or on bytes that are not valid UTF-8.
    """
    if _BAD_PERCENT_ESCAPE.search(spec):
        raise MalformedSpec(f"invalid %-encoding in {spec!r}")
    try:
        return unquote_plus(spec, errors="strict")
    except UnicodeDecodeError as err:
        raise MalformedSpec(f"invalid UTF-8 after decoding {spec!r}") from err


def normalize_spec(spec: str, from_url: bool = False) -> str:
    """Return the string the cascade should see for ``spec``.

    URL specs are percent-decoded; a malformed encoding leaves the spec
    untouched rather than failing.
    """
    if not from_url:
        return spec
    try:
        return _decode_form_component(spec)
    except MalformedSpec as err:
        from brewversion.logging import get_global_logger

        get_global_logger().debug("DETECT", f"Using raw spec: {err}")
        return spec


# ----------------------------
# Stem derivation
# ----------------------------

_SOURCEFORGE_DOWNLOAD = re.compile(r"(?:sourceforge\.net|sf\.net)/.*/download$")
_NO_FILE_EXTENSION = re.compile(r"\.[^a-zA-Z]+$")
_QUERY_OR_FRAGMENT = re.compile(r"[?#].*\Z", re.DOTALL)
_ARCHIVE_EXTENSION = re.compile(r"(\.(?:tar|cpio|pax)\.(?:gz|bz2|lz|xz|zst|Z))\Z")
_NUMERIC_TAIL = re.compile(r"\b\d+\.\d+[^.]*\Z")


def _basename(path: str) -> str:
    """Last path segment, ignoring trailing slashes."""
    stripped = path.rstrip("/")
    if not stripped:
        return "/" if path else ""
    return stripped.rsplit("/", 1)[-1]


def _dirname(path: str) -> str:
    """Everything before the last path segment, ignoring trailing slashes."""
    stripped = path.rstrip("/")
    if "/" not in stripped:
        return "/" if path.startswith("/") else "."
    parent = stripped.rsplit("/", 1)[0].rstrip("/")
    return parent or "/"


def _extension(basename: str) -> str:
    """Extension to strip from ``basename`` ("" for none).

    Compound archive extensions count as one; names whose tail looks like a
    dotted version ("foo-1.2") have no extension, except ".7z" archives.
    """
    m = _ARCHIVE_EXTENSION.search(basename)
    if m:
        return m.group(1)
    if _NUMERIC_TAIL.search(basename) and not basename.endswith(".7z"):
        return ""
    return posixpath.splitext(basename)[1]


def _strip_extension(path: str) -> str:
    basename = _basename(path)
    ext = _extension(basename)
    if not ext or ext == basename:
        return basename
    return basename[: -len(ext)]


def stem_of(spec: str) -> str:
    """Derive the filename stem that ``stem`` rules match against.

    Args:
        spec: Normalized spec (URL or filename).

    Returns:
        The stem, e.g. "foo-1.2.3" for "https://example.com/foo-1.2.3.tar.gz".
    """
    without_query = _QUERY_OR_FRAGMENT.sub("", spec)
    basename = _basename(without_query)

    if spec.endswith("/"):
        return basename
    if _SOURCEFORGE_DOWNLOAD.search(spec):
        return _strip_extension(_basename(_dirname(without_query)))
    if _NO_FILE_EXTENSION.search(spec):
        return basename
    return _strip_extension(basename)


# ----------------------------
# Rule table
# ----------------------------


@dataclass(frozen=True)
class ExtractionRule:
    """One heuristic of the extraction cascade.

    Attributes:
        name: Short label used in logs and tests.
        mode: "url" to search the whole spec, "stem" to search the filename stem.
        pattern: Compiled regex; group 1 is the version.
        transform: Optional rewrite applied to the captured text.
    """

    name: str
    mode: RuleMode
    pattern: re.Pattern[str]
    transform: Callable[[str], str] | None = None

    def extract(self, spec: str) -> str | None:
        """Return the (transformed) capture for ``spec``, or None."""
        target = spec if self.mode == "url" else stem_of(spec)
        m = self.pattern.search(target)
        if not m:
            return None
        version = m.group(1)
        if not version:
            return None
        return self.transform(version) if self.transform else version


def _rule(
    name: str,
    mode: RuleMode,
    pattern: str,
    transform: Callable[[str], str] | None = None,
) -> ExtractionRule:
    return ExtractionRule(name, mode, re.compile(pattern, re.ASCII), transform)


def _underscores_to_dots(version: str) -> str:
    return version.replace("_", ".")


NUMERIC_WITH_OPTIONAL_DOTS = r"(?:\d+(?:\.\d+)*)"
NUMERIC_WITH_DOTS = r"(?:\d+(?:\.\d+)+)"
MINOR_OR_PATCH = r"(?:\d+(?:\.\d+){1,2})"
CONTENT_SUFFIX = r"(?:[._-](?i:bin|dist|stable|src|sources?|final|full))"
PRERELEASE_SUFFIX = r"(?:[._-]?(?i:alpha|beta|pre|rc)\.?\d{0,2})"

_NWOD = NUMERIC_WITH_OPTIONAL_DOTS
_NWD = NUMERIC_WITH_DOTS
_MOP = MINOR_OR_PATCH

VERSION_RULES: tuple[ExtractionRule, ...] = (
    # foo-2023-09-28.tar.gz
    _rule("date", "stem", r"(?:^|[._-]?)v?(\d{4}-\d{2}-\d{2})"),
    # github.com/foo/bar/tarball/v1.2.3
    _rule(
        "github-tarball",
        "url",
        r"github\.com/.+/(?:zip|tar)ball/(?:v|\w+-)?((?:\d+[._-])+\d*)$",
    ),
    # Erlang-style otp_src_R13B-1
    _rule("erlang-release", "url", r"[_-]([Rr]\d+[AaBb]\d*(?:-\d+)?)"),
    # boost_1_39_0
    _rule("underscore-separated", "stem", r"((?:\d+_)+\d+)$", _underscores_to_dots),
    # foo-4.0.18-1, foo-1.2.3-rc1-src
    _rule(
        "dotted-with-build",
        "stem",
        rf"[_-]({_NWD}-(?:p|P|rc|RC)?\d+){CONTENT_SUFFIX}?$",
    ),
    # 1.2.3-4 at the very start of the stem
    _rule("leading-dotted-with-build", "stem", rf"^v?({_NWD}(?:-{_NWOD})+)"),
    # .../foo-1.2 or .../v1.2 with no extension
    _rule("url-trailing-number", "url", rf"[-v]({_NWOD})$"),
    # lame-398-2
    _rule("dash-pair", "stem", r"-(\d+-\d+)"),
    # foo-1.2.3
    _rule("dash-numeric", "stem", rf"-({_NWOD})$"),
    # foo-1.0.post1
    _rule("dash-post", "stem", rf"-({_NWOD}(.post\d+)?)$"),
    # foo-1.2.3b2, foo-1.0rc1
    _rule("dash-letter-suffix", "stem", rf"-({_NWOD}(?:[abc]|rc|RC)\d*)$"),
    # foo-1.2.3-beta2
    _rule("dash-prerelease", "stem", rf"-({_NWOD}-(?:alpha|beta|rc)\d*)$"),
    # foo-1.2.3-win64
    _rule("windows-qualified", "stem", rf"-({_MOP})-w(?:in)?(?:32|64)$"),
    # foo.2.0.0+opam
    _rule("opam", "stem", rf"\.({_MOP})\+opam$"),
    # foo_1.2.3_x86, foo-1.2-3-i686
    _rule(
        "arch-qualified",
        "stem",
        rf"[_-]({_MOP}(?:-\d+)?)[._-](?:i[36]86|x86|x64(?:[_-](?:32|64))?)$",
    ),
    # premake-5.0.0-alpha10-src
    _rule("prerelease-suffix", "stem", rf"[-.vV]?({_NWD}{PRERELEASE_SUFFIX})"),
    # 1.2.3, v1.2.3
    _rule("trailing-number", "stem", rf"({_NWOD})$"),
    # foo-1.2.3-src
    _rule("content-suffix", "stem", rf"[-vV]({_NWD}[abc]?){CONTENT_SUFFIX}$"),
    # foo-1.2.3-linux
    _rule("dash-enclosed", "stem", rf"-({_NWD})-"),
    # foo_1.2.3.orig (Debian source tarballs)
    _rule("debian-orig", "stem", rf"_({_NWOD}[abc]?)\.orig$"),
    # foo-1.2r3
    _rule("dash-anything", "stem", r"-v?(\d[^-]+)"),
    # foo_1.2r3
    _rule("underscore-anything", "stem", r"_v?(\d[^_]+)"),
    # .../releases/1.2.3/foo.tar.gz
    _rule("url-directory", "url", r"/(?:[rvV]_?)?(\d+\.\d+(?:\.\d+){0,2})"),
    # foo.v8a
    _rule("dot-v", "stem", r"\.v(\d+[a-z]?)"),
    # last resort: any dotted number in the URL
    _rule("url-anywhere", "url", rf"[-.vV]?({_NWD}{PRERELEASE_SUFFIX}?)"),
)


# ----------------------------
# Cascade
# ----------------------------


@dataclass(frozen=True)
class RuleMatch:
    """Result of a successful cascade run.

    Attributes:
        version: Extracted version text.
        index: 1-based position of the matching rule in ``VERSION_RULES``.
        rule: The matching rule.
    """

    version: str
    index: int
    rule: ExtractionRule


def match_spec(
    spec: str,
    *,
    from_url: bool = False,
    rules: tuple[ExtractionRule, ...] = VERSION_RULES,
) -> RuleMatch | None:
    """Run the cascade over ``spec`` and report the first rule that matched.

    Args:
        spec: URL, filename or bare version text.
        from_url: If True, percent-decode the spec first.
        rules: Rule table to use; defaults to ``VERSION_RULES``.

    Returns:
        The winning match, or None when no rule produced a version.
    """
    from brewversion.logging import get_global_logger

    logger = get_global_logger()
    normalized = normalize_spec(str(spec), from_url)
    logger.debug("DETECT", f"Spec: {normalized}")

    for index, rule in enumerate(rules, start=1):
        version = rule.extract(normalized)
        if version:
            logger.debug("DETECT", f"Rule {index} ({rule.name}) matched: {version}")
            return RuleMatch(version=version, index=index, rule=rule)

    logger.debug("DETECT", "No rule matched")
    return None


def parse_spec(spec: str, *, detected_from_url: bool = False) -> Version:
    """Extract a Version from ``spec``.

    Returns:
        The extracted Version, or ``Version.NULL`` if no rule matched.
    """
    match = match_spec(spec, from_url=detected_from_url)
    if match is None:
        return Version.NULL
    return Version(match.version, detected_from_url=detected_from_url)
