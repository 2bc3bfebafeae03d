"""Doc comment parsing and matching against the declaration that follows.

A doc comment is split into its main description and its block tags:

    /**
     * Adds two numbers.
     *
     * @param left first operand
     * @param <T> element type
     * @return the sum
     */

Only the tags that describe a declaration's signature are checked:
``@param`` (including ``@param <T>`` for type parameters), ``@return``,
``@throws`` and ``@exception``. An inline ``{@inheritDoc}`` anywhere in the
comment means the documentation comes from an overridden member, so no tag
is checked.

Exceptions are compared by simple name, since types are not resolved: a
``@throws java.io.IOException`` matches ``throws IOException``. Unchecked
exceptions need no throws clause; without type resolution they are
recognised by name (UNCHECKED_EXCEPTIONS, or a name ending in
``RuntimeException`` or ``Error``).
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

from ..syntax.model import Declaration, DeclarationKind

_BLOCK_TAG = re.compile(r"@([A-Za-z]+)(?:\s+(\S+))?")
_INHERIT_DOC = re.compile(r"\{@inheritDoc\s*\}")

CALLABLE_TAGS = frozenset({"return", "throws", "exception"})
THROWS_TAGS = frozenset({"throws", "exception"})

# Unchecked JDK exceptions commonly documented without a throws clause.
# Other names ending in RuntimeException or Error are unchecked as well.
UNCHECKED_EXCEPTIONS = frozenset(
    {
        "ArithmeticException",
        "ArrayIndexOutOfBoundsException",
        "ArrayStoreException",
        "ClassCastException",
        "ConcurrentModificationException",
        "DateTimeException",
        "DateTimeParseException",
        "EmptyStackException",
        "IllegalArgumentException",
        "IllegalMonitorStateException",
        "IllegalStateException",
        "IndexOutOfBoundsException",
        "NegativeArraySizeException",
        "NoSuchElementException",
        "NullPointerException",
        "NumberFormatException",
        "SecurityException",
        "StringIndexOutOfBoundsException",
        "UncheckedIOException",
        "UnsupportedOperationException",
    }
)


def simple_type_name(text: str) -> str:
    """``java.util.List<String>`` -> ``List``; annotations are dropped."""
    words = text.split("<", 1)[0].split()
    return words[-1].rsplit(".", 1)[-1] if words else ""


def is_unchecked(name: str) -> bool:
    simple = simple_type_name(name)
    return (
        simple in UNCHECKED_EXCEPTIONS
        or simple.endswith("RuntimeException")
        or simple.endswith("Error")
    )


@dataclass(frozen=True)
class DocTag:
    """One block tag: ``@name argument description...``."""

    name: str
    argument: str = ""

    @property
    def is_type_parameter(self) -> bool:
        return self.name == "param" and self.argument.startswith("<")

    @property
    def parameter_name(self) -> str:
        """Documented name, without the angle brackets of type parameters."""
        return self.argument.strip("<>")


@dataclass(frozen=True)
class DocComment:
    description: str
    tags: tuple[DocTag, ...]
    inherits_doc: bool = False

    def tags_named(self, name: str) -> tuple[DocTag, ...]:
        return tuple(tag for tag in self.tags if tag.name == name)

    @property
    def has_return(self) -> bool:
        return any(tag.name == "return" for tag in self.tags)

    @property
    def describes_callable(self) -> bool:
        """True if the tags only make sense on a method or constructor."""
        return any(tag.name in CALLABLE_TAGS for tag in self.tags)


@dataclass(frozen=True)
class DocMatch:
    """How a doc comment matches the declaration after it.

    Attributes:
        declaration: The declaration that follows, if any
        subject_mismatch: Nothing is declared right after the comment, or the
            comment documents a callable and the declaration is not one
        unmatched_tags: Tags naming something the declaration does not have
        undocumented_parameters: Parameters without a ``@param`` tag
        return_missing: A value-returning method has no ``@return`` tag
    """

    declaration: Optional[Declaration]
    subject_mismatch: bool = False
    unmatched_tags: tuple[str, ...] = ()
    undocumented_parameters: tuple[str, ...] = ()
    return_missing: bool = False

    @property
    def matches(self) -> bool:
        return not (
            self.subject_mismatch
            or self.unmatched_tags
            or self.undocumented_parameters
            or self.return_missing
        )


def parse_doc_comment(text: str) -> DocComment:
    """Parse the raw text of a ``/** ... */`` comment."""
    body = text[3:]
    if body.endswith("*/"):
        body = body[:-2]

    description: list[str] = []
    tags: list[DocTag] = []
    for raw_line in body.splitlines():
        line = raw_line.strip()
        if line.startswith("*"):
            line = line[1:].strip()
        match = _BLOCK_TAG.match(line)
        if match:
            tags.append(DocTag(name=match.group(1), argument=match.group(2) or ""))
        elif not tags and line:
            description.append(line)

    return DocComment(
        description=" ".join(description),
        tags=tuple(tags),
        inherits_doc=bool(_INHERIT_DOC.search(body)),
    )


def match_declaration(doc: DocComment, declaration: Optional[Declaration]) -> DocMatch:
    """Check a parsed doc comment against the declaration it documents."""
    if declaration is None:
        return DocMatch(declaration=None, subject_mismatch=True)
    if doc.describes_callable and not declaration.is_callable:
        return DocMatch(declaration=declaration, subject_mismatch=True)
    if doc.inherits_doc:
        return DocMatch(declaration=declaration)

    takes_parameters = declaration.is_callable or declaration.is_record
    parameters = declaration.parameters if takes_parameters else ()
    documented: set[str] = set()
    unmatched: list[str] = []
    declared_exceptions = {simple_type_name(name) for name in declaration.thrown_types}

    for tag in doc.tags:
        if tag.name == "param":
            name = tag.parameter_name
            known = declaration.type_parameters if tag.is_type_parameter else parameters
            if name in known:
                documented.add(name)
            else:
                unmatched.append(f"@param {tag.argument}".rstrip())
        elif tag.name == "return" and not declaration.returns_value:
            unmatched.append("@return")
        elif tag.name in THROWS_TAGS:
            exception = tag.argument
            if not exception or (
                simple_type_name(exception) not in declared_exceptions
                and not is_unchecked(exception)
            ):
                unmatched.append(f"@{tag.name} {exception}".rstrip())

    undocumented = tuple(name for name in parameters if name not in documented)
    return_missing = (
        declaration.kind is DeclarationKind.METHOD
        and declaration.returns_value
        and not doc.has_return
    )

    return DocMatch(
        declaration=declaration,
        unmatched_tags=tuple(unmatched),
        undocumented_parameters=undocumented,
        return_missing=return_missing,
    )
