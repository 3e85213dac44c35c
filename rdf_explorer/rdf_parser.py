"""Turtle parsing on top of rdflib, reported one statement at a time."""

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional

from rdflib import BNode, Graph as RDFGraph, Literal, URIRef

from rdf_explorer.errors import ParseError
from rdf_explorer.models import TermKind


@dataclass(frozen=True)
class Term:
    kind: TermKind
    value: str

    @property
    def is_literal(self) -> bool:
        return self.kind is TermKind.LITERAL


@dataclass(frozen=True)
class Statement:
    subject: Term
    predicate: Term
    object: Term


ParseCallback = Callable[[Optional[Exception], Optional[Statement]], None]


def to_term(node) -> Term:
    if isinstance(node, Literal):
        return Term(TermKind.LITERAL, str(node))
    if isinstance(node, BNode):
        return Term(TermKind.BLANK_NODE, str(node))
    if isinstance(node, URIRef):
        return Term(TermKind.IRI, str(node))
    raise ParseError(f"Unsupported RDF term: {node!r}")


class _StatementSink(RDFGraph):
    """Graph that reports every added triple in arrival order, duplicates included."""

    def __init__(self, on_triple: Callable[[tuple], None]):
        super().__init__()
        self._on_triple = on_triple

    def add(self, triple):
        self._on_triple(triple)
        return super().add(triple)


def parse_turtle(text: str, callback: ParseCallback, base: Optional[str] = None) -> None:
    """
    Parse Turtle text and report each statement through `callback(None, statement)`.
    Completion is signalled by exactly one `callback(None, None)`; failure by exactly
    one `callback(error, None)`. Nothing is reported after either terminal call.
    """
    def on_triple(triple):
        s, p, o = triple
        callback(None, Statement(to_term(s), to_term(p), to_term(o)))

    if not text.strip():
        callback(None, None)
        return
    sink = _StatementSink(on_triple)
    try:
        sink.parse(data=text, format="turtle", publicID=base)
    except Exception as e:
        logging.error(f"Turtle parsing failed: {e}")
        error = e
        if not isinstance(e, ParseError):
            error = ParseError(str(e))
            error.__cause__ = e
        callback(error, None)
        return
    callback(None, None)


def read_statements(text: str, base: Optional[str] = None) -> List[Statement]:
    statements: List[Statement] = []
    failure: List[Exception] = []

    def collect(error, statement):
        if error is not None:
            failure.append(error)
        elif statement is not None:
            statements.append(statement)

    parse_turtle(text, collect, base=base)
    if failure:
        raise failure[0]
    return statements
