from __future__ import annotations

"""
A minimal pygls-based Language Server for pexpr.

Features:
- Text synchronization and document store
- Diagnostics: unbalanced parens/brackets, unterminated strings, malformed def
  forms, unknown function names, undefined constants
- Hover: builtin signatures and def-bound constants
- Completion: builtins and constants
- Signature Help: for builtins
- Document Symbols: def forms

Note: We avoid evaluating the buffer. We build a static index per document.
"""

import logging
import re
from typing import Dict, Optional, List
from dataclasses import dataclass

from pygls.server import LanguageServer
from lsprotocol.types import (
    TEXT_DOCUMENT_COMPLETION,
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DID_CLOSE,
    TEXT_DOCUMENT_DID_OPEN,
    TEXT_DOCUMENT_DOCUMENT_SYMBOL,
    TEXT_DOCUMENT_HOVER,
    TEXT_DOCUMENT_SIGNATURE_HELP,
    CompletionItem,
    CompletionItemKind,
    CompletionList,
    CompletionOptions,
    CompletionParams,
    Diagnostic,
    DiagnosticSeverity,
    DidChangeTextDocumentParams,
    DidCloseTextDocumentParams,
    DidOpenTextDocumentParams,
    DocumentSymbol,
    DocumentSymbolParams,
    Hover,
    HoverParams,
    MarkupContent,
    MarkupKind,
    ParameterInformation,
    Position,
    Range,
    SignatureHelp,
    SignatureHelpOptions,
    SignatureHelpParams,
    SignatureInformation,
    SymbolKind,
)

from pexpr import __version__
from pexpr.builtin.builtins import BUILTINS
from pexpr_lsp.indexer import build_index, BUILTIN_SIGNATURES, DocumentIndex, Problem

logger = logging.getLogger(__name__)

SOURCE = "pexpr-ls"


@dataclass
class DocumentState:
    text: str
    index: DocumentIndex


class PexprLanguageServer(LanguageServer):
    CMD_NAME = "pexpr-ls"

    def __init__(self):
        super().__init__(self.CMD_NAME, __version__)
        self.documents: Dict[str, DocumentState] = {}

    def refresh(self, uri: str) -> DocumentState:
        """Re-read a document from the workspace and rebuild its index."""
        text = self.workspace.get_text_document(uri).source
        state = DocumentState(text=text, index=build_index(text))
        self.documents[uri] = state
        return state


ls = PexprLanguageServer()


# --- Text sync ---
@ls.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(server: PexprLanguageServer, params: DidOpenTextDocumentParams):
    uri = params.text_document.uri
    _publish_diagnostics(server, uri, server.refresh(uri))


@ls.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(server: PexprLanguageServer, params: DidChangeTextDocumentParams):
    uri = params.text_document.uri
    _publish_diagnostics(server, uri, server.refresh(uri))


@ls.feature(TEXT_DOCUMENT_DID_CLOSE)
def did_close(server: PexprLanguageServer, params: DidCloseTextDocumentParams):
    uri = params.text_document.uri
    server.documents.pop(uri, None)
    server.publish_diagnostics(uri, [])


# --- Diagnostics ---
def _mk_range(line: int, col: int, length: int = 1) -> Range:
    return Range(start=Position(line=line, character=col), end=Position(line=line, character=col + length))


def _problem(p: Problem, severity: DiagnosticSeverity) -> Diagnostic:
    return Diagnostic(range=_mk_range(p.line, p.col, p.length), message=p.message, severity=severity, source=SOURCE)


def collect_diagnostics(idx: DocumentIndex) -> List[Diagnostic]:
    diags: List[Diagnostic] = []

    if idx.paren_balance != 0:
        diags.append(
            Diagnostic(
                range=_mk_range(0, 0),
                message="Unmatched parentheses detected",
                severity=DiagnosticSeverity.Warning,
                source=SOURCE,
            )
        )
    if idx.bracket_balance != 0:
        diags.append(
            Diagnostic(
                range=_mk_range(0, 0),
                message="Unterminated array detected",
                severity=DiagnosticSeverity.Warning,
                source=SOURCE,
            )
        )
    if idx.has_unmatched_quote:
        diags.append(
            Diagnostic(
                range=_mk_range(0, 0),
                message="Unmatched quote detected",
                severity=DiagnosticSeverity.Warning,
                source=SOURCE,
            )
        )

    diags.extend(_problem(p, DiagnosticSeverity.Error) for p in idx.structure)
    diags.extend(_problem(p, DiagnosticSeverity.Warning) for p in idx.ignored_values)
    diags.extend(_problem(p, DiagnosticSeverity.Error) for p in idx.unknown_functions)
    diags.extend(_problem(p, DiagnosticSeverity.Warning) for p in idx.undefined_constants)
    return diags


def _publish_diagnostics(server: PexprLanguageServer, uri: str, state: DocumentState):
    diags = collect_diagnostics(state.index)
    logger.debug("%s: %d diagnostics", uri, len(diags))
    server.publish_diagnostics(uri, diags)


# --- Hover ---
@ls.feature(TEXT_DOCUMENT_HOVER)
def on_hover(server: PexprLanguageServer, params: HoverParams) -> Optional[Hover]:
    state = server.documents.get(params.text_document.uri)
    if not state:
        return None

    word = _extract_word_at(state.text, params.position)
    if not word:
        return None

    if word in BUILTIN_SIGNATURES:
        contents = BUILTIN_SIGNATURES[word]
    elif word in state.index.constants:
        sdef = state.index.constants[word]
        contents = f"{word}: {sdef.kind} constant (defined at {sdef.line+1}:{sdef.col+1})"
    else:
        return None
    return Hover(contents=MarkupContent(kind=MarkupKind.PlainText, value=contents))


# --- Completion ---
@ls.feature(TEXT_DOCUMENT_COMPLETION, CompletionOptions(trigger_characters=["("]))
def on_completion(server: PexprLanguageServer, params: CompletionParams) -> CompletionList:
    state = server.documents.get(params.text_document.uri)
    items: List[CompletionItem] = []
    for name, sig in BUILTIN_SIGNATURES.items():
        items.append(CompletionItem(label=name, kind=CompletionItemKind.Function, detail=sig))
    if state:
        for name, sdef in state.index.constants.items():
            items.append(CompletionItem(label=name, kind=CompletionItemKind.Constant, detail=sdef.kind))
    return CompletionList(is_incomplete=False, items=items)


# --- Signature Help ---
@ls.feature(TEXT_DOCUMENT_SIGNATURE_HELP, SignatureHelpOptions(trigger_characters=["(", " "]))
def on_signature_help(server: PexprLanguageServer, params: SignatureHelpParams) -> Optional[SignatureHelp]:
    state = server.documents.get(params.text_document.uri)
    if not state:
        return None

    line_text = _get_line_prefix(state.text, params.position)
    call = _extract_call(line_text)
    if call is None:
        return None
    callee, arg_count = call
    builtin = BUILTINS.get(callee)
    if builtin is None:
        return None

    parameters = [ParameterInformation(label=str(k)) for k in builtin.arg_kinds]
    active = min(arg_count, max(builtin.arity - 1, 0))
    return SignatureHelp(
        signatures=[SignatureInformation(label=builtin.signature, documentation=builtin.doc, parameters=parameters)],
        active_signature=0,
        active_parameter=active,
    )


# --- Document Symbols ---
@ls.feature(TEXT_DOCUMENT_DOCUMENT_SYMBOL)
def on_document_symbols(server: PexprLanguageServer, params: DocumentSymbolParams) -> Optional[List[DocumentSymbol]]:
    state = server.documents.get(params.text_document.uri)
    if not state:
        return None
    symbols: List[DocumentSymbol] = []
    for name, sdef in state.index.constants.items():
        rng = _mk_range(sdef.line, sdef.col, len(name))
        symbols.append(
            DocumentSymbol(name=name, detail=sdef.kind, kind=SymbolKind.Constant, range=rng, selection_range=rng)
        )
    return symbols


# --- Helpers ---

_ARG_TOKEN = re.compile(r'"[^"]*"|\[[^\]]*\]|\([^()]*\)|[^\s()\[\]"]+')


def _get_line_prefix(text: str, pos: Position) -> str:
    # Return the text from start of line up to pos
    lines = text.splitlines(True)
    if pos.line >= len(lines):
        return ""
    return lines[pos.line][: pos.character]


def _extract_word_at(text: str, pos: Position) -> Optional[str]:
    lines = text.splitlines(True)
    if pos.line >= len(lines):
        return None
    line = lines[pos.line]
    start = end = min(pos.character, len(line))
    while start > 0 and line[start - 1].isalpha():
        start -= 1
    while end < len(line) and line[end].isalpha():
        end += 1
    return line[start:end] or None


def _extract_call(prefix: str) -> Optional[tuple[str, int]]:
    """Callee of the innermost open paren on the line and how many arguments follow it."""
    depth = 0
    for lp in range(len(prefix) - 1, -1, -1):
        ch = prefix[lp]
        if ch == ')':
            depth += 1
        elif ch == '(':
            if depth == 0:
                break
            depth -= 1
    else:
        return None
    tail = prefix[lp + 1:]
    m = re.match(r"\s*([a-zA-Z]+)", tail)
    if not m:
        return None
    args = _ARG_TOKEN.findall(tail[m.end():])
    return m.group(1), len(args)


def main() -> None:
    # Run the language server over stdio
    ls.start_io()


if __name__ == "__main__":
    main()
