"""Tree-sitter powered TypeScript declaration provider."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional, Set, Tuple

import tree_sitter_typescript
from tree_sitter import Language, Node, Parser

from .base import DeclarationProvider
from ..logging import get_logger
from ..models import DeclarationKind, DeclarationRecord, ExtractionFailure, FileExtraction

_SNIPPET_LIMIT = 100

_UTF8_BOM = b"\xef\xbb\xbf"

_SUFFIX_DIALECTS = {
    ".ts": "typescript",
    ".mts": "typescript",
    ".cts": "typescript",
    ".tsx": "tsx",
}

_KIND_BY_NODE_TYPE = {
    "function_declaration": DeclarationKind.FUNCTION,
    "generator_function_declaration": DeclarationKind.FUNCTION,
    "function_signature": DeclarationKind.FUNCTION,
    "class_declaration": DeclarationKind.CLASS,
    "abstract_class_declaration": DeclarationKind.CLASS,
    "interface_declaration": DeclarationKind.INTERFACE,
    "type_alias_declaration": DeclarationKind.TYPE,
    "enum_declaration": DeclarationKind.ENUM,
    "internal_module": DeclarationKind.NAMESPACE,
    "module": DeclarationKind.NAMESPACE,
}

_VARIABLE_NODE_TYPES = {"lexical_declaration", "variable_declaration"}

# `export default function foo() {}` may surface as an expression value.
_DEFAULT_VALUE_KINDS = {
    "function_expression": DeclarationKind.FUNCTION,
    "function": DeclarationKind.FUNCTION,
    "generator_function": DeclarationKind.FUNCTION,
    "class": DeclarationKind.CLASS,
}

_NAMESPACE_NAME_TYPES = {"identifier", "nested_identifier"}


class TypeScriptProvider(DeclarationProvider):
    """Extracts top-level TypeScript declarations using tree-sitter grammars."""

    def __init__(self, target: str = "auto") -> None:
        self.target = target
        self.logger = get_logger("providers.typescript")
        self._parsers: Dict[str, Parser] = {}

    def supports(self, path: str) -> bool:
        return Path(path).suffix.lower() in _SUFFIX_DIALECTS

    def extract(self, root: Path, path: str) -> FileExtraction:
        extraction = FileExtraction(file=path)
        try:
            source_bytes = (Path(root) / path).read_bytes()
        except OSError as exc:
            extraction.failures.append(ExtractionFailure(file=path, reason=f"unreadable: {exc}"))
            return extraction
        if source_bytes.startswith(_UTF8_BOM):
            source_bytes = source_bytes[len(_UTF8_BOM) :]
        try:
            source_bytes.decode("utf-8")
        except UnicodeDecodeError as exc:
            extraction.failures.append(ExtractionFailure(file=path, reason=f"not valid UTF-8: {exc}"))
            return extraction

        tree = self._get_parser(self._dialect_for(path)).parse(source_bytes)
        if tree.root_node.has_error:
            self.logger.debug("Syntax errors in %s; extracting recoverable declarations", path)

        extraction.records.extend(self.collect(tree.root_node, source_bytes))
        return extraction

    def parse_source(self, source: str, *, dialect: str = "typescript") -> List[DeclarationRecord]:
        """Return declarations found in an in-memory source string."""
        source_bytes = source.encode("utf-8")
        tree = self._get_parser(dialect).parse(source_bytes)
        return list(self.collect(tree.root_node, source_bytes))

    def collect(self, program: Node, source_bytes: bytes) -> Iterator[DeclarationRecord]:
        exported_names = self._local_export_names(program, source_bytes)
        for statement in program.named_children:
            for kind, node, anchor, exported in self._iter_declarations(statement, False):
                name = self._declaration_name(kind, node, source_bytes)
                if not name:
                    continue
                line, column = self._position(anchor, source_bytes)
                yield DeclarationRecord(
                    name=name,
                    kind=kind,
                    exported=exported or name in exported_names,
                    line=line,
                    column=column,
                    snippet=self._snippet(anchor, source_bytes),
                )

    def _dialect_for(self, path: str) -> str:
        if self.target in {"typescript", "tsx"}:
            return self.target
        return _SUFFIX_DIALECTS.get(Path(path).suffix.lower(), "typescript")

    def _get_parser(self, dialect: str) -> Parser:
        parser = self._parsers.get(dialect)
        if parser is not None:
            return parser
        if dialect == "tsx":
            language = Language(tree_sitter_typescript.language_tsx())
        else:
            language = Language(tree_sitter_typescript.language_typescript())
        parser = Parser(language)
        self._parsers[dialect] = parser
        return parser

    def _iter_declarations(
        self, node: Node, exported: bool, anchor: Optional[Node] = None
    ) -> Iterable[Tuple[DeclarationKind, Node, Node, bool]]:
        """Yield ``(kind, declaration, anchor, exported)`` for one top-level statement.

        ``anchor`` is the node whose start and first line describe the
        declaration: the outer export statement when there is one.
        """
        anchor = anchor or node
        node_type = node.type

        if node_type == "export_statement":
            declaration = node.child_by_field_name("declaration")
            if declaration is not None:
                yield from self._iter_declarations(declaration, True, anchor)
                return
            value = node.child_by_field_name("value")
            if value is not None and value.type in _DEFAULT_VALUE_KINDS:
                yield _DEFAULT_VALUE_KINDS[value.type], value, anchor, True
            return

        if node_type == "ambient_declaration":
            for child in node.named_children:
                yield from self._iter_declarations(child, exported, anchor)
            return

        if node_type == "expression_statement":
            for child in node.named_children:
                if child.type == "internal_module":
                    yield DeclarationKind.NAMESPACE, child, anchor, exported
            return

        if node_type in _VARIABLE_NODE_TYPES:
            for declarator in node.named_children:
                if declarator.type == "variable_declarator":
                    yield DeclarationKind.VARIABLE, declarator, declarator, exported
            return

        kind = _KIND_BY_NODE_TYPE.get(node_type)
        if kind is not None:
            yield kind, node, anchor, exported

    def _declaration_name(self, kind: DeclarationKind, node: Node, source_bytes: bytes) -> str:
        name_node = node.child_by_field_name("name")
        if name_node is None:
            return ""
        if kind is DeclarationKind.VARIABLE and name_node.type != "identifier":
            # Destructuring patterns do not name a single declaration.
            return ""
        if kind is DeclarationKind.NAMESPACE and name_node.type not in _NAMESPACE_NAME_TYPES:
            return ""
        return self._node_text(name_node, source_bytes).strip()

    def _local_export_names(self, program: Node, source_bytes: bytes) -> Set[str]:
        """Names exported after the fact: ``export { a, b as c }`` and ``export default a``."""
        names: Set[str] = set()
        for statement in program.named_children:
            if statement.type != "export_statement":
                continue
            if statement.child_by_field_name("source") is not None:
                continue
            if statement.child_by_field_name("declaration") is not None:
                continue
            value = statement.child_by_field_name("value")
            if value is not None and value.type == "identifier":
                names.add(self._node_text(value, source_bytes))
            for child in statement.named_children:
                if child.type != "export_clause":
                    continue
                for specifier in child.named_children:
                    if specifier.type != "export_specifier":
                        continue
                    local = specifier.child_by_field_name("name")
                    if local is not None:
                        names.add(self._node_text(local, source_bytes))
        return names

    @staticmethod
    def _node_text(node: Node, source_bytes: bytes) -> str:
        return source_bytes[node.start_byte : node.end_byte].decode("utf-8", errors="ignore")

    @staticmethod
    def _position(node: Node, source_bytes: bytes) -> Tuple[int, int]:
        line_start = source_bytes.rfind(b"\n", 0, node.start_byte) + 1
        prefix = source_bytes[line_start : node.start_byte].decode("utf-8", errors="ignore")
        return node.start_point[0] + 1, len(prefix) + 1

    def _snippet(self, node: Node, source_bytes: bytes) -> str:
        text = self._node_text(node, source_bytes)
        first_line = text.split("\n", 1)[0].strip()
        if len(first_line) > _SNIPPET_LIMIT:
            return first_line[:_SNIPPET_LIMIT] + "..."
        return first_line


__all__ = ["TypeScriptProvider"]
