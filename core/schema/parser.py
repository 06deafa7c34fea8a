"""TypeScript source parsing into recognized expression shapes."""

import logging
from dataclasses import dataclass

import tree_sitter_typescript
from tree_sitter import Language, Node, Parser

from core.models import SourceFile
from core.schema.expressions import (
    ArrayLiteral,
    ArrowFunction,
    BooleanLiteral,
    Call,
    Expression,
    Identifier,
    NumberLiteral,
    ObjectLiteral,
    Parenthesized,
    PropertyAccess,
    StringLiteral,
    TaggedTemplate,
    Unknown,
)

logger = logging.getLogger(__name__)

TS_LANGUAGE = Language(tree_sitter_typescript.language_typescript())

# Wrappers that do not change the value of the wrapped expression
TRANSPARENT_NODES = ("as_expression", "satisfies_expression", "non_null_expression")


class SchemaParseError(ValueError):
    """Raised when a schema source file is not valid TypeScript."""

    def __init__(self, file_name: str, line: int, snippet: str) -> None:
        self.file_name = file_name
        self.line = line
        super().__init__(f"Syntax error in {file_name} at line {line}: {snippet!r}")


@dataclass(frozen=True)
class Declaration:
    """A top-level ``const name = <initializer>`` declaration."""

    name: str
    initializer: Expression


def _text(node: Node) -> str:
    return node.text.decode("utf-8") if node.text is not None else ""


def _named(node: Node) -> list[Node]:
    return [child for child in node.named_children if child.type != "comment"]


def _number_value(text: str) -> int | float:
    cleaned = text.replace("_", "").rstrip("n")
    try:
        return int(cleaned, 0)
    except ValueError:
        value = float(cleaned)
    # JavaScript prints integral numbers without a fraction
    return int(value) if value.is_integer() else value


def _property_key(node: Node) -> str | None:
    match node.type:
        case "property_identifier" | "identifier":
            return _text(node)
        case "string":
            return _text(node)[1:-1]
        case "number":
            return _text(node)
    return None


def _first_error(node: Node) -> Node | None:
    if node.type == "ERROR" or node.is_missing:
        return node
    for child in node.children:
        if child.has_error or child.is_missing:
            found = _first_error(child)
            if found is not None:
                return found
    return None


def to_expression(node: Node | None) -> Expression:
    """Convert a tree-sitter node into its recognized expression shape."""
    if node is None:
        return Unknown(kind="missing")

    text = _text(node)
    match node.type:
        case "string":
            return StringLiteral(value=text[1:-1], text=text)
        case "number":
            return NumberLiteral(value=_number_value(text), text=text)
        case "true" | "false":
            return BooleanLiteral(value=node.type == "true", text=text)
        case "identifier":
            return Identifier(name=text, text=text)
        case "array":
            return ArrayLiteral(elements=tuple(to_expression(child) for child in _named(node)), text=text)
        case "object":
            properties = []
            for member in _named(node):
                if member.type != "pair":
                    continue
                key_node = member.child_by_field_name("key")
                key = _property_key(key_node) if key_node is not None else None
                if key is None:
                    continue
                properties.append((key, to_expression(member.child_by_field_name("value"))))
            return ObjectLiteral(properties=tuple(properties), text=text)
        case "parenthesized_expression":
            inner = _named(node)
            return Parenthesized(expression=to_expression(inner[0] if inner else None), text=text)
        case "member_expression":
            prop = node.child_by_field_name("property")
            return PropertyAccess(
                object=to_expression(node.child_by_field_name("object")),
                name=_text(prop) if prop is not None else "",
                text=text,
            )
        case "call_expression":
            function = node.child_by_field_name("function")
            arguments = node.child_by_field_name("arguments")
            if arguments is not None and arguments.type == "template_string":
                tag = _text(function) if function is not None else ""
                return TaggedTemplate(tag=tag, template=_text(arguments)[1:-1], text=text)
            args = tuple(to_expression(child) for child in _named(arguments)) if arguments is not None else ()
            return Call(callee=to_expression(function), args=args, text=text)
        case "arrow_function":
            single = node.child_by_field_name("parameter")
            if single is not None:
                params: tuple[str, ...] = (_text(single),)
            else:
                formal = node.child_by_field_name("parameters")
                params = tuple(_text(child) for child in _named(formal)) if formal is not None else ()
            body = node.child_by_field_name("body")
            if body is None or body.type == "statement_block":
                return ArrowFunction(params=params, body=None, text=text)
            return ArrowFunction(params=params, body=to_expression(body), text=text)
        case "unary_expression":
            operator = node.child_by_field_name("operator")
            argument = node.child_by_field_name("argument")
            if operator is not None and _text(operator) == "-" and argument is not None and argument.type == "number":
                return NumberLiteral(value=-_number_value(_text(argument)), text=text)
        case kind if kind in TRANSPARENT_NODES:
            inner = _named(node)
            if inner:
                return to_expression(inner[0])

    return Unknown(kind=node.type, text=text)


def _declarators(statement: Node) -> list[Node]:
    if statement.type == "export_statement":
        declaration = statement.child_by_field_name("declaration")
        if declaration is None:
            return []
        statement = declaration
    if statement.type not in ("lexical_declaration", "variable_declaration"):
        return []
    return [child for child in statement.named_children if child.type == "variable_declarator"]


def parse_declarations(source: SourceFile) -> list[Declaration]:
    """Parse a source file and return its top-level variable declarations.

    Raises:
        SchemaParseError: If the source contains syntax errors
    """
    parser = Parser(TS_LANGUAGE)
    tree = parser.parse(source.content.encode("utf-8"))
    root = tree.root_node

    if root.has_error:
        error = _first_error(root) or root
        raise SchemaParseError(source.file_name, error.start_point[0] + 1, _text(error)[:60])

    declarations = []
    for statement in root.named_children:
        for declarator in _declarators(statement):
            name = declarator.child_by_field_name("name")
            value = declarator.child_by_field_name("value")
            if name is None or value is None or name.type != "identifier":
                continue
            declarations.append(Declaration(name=_text(name), initializer=to_expression(value)))

    logger.debug(f"Parsed {len(declarations)} top-level declaration(s) from {source.file_name}")
    return declarations
