"""Recognized expression shapes of the schema DSL.

Parsed source is reduced to the small set of expression forms the extractors
understand. Anything else becomes ``Unknown`` and keeps its raw text.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class StringLiteral:
    value: str
    text: str = field(default="", compare=False)


@dataclass(frozen=True)
class NumberLiteral:
    value: int | float
    text: str = field(default="", compare=False)


@dataclass(frozen=True)
class BooleanLiteral:
    value: bool
    text: str = field(default="", compare=False)


@dataclass(frozen=True)
class ArrayLiteral:
    elements: tuple[Expression, ...]
    text: str = field(default="", compare=False)


@dataclass(frozen=True)
class ObjectLiteral:
    properties: tuple[tuple[str, Expression], ...]
    text: str = field(default="", compare=False)

    def get(self, key: str) -> Expression | None:
        """Return the value of ``key``; the last duplicate wins."""
        found = None
        for name, value in self.properties:
            if name == key:
                found = value
        return found


@dataclass(frozen=True)
class Parenthesized:
    expression: Expression
    text: str = field(default="", compare=False)


@dataclass(frozen=True)
class TaggedTemplate:
    tag: str
    template: str
    text: str = field(default="", compare=False)


@dataclass(frozen=True)
class Call:
    callee: Expression
    args: tuple[Expression, ...]
    text: str = field(default="", compare=False)


@dataclass(frozen=True)
class Identifier:
    name: str
    text: str = field(default="", compare=False)


@dataclass(frozen=True)
class PropertyAccess:
    object: Expression
    name: str
    text: str = field(default="", compare=False)


@dataclass(frozen=True)
class ArrowFunction:
    params: tuple[str, ...]
    # None for block bodies
    body: Expression | None
    text: str = field(default="", compare=False)


@dataclass(frozen=True)
class Unknown:
    kind: str
    text: str = field(default="", compare=False)


Expression = (
    StringLiteral
    | NumberLiteral
    | BooleanLiteral
    | ArrayLiteral
    | ObjectLiteral
    | Parenthesized
    | TaggedTemplate
    | Call
    | Identifier
    | PropertyAccess
    | ArrowFunction
    | Unknown
)


@dataclass(frozen=True)
class CallFrame:
    """One call in a chain such as ``uuid("id").primaryKey().defaultRandom()``."""

    name: str | None
    args: tuple[Expression, ...]
    is_method: bool


def unwrap_parens(expr: Expression | None) -> Expression | None:
    while isinstance(expr, Parenthesized):
        expr = expr.expression
    return expr


def call_chain(expr: Expression | None) -> list[CallFrame]:
    """Unwind a call chain into frames ordered from outermost to innermost.

    ``a("x").b().c(1)`` yields ``[c(1), b(), a("x")]``. Unwinding stops at the
    first receiver that is not itself a call.
    """
    frames: list[CallFrame] = []
    current = expr
    while isinstance(current, Call):
        match current.callee:
            case PropertyAccess(object=receiver, name=name):
                frames.append(CallFrame(name, current.args, is_method=True))
                current = receiver
            case Identifier(name=name):
                frames.append(CallFrame(name, current.args, is_method=False))
                break
            case _:
                frames.append(CallFrame(None, current.args, is_method=False))
                break
    return frames


def root_call(frames: list[CallFrame]) -> CallFrame | None:
    """Return the innermost frame when it calls a bare identifier."""
    if frames and not frames[-1].is_method and frames[-1].name is not None:
        return frames[-1]
    return None


def callee_name(expr: Expression | None) -> str | None:
    """Name of the function a call targets: ``f(...)`` or ``obj.f(...)``."""
    match expr:
        case Call(callee=Identifier(name=name)):
            return name
        case Call(callee=PropertyAccess(name=name)):
            return name
    return None


def member_name(expr: Expression | None) -> str | None:
    """Accessed property of ``table.column``, else None."""
    if isinstance(expr, PropertyAccess):
        return expr.name
    return None


def is_true(expr: Expression | None) -> bool:
    return isinstance(expr, BooleanLiteral) and expr.value is True
