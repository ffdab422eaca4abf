"""JSX/JavaScript AST (Abstract Syntax Tree) node definitions.

Covers the subset of the host grammar that component templates are written
in: statements and expressions a render function uses, plus JSX markup.
Nodes are frozen slotted dataclasses with tuple children, so trees are
immutable, hashable and compare structurally.

Includes type guards as static methods (eliminates circular imports).

Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from typing import TypeIs

from jsxcond.enums import DeclarationKind, PlaceholderKind

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Base types
    "Span",
    # Program structure
    "Program",
    "ExpressionStatement",
    "BlockStatement",
    "ReturnStatement",
    "VariableDeclaration",
    "VariableDeclarator",
    "FunctionDeclaration",
    "IfStatement",
    # Literals
    "Identifier",
    "StringLiteral",
    "NumericLiteral",
    "BooleanLiteral",
    "NullLiteral",
    # Expressions
    "ArrayExpression",
    "ObjectPattern",
    "MemberExpression",
    "CallExpression",
    "UnaryExpression",
    "BinaryExpression",
    "LogicalExpression",
    "ConditionalExpression",
    "AssignmentExpression",
    "ArrowFunctionExpression",
    "ParenthesizedExpression",
    # JSX
    "JSXIdentifier",
    "JSXMemberExpression",
    "JSXAttribute",
    "JSXSpreadAttribute",
    "JSXElement",
    "JSXFragment",
    "JSXText",
    "JSXExpressionContainer",
    "JSXEmptyExpression",
    # Synthetic
    "Placeholder",
    # Operator tables
    "UNARY_OPERATORS",
    "BINARY_OPERATORS",
    "LOGICAL_OPERATORS",
    "ASSIGNMENT_OPERATORS",
    # Type aliases
    "Statement",
    "Expression",
    "JSXElementName",
    "JSXChild",
    "ASTNode",
]

UNARY_OPERATORS: frozenset[str] = frozenset({"!", "-", "+", "~", "typeof", "void", "delete"})

BINARY_OPERATORS: frozenset[str] = frozenset({
    "==", "!=", "===", "!==",
    "<", "<=", ">", ">=", "in", "instanceof",
    "<<", ">>", ">>>",
    "+", "-", "*", "/", "%", "**",
    "|", "^", "&",
})

LOGICAL_OPERATORS: frozenset[str] = frozenset({"&&", "||", "??"})

ASSIGNMENT_OPERATORS: frozenset[str] = frozenset({
    "=", "+=", "-=", "*=", "/=", "%=", "**=",
    "<<=", ">>=", ">>>=", "|=", "^=", "&=",
    "&&=", "||=", "??=",
})


def _check_operator(operator: str, allowed: frozenset[str], kind: str) -> None:
    if operator not in allowed:
        msg = f"Unknown {kind} operator: {operator!r}"
        raise ValueError(msg)


# ============================================================================
# BASE TYPES
# ============================================================================

# ASTNode type alias is defined at the end of this file after all classes
# This is necessary because it references all the AST node classes


@dataclass(frozen=True, slots=True)
class Span:
    """Source position span.

    Tracks offsets in source text for error reporting and tooling.
    Generated nodes inherit the span of the directive they replace.

    Attributes:
        start: Starting offset (inclusive)
        end: Ending offset (exclusive)
    """

    start: int
    end: int

    def __post_init__(self) -> None:
        """Validate span invariants."""
        if self.start < 0:
            msg = f"Span start must be >= 0, got {self.start}"
            raise ValueError(msg)
        if self.end < self.start:
            msg = f"Span end ({self.end}) must be >= start ({self.start})"
            raise ValueError(msg)


# ============================================================================
# PROGRAM STRUCTURE
# ============================================================================


@dataclass(frozen=True, slots=True)
class Program:
    """Root AST node containing all top-level statements."""

    body: tuple["Statement", ...]


@dataclass(frozen=True, slots=True)
class ExpressionStatement:
    """Expression evaluated for its side effects: render(app);"""

    expression: "Expression"


@dataclass(frozen=True, slots=True)
class BlockStatement:
    """Braced statement list: { ... }"""

    body: tuple["Statement", ...]


@dataclass(frozen=True, slots=True)
class ReturnStatement:
    """return argument;

    The argument is a return-context slot for the rewriter.
    """

    argument: "Expression | None" = None


@dataclass(frozen=True, slots=True)
class VariableDeclaration:
    """const a = 1, b = 2;"""

    kind: DeclarationKind
    declarations: tuple["VariableDeclarator", ...]


@dataclass(frozen=True, slots=True)
class VariableDeclarator:
    """Single binding of a declaration: id = init

    The initializer is an assignment-context slot for the rewriter.
    """

    id: "Identifier | ObjectPattern"
    init: "Expression | None" = None


@dataclass(frozen=True, slots=True)
class FunctionDeclaration:
    """function App({ show }) { ... }"""

    id: "Identifier"
    params: tuple["Identifier | ObjectPattern", ...]
    body: BlockStatement


@dataclass(frozen=True, slots=True)
class IfStatement:
    """if (test) consequent else alternate"""

    test: "Expression"
    consequent: "Statement"
    alternate: "Statement | None" = None


# ============================================================================
# LITERALS
# ============================================================================


@dataclass(frozen=True, slots=True)
class Identifier:
    """Identifier reference or binding name."""

    name: str


@dataclass(frozen=True, slots=True)
class StringLiteral:
    """String literal: 'text'

    Value is stored unescaped; the serializer quotes and escapes it.
    """

    value: str


@dataclass(frozen=True, slots=True)
class NumericLiteral:
    """Number literal: 42 or 3.14

    The optional raw field preserves original source for serialization.
    """

    value: int | float
    raw: str | None = None


@dataclass(frozen=True, slots=True)
class BooleanLiteral:
    """true or false"""

    value: bool


@dataclass(frozen=True, slots=True)
class NullLiteral:
    """null"""


# ============================================================================
# EXPRESSIONS
# ============================================================================


@dataclass(frozen=True, slots=True)
class ArrayExpression:
    """[a, b, c]"""

    elements: tuple["Expression", ...]


@dataclass(frozen=True, slots=True)
class ObjectPattern:
    """Destructuring binding in parameter position: { user, settings }"""

    properties: tuple[Identifier, ...]


@dataclass(frozen=True, slots=True)
class MemberExpression:
    """Property access: a.b, a?.b, a[b]"""

    object: "Expression"
    property: "Expression"
    computed: bool = False
    optional: bool = False


@dataclass(frozen=True, slots=True)
class CallExpression:
    """callee(arg1, arg2)"""

    callee: "Expression"
    arguments: tuple["Expression", ...]


@dataclass(frozen=True, slots=True)
class UnaryExpression:
    """Prefix operator: !a, -a, typeof a"""

    operator: str
    argument: "Expression"

    def __post_init__(self) -> None:
        """Validate operator."""
        _check_operator(self.operator, UNARY_OPERATORS, "unary")


@dataclass(frozen=True, slots=True)
class BinaryExpression:
    """Arithmetic, comparison and bitwise operators: a === b"""

    operator: str
    left: "Expression"
    right: "Expression"

    def __post_init__(self) -> None:
        """Validate operator."""
        _check_operator(self.operator, BINARY_OPERATORS, "binary")


@dataclass(frozen=True, slots=True)
class LogicalExpression:
    """Short-circuiting operators: a && b, a || b, a ?? b"""

    operator: str
    left: "Expression"
    right: "Expression"

    def __post_init__(self) -> None:
        """Validate operator."""
        _check_operator(self.operator, LOGICAL_OPERATORS, "logical")


@dataclass(frozen=True, slots=True)
class ConditionalExpression:
    """Ternary: test ? consequent : alternate"""

    test: "Expression"
    consequent: "Expression"
    alternate: "Expression"
    span: Span | None = None

    @staticmethod
    def guard(expr: object) -> TypeIs["ConditionalExpression"]:
        """Type guard for ConditionalExpression."""
        return isinstance(expr, ConditionalExpression)


@dataclass(frozen=True, slots=True)
class AssignmentExpression:
    """left = right

    The right-hand side is an assignment-context slot for the rewriter.
    """

    operator: str
    left: "Expression"
    right: "Expression"

    def __post_init__(self) -> None:
        """Validate operator."""
        _check_operator(self.operator, ASSIGNMENT_OPERATORS, "assignment")


@dataclass(frozen=True, slots=True)
class ArrowFunctionExpression:
    """(params) => body"""

    params: tuple["Identifier | ObjectPattern", ...]
    body: "BlockStatement | Expression"


@dataclass(frozen=True, slots=True)
class ParenthesizedExpression:
    """Explicit grouping kept from source: (expression)"""

    expression: "Expression"


# ============================================================================
# JSX
# ============================================================================


@dataclass(frozen=True, slots=True)
class JSXIdentifier:
    """Element or attribute name segment: div, Switch"""

    name: str


@dataclass(frozen=True, slots=True)
class JSXMemberExpression:
    """Dotted element name: Switch.Case, React.Fragment"""

    object: "JSXIdentifier | JSXMemberExpression"
    property: JSXIdentifier


@dataclass(frozen=True, slots=True)
class JSXAttribute:
    """name="value", name={expr} or bare name

    A bare attribute (value=None) is a boolean flag: <Switch.Case else>.
    """

    name: str
    value: "StringLiteral | JSXExpressionContainer | JSXElement | JSXFragment | None" = None


@dataclass(frozen=True, slots=True)
class JSXSpreadAttribute:
    """{...props}"""

    argument: "Expression"


@dataclass(frozen=True, slots=True)
class JSXElement:
    """Markup element: <name attributes>children</name>

    Attributes:
        name: Element name (plain or dotted)
        attributes: Attributes in source order
        children: Child nodes in source order
        self_closing: Rendered as <name /> when there are no children
        span: Source location (optional)
    """

    name: "JSXElementName"
    attributes: tuple["JSXAttribute | JSXSpreadAttribute", ...] = ()
    children: tuple["JSXChild", ...] = ()
    self_closing: bool = False
    span: Span | None = None

    @property
    def tag(self) -> str:
        """Dotted tag name: "div", "Switch.Case"."""
        return jsx_name_to_str(self.name)

    @staticmethod
    def guard(node: object) -> TypeIs["JSXElement"]:
        """Type guard for JSXElement."""
        return isinstance(node, JSXElement)


@dataclass(frozen=True, slots=True)
class JSXFragment:
    """Grouping without markup identity: <>children</>"""

    children: tuple["JSXChild", ...] = ()
    span: Span | None = None

    @staticmethod
    def guard(node: object) -> TypeIs["JSXFragment"]:
        """Type guard for JSXFragment."""
        return isinstance(node, JSXFragment)


@dataclass(frozen=True, slots=True)
class JSXText:
    """Literal text between tags, including its whitespace."""

    value: str

    @staticmethod
    def guard(node: object) -> TypeIs["JSXText"]:
        """Type guard for JSXText."""
        return isinstance(node, JSXText)


@dataclass(frozen=True, slots=True)
class JSXEmptyExpression:
    """Contents of an empty container: {}"""


@dataclass(frozen=True, slots=True)
class JSXExpressionContainer:
    """Embedded expression: {expression}

    The expression is a template-child slot for the rewriter.
    """

    expression: "Expression | JSXEmptyExpression"


# ============================================================================
# SYNTHETIC
# ============================================================================


@dataclass(frozen=True, slots=True)
class Placeholder:
    """Carrier for a bare expression produced in a non-template slot.

    Only exists between the rewrite and unwrap passes. The kind records which
    directive produced it so unwrapping can apply switch-only cleanups.
    """

    kind: PlaceholderKind
    expression: "Expression"
    span: Span | None = None

    @staticmethod
    def guard(node: object) -> TypeIs["Placeholder"]:
        """Type guard for Placeholder."""
        return isinstance(node, Placeholder)


def jsx_name_to_str(name: "JSXElementName") -> str:
    """Render an element name as a dotted string."""
    match name:
        case JSXIdentifier(name=text):
            return text
        case JSXMemberExpression(object=obj, property=prop):
            return f"{jsx_name_to_str(obj)}.{prop.name}"
    msg = f"Not a JSX element name: {type(name).__name__}"
    raise TypeError(msg)


# ============================================================================
# TYPE ALIASES
# ============================================================================

type Statement = (
    ExpressionStatement
    | BlockStatement
    | ReturnStatement
    | VariableDeclaration
    | FunctionDeclaration
    | IfStatement
)
type Expression = (
    Identifier
    | StringLiteral
    | NumericLiteral
    | BooleanLiteral
    | NullLiteral
    | ArrayExpression
    | MemberExpression
    | CallExpression
    | UnaryExpression
    | BinaryExpression
    | LogicalExpression
    | ConditionalExpression
    | AssignmentExpression
    | ArrowFunctionExpression
    | ParenthesizedExpression
    | JSXElement
    | JSXFragment
    | Placeholder
)
type JSXElementName = JSXIdentifier | JSXMemberExpression
type JSXChild = JSXElement | JSXFragment | JSXText | JSXExpressionContainer

# Complete ASTNode type - union of all AST node types
type ASTNode = (
    Program
    | Statement
    | VariableDeclarator
    | Expression
    | ObjectPattern
    | JSXIdentifier
    | JSXMemberExpression
    | JSXAttribute
    | JSXSpreadAttribute
    | JSXText
    | JSXExpressionContainer
    | JSXEmptyExpression
    | Span
)
