"""Serialize the JSX AST back to source text.

Converts AST nodes to JSX/JavaScript source. Useful for:
- Inspecting rewrite results in tests and debugging sessions
- Hosts that lack their own code generator

Output is single-line per statement. Expression nesting is precedence-aware:
a child that binds looser than its slot is parenthesised, so trees print
correctly even where no ParenthesizedExpression node exists. Placeholder nodes
print with their synthetic debug tags, which makes a leak visible.

Python 3.13+.
"""

from jsxcond.constants import CONDITION_PLACEHOLDER_TAG, SWITCH_PLACEHOLDER_TAG
from jsxcond.enums import PlaceholderKind

from .ast import (
    ArrayExpression,
    ArrowFunctionExpression,
    AssignmentExpression,
    ASTNode,
    BinaryExpression,
    BlockStatement,
    BooleanLiteral,
    CallExpression,
    ConditionalExpression,
    ExpressionStatement,
    FunctionDeclaration,
    Identifier,
    IfStatement,
    JSXAttribute,
    JSXElement,
    JSXEmptyExpression,
    JSXExpressionContainer,
    JSXFragment,
    JSXIdentifier,
    JSXMemberExpression,
    JSXSpreadAttribute,
    JSXText,
    LogicalExpression,
    MemberExpression,
    NullLiteral,
    NumericLiteral,
    ObjectPattern,
    ParenthesizedExpression,
    Placeholder,
    Program,
    ReturnStatement,
    StringLiteral,
    UnaryExpression,
    VariableDeclaration,
    VariableDeclarator,
    jsx_name_to_str,
)
from .visitor import ASTVisitor

__all__ = ["JSXSerializer", "serialize"]

# Binding power, loosest first. Operands binding looser than their slot
# requirement get parenthesised.
PREC_LOWEST: int = 0
PREC_ASSIGNMENT: int = 2
PREC_CONDITIONAL: int = 3
PREC_UNARY: int = 15
PREC_CALL: int = 17
PREC_PRIMARY: int = 18

_BINARY_PRECEDENCE: dict[str, int] = {
    "??": 4, "||": 4,
    "&&": 5,
    "|": 6,
    "^": 7,
    "&": 8,
    "==": 9, "!=": 9, "===": 9, "!==": 9,
    "<": 10, "<=": 10, ">": 10, ">=": 10, "in": 10, "instanceof": 10,
    "<<": 11, ">>": 11, ">>>": 11,
    "+": 12, "-": 12,
    "*": 13, "/": 13, "%": 13,
    "**": 14,
}

_PLACEHOLDER_TAGS: dict[PlaceholderKind, str] = {
    PlaceholderKind.CONDITION: CONDITION_PLACEHOLDER_TAG,
    PlaceholderKind.SWITCH: SWITCH_PLACEHOLDER_TAG,
}


def precedence(node: ASTNode) -> int:
    """Binding power of an expression node."""
    match node:
        case AssignmentExpression() | ArrowFunctionExpression():
            return PREC_ASSIGNMENT
        case ConditionalExpression():
            return PREC_CONDITIONAL
        case BinaryExpression(operator=op) | LogicalExpression(operator=op):
            return _BINARY_PRECEDENCE[op]
        case UnaryExpression():
            return PREC_UNARY
        case CallExpression() | MemberExpression():
            return PREC_CALL
        case _:
            return PREC_PRIMARY


def _mixes_nullish(parent_op: str, child: ASTNode) -> bool:
    """?? cannot be combined with && or || without explicit grouping."""
    if not isinstance(child, LogicalExpression):
        return False
    return (parent_op == "??") != (child.operator == "??")


def _quote(value: str) -> str:
    escaped = (
        value.replace("\\", "\\\\")
        .replace("'", "\\'")
        .replace("\n", "\\n")
        .replace("\r", "\\r")
    )
    return f"'{escaped}'"


def _attribute_string(value: str) -> str:
    """Quote a JSX attribute string.

    JSX attribute strings have no backslash escapes, so the quote character
    is one the value lacks. A value holding both falls back to &quot;.
    """
    if '"' not in value:
        return f'"{value}"'
    if "'" not in value:
        return f"'{value}'"
    return '"' + value.replace('"', "&quot;") + '"'


class JSXSerializer(ASTVisitor[str]):
    """Converts AST back to JSX source string.

    Holds no state beyond the depth guard, which is balanced after every
    call, so one instance can serialize many trees.

    Usage:
        >>> serializer = JSXSerializer()
        >>> serializer.serialize(Program(body=(ReturnStatement(Identifier("x")),)))
        'return x;'
    """

    def serialize(self, node: ASTNode) -> str:
        """Serialize any node to source text.

        Raises:
            DepthLimitExceededError: If nesting exceeds the depth limit
        """
        return self._emit(node, PREC_LOWEST)

    def _emit(self, node: ASTNode, min_precedence: int) -> str:
        with self._depth_guard:
            text = self.visit(node)
        if precedence(node) < min_precedence:
            return f"({text})"
        return text

    def generic_visit(self, node: ASTNode) -> str:
        msg = f"Cannot serialize node type: {type(node).__name__}"
        raise TypeError(msg)

    # ------------------------------------------------------------------
    # Statements
    # ------------------------------------------------------------------

    def visit_Program(self, node: Program) -> str:
        return "\n".join(self._emit(stmt, PREC_LOWEST) for stmt in node.body)

    def visit_ExpressionStatement(self, node: ExpressionStatement) -> str:
        return f"{self._emit(node.expression, PREC_LOWEST)};"

    def visit_BlockStatement(self, node: BlockStatement) -> str:
        if not node.body:
            return "{}"
        inner = " ".join(self._emit(stmt, PREC_LOWEST) for stmt in node.body)
        return f"{{ {inner} }}"

    def visit_ReturnStatement(self, node: ReturnStatement) -> str:
        if node.argument is None:
            return "return;"
        return f"return {self._emit(node.argument, PREC_LOWEST)};"

    def visit_VariableDeclaration(self, node: VariableDeclaration) -> str:
        declarations = ", ".join(self._emit(decl, PREC_LOWEST) for decl in node.declarations)
        return f"{node.kind} {declarations};"

    def visit_VariableDeclarator(self, node: VariableDeclarator) -> str:
        target = self._emit(node.id, PREC_LOWEST)
        if node.init is None:
            return target
        return f"{target} = {self._emit(node.init, PREC_ASSIGNMENT)}"

    def visit_FunctionDeclaration(self, node: FunctionDeclaration) -> str:
        params = ", ".join(self._emit(p, PREC_LOWEST) for p in node.params)
        return f"function {node.id.name}({params}) {self._emit(node.body, PREC_LOWEST)}"

    def visit_IfStatement(self, node: IfStatement) -> str:
        text = f"if ({self._emit(node.test, PREC_LOWEST)}) {self._emit(node.consequent, PREC_LOWEST)}"
        if node.alternate is not None:
            text += f" else {self._emit(node.alternate, PREC_LOWEST)}"
        return text

    # ------------------------------------------------------------------
    # Literals
    # ------------------------------------------------------------------

    def visit_Identifier(self, node: Identifier) -> str:
        return node.name

    def visit_StringLiteral(self, node: StringLiteral) -> str:
        return _quote(node.value)

    def visit_NumericLiteral(self, node: NumericLiteral) -> str:
        if node.raw is not None:
            return node.raw
        return repr(node.value)

    def visit_BooleanLiteral(self, node: BooleanLiteral) -> str:
        return "true" if node.value else "false"

    def visit_NullLiteral(self, node: NullLiteral) -> str:
        return "null"

    # ------------------------------------------------------------------
    # Expressions
    # ------------------------------------------------------------------

    def visit_ArrayExpression(self, node: ArrayExpression) -> str:
        return "[" + ", ".join(self._emit(e, PREC_ASSIGNMENT) for e in node.elements) + "]"

    def visit_ObjectPattern(self, node: ObjectPattern) -> str:
        if not node.properties:
            return "{}"
        return "{ " + ", ".join(p.name for p in node.properties) + " }"

    def visit_MemberExpression(self, node: MemberExpression) -> str:
        obj = self._emit(node.object, PREC_CALL)
        if node.computed:
            accessor = "?.[" if node.optional else "["
            return f"{obj}{accessor}{self._emit(node.property, PREC_LOWEST)}]"
        accessor = "?." if node.optional else "."
        return f"{obj}{accessor}{self._emit(node.property, PREC_PRIMARY)}"

    def visit_CallExpression(self, node: CallExpression) -> str:
        args = ", ".join(self._emit(a, PREC_ASSIGNMENT) for a in node.arguments)
        return f"{self._emit(node.callee, PREC_CALL)}({args})"

    def visit_UnaryExpression(self, node: UnaryExpression) -> str:
        argument = self._emit(node.argument, PREC_UNARY)
        # - -a and + +a must not fuse into decrement/increment
        fuses = node.operator in ("+", "-") and argument.startswith(node.operator)
        if node.operator.isalpha() or fuses:
            return f"{node.operator} {argument}"
        return f"{node.operator}{argument}"

    def _binary(self, node: BinaryExpression | LogicalExpression) -> str:
        prec = _BINARY_PRECEDENCE[node.operator]
        # ** is right-associative, everything else left-associative
        left_min, right_min = (prec + 1, prec) if node.operator == "**" else (prec, prec + 1)
        if _mixes_nullish(node.operator, node.left):
            left_min = PREC_PRIMARY
        if _mixes_nullish(node.operator, node.right):
            right_min = PREC_PRIMARY
        left = self._emit(node.left, left_min)
        right = self._emit(node.right, right_min)
        return f"{left} {node.operator} {right}"

    def visit_BinaryExpression(self, node: BinaryExpression) -> str:
        return self._binary(node)

    def visit_LogicalExpression(self, node: LogicalExpression) -> str:
        return self._binary(node)

    def visit_ConditionalExpression(self, node: ConditionalExpression) -> str:
        test = self._emit(node.test, PREC_CONDITIONAL + 1)
        consequent = self._emit(node.consequent, PREC_ASSIGNMENT)
        alternate = self._emit(node.alternate, PREC_CONDITIONAL)
        return f"{test} ? {consequent} : {alternate}"

    def visit_AssignmentExpression(self, node: AssignmentExpression) -> str:
        left = self._emit(node.left, PREC_CALL)
        return f"{left} {node.operator} {self._emit(node.right, PREC_ASSIGNMENT)}"

    def visit_ArrowFunctionExpression(self, node: ArrowFunctionExpression) -> str:
        params = ", ".join(self._emit(p, PREC_LOWEST) for p in node.params)
        if isinstance(node.body, BlockStatement):
            body = self._emit(node.body, PREC_LOWEST)
        else:
            body = self._emit(node.body, PREC_ASSIGNMENT)
        return f"({params}) => {body}"

    def visit_ParenthesizedExpression(self, node: ParenthesizedExpression) -> str:
        return f"({self._emit(node.expression, PREC_LOWEST)})"

    # ------------------------------------------------------------------
    # JSX
    # ------------------------------------------------------------------

    def visit_JSXIdentifier(self, node: JSXIdentifier) -> str:
        return node.name

    def visit_JSXMemberExpression(self, node: JSXMemberExpression) -> str:
        return jsx_name_to_str(node)

    def visit_JSXAttribute(self, node: JSXAttribute) -> str:
        match node.value:
            case None:
                return node.name
            case StringLiteral(value=value):
                return f"{node.name}={_attribute_string(value)}"
            case _:
                return f"{node.name}={self._emit(node.value, PREC_LOWEST)}"

    def visit_JSXSpreadAttribute(self, node: JSXSpreadAttribute) -> str:
        return f"{{...{self._emit(node.argument, PREC_ASSIGNMENT)}}}"

    def visit_JSXElement(self, node: JSXElement) -> str:
        tag = node.tag
        attributes = "".join(" " + self._emit(a, PREC_LOWEST) for a in node.attributes)
        if node.self_closing and not node.children:
            return f"<{tag}{attributes} />"
        return f"<{tag}{attributes}>{self._children(node.children)}</{tag}>"

    def visit_JSXFragment(self, node: JSXFragment) -> str:
        return f"<>{self._children(node.children)}</>"

    def visit_JSXText(self, node: JSXText) -> str:
        return node.value

    def visit_JSXExpressionContainer(self, node: JSXExpressionContainer) -> str:
        return f"{{{self._emit(node.expression, PREC_LOWEST)}}}"

    def visit_JSXEmptyExpression(self, node: JSXEmptyExpression) -> str:
        return ""

    def visit_Placeholder(self, node: Placeholder) -> str:
        tag = _PLACEHOLDER_TAGS[node.kind]
        return f"<{tag}>{{{self._emit(node.expression, PREC_LOWEST)}}}</{tag}>"

    def _children(self, children: tuple[ASTNode, ...]) -> str:
        return "".join(self._emit(child, PREC_LOWEST) for child in children)


def serialize(node: ASTNode, *, max_depth: int | None = None) -> str:
    """Serialize an AST node (typically a Program) to JSX source.

    Args:
        node: Root node to render
        max_depth: Maximum nesting depth (default: derived from the recursion limit)

    Returns:
        Source text

    Example:
        >>> from jsxcond.syntax.ast import Identifier, ReturnStatement
        >>> serialize(ReturnStatement(Identifier("x")))
        'return x;'
    """
    return JSXSerializer(max_depth=max_depth).serialize(node)
