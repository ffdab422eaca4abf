"""JSX syntax package.

Provides AST definitions, visitor pattern, and serialization.
Separate from the transform passes so tooling can build and inspect trees
without pulling in the rewriter.

Python 3.13+.
"""

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
    Expression,
    ExpressionStatement,
    FunctionDeclaration,
    Identifier,
    IfStatement,
    JSXAttribute,
    JSXChild,
    JSXElement,
    JSXElementName,
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
    Span,
    Statement,
    StringLiteral,
    UnaryExpression,
    VariableDeclaration,
    VariableDeclarator,
)
from .serializer import JSXSerializer, serialize
from .visitor import ASTTransformer, ASTVisitor, clone, find_placeholders

__all__ = [
    "ASTNode",
    "ASTTransformer",
    "ASTVisitor",
    "ArrayExpression",
    "ArrowFunctionExpression",
    "AssignmentExpression",
    "BinaryExpression",
    "BlockStatement",
    "BooleanLiteral",
    "CallExpression",
    "ConditionalExpression",
    "Expression",
    "ExpressionStatement",
    "FunctionDeclaration",
    "Identifier",
    "IfStatement",
    "JSXAttribute",
    "JSXChild",
    "JSXElement",
    "JSXElementName",
    "JSXEmptyExpression",
    "JSXExpressionContainer",
    "JSXFragment",
    "JSXIdentifier",
    "JSXMemberExpression",
    "JSXSerializer",
    "JSXSpreadAttribute",
    "JSXText",
    "LogicalExpression",
    "MemberExpression",
    "NullLiteral",
    "NumericLiteral",
    "ObjectPattern",
    "ParenthesizedExpression",
    "Placeholder",
    "Program",
    "ReturnStatement",
    "Span",
    "Statement",
    "StringLiteral",
    "UnaryExpression",
    "VariableDeclaration",
    "VariableDeclarator",
    "clone",
    "find_placeholders",
    "serialize",
]
