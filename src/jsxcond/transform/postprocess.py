"""Post-processing pass: strip placeholders left by the rewriter.

Every Placeholder is replaced by the expression it carries. Switch
placeholders additionally get their chain of branches collapsed, so a
branch holding a single element is not wrapped in a fragment. When the
placeholder sat inside parentheses in the source, the parentheses move onto
the branch content so the result stays readable once printed.

The pass never recognises directives; it only consumes rewriter output.

Python 3.13+.
"""

from __future__ import annotations

import logging
from dataclasses import replace

from jsxcond.enums import PlaceholderKind
from jsxcond.syntax.ast import (
    ASTNode,
    ConditionalExpression,
    Expression,
    JSXElement,
    JSXFragment,
    JSXText,
    ParenthesizedExpression,
    Placeholder,
)
from jsxcond.syntax.visitor import ASTTransformer

from .directives import single_element_child

__all__ = ["PlaceholderUnwrapper", "collapse_branches", "needs_consequent_parens"]

logger = logging.getLogger(__name__)


def collapse_branches(expression: ASTNode) -> ASTNode:
    """Replace single-element fragments along a conditional chain.

    Walks consequents down the alternate arm: c1 ? <><X /></> : c2 ? ...
    becomes c1 ? <X /> : c2 ? ... Fragments with more than one significant
    child, or whose only child is not an element, are kept.
    """
    if not ConditionalExpression.guard(expression):
        return expression

    consequent: Expression = expression.consequent
    if JSXFragment.guard(consequent):
        element = single_element_child(consequent.children)
        if element is not None:
            consequent = element

    alternate = collapse_branches(expression.alternate)
    if consequent is expression.consequent and alternate is expression.alternate:
        return expression
    return replace(expression, consequent=consequent, alternate=alternate)


def needs_consequent_parens(consequent: ASTNode) -> bool:
    """Whether branch content spans several nodes or lines once printed."""
    match consequent:
        case JSXFragment():
            return True
        case JSXElement(children=children):
            return len(children) > 1 or any(
                JSXText.guard(child) and "\n" in child.value for child in children
            )
        case _:
            return False


class PlaceholderUnwrapper(ASTTransformer):
    """Replaces Placeholder nodes with the expressions they carry.

    Attributes:
        unwrapped: Number of placeholders removed
    """

    def __init__(self, *, max_depth: int | None = None) -> None:
        super().__init__(max_depth=max_depth)
        self.unwrapped = 0

    def unwrap(self, node: ASTNode) -> ASTNode:
        """Remove every placeholder in a tree."""
        result = self.transform(node)
        if self.unwrapped:
            logger.debug("Unwrapped %d placeholder(s)", self.unwrapped)
        return result  # type: ignore[return-value]

    def visit_Placeholder(self, node: Placeholder) -> ASTNode:
        self.unwrapped += 1
        # The carried expression may itself contain placeholders
        expression = self.visit(node.expression)
        if node.kind is PlaceholderKind.SWITCH:
            return collapse_branches(expression)  # type: ignore[arg-type]
        return expression  # type: ignore[return-value]

    def visit_ParenthesizedExpression(self, node: ParenthesizedExpression) -> ASTNode:
        if not Placeholder.guard(node.expression):
            return self.generic_visit(node)  # type: ignore[return-value]

        inner = self.visit(node.expression)
        if not ConditionalExpression.guard(inner):
            return replace(node, expression=inner)

        # (c ? a : b) -> c ? (a) : b
        if needs_consequent_parens(inner.consequent):
            return replace(inner, consequent=ParenthesizedExpression(inner.consequent))
        return inner
