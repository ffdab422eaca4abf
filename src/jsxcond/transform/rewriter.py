"""Primary rewrite pass: <Condition> and <Switch> to conditional expressions.

The rewriter walks the tree depth-first while tracking the position context of
the node being visited:

- TEMPLATE_CHILD: element/fragment children, attribute values and expression
  containers. Rewrites must still be template nodes, so results are wrapped
  in a fragment holding an expression container.
- ASSIGNMENT: variable initializers and assignment right-hand sides.
- RETURN: return arguments.

In ASSIGNMENT and RETURN slots the rewrite is a bare expression. It is
carried in a Placeholder node, which PlaceholderUnwrapper strips in the
second pass.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import replace

from jsxcond.constants import BOOLEAN_FUNC, CONDITION_TAG, IF_ATTR, SWITCH_TAG
from jsxcond.enums import PlaceholderKind, PositionContext, SwitchMode
from jsxcond.syntax.ast import (
    AssignmentExpression,
    ASTNode,
    BooleanLiteral,
    CallExpression,
    ConditionalExpression,
    Expression,
    Identifier,
    JSXChild,
    JSXElement,
    JSXExpressionContainer,
    JSXFragment,
    LogicalExpression,
    NullLiteral,
    Placeholder,
    ReturnStatement,
    Span,
    UnaryExpression,
    VariableDeclarator,
)
from jsxcond.syntax.visitor import ASTTransformer, clone

from .directives import (
    Branch,
    SwitchCases,
    branch_content,
    collect_cases,
    extract_condition,
    has_switch_cases,
    is_condition_element,
    is_short_circuit,
    is_switch_element,
)

__all__ = ["DirectiveRewriter", "else_guard", "select_switch_mode"]

logger = logging.getLogger(__name__)


def _boolean(condition: Expression) -> CallExpression:
    return CallExpression(callee=Identifier(BOOLEAN_FUNC), arguments=(condition,))


def select_switch_mode(
    cases: SwitchCases, short_circuit: bool, context: PositionContext
) -> SwitchMode:
    """Pick the evaluation mode of a switch with at least one normal branch.

    Short-circuit when requested, or when an expression slot holds at most one
    branch and no else, which reads as a plain conditional.
    """
    if short_circuit:
        return SwitchMode.SHORT_CIRCUIT
    if (
        context is not PositionContext.TEMPLATE_CHILD
        and len(cases.branches) <= 1
        and cases.else_branch is None
    ):
        return SwitchMode.SHORT_CIRCUIT
    return SwitchMode.PARALLEL


def else_guard(branches: tuple[Branch, ...]) -> Expression:
    """!c1 && !c2 && ... over every normal branch, or true when there are none.

    Conditions are cloned: each one is also used by its own branch, and
    renders evaluate it twice.
    """
    guard: Expression | None = None
    for branch in branches:
        negated = UnaryExpression(operator="!", argument=clone(branch.condition))
        if guard is None:
            guard = negated
        else:
            guard = LogicalExpression(operator="&&", left=guard, right=negated)
    return guard if guard is not None else BooleanLiteral(True)


class DirectiveRewriter(ASTTransformer):
    """Replaces directive elements with conditional expressions.

    Each instance keeps one context slot. Use a fresh instance per tree;
    rewrite() leaves the slot at TEMPLATE_CHILD when it returns.

    Attributes:
        conditions_rewritten: Number of <Condition> directives replaced
        switches_rewritten: Number of <Switch> directives replaced
    """

    def __init__(self, *, max_depth: int | None = None) -> None:
        super().__init__(max_depth=max_depth)
        self._context = PositionContext.TEMPLATE_CHILD
        self.conditions_rewritten = 0
        self.switches_rewritten = 0

    @property
    def context(self) -> PositionContext:
        """Position context of the node currently being visited."""
        return self._context

    def rewrite(self, node: ASTNode) -> ASTNode:
        """Rewrite every directive in a tree."""
        return self.transform(node)  # type: ignore[return-value]

    @contextmanager
    def _in_context(self, context: PositionContext) -> Iterator[None]:
        previous = self._context
        self._context = context
        try:
            yield
        finally:
            self._context = previous

    # ------------------------------------------------------------------
    # Context slots
    # ------------------------------------------------------------------

    def visit_ReturnStatement(self, node: ReturnStatement) -> ASTNode:
        if node.argument is None:
            return node
        with self._in_context(PositionContext.RETURN):
            argument = self.visit(node.argument)
        if argument is node.argument:
            return node
        return replace(node, argument=argument)

    def visit_VariableDeclarator(self, node: VariableDeclarator) -> ASTNode:
        if node.init is None:
            return node
        with self._in_context(PositionContext.ASSIGNMENT):
            init = self.visit(node.init)
        if init is node.init:
            return node
        return replace(node, init=init)

    def visit_AssignmentExpression(self, node: AssignmentExpression) -> ASTNode:
        left = self.visit(node.left)
        with self._in_context(PositionContext.ASSIGNMENT):
            right = self.visit(node.right)
        if left is node.left and right is node.right:
            return node
        return replace(node, left=left, right=right)

    def visit_JSXExpressionContainer(self, node: JSXExpressionContainer) -> ASTNode:
        with self._in_context(PositionContext.TEMPLATE_CHILD):
            return self.generic_visit(node)  # type: ignore[return-value]

    def visit_JSXFragment(self, node: JSXFragment) -> ASTNode:
        with self._in_context(PositionContext.TEMPLATE_CHILD):
            return self.generic_visit(node)  # type: ignore[return-value]

    def visit_JSXElement(self, node: JSXElement) -> ASTNode:
        with self._depth_guard:
            if is_condition_element(node):
                condition = extract_condition(node)
                if condition is not None:
                    return self._rewrite_condition(node, condition)
                logger.debug("<%s> without %s={...} left as markup", CONDITION_TAG, IF_ATTR)
            elif is_switch_element(node) and has_switch_cases(node):
                return self._rewrite_switch(node)

        with self._in_context(PositionContext.TEMPLATE_CHILD):
            return self.generic_visit(node)  # type: ignore[return-value]

    # ------------------------------------------------------------------
    # Rewrites
    # ------------------------------------------------------------------

    def _rewrite_children(self, children: tuple[JSXChild, ...]) -> tuple[JSXChild, ...]:
        """Rewrite directives nested inside a directive's own children."""
        with self._in_context(PositionContext.TEMPLATE_CHILD):
            return self._transform_list(children)

    def _test(self, condition: Expression, *, coerce: bool) -> Expression:
        return _boolean(condition) if coerce else condition

    def _package(
        self, expression: Expression, kind: PlaceholderKind, span: Span | None
    ) -> JSXFragment | Placeholder:
        """Fit a bare expression back into the current slot."""
        if self._context is PositionContext.TEMPLATE_CHILD:
            return JSXFragment(children=(JSXExpressionContainer(expression),), span=span)
        return Placeholder(kind=kind, expression=expression, span=span)

    def _rewrite_condition(self, node: JSXElement, condition: Expression) -> ASTNode:
        """<Condition if={c}>children</Condition> -> c ? <>children</> : null

        Only return operands skip Boolean() coercion.
        """
        children = self._rewrite_children(node.children)
        conditional = ConditionalExpression(
            test=self._test(condition, coerce=self._context is not PositionContext.RETURN),
            consequent=JSXFragment(children=children, span=node.span),
            alternate=NullLiteral(),
            span=node.span,
        )
        self.conditions_rewritten += 1
        logger.debug("Rewrote <%s> in %s context", CONDITION_TAG, self._context)
        return self._package(conditional, PlaceholderKind.CONDITION, node.span)

    def _rewrite_switch(self, node: JSXElement) -> ASTNode:
        collected = collect_cases(node)
        cases = SwitchCases(
            branches=tuple(
                replace(branch, children=self._rewrite_children(branch.children))
                for branch in collected.branches
            ),
            else_branch=(
                replace(
                    collected.else_branch,
                    children=self._rewrite_children(collected.else_branch.children),
                )
                if collected.else_branch is not None
                else None
            ),
        )
        self.switches_rewritten += 1

        if cases.is_empty:
            logger.debug("<%s> has no usable cases, rendering nothing", SWITCH_TAG)
            return JSXFragment(span=node.span)

        if not cases.branches and cases.else_branch is not None:
            # Only an else case: its content renders unconditionally
            content = branch_content(cases.else_branch.children, node.span)
            logger.debug("Hoisted else-only <%s> in %s context", SWITCH_TAG, self._context)
            if self._context is PositionContext.TEMPLATE_CHILD:
                return content
            return Placeholder(kind=PlaceholderKind.CONDITION, expression=content, span=node.span)

        mode = select_switch_mode(cases, is_short_circuit(node), self._context)
        logger.debug(
            "Rewrote <%s> with %d branch(es)%s as %s in %s context",
            SWITCH_TAG,
            len(cases.branches),
            " and else" if cases.else_branch is not None else "",
            mode,
            self._context,
        )
        if mode is SwitchMode.SHORT_CIRCUIT:
            return self._short_circuit(cases, node.span)
        return self._parallel(cases, node.span)

    def _short_circuit(self, cases: SwitchCases, span: Span | None) -> ASTNode:
        """c1 ? b1 : c2 ? b2 : else, built right to left."""
        chain: Expression = (
            branch_content(cases.else_branch.children, span)
            if cases.else_branch is not None
            else NullLiteral()
        )
        coerce = self._context is PositionContext.TEMPLATE_CHILD
        for branch in reversed(cases.branches):
            chain = ConditionalExpression(
                test=self._test(branch.condition, coerce=coerce),  # type: ignore[arg-type]
                consequent=branch_content(branch.children, span),
                alternate=chain,
                span=span,
            )
        return self._package(chain, PlaceholderKind.SWITCH, span)

    def _parallel(self, cases: SwitchCases, span: Span | None) -> JSXFragment:
        """<>{c1 ? <>b1</> : null}{c2 ? <>b2</> : null}...</>

        Always a template fragment: independent renders only make sense as a
        sequence of children.
        """
        guarded: list[tuple[Expression, tuple[JSXChild, ...]]] = [
            (branch.condition, branch.children)  # type: ignore[misc]
            for branch in cases.branches
        ]
        if cases.else_branch is not None:
            guarded.append((else_guard(cases.branches), cases.else_branch.children))

        containers = tuple(
            JSXExpressionContainer(
                ConditionalExpression(
                    test=test,
                    consequent=JSXFragment(children=children, span=span),
                    alternate=NullLiteral(),
                    span=span,
                )
            )
            for test, children in guarded
        )
        return JSXFragment(children=containers, span=span)
