"""Directive recognition helpers shared by the rewrite passes.

Attribute extraction, whitespace filtering and branch classification for the
<Condition>, <Switch> and <Switch.Case> pseudo-elements. Everything here is a
pure function of the nodes passed in.

Python 3.13+.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from jsxcond.constants import (
    CONDITION_TAG,
    ELSE_ATTR,
    IF_ATTR,
    SHORT_CIRCUIT_ATTR,
    SWITCH_CASE_TAG,
    SWITCH_TAG,
)
from jsxcond.syntax.ast import (
    Expression,
    JSXAttribute,
    JSXChild,
    JSXElement,
    JSXEmptyExpression,
    JSXExpressionContainer,
    JSXFragment,
    JSXText,
    Span,
)

__all__ = [
    "Branch",
    "SwitchCases",
    "branch_content",
    "collect_cases",
    "extract_condition",
    "find_attribute",
    "has_switch_cases",
    "is_condition_element",
    "is_short_circuit",
    "is_significant",
    "is_switch_case",
    "is_switch_element",
    "significant_children",
    "single_element_child",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Branch:
    """One arm of a switch: condition plus the template children it guards.

    The else-branch has no condition.
    """

    condition: Expression | None
    children: tuple[JSXChild, ...]

    @property
    def is_else(self) -> bool:
        return self.condition is None


@dataclass(frozen=True, slots=True)
class SwitchCases:
    """Branches collected from a <Switch>, in source order."""

    branches: tuple[Branch, ...]
    else_branch: Branch | None = None

    @property
    def is_empty(self) -> bool:
        return not self.branches and self.else_branch is None


# ============================================================================
# ATTRIBUTES
# ============================================================================


def find_attribute(element: JSXElement, name: str) -> JSXAttribute | None:
    """First plain attribute called name (spread attributes are skipped)."""
    for attr in element.attributes:
        if isinstance(attr, JSXAttribute) and attr.name == name:
            return attr
    return None


def extract_condition(element: JSXElement) -> Expression | None:
    """The expression of an if={...} attribute, if present and non-empty.

    String values (if="x"), bare flags (if) and empty containers (if={})
    do not count as conditions.
    """
    attr = find_attribute(element, IF_ATTR)
    if attr is None:
        return None
    match attr.value:
        case JSXExpressionContainer(expression=JSXEmptyExpression()):
            return None
        case JSXExpressionContainer(expression=expression):
            return expression  # type: ignore[return-value]
        case _:
            return None


def is_short_circuit(element: JSXElement) -> bool:
    """Presence of shortCircuit selects chained evaluation, whatever its value."""
    return find_attribute(element, SHORT_CIRCUIT_ATTR) is not None


# ============================================================================
# TAGS
# ============================================================================


def is_condition_element(element: JSXElement) -> bool:
    return element.tag == CONDITION_TAG


def is_switch_element(element: JSXElement) -> bool:
    return element.tag == SWITCH_TAG


def is_switch_case(node: object) -> bool:
    return JSXElement.guard(node) and node.tag == SWITCH_CASE_TAG


def has_switch_cases(element: JSXElement) -> bool:
    """A <Switch> is only a directive when it holds at least one <Switch.Case>."""
    return any(is_switch_case(child) for child in element.children)


# ============================================================================
# WHITESPACE AND BRANCH CONTENT
# ============================================================================


def is_significant(child: JSXChild) -> bool:
    """Whitespace-only text is layout, everything else is content."""
    if JSXText.guard(child):
        return bool(child.value.strip())
    return True


def significant_children(children: tuple[JSXChild, ...]) -> tuple[JSXChild, ...]:
    return tuple(child for child in children if is_significant(child))


def single_element_child(children: tuple[JSXChild, ...]) -> JSXElement | None:
    """The only significant child when it is an element, else None."""
    significant = significant_children(children)
    if len(significant) == 1 and JSXElement.guard(significant[0]):
        return significant[0]
    return None


def branch_content(
    children: tuple[JSXChild, ...], span: Span | None = None
) -> JSXElement | JSXFragment:
    """Reduce branch children to one expression-shaped node.

    A branch holding exactly one element (ignoring whitespace text) becomes
    that element. Anything else is grouped in a fragment that keeps the
    children as written, whitespace included.
    """
    element = single_element_child(children)
    if element is not None:
        return element
    return JSXFragment(children=children, span=span)


# ============================================================================
# CASE COLLECTION
# ============================================================================


def collect_cases(switch: JSXElement) -> SwitchCases:
    """Collect the branches of a <Switch> in source order.

    A case with if={...} is a normal branch; otherwise a case with the else
    flag is the default branch. When several else cases exist the first one
    wins and the rest are dropped. Cases with neither attribute and
    non-case children are ignored.
    """
    branches: list[Branch] = []
    else_branch: Branch | None = None

    for child in switch.children:
        if not is_switch_case(child):
            continue
        case_element: JSXElement = child  # type: ignore[assignment]

        condition = extract_condition(case_element)
        if condition is not None:
            branches.append(Branch(condition=condition, children=case_element.children))
        elif find_attribute(case_element, ELSE_ATTR) is not None:
            if else_branch is None:
                else_branch = Branch(condition=None, children=case_element.children)
            else:
                logger.warning(
                    "Ignoring duplicate <%s %s> case: the first else case is kept",
                    SWITCH_CASE_TAG,
                    ELSE_ATTR,
                )
        else:
            logger.debug("Ignoring <%s> without %s or %s", SWITCH_CASE_TAG, IF_ATTR, ELSE_ATTR)

    return SwitchCases(branches=tuple(branches), else_branch=else_branch)
