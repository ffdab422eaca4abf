"""Hypothesis strategies for JSX syntax trees.

Generates plain markup, directive-bearing markup and switch samples with
known branch layout, for property tests of the desugaring passes.

Event-Emitting Strategies (HypoFuzz-Optimized):
    - switch_samples: Emits ``switch={mode}`` and ``switch_branches={n}``
    - directive_programs: Emits ``context={slot}``

Python 3.13+.
"""

from __future__ import annotations

from dataclasses import dataclass

from hypothesis import event
from hypothesis import strategies as st
from hypothesis.strategies import composite

from jsxcond.syntax.ast import (
    Identifier,
    JSXElement,
    JSXExpressionContainer,
    JSXText,
    Program,
)
from tests.helpers.jsx import (
    case,
    condition,
    const,
    el,
    else_case,
    frag,
    leaf,
    paren,
    program,
    returning,
    stmt,
    switch,
)

__all__ = [
    "ELSE_TAG",
    "SwitchSample",
    "condition_names",
    "directive_programs",
    "directive_trees",
    "markup_trees",
    "switch_samples",
    "tag_names",
]

ELSE_TAG = "Otherwise"

# Constrained alphabets keep generation fast; directive names never appear
tag_names: st.SearchStrategy[str] = st.sampled_from(
    ["div", "span", "p", "li", "ul", "Header", "Footer", "Card"]
)

condition_names: st.SearchStrategy[str] = st.text(
    alphabet=st.sampled_from("abcdefgh"),
    min_size=1,
    max_size=3,
)

_texts: st.SearchStrategy[JSXText] = st.sampled_from(
    [" ", "\n  ", "hello", "a b", "\n"]
).map(JSXText)

_leaves = st.one_of(
    tag_names.map(leaf),
    _texts,
    condition_names.map(lambda name: JSXExpressionContainer(Identifier(name))),
)


def _as_element(node: object) -> JSXElement:
    """Root every generated tree in an element."""
    if isinstance(node, JSXElement):
        return node
    return el("div", node)  # type: ignore[arg-type]


def _markup_extend(children: st.SearchStrategy) -> st.SearchStrategy:
    child_lists = st.lists(children, max_size=4)
    return st.one_of(
        st.builds(lambda tag, kids: el(tag, *kids), tag_names, child_lists),
        child_lists.map(lambda kids: frag(*kids)),
    )


# Markup without any directive tag
markup_trees = st.recursive(tag_names.map(leaf), _markup_extend, max_leaves=15).map(_as_element)


def _directive_extend(children: st.SearchStrategy) -> st.SearchStrategy:
    child_lists = st.lists(children, max_size=3)
    cases = st.one_of(
        st.builds(
            lambda name, kids: case(Identifier(name), *kids), condition_names, child_lists
        ),
        child_lists.map(lambda kids: else_case(*kids)),
    )
    return st.one_of(
        _markup_extend(children),
        st.builds(
            lambda name, kids: condition(Identifier(name), *kids), condition_names, child_lists
        ),
        st.builds(
            lambda case_list, short: switch(*case_list, short_circuit=short),
            st.lists(cases, min_size=1, max_size=3),
            st.booleans(),
        ),
    )


# Markup with <Condition> and <Switch> directives at any depth
directive_trees = st.recursive(_leaves, _directive_extend, max_leaves=20).map(_as_element)


@composite
def directive_programs(draw: st.DrawFn) -> Program:
    """A directive tree placed in a random syntactic slot.

    Events emitted:
        - ``context={slot}``: statement, return, paren_return or initializer
    """
    tree = draw(directive_trees)
    slot = draw(st.sampled_from(["statement", "return", "paren_return", "initializer"]))
    event(f"context={slot}")
    match slot:
        case "statement":
            return program(stmt(tree))
        case "return":
            return returning(tree)
        case "paren_return":
            return returning(paren(tree))
        case _:
            return program(const("view", tree))


@dataclass(frozen=True, slots=True)
class SwitchSample:
    """A <Switch> whose branches each render one distinguishable element.

    Branch i renders <B{i} />; the else case, when present, renders
    <Otherwise />.
    """

    element: JSXElement
    names: tuple[str, ...]
    has_else: bool
    short_circuit: bool

    @property
    def branch_tags(self) -> tuple[str, ...]:
        return tuple(f"B{i}" for i in range(len(self.names)))


@composite
def switch_samples(draw: st.DrawFn, *, short_circuit: bool | None = None) -> SwitchSample:
    """Generate a switch with distinct condition identifiers.

    Branch content is padded with whitespace text at random, which must not
    change what renders.

    Events emitted:
        - ``switch={mode}``: short_circuit or parallel
        - ``switch_branches={n}``: Number of normal branches
    """
    names = tuple(draw(st.lists(condition_names, max_size=4, unique=True)))
    # A switch needs at least one case to count as a directive
    has_else = draw(st.booleans()) or not names
    if short_circuit is None:
        short_circuit = draw(st.booleans())
    event(f"switch={'short_circuit' if short_circuit else 'parallel'}")
    event(f"switch_branches={len(names)}")

    def content(tag: str) -> tuple[JSXElement | JSXText, ...]:
        if draw(st.booleans()):
            return (JSXText("\n  "), leaf(tag), JSXText("\n"))
        return (leaf(tag),)

    cases = [case(Identifier(name), *content(f"B{i}")) for i, name in enumerate(names)]
    if has_else:
        position = draw(st.integers(min_value=0, max_value=len(cases)))
        cases.insert(position, else_case(*content(ELSE_TAG)))
    return SwitchSample(
        element=switch(*cases, short_circuit=short_circuit),
        names=names,
        has_else=has_else,
        short_circuit=short_circuit,
    )
