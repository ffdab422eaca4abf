"""Tests for transform/pipeline.py: the desugar() entry point.

Covers identity on directive-free input, error propagation, placeholder
leak detection, logging, and property tests comparing what rewritten trees
render against the directive semantics.

Python 3.13+.
"""

from __future__ import annotations

import logging

import pytest
from hypothesis import event, given
from hypothesis import strategies as st

from jsxcond import DesugarConfig, desugar
from jsxcond.constants import CONDITION_TAG, SWITCH_CASE_TAG, SWITCH_TAG
from jsxcond.core.errors import DepthLimitExceededError, PlaceholderLeakError
from jsxcond.syntax.ast import (
    ASTNode,
    BinaryExpression,
    Expression,
    JSXElement,
    Placeholder,
    Program,
)
from jsxcond.syntax.visitor import ASTVisitor, find_placeholders
from jsxcond.transform import pipeline
from jsxcond.transform.pipeline import rewrite, unwrap
from jsxcond.transform.postprocess import PlaceholderUnwrapper
from tests.helpers.jsx import (
    case,
    condition,
    const,
    el,
    else_case,
    ident,
    leaf,
    paren,
    program,
    returning,
    stmt,
    switch,
)
from tests.helpers.render import render
from tests.strategies import (
    ELSE_TAG,
    SwitchSample,
    directive_programs,
    markup_trees,
    switch_samples,
)


class _TagCollector(ASTVisitor[None]):
    """Collects the tag of every element in a tree."""

    def __init__(self) -> None:
        super().__init__()
        self.tags: list[str] = []

    def visit_JSXElement(self, node: JSXElement) -> None:
        self.tags.append(node.tag)
        self.generic_visit(node)


def tags_in(node: ASTNode) -> list[str]:
    collector = _TagCollector()
    collector.visit(node)
    return collector.tags


def expected_render(sample: SwitchSample, env: dict[str, bool]) -> list[str]:
    """What a switch renders for one binding of its conditions."""
    truthy = [tag for name, tag in zip(sample.names, sample.branch_tags, strict=True) if env[name]]
    if sample.short_circuit:
        truthy = truthy[:1]
    if not truthy and sample.has_else:
        return [ELSE_TAG]
    return truthy


# ============================================================================
# IDENTITY AND ERRORS
# ============================================================================


class TestDesugarIdentity:
    """Trees without directives come back as the same object."""

    def test_plain_markup(self) -> None:
        tree = program(stmt(el("div", leaf("p"))))

        assert desugar(tree) is tree

    def test_empty_program(self) -> None:
        tree = Program(body=())

        assert desugar(tree) is tree

    @given(markup_trees)
    def test_markup_property(self, tree: JSXElement) -> None:
        """Property: directive-free markup is never rebuilt."""
        event(f"tags={min(len(tags_in(tree)), 10)}")
        source = program(stmt(tree))

        assert desugar(source) is source

    def test_any_root_node(self) -> None:
        """desugar() accepts any node, not only programs."""
        result = desugar(el("div", condition(ident("a"), leaf("X"))))

        assert isinstance(result, JSXElement)
        assert CONDITION_TAG not in tags_in(result)


class TestDesugarConfig:
    def test_default_config(self) -> None:
        tree = returning(condition(ident("a"), leaf("X")))

        assert desugar(tree, DesugarConfig()) == desugar(tree)

    def test_config_from_host_options(self) -> None:
        config = DesugarConfig.from_mapping({})
        tree = returning(condition(ident("a"), leaf("X")))

        assert desugar(tree, config) == desugar(tree)


class TestDesugarErrors:
    def test_depth_limit(self) -> None:
        deep = leaf("X")
        for _ in range(30):
            deep = el("div", deep)
        tree = program(stmt(el("main", condition(ident("a"), deep))))

        with pytest.raises(DepthLimitExceededError) as exc_info:
            desugar(tree, max_depth=10)

        assert exc_info.value.max_depth == 10

    def test_depth_limit_without_directives(self) -> None:
        """An explicit limit applies even when nothing would change."""
        deep = leaf("X")
        for _ in range(30):
            deep = el("div", deep)

        with pytest.raises(DepthLimitExceededError):
            desugar(program(stmt(deep)), max_depth=10)

    def test_long_expression_without_directives(self) -> None:
        """A 100-term concatenation nests 99 levels deep and is left alone."""
        chain: Expression = ident("a1")
        for index in range(2, 101):
            chain = BinaryExpression(operator="+", left=chain, right=ident(f"a{index}"))
        tree = program(const("x", chain))

        assert desugar(tree) is tree

    def test_long_expression_next_to_directive(self) -> None:
        chain: Expression = ident("a1")
        for index in range(2, 101):
            chain = BinaryExpression(operator="+", left=chain, right=ident(f"a{index}"))
        tree = program(const("x", chain), stmt(el("div", condition(ident("a"), leaf("X")))))

        result = desugar(tree)

        assert result.body[0] is tree.body[0]  # type: ignore[union-attr]
        assert CONDITION_TAG not in tags_in(result)

    def test_default_depth_handles_realistic_nesting(self) -> None:
        deep = condition(ident("a"), leaf("X"))
        for _ in range(40):
            deep = el("div", deep)

        result = desugar(program(stmt(deep)))

        assert CONDITION_TAG not in tags_in(result)

    def test_leak_detected(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """A post-processor that leaves placeholders is reported."""

        class LeakyUnwrapper(PlaceholderUnwrapper):
            def visit_Placeholder(self, node: Placeholder) -> ASTNode:
                return node

        monkeypatch.setattr(pipeline, "PlaceholderUnwrapper", LeakyUnwrapper)

        with pytest.raises(PlaceholderLeakError) as exc_info:
            desugar(returning(condition(ident("a"), leaf("X"))))

        assert len(exc_info.value.placeholders) == 1
        assert "condition" in str(exc_info.value)


class TestDesugarLogging:
    def test_summary_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        tree = program(
            stmt(el("div", condition(ident("a"), leaf("X")), switch(case(ident("b"), leaf("Y")))))
        )

        with caplog.at_level(logging.DEBUG, logger="jsxcond"):
            desugar(tree)

        summaries = [r for r in caplog.records if r.name == "jsxcond.transform.pipeline"]
        assert len(summaries) == 1
        assert "1 condition(s) and 1 switch(es)" in summaries[0].getMessage()

    def test_silent_at_default_level(self, caplog: pytest.LogCaptureFixture) -> None:
        """Only debug records are emitted for well-formed input."""
        with caplog.at_level(logging.INFO, logger="jsxcond"):
            desugar(returning(condition(ident("a"), leaf("X"))))

        assert caplog.records == []


class TestSeparatePasses:
    """rewrite() and unwrap() compose to desugar()."""

    def test_compose(self) -> None:
        tree = returning(paren(switch(case(ident("a"), leaf("X"), leaf("Y")), short_circuit=True)))

        intermediate = rewrite(tree)

        assert len(find_placeholders(intermediate)) == 1
        assert unwrap(intermediate) == desugar(tree)


# ============================================================================
# PROPERTIES
# ============================================================================


class TestDesugarProperties:
    """Invariants over random directive trees."""

    @given(directive_programs())
    def test_no_directives_or_placeholders_remain(self, tree: Program) -> None:
        """Property: output holds no directive tags and no placeholders."""
        result = desugar(tree)
        tags = tags_in(result)

        assert CONDITION_TAG not in tags
        assert SWITCH_TAG not in tags
        assert SWITCH_CASE_TAG not in tags
        assert find_placeholders(result) == ()

    @given(directive_programs())
    def test_idempotent(self, tree: Program) -> None:
        """Property: desugaring output again changes nothing."""
        once = desugar(tree)

        assert desugar(once) is once

    @given(directive_programs())
    def test_input_not_mutated(self, tree: Program) -> None:
        snapshot = repr(tree)

        desugar(tree)

        assert repr(tree) == snapshot


class TestRenderSemantics:
    """Rewritten trees render what the directives promise."""

    @given(switch_samples(), st.data())
    def test_switch_as_child(self, sample: SwitchSample, data: st.DataObject) -> None:
        """Property: a switch in markup renders per its mode."""
        env = {name: data.draw(st.booleans(), label=name) for name in sample.names}
        event(f"truthy={sum(env.values())}")

        result = desugar(program(stmt(el("main", sample.element))))
        main = result.body[0].expression  # type: ignore[union-attr]

        rendered = [tag for child in main.children for tag in render(child, env)]
        assert rendered == expected_render(sample, env)

    @given(switch_samples(), st.data(), st.booleans())
    def test_switch_returned(
        self, sample: SwitchSample, data: st.DataObject, parenthesized: bool
    ) -> None:
        """Property: a returned switch renders per its mode."""
        env = {name: data.draw(st.booleans(), label=name) for name in sample.names}
        operand = paren(sample.element) if parenthesized else sample.element

        result = desugar(returning(operand))
        argument = result.body[0].body.body[0].argument  # type: ignore[union-attr]

        assert render(argument, env) == expected_render(sample, env)

    @given(st.booleans(), st.sampled_from(["child", "return", "paren_return"]))
    def test_condition(self, shown: bool, slot: str) -> None:
        """Property: a condition renders its children exactly when truthy."""
        directive = condition(ident("show"), leaf("A"), leaf("B"))
        env = {"show": shown}
        event(f"slot={slot}")

        match slot:
            case "child":
                result = desugar(program(stmt(el("main", directive))))
                main = result.body[0].expression  # type: ignore[union-attr]
                rendered = [tag for child in main.children for tag in render(child, env)]
            case "return":
                result = desugar(returning(directive))
                argument = result.body[0].body.body[0].argument  # type: ignore[union-attr]
                rendered = render(argument, env)
            case _:
                result = desugar(returning(paren(directive)))
                argument = result.body[0].body.body[0].argument  # type: ignore[union-attr]
                rendered = render(argument, env)

        assert rendered == (["A", "B"] if shown else [])

    def test_else_only_always_renders(self) -> None:
        result = desugar(program(stmt(el("main", switch(else_case(leaf("Z")))))))
        main = result.body[0].expression  # type: ignore[union-attr]

        assert [tag for child in main.children for tag in render(child, {})] == ["Z"]
