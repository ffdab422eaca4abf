"""Entry points running the two desugaring passes.

Python 3.13+.
"""

from __future__ import annotations

import logging

from jsxcond.config import DesugarConfig
from jsxcond.core.errors import PlaceholderLeakError
from jsxcond.syntax.ast import ASTNode
from jsxcond.syntax.visitor import find_placeholders

from .postprocess import PlaceholderUnwrapper
from .rewriter import DirectiveRewriter

__all__ = ["desugar", "rewrite", "unwrap"]

logger = logging.getLogger(__name__)


def rewrite(node: ASTNode, *, max_depth: int | None = None) -> ASTNode:
    """Run the primary pass alone.

    The result may contain Placeholder nodes and is only meant to be fed to
    unwrap() or inspected.
    """
    return DirectiveRewriter(max_depth=max_depth).rewrite(node)


def unwrap(node: ASTNode, *, max_depth: int | None = None) -> ASTNode:
    """Run the post-processing pass alone."""
    return PlaceholderUnwrapper(max_depth=max_depth).unwrap(node)


def desugar(
    program: ASTNode,
    config: DesugarConfig | None = None,
    *,
    max_depth: int | None = None,
) -> ASTNode:
    """Replace every <Condition> and <Switch> directive with plain JSX.

    Stateless across calls: every invocation builds fresh passes.

    Args:
        program: Tree to transform (usually a Program, any node works)
        config: Options (default: DesugarConfig())
        max_depth: Maximum traversal depth (default: derived from the recursion limit)

    Returns:
        Tree of the same grammar without directives or placeholders.
        A tree without directives is returned as the same object.

    Raises:
        DepthLimitExceededError: If the tree nests deeper than max_depth
        PlaceholderLeakError: If a placeholder survived (internal defect)

    Example:
        >>> from jsxcond.syntax import serialize
        >>> serialize(desugar(program))
        'function App({ show }) { return show ? <><p>hi</p></> : null; }'
    """
    if config is None:
        config = DesugarConfig()

    rewriter = DirectiveRewriter(max_depth=max_depth)
    intermediate = rewriter.rewrite(program)
    if intermediate is program:
        return program

    unwrapper = PlaceholderUnwrapper(max_depth=max_depth)
    result = unwrapper.unwrap(intermediate)

    leaked = find_placeholders(result, max_depth=max_depth)
    if leaked:
        raise PlaceholderLeakError(leaked)

    logger.debug(
        "Desugared %d condition(s) and %d switch(es), unwrapped %d placeholder(s)",
        rewriter.conditions_rewritten,
        rewriter.switches_rewritten,
        unwrapper.unwrapped,
    )
    return result
