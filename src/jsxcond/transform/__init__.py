"""Desugaring passes for the <Condition> and <Switch> directives.

Python 3.13+.
"""

from .directives import Branch, SwitchCases, collect_cases
from .pipeline import desugar, rewrite, unwrap
from .postprocess import PlaceholderUnwrapper, collapse_branches
from .rewriter import DirectiveRewriter, else_guard, select_switch_mode

__all__ = [
    "Branch",
    "DirectiveRewriter",
    "PlaceholderUnwrapper",
    "SwitchCases",
    "collapse_branches",
    "collect_cases",
    "desugar",
    "else_guard",
    "rewrite",
    "select_switch_mode",
    "unwrap",
]
