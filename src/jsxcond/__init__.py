"""jsxcond - desugars <Condition> and <Switch> JSX directives into ternaries.

Rewrites the two pseudo-elements of the conditional-rendering JSX extension
into plain conditional expressions the JSX runtime already understands:

    <Condition if={show}><p>hi</p></Condition>
        -> <>{Boolean(show) ? <><p>hi</p></> : null}</>

    return <Switch shortCircuit>
      <Switch.Case if={a}><X /></Switch.Case>
      <Switch.Case else><Y /></Switch.Case>
    </Switch>
        -> return a ? <X /> : <Y />

Public API:
    desugar - Run both passes over a tree
    DesugarConfig - Options object accepted by desugar()
    serialize - Render a tree as JSX source

Exceptions:
    JSXCondError - Base exception class
    DepthLimitExceededError - Tree nests deeper than the traversal limit
    PlaceholderLeakError - Internal placeholder survived post-processing
    ConfigurationError - Host options are not a mapping

Submodules:
    jsxcond.syntax.ast - AST node types (Program, JSXElement, ConditionalExpression, ...)
    jsxcond.syntax.visitor - ASTVisitor / ASTTransformer base classes
    jsxcond.transform - The rewrite and unwrap passes
"""

from .config import DesugarConfig
from .core.errors import (
    ConfigurationError,
    DepthLimitExceededError,
    JSXCondError,
    PlaceholderLeakError,
)
from .syntax import serialize
from .transform import desugar

try:
    from importlib.metadata import PackageNotFoundError
    from importlib.metadata import version as _get_version
except ImportError as e:
    raise RuntimeError("importlib.metadata unavailable - Python version too old? " + str(e)) from e

try:
    __version__ = _get_version("jsxcond")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "ConfigurationError",
    "DepthLimitExceededError",
    "DesugarConfig",
    "JSXCondError",
    "PlaceholderLeakError",
    "__version__",
    "desugar",
    "serialize",
]
