"""Visitor pattern for AST traversal.

Enables passes to traverse and transform the JSX AST without modifying node
classes.

NOTE: This module follows Python stdlib ast.NodeVisitor naming convention.
Methods are named visit_NodeName (PascalCase) rather than visit_node_name
(snake_case), e.g. visit_JSXElement.

Type Parameters:
- ASTVisitor[T] is generic over return type T
- ASTVisitor (no type param) defaults to T=ASTNode
- ASTTransformer uses extended return type: ASTNode | None | list[ASTNode]

Python 3.13+.
"""

from collections.abc import Callable, Iterator
from dataclasses import Field, fields, replace
from typing import Any, ClassVar

from jsxcond.core.depth_guard import DepthGuard

from .ast import ASTNode, Placeholder

__all__ = ["ASTTransformer", "ASTVisitor", "clone", "find_placeholders", "iter_child_nodes"]

type TransformerResult = ASTNode | None | list[ASTNode]

# Positions are metadata, never traversed
_SKIPPED_FIELDS: frozenset[str] = frozenset({"span"})


def _is_node(value: object) -> bool:
    return hasattr(value, "__dataclass_fields__")


def iter_child_nodes(node: ASTNode) -> Iterator[ASTNode]:
    """Yield direct child nodes in field order (tuples flattened)."""
    for field in fields(node):  # type: ignore[arg-type]
        if field.name in _SKIPPED_FIELDS:
            continue
        value = getattr(node, field.name)
        if isinstance(value, tuple):
            yield from (item for item in value if _is_node(item))
        elif _is_node(value):
            yield value


class ASTVisitor[T = ASTNode]:
    """Base visitor for traversing the JSX AST.

    Follows stdlib ast.NodeVisitor convention: generic_visit() automatically
    traverses all child nodes. Override visit_NodeType methods to add custom
    behavior.

    Uses class-level dispatch table:
    - Dispatch table built once per class definition via __init_subclass__
    - Falls back to instance-level cache for bound methods

    Example:
        >>> class CountElementsVisitor(ASTVisitor):
        ...     def __init__(self):
        ...         super().__init__()
        ...         self.count = 0
        ...
        ...     def visit_JSXElement(self, node):
        ...         self.count += 1
        ...         return self.generic_visit(node)
        ...
        >>> visitor = CountElementsVisitor()
        >>> visitor.visit(program)
        >>> print(visitor.count)
    """

    __slots__ = ("_depth_guard", "_instance_dispatch_cache")

    _class_visit_methods: ClassVar[dict[str, str]] = {}

    # Dataclass fields per node type, shared by all visitors
    _fields_cache: ClassVar[dict[type, tuple[Field[Any], ...]]] = {}

    def __init_subclass__(cls, **kwargs: object) -> None:
        """Build class-level dispatch table when subclass is defined."""
        super().__init_subclass__(**kwargs)
        cls._class_visit_methods = {}
        for name in dir(cls):
            if name.startswith("visit_") and name != "visit":
                cls._class_visit_methods[name[6:]] = name

    def __init__(self, *, max_depth: int | None = None) -> None:
        """Initialize visitor with depth guard and dispatch cache.

        Subclasses MUST call super().__init__() to ensure depth protection
        is properly initialized.

        Args:
            max_depth: Maximum traversal depth (default: the recursion-limit
                derived default_max_depth()).
        """
        self._depth_guard = DepthGuard() if max_depth is None else DepthGuard(max_depth=max_depth)
        self._instance_dispatch_cache: dict[type, Callable[[Any], T]] = {}

    def visit(self, node: ASTNode) -> T:
        """Visit a node, dispatching to visit_<ClassName> or generic_visit."""
        node_type = type(node)

        if node_type in self._instance_dispatch_cache:
            return self._instance_dispatch_cache[node_type](node)

        node_type_name = node_type.__name__
        if node_type_name in self._class_visit_methods:
            method = getattr(self, self._class_visit_methods[node_type_name])
        else:
            method = self.generic_visit

        self._instance_dispatch_cache[node_type] = method
        return method(node)  # type: ignore[no-any-return]

    def _get_node_fields(self, node_type: type) -> tuple[Field[Any], ...]:
        """Get cached traversable dataclass fields for a node type."""
        if node_type not in ASTVisitor._fields_cache:
            ASTVisitor._fields_cache[node_type] = tuple(
                f for f in fields(node_type) if f.name not in _SKIPPED_FIELDS
            )
        return ASTVisitor._fields_cache[node_type]

    def generic_visit(self, node: ASTNode) -> T:
        """Default visitor (traverses children with depth protection).

        Raises:
            DepthLimitExceededError: If traversal depth exceeds max_depth
        """
        with self._depth_guard:
            for child in iter_child_nodes(node):
                self.visit(child)

        return node  # type: ignore[return-value]


class ASTTransformer(ASTVisitor[TransformerResult]):
    """AST transformer producing new immutable trees.

    Each visit method can return:
    - The modified node (replaces original)
    - None (removes node from a parent tuple)
    - A list of nodes (replaces single node with multiple, in tuples only)

    Unchanged subtrees are returned by identity, so a transformer that
    matches nothing hands back the very tree it was given.

    Example - Rename all identifiers:
        >>> class RenameTransformer(ASTTransformer):
        ...     def __init__(self, mapping: dict[str, str]):
        ...         super().__init__()
        ...         self.mapping = mapping
        ...
        ...     def visit_Identifier(self, node: Identifier) -> Identifier:
        ...         if node.name in self.mapping:
        ...             return Identifier(name=self.mapping[node.name])
        ...         return node
        ...
        >>> renamed = RenameTransformer({"old": "new"}).transform(program)
    """

    def transform(self, node: ASTNode) -> TransformerResult:
        """Transform an AST node or tree (main entry point)."""
        return self.visit(node)

    def generic_visit(self, node: ASTNode) -> TransformerResult:
        """Transform node children, rebuilding only what changed.

        Raises:
            DepthLimitExceededError: If traversal depth exceeds max_depth
            TypeError: If a visit method returns a list for a single-node field
        """
        with self._depth_guard:
            changes: dict[str, object] = {}
            for field in self._get_node_fields(type(node)):
                value = getattr(node, field.name)

                if isinstance(value, tuple):
                    new_value: object = self._transform_list(value)
                elif _is_node(value):
                    new_value = self.visit(value)
                    if isinstance(new_value, list):
                        msg = (
                            f"Cannot expand {type(value).__name__} into a list: "
                            f"{type(node).__name__}.{field.name} holds a single node"
                        )
                        raise TypeError(msg)
                else:
                    continue

                if new_value is not value:
                    changes[field.name] = new_value

            if not changes:
                return node
            return replace(node, **changes)  # type: ignore[type-var]

    def _transform_list(self, nodes: tuple[Any, ...]) -> tuple[Any, ...]:
        """Transform a tuple of nodes.

        Handles node removal (None) and expansion (lists). Returns the input
        tuple itself when every item came back unchanged.
        """
        result: list[Any] = []
        changed = False
        for node in nodes:
            if not _is_node(node):
                result.append(node)
                continue

            transformed = self.visit(node)
            match transformed:
                case None:
                    changed = True
                case list():
                    changed = True
                    result.extend(transformed)
                case _:
                    changed = changed or transformed is not node
                    result.append(transformed)

        return tuple(result) if changed else nodes


def clone[N](node: N) -> N:
    """Structurally copy a subtree.

    Every node object in the result is new, so the copy can be attached to a
    second parent without aliasing the original.
    """
    changes: dict[str, object] = {}
    for field in fields(node):  # type: ignore[arg-type]
        value = getattr(node, field.name)
        if isinstance(value, tuple):
            changes[field.name] = tuple(clone(item) if _is_node(item) else item for item in value)
        elif _is_node(value):
            changes[field.name] = clone(value)
    return replace(node, **changes)  # type: ignore[type-var]


class _PlaceholderCollector(ASTVisitor[None]):
    """Collects every Placeholder node in traversal order."""

    def __init__(self, *, max_depth: int | None = None) -> None:
        super().__init__(max_depth=max_depth)
        self.found: list[Placeholder] = []

    def visit_Placeholder(self, node: Placeholder) -> None:
        self.found.append(node)
        self.generic_visit(node)


def find_placeholders(node: ASTNode, *, max_depth: int | None = None) -> tuple[Placeholder, ...]:
    """Return all placeholder nodes in a tree (empty for well-formed output)."""
    collector = _PlaceholderCollector(max_depth=max_depth)
    collector.visit(node)
    return tuple(collector.found)
