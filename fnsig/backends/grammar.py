"""Full-grammar signature backend built on tree-sitter.

Parses the serialized callable with the JavaScript (or TypeScript) grammar
instead of scanning text, then maps the parameter nodes onto the same
shape model the text engine produces. Runtime-printed methods such as
``instanceFn(a, b) { ... }`` are not valid programs on their own, so the
source is first tried as a parenthesised expression and then as the single
member of an object literal.
"""

from __future__ import annotations

import logging

import tree_sitter as ts

from ..config import DescriberConfig
from ..constants import TREE_SITTER_BACKEND
from ..core.exceptions import (
    ConfigurationError,
    DecompositionError,
    ExtractionError,
    UnknownShapeError,
)
from ..engine.extractor import ensure_inspectable
from ..models import (
    DestructureKind,
    Extraction,
    KeyedMapping,
    Leaf,
    OrderedSequence,
    ParameterDescriptor,
    Shape,
    Spread,
)
from .ast_engine import ASTEngine, ParsedAST, named_children
from .base import SignatureBackend

logger = logging.getLogger(__name__)

_FUNCTION_TYPES = frozenset({
    "function_expression",
    "function",
    "generator_function",
    "arrow_function",
})

# (prefix, suffix, wrapped in an object literal)
_WRAPPINGS = (
    ("(", "\n)", False),
    ("({", "\n})", True),
)


class TreeSitterBackend(SignatureBackend):
    """Describes callables from a full tree-sitter parse."""

    name = TREE_SITTER_BACKEND

    def __init__(
        self,
        config: DescriberConfig | None = None,
        engine: ASTEngine | None = None,
    ) -> None:
        super().__init__(config)
        self.engine = engine or ASTEngine()
        try:
            self.engine._get_language(self.config.language)
        except ValueError as e:
            raise ConfigurationError(str(e)) from e

    def analyze(
        self, source_text: str | None
    ) -> tuple[Extraction, list[ParameterDescriptor]]:
        text = ensure_inspectable(source_text)
        ast, node = self._parse_callable(text)
        if node.type == "class":
            return self._analyze_class(ast, node)
        return self._analyze_function(ast, node)

    # ------------------------------------------------------------------
    # Locating the callable node
    # ------------------------------------------------------------------

    def _parse_callable(self, text: str) -> tuple[ParsedAST, ts.Node]:
        for prefix, suffix, as_member in _WRAPPINGS:
            ast = self.engine.parse(prefix + text + suffix, language=self.config.language)
            if ast.has_errors:
                continue
            node = self._unwrap(ast, as_member)
            if node is not None:
                return ast, node
            logger.debug(f"Parsed without a callable using {prefix!r} wrapping")
        raise ExtractionError(f"Function parsing failed: {text}")

    @staticmethod
    def _unwrap(ast: ParsedAST, as_member: bool) -> ts.Node | None:
        statements = named_children(ast.root_node)
        if len(statements) != 1 or statements[0].type != "expression_statement":
            return None
        expression = named_children(statements[0])
        if not expression or expression[0].type != "parenthesized_expression":
            return None
        inner = named_children(expression[0])
        if not inner:
            return None
        node = inner[0]

        if as_member:
            if node.type != "object":
                return None
            members = named_children(node)
            if len(members) == 1 and members[0].type == "method_definition":
                return members[0]
            return None
        if node.type in _FUNCTION_TYPES or node.type == "class":
            return node
        return None

    # ------------------------------------------------------------------
    # Functions and classes
    # ------------------------------------------------------------------

    def _analyze_function(
        self, ast: ParsedAST, node: ts.Node
    ) -> tuple[Extraction, list[ParameterDescriptor]]:
        name_node = node.child_by_field_name("name")
        name = "" if name_node is None else self._member_name(ast, name_node)

        params_node = node.child_by_field_name("parameters")
        if params_node is not None:
            parameter_text = ast.get_text(params_node)[1:-1]
            parameters = [
                self._parameter(ast, child) for child in named_children(params_node)
            ]
        else:
            # Single-param arrow without parens: x => ...
            single = node.child_by_field_name("parameter")
            if single is None:
                raise ExtractionError(f"No parameter list in {ast.get_text(node)}")
            parameter_text = ast.get_text(single)
            parameters = [self._parameter(ast, single)]

        extraction = Extraction(
            name=name,
            is_async=_has_token(node, "async"),
            is_arrow_form=node.type == "arrow_function",
            is_generator_form=(
                node.type == "generator_function"
                or (node.type == "method_definition" and _has_token(node, "*"))
            ),
            parameter_text=parameter_text,
        )
        return extraction, parameters

    def _analyze_class(
        self, ast: ParsedAST, node: ts.Node
    ) -> tuple[Extraction, list[ParameterDescriptor]]:
        name_node = node.child_by_field_name("name")
        name = "" if name_node is None else ast.get_text(name_node)

        superclass = None
        for child in named_children(node):
            if child.type != "class_heritage":
                continue
            target = named_children(child)[0]
            if target.type == "extends_clause":
                # TypeScript wraps the expression in an extends_clause
                target = target.child_by_field_name("value") or named_children(target)[0]
            superclass = ast.get_text(target).strip()

        body = node.child_by_field_name("body")
        for member in named_children(body) if body is not None else []:
            if member.type != "method_definition":
                continue
            member_name = member.child_by_field_name("name")
            if member_name is None or ast.get_text(member_name) != "constructor":
                continue
            constructor, parameters = self._analyze_function(ast, member)
            extraction = Extraction(
                name=name,
                is_class_form=True,
                parameter_text=constructor.parameter_text,
                superclass=superclass,
                has_constructor=True,
            )
            return extraction, parameters

        return Extraction(name=name, is_class_form=True, superclass=superclass), []

    @staticmethod
    def _member_name(ast: ParsedAST, node: ts.Node) -> str:
        if node.type == "computed_property_name":
            inner = named_children(node)
            return ast.get_text(inner[0]).strip() if inner else ""
        return ast.get_text(node)

    # ------------------------------------------------------------------
    # Parameters
    # ------------------------------------------------------------------

    def _parameter(self, ast: ParsedAST, node: ts.Node) -> ParameterDescriptor:
        node_type = node.type

        if node_type in ("required_parameter", "optional_parameter"):
            pattern = node.child_by_field_name("pattern")
            if pattern is None:
                raise UnknownShapeError(f"Parameter without pattern: {ast.get_text(node)}")
            descriptor = self._parameter(ast, pattern)
            has_value = node.child_by_field_name("value") is not None
            if has_value or node_type == "optional_parameter":
                descriptor = self._with_default(ast, node, descriptor)
            return descriptor

        if node_type == "assignment_pattern":
            descriptor = self._parameter(ast, node.child_by_field_name("left"))
            return self._with_default(ast, node, descriptor)

        shape = self._pattern_shape(ast, node, 0)
        if node_type == "identifier":
            return ParameterDescriptor(name=ast.get_text(node), raw_shape=shape)
        if node_type == "object_pattern":
            return ParameterDescriptor(
                name="", raw_shape=shape, destructure_kind=DestructureKind.OBJECT
            )
        if node_type == "array_pattern":
            return ParameterDescriptor(
                name="", raw_shape=shape, destructure_kind=DestructureKind.ARRAY
            )
        if node_type == "rest_pattern":
            target = shape.target
            name = str(target.value) if isinstance(target, Leaf) else ""
            return ParameterDescriptor(
                name=name, raw_shape=shape, destructure_kind=DestructureKind.SPREAD
            )
        raise UnknownShapeError(
            f"Unknown parameter type recognized: {node_type} ({ast.get_text(node)})"
        )

    @staticmethod
    def _with_default(
        ast: ParsedAST, node: ts.Node, descriptor: ParameterDescriptor
    ) -> ParameterDescriptor:
        if descriptor.destructure_kind is DestructureKind.SPREAD:
            raise DecompositionError(
                f"Rest parameter cannot have a default: {ast.get_text(node)!r}"
            )
        return descriptor.model_copy(update={"has_default": True})

    def _check_depth(self, depth: int, ast: ParsedAST, node: ts.Node) -> None:
        if depth > self.config.max_depth:
            raise DecompositionError(
                f"Pattern nesting exceeds maximum depth of {self.config.max_depth}",
                text=ast.get_text(node),
            )

    def _pattern_shape(self, ast: ParsedAST, node: ts.Node, depth: int) -> Shape:
        """Shape of a binding pattern (parameter position)."""
        self._check_depth(depth, ast, node)
        node_type = node.type

        if node_type == "object_pattern":
            entries: dict[str, Shape | None] = {}
            for child in named_children(node):
                if child.type == "pair_pattern":
                    key = _key_text(ast, child.child_by_field_name("key"))
                    entries[key] = self._pattern_shape(
                        ast, child.child_by_field_name("value"), depth + 1
                    )
                elif child.type == "object_assignment_pattern":
                    key = ast.get_text(child.child_by_field_name("left")).strip()
                    entries[key] = self._expression_shape(
                        ast, child.child_by_field_name("right"), depth + 1
                    )
                else:
                    # shorthand_property_identifier_pattern, rest_pattern
                    entries[ast.get_text(child).strip()] = None
            return KeyedMapping(entries=entries)

        if node_type == "array_pattern":
            return OrderedSequence(
                items=tuple(
                    self._pattern_shape(ast, child, depth + 1)
                    for child in named_children(node)
                )
            )

        if node_type == "rest_pattern":
            inner = named_children(node)
            if not inner:
                raise UnknownShapeError(f"Empty rest pattern: {ast.get_text(node)}")
            return Spread(target=self._pattern_shape(ast, inner[0], depth + 1))

        # identifier, assignment_pattern inside arrays, member expressions
        return Leaf(value=ast.get_text(node).strip())

    def _expression_shape(self, ast: ParsedAST, node: ts.Node, depth: int) -> Shape:
        """Shape of a default value nested inside an object pattern."""
        self._check_depth(depth, ast, node)
        node_type = node.type

        if node_type == "object":
            entries: dict[str, Shape | None] = {}
            for child in named_children(node):
                if child.type == "pair":
                    key = _key_text(ast, child.child_by_field_name("key"))
                    entries[key] = self._expression_shape(
                        ast, child.child_by_field_name("value"), depth + 1
                    )
                else:
                    # shorthand_property_identifier, spread_element, methods
                    entries[ast.get_text(child).strip()] = None
            return KeyedMapping(entries=entries)

        if node_type == "array":
            items: list[Shape] = []
            for child in named_children(node):
                if child.type == "spread_element":
                    target = named_children(child)[0]
                    items.append(
                        Spread(target=self._expression_shape(ast, target, depth + 1))
                    )
                else:
                    items.append(self._expression_shape(ast, child, depth + 1))
            return OrderedSequence(items=tuple(items))

        if node_type in ("true", "false"):
            return Leaf(value=node_type == "true")
        if node_type in ("string", "template_string"):
            return Leaf(value=ast.get_text(node)[1:-1].strip())
        return Leaf(value=ast.get_text(node).strip())


def _has_token(node: ts.Node, token: str) -> bool:
    """Check whether *node* has an anonymous ``token`` child (``async``, ``*``)."""
    for child in node.children:
        if child.type == token and not child.is_named:
            return True
        # Modifiers always precede the parameter list
        if child.type in ("formal_parameters", "identifier", "property_identifier"):
            break
    return False


def _key_text(ast: ParsedAST, node: ts.Node) -> str:
    text = ast.get_text(node).strip()
    if node.type == "string":
        return text[1:-1]
    return text
