"""Query-trail models: one trail class per object type.

A trail accessor for a leaf field (scalar or enum) tells whether the field
was selected; an accessor for a node field (object, interface or union)
returns the trail of the nested selection, to be walked before use.
"""

import logging

from graphql import DocumentNode, FieldDefinitionNode, ObjectTypeDefinitionNode

from .ast_data import AstData
from .ir import QueryTrailModel, TrailAccessor
from .naming import safe_name, snake_case
from .nullable_type import type_name
from .scalars import BUILTIN_SCALARS, RESERVED_SCALAR_NAMES
from .type_model import NODE_KINDS
from .visitor import SchemaVisitor, visit_document

logger = logging.getLogger(__name__)

# Names the runtime trail base class already defines
TRAIL_API = {"walk", "walked", "is_walked", "arguments"}

BASE_TRAIL = "runtime.QueryTrail"


def trail_class_name(object_name: str) -> str:
    return f"{object_name}Trail"


def accessor_name(field_name: str) -> str:
    name = safe_name(snake_case(field_name))
    if name in TRAIL_API:
        return f"{name}_"
    return name


class QueryTrailGenerator(SchemaVisitor):
    """Collect a trail model for every object type, roots included."""

    def __init__(self, ast_data: AstData):
        self.ast_data = ast_data
        self.trails: list[QueryTrailModel] = []

    def visit_object_type(self, node: ObjectTypeDefinitionNode) -> None:
        name = node.name.value
        self.trails.append(
            QueryTrailModel(
                object_name=name,
                class_name=trail_class_name(name),
                accessors=tuple(self._accessor(field) for field in node.fields or ()),
            )
        )

    def _accessor(self, field: FieldDefinitionNode) -> TrailAccessor:
        name = field.name.value
        target = type_name(field.type)
        return TrailAccessor(
            name=name,
            python_name=accessor_name(name),
            child_trail=self._child_trail(target),
        )

    def _child_trail(self, target: str) -> str | None:
        if target in BUILTIN_SCALARS or target in RESERVED_SCALAR_NAMES:
            return None
        if self.ast_data.kind_of(target) not in NODE_KINDS:
            return None
        if self.ast_data.is_object(target):
            return trail_class_name(target)
        return BASE_TRAIL


def generate_query_trails(document: DocumentNode, ast_data: AstData) -> tuple[QueryTrailModel, ...]:
    generator = QueryTrailGenerator(ast_data)
    visit_document(generator, document)
    logger.debug("Generated %d query trails", len(generator.trails))
    return tuple(generator.trails)
