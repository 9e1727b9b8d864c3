"""Dispatch over the top-level definitions of an SDL document."""

import logging

from graphql import (
    DirectiveDefinitionNode,
    DocumentNode,
    EnumTypeDefinitionNode,
    InputObjectTypeDefinitionNode,
    InterfaceTypeDefinitionNode,
    ObjectTypeDefinitionNode,
    ScalarTypeDefinitionNode,
    SchemaDefinitionNode,
    SchemaExtensionNode,
    TypeExtensionNode,
    UnionTypeDefinitionNode,
)

logger = logging.getLogger(__name__)


class SchemaVisitor:
    """Base visitor with one no-op method per definition kind.

    Subclasses override the kinds they care about and are driven by
    ``visit_document``.
    """

    def visit_schema_definition(self, node: SchemaDefinitionNode) -> None:
        pass

    def visit_directive_definition(self, node: DirectiveDefinitionNode) -> None:
        pass

    def visit_scalar_type(self, node: ScalarTypeDefinitionNode) -> None:
        pass

    def visit_object_type(self, node: ObjectTypeDefinitionNode) -> None:
        pass

    def visit_interface_type(self, node: InterfaceTypeDefinitionNode) -> None:
        pass

    def visit_union_type(self, node: UnionTypeDefinitionNode) -> None:
        pass

    def visit_enum_type(self, node: EnumTypeDefinitionNode) -> None:
        pass

    def visit_input_object_type(self, node: InputObjectTypeDefinitionNode) -> None:
        pass

    def visit_extension(self, node: TypeExtensionNode | SchemaExtensionNode) -> None:
        pass


def visit_document(visitor: SchemaVisitor, document: DocumentNode) -> None:
    """Call the visitor method matching each definition, in document order."""
    for definition in document.definitions:
        if isinstance(definition, SchemaDefinitionNode):
            visitor.visit_schema_definition(definition)
        elif isinstance(definition, DirectiveDefinitionNode):
            visitor.visit_directive_definition(definition)
        elif isinstance(definition, ScalarTypeDefinitionNode):
            visitor.visit_scalar_type(definition)
        elif isinstance(definition, ObjectTypeDefinitionNode):
            visitor.visit_object_type(definition)
        elif isinstance(definition, InterfaceTypeDefinitionNode):
            visitor.visit_interface_type(definition)
        elif isinstance(definition, UnionTypeDefinitionNode):
            visitor.visit_union_type(definition)
        elif isinstance(definition, EnumTypeDefinitionNode):
            visitor.visit_enum_type(definition)
        elif isinstance(definition, InputObjectTypeDefinitionNode):
            visitor.visit_input_object_type(definition)
        elif isinstance(definition, (TypeExtensionNode, SchemaExtensionNode)):
            visitor.visit_extension(definition)
        else:
            logger.debug("Ignoring non-schema definition %s", type(definition).__name__)
