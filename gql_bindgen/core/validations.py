"""Naming lints run before code generation.

Each validator is a read-only visitor with its own error set; the compiler
merges their results before its first checkpoint.
"""

from graphql import (
    DocumentNode,
    InputObjectTypeDefinitionNode,
    InterfaceTypeDefinitionNode,
    ObjectTypeDefinitionNode,
    ScalarTypeDefinitionNode,
)

from .errors import ErrorCode, ErrorSet, pos_of
from .naming import is_snake_case
from .scalars import RESERVED_SCALAR_NAMES
from .visitor import SchemaVisitor, visit_document


class FieldNameCaseValidator(SchemaVisitor):
    """Reject field names that are already snake_case.

    Names are snake_cased for emission, so ``user_name`` in the schema is
    almost certainly meant to be ``userName``.
    """

    def __init__(self):
        self.errors = ErrorSet()

    def visit_object_type(self, node: ObjectTypeDefinitionNode) -> None:
        self._validate_fields(node.fields)

    def visit_interface_type(self, node: InterfaceTypeDefinitionNode) -> None:
        self._validate_fields(node.fields)

    def visit_input_object_type(self, node: InputObjectTypeDefinitionNode) -> None:
        self._validate_fields(node.fields)

    def _validate_fields(self, fields) -> None:
        for field in fields or ():
            if is_snake_case(field.name.value):
                self.errors.emit(
                    pos_of(field),
                    ErrorCode.FIELD_NAME_IN_SNAKE_CASE,
                    f"`{field.name.value}`",
                )


class ReservedScalarNameValidator(SchemaVisitor):
    """Reject the all-uppercase spelling of a reserved scalar (``UUID``)."""

    def __init__(self):
        self.errors = ErrorSet()

    def visit_scalar_type(self, node: ScalarTypeDefinitionNode) -> None:
        name = node.name.value
        for reserved in RESERVED_SCALAR_NAMES:
            if name != reserved and name == reserved.upper():
                self.errors.emit(
                    pos_of(node),
                    ErrorCode.UPPERCASE_RESERVED_SCALAR,
                    f"`{name}`",
                    f"Use `{reserved}` instead",
                )


def validate_document(document: DocumentNode) -> ErrorSet:
    """Run every naming lint and merge their errors."""
    validators = (FieldNameCaseValidator(), ReservedScalarNameValidator())
    errors = ErrorSet()
    for validator in validators:
        visit_document(validator, document)
        errors.extend(validator.errors)
    return errors
