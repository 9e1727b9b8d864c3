"""Core modules for compiling GraphQL schemas into Python bindings."""

from .ast_data import AstData, DateTimeScalarDefinition, InputFieldInfo
from .compiler import FieldLocation, SchemaCompiler, compile_schema, parse_document
from .config import CodegenConfig
from .directives import (
    Deprecation,
    FieldDirectives,
    Ownership,
    ScalarDirectives,
)
from .errors import (
    BindgenError,
    CompileError,
    DefaultValueOverflowError,
    ErrorCode,
    ErrorSet,
    GeneratedCodeError,
    Pos,
    SchemaCompilationError,
)
from .generator import CodeGenerator, generate_code
from .hooks import (
    AddHeaderHook,
    HookRunner,
    PostGenerateHook,
    PreGenerateHook,
)
from .ir import (
    CompiledSchema,
    Enum,
    EnumVariant,
    Field,
    FieldArg,
    InputField,
    InputObject,
    Interface,
    Object,
    QueryTrailModel,
    Scalar,
    SchemaType,
    Subscription,
    TrailAccessor,
    Union,
    UnionVariant,
)
from .loader import load_schema_source
from .scalars import (
    DateHandler,
    DateTimeHandler,
    NaiveDateTimeHandler,
    ScalarHandler,
    ScalarRegistry,
    UrlHandler,
    UUIDHandler,
)

__all__ = [
    # Symbol table
    "AstData",
    "DateTimeScalarDefinition",
    "InputFieldInfo",
    # Compiler
    "FieldLocation",
    "SchemaCompiler",
    "compile_schema",
    "parse_document",
    "load_schema_source",
    # Directives
    "Deprecation",
    "FieldDirectives",
    "Ownership",
    "ScalarDirectives",
    # Errors
    "BindgenError",
    "CompileError",
    "DefaultValueOverflowError",
    "ErrorCode",
    "ErrorSet",
    "GeneratedCodeError",
    "Pos",
    "SchemaCompilationError",
    # Generation
    "CodeGenerator",
    "CodegenConfig",
    "generate_code",
    # Hooks
    "PreGenerateHook",
    "PostGenerateHook",
    "AddHeaderHook",
    "HookRunner",
    # Emission models
    "CompiledSchema",
    "Enum",
    "EnumVariant",
    "Field",
    "FieldArg",
    "InputField",
    "InputObject",
    "Interface",
    "Object",
    "QueryTrailModel",
    "Scalar",
    "SchemaType",
    "Subscription",
    "TrailAccessor",
    "Union",
    "UnionVariant",
    # Scalars
    "ScalarHandler",
    "ScalarRegistry",
    "DateHandler",
    "DateTimeHandler",
    "NaiveDateTimeHandler",
    "UUIDHandler",
    "UrlHandler",
]
