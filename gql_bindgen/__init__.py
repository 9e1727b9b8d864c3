"""gql-bindgen: typed Python bindings for GraphQL schemas."""

from .core.compiler import compile_schema
from .core.config import CodegenConfig
from .core.generator import CodeGenerator, generate_code

__version__ = "0.1.0"

__all__ = [
    "CodeGenerator",
    "CodegenConfig",
    "compile_schema",
    "generate_code",
]
