"""Code generation settings.

Example usage:
    from gql_bindgen.core.config import CodegenConfig

    config = CodegenConfig(context_type="myapp.context.Context", error_type="myapp.errors.AppError")
    config.context_name  # "Context"
    config.imports       # ["from myapp.context import Context", "from myapp.errors import AppError"]
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator


def _split_dotted(path: str) -> tuple[Optional[str], str]:
    module, _, name = path.rpartition(".")
    return (module or None), name


class CodegenConfig(BaseModel):
    """Settings for one generated module.

    Attributes:
        context_type: Type of ``executor.context``; a builtin name or a dotted path
        error_type: Exception type fallible resolvers raise and failing stream items carry
        header: Optional text placed at the top of the generated module
        template_dir: Directory with templates overriding the built-in ones
    """

    model_config = ConfigDict(frozen=True)

    context_type: str = "Any"
    error_type: str = "Exception"
    header: Optional[str] = None
    template_dir: Optional[str] = None

    @field_validator("context_type", "error_type")
    @classmethod
    def _dotted_identifier(cls, value: str) -> str:
        parts = value.split(".")
        if not all(part.isidentifier() for part in parts):
            raise ValueError(f"`{value}` is not a dotted Python name")
        return value

    @property
    def context_name(self) -> str:
        return _split_dotted(self.context_type)[1]

    @property
    def error_name(self) -> str:
        return _split_dotted(self.error_type)[1]

    @property
    def imports(self) -> list[str]:
        """Import lines the generated module needs for the configured types."""
        lines = []
        for path in (self.context_type, self.error_type):
            module, name = _split_dotted(path)
            if module is not None:
                line = f"from {module} import {name}"
                if line not in lines:
                    lines.append(line)
        return lines
