"""Tests for code generation settings."""

import pytest
from pydantic import ValidationError

from gql_bindgen.core.config import CodegenConfig


class TestCodegenConfig:
    """Tests for CodegenConfig."""

    def test_defaults(self):
        config = CodegenConfig()
        assert config.context_name == "Any"
        assert config.error_name == "Exception"
        assert config.imports == []
        assert config.header is None

    def test_dotted_types(self):
        config = CodegenConfig(
            context_type="myapp.context.Context",
            error_type="myapp.errors.AppError",
        )
        assert config.context_name == "Context"
        assert config.error_name == "AppError"
        assert config.imports == [
            "from myapp.context import Context",
            "from myapp.errors import AppError",
        ]

    def test_imports_are_deduplicated(self):
        config = CodegenConfig(context_type="app.Both", error_type="app.Both")
        assert config.imports == ["from app import Both"]

    @pytest.mark.parametrize("value", ["my-app.Context", "app..Context", "", "1st.Context"])
    def test_rejects_invalid_names(self, value):
        with pytest.raises(ValidationError):
            CodegenConfig(context_type=value)

    def test_is_frozen(self):
        config = CodegenConfig()
        with pytest.raises(ValidationError):
            config.header = "changed"
