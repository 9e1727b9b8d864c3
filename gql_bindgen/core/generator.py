"""Code generator for compiled schemas.

Renders Jinja2 templates to produce one Python module from a
``CompiledSchema``.

Supports custom templates via the template_dir parameter:
    generator = CodeGenerator(compiled, template_dir="./my_templates")

Template lookup order:
1. User's template directory (if provided)
2. Package default templates
"""

import ast
import logging
from pathlib import Path
from typing import Iterator, Optional

from jinja2 import ChoiceLoader, Environment, FileSystemLoader, PackageLoader, select_autoescape

from . import ir
from . import type_model as tm
from .compiler import compile_schema
from .config import CodegenConfig
from .directives import format_names
from .errors import GeneratedCodeError
from .hooks import AddHeaderHook, HookRunner
from .naming import camel_case, snake_case
from .scalars import DEFAULT_REGISTRY, ScalarRegistry

logger = logging.getLogger(__name__)

# Annotation names of the built-in scalars that live in the runtime package
_RUNTIME_SCALARS = {"ID": "runtime.ID"}

_BUILTIN_DECODERS = {
    "str": "runtime.decode_string",
    "int": "runtime.decode_int",
    "float": "runtime.decode_float",
    "bool": "runtime.decode_bool",
    "ID": "runtime.decode_id",
    "date": "runtime.decode_date",
    "AwareDatetime": "runtime.decode_datetime",
    "NaiveDatetime": "runtime.decode_naive_datetime",
    "UUID": "runtime.decode_uuid",
    "AnyUrl": "runtime.decode_url",
}

BASE_TRAIL = "runtime.QueryTrail"
CONTEXT_ALIAS = "ContextType"


def safe_docstring(text: str) -> str:
    """Escape text for use in docstrings."""
    if not text:
        return ""
    text = text.replace("\\", "\\\\").replace('"""', '\\"\\"\\"')
    if text.endswith('"'):
        text += " "
    return text


def safe_comment(text: str) -> str:
    """Make text safe for a single-line Python comment.

    Removes newlines, collapses whitespace and truncates long text.
    """
    if not text:
        return ""
    text = " ".join(text.split())
    if len(text) > 120:
        text = text[:117] + "..."
    return text


def docstring(text: str, indent: int = 4) -> str:
    """Docstring body with continuation lines indented to ``indent``."""
    lines = safe_docstring(text.strip()).splitlines() or [""]
    pad = " " * indent
    rest = [pad + line if line.strip() else "" for line in lines[1:]]
    if rest:
        return "\n".join([lines[0], *rest, pad])
    return lines[0]


class CodeGenerator:
    """Generates a Python binding module from a compiled schema.

    Supports custom templates via the template_dir parameter.
    Templates in template_dir take precedence over built-in templates.

    Available templates to override:
        - module.py.j2: The module layout and imports
        - _scalar.py.j2: Custom scalar wrappers
        - _enum.py.j2: Enumerations
        - _input_object.py.j2: Input object models
        - _union.py.j2: Tagged unions
        - _interface.py.j2: Interface contracts and forwarding classes
        - _object.py.j2: Object and subscription contracts
        - _query_trail.py.j2: Query trails

    Example:
        generator = CodeGenerator(
            compiled,
            config=CodegenConfig(context_type="myapp.Context"),
            template_dir="./my_templates",
        )
        source = generator.generate()
    """

    def __init__(
        self,
        compiled: ir.CompiledSchema,
        config: Optional[CodegenConfig] = None,
        template_dir: Optional[str] = None,
        hooks: Optional[HookRunner] = None,
        registry: Optional[ScalarRegistry] = None,
    ):
        """Initialize the code generator.

        Args:
            compiled: The compiled schema
            config: Generation settings; defaults are used when omitted
            template_dir: Optional directory with custom Jinja2 templates.
                          Overrides ``config.template_dir``.
            hooks: Pre- and post-generation hooks to run
            registry: Registry of the reserved scalar handlers
        """
        self.config = config or CodegenConfig()
        self.compiled = compiled
        self.ast_data = compiled.ast_data
        self.template_dir = template_dir or self.config.template_dir
        self.registry = registry or DEFAULT_REGISTRY
        self.hooks = hooks.copy() if hooks else HookRunner()
        if self.config.header:
            self.hooks.add_post_hook(AddHeaderHook(self.config.header))

        # Build template loader - custom templates take precedence
        loaders = []
        if self.template_dir:
            template_path = Path(self.template_dir)
            if template_path.is_dir():
                loaders.append(FileSystemLoader(str(template_path)))
            else:
                logger.warning("Template directory %s does not exist", template_path)
        loaders.append(PackageLoader("gql_bindgen", "templates"))

        self.env = Environment(
            loader=ChoiceLoader(loaders),
            autoescape=select_autoescape(),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )
        # Register custom filters
        self.env.filters["snake_case"] = snake_case
        self.env.filters["camel_case"] = camel_case
        self.env.filters["repr"] = repr
        self.env.filters["docstring"] = docstring
        self.env.filters["safe_comment"] = safe_comment
        self.env.filters["format_names"] = format_names
        self.env.filters["py_type"] = self.type_hint
        self.env.filters["decoder"] = self.decoder
        self.env.filters["contract_params"] = self.contract_params
        self.env.filters["contract_call"] = self.contract_call
        self.env.filters["glue_params"] = self.glue_params
        self.env.filters["glue_call"] = self.glue_call
        self.env.filters["glue_doc"] = self.glue_doc
        self.env.filters["return_hint"] = self.return_hint
        self.env.filters["stream_hint"] = self.stream_hint
        self.env.filters["trail_class"] = self.trail_class
        self.env.filters["union_value_hint"] = self.union_value_hint
        self.env.filters["declared_interfaces"] = self.declared_interfaces

    # =========================================================================
    # Types
    # =========================================================================

    def type_hint(self, ty: tm.Type) -> str:
        """Render a type as a Python annotation."""
        if isinstance(ty, tm.Nullable):
            return f"Optional[{self.type_hint(ty.inner)}]"
        if isinstance(ty, tm.List):
            if isinstance(ty.inner, tm.Ref):
                return f"Sequence[{self.type_hint(ty.inner.inner)}]"
            return f"List[{self.type_hint(ty.inner)}]"
        if isinstance(ty, tm.Ref):
            # Borrowed lists are handed out read-only
            if isinstance(ty.inner, tm.List):
                return f"Sequence[{self.type_hint(ty.inner.inner)}]"
            return self.type_hint(ty.inner)
        if isinstance(ty, tm.Scalar):
            if ty.builtin is None:
                return ty.name
            return _RUNTIME_SCALARS.get(ty.builtin, ty.builtin)
        if isinstance(ty, tm.Enum):
            return camel_case(ty.name)
        if isinstance(ty, tm.Union):
            return ty.name
        if isinstance(ty, tm.Interface):
            return f"{ty.name}Interface"
        if isinstance(ty, tm.Object):
            if self.ast_data.is_input_object(ty.name):
                return ty.name
            return f"{ty.name}Fields"
        raise TypeError(f"Unexpected type {ty!r}")

    def decoder(self, ty: tm.Type) -> str:
        """Render the runtime decoder of a look-ahead value of this type."""
        if isinstance(ty, tm.Nullable):
            return f"runtime.nullable({self.decoder(ty.inner)})"
        if isinstance(ty, tm.List):
            return f"runtime.list_of({self.decoder(ty.inner)})"
        if isinstance(ty, tm.Ref):
            return self.decoder(ty.inner)
        if isinstance(ty, tm.Scalar) and ty.builtin is not None:
            return _BUILTIN_DECODERS[ty.builtin]
        return f"{self.type_hint(ty)}.from_look_ahead"

    def trail_class(self, field: ir.Field) -> str:
        target = field.trail_type
        if isinstance(target, tm.Object) and self.ast_data.is_object(target.name):
            return f"{target.name}Trail"
        return BASE_TRAIL

    def union_value_hint(self, union: ir.Union) -> str:
        hints = [self.type_hint(variant.type) for variant in union.variants]
        if not hints:
            return "Any"
        if len(hints) == 1:
            return hints[0]
        return f"Union[{', '.join(hints)}]"

    def declared_interfaces(self, obj: ir.Object) -> list[str]:
        """Interfaces of an object that the schema actually declares."""
        return [name for name in obj.interfaces if self.ast_data.is_interface(name)]

    # =========================================================================
    # Resolver signatures
    # =========================================================================

    def _executor_param(self) -> str:
        return f"executor: runtime.Executor[{CONTEXT_ALIAS}]"

    def contract_params(self, field: ir.Field) -> str:
        """Parameters of the abstract ``field_*`` method."""
        params = ["self", self._executor_param()]
        if field.needs_trail:
            params.append(f"trail: {self.trail_class(field)}")
        params.extend(
            f"{arg.python_name}: {self.type_hint(arg.signature_type)}" for arg in field.args
        )
        return ", ".join(params)

    def contract_call(self, field: ir.Field) -> str:
        args = ["executor"]
        if field.needs_trail:
            args.append("trail")
        args.extend(arg.python_name for arg in field.args)
        return ", ".join(args)

    def glue_params(self, field: ir.Field) -> str:
        """Parameters of the ``resolve_*`` glue and of interface methods."""
        params = ["self", self._executor_param()]
        if field.args:
            params.append("*")
        for arg in field.args:
            hint = self.type_hint(arg.type)
            if arg.has_default or arg.type.is_nullable():
                params.append(f"{arg.python_name}: {hint} = None")
            else:
                params.append(f"{arg.python_name}: {hint}")
        return ", ".join(params)

    def glue_call(self, field: ir.Field) -> str:
        args = ["executor"]
        args.extend(f"{arg.python_name}={arg.python_name}" for arg in field.args)
        return ", ".join(args)

    def glue_doc(self, field: ir.Field) -> str:
        lines = [field.description or f"Resolve `{field.name}`."]
        if field.deprecated is not None:
            reason = field.deprecated.reason or "No longer supported"
            lines += ["", f"Deprecated: {reason}"]
        if not field.directives.infallible:
            lines += ["", "Raises:", f"    {self.config.error_name}"]
        return docstring("\n".join(lines), indent=8)

    def return_hint(self, field: ir.Field) -> str:
        return self.type_hint(field.return_type)

    def stream_hint(self, field: ir.Field) -> str:
        """Return annotation of a subscription field: a stream of items."""
        if field.directives.stream_type is not None:
            return field.directives.stream_type
        item = self.type_hint(field.return_type)
        if not field.directives.stream_items_are_infallible:
            item = f"Union[{item}, {self.config.error_name}]"
        return f"AsyncIterator[{item}]"

    # =========================================================================
    # Rendering
    # =========================================================================

    def _all_types(self, compiled: ir.CompiledSchema) -> Iterator[tm.Type]:
        fields = [f for obj in compiled.objects for f in obj.fields]
        fields += [f for interface in compiled.interfaces for f in interface.fields]
        if compiled.subscription is not None:
            fields += list(compiled.subscription.fields)
        for field in fields:
            yield field.return_type
            for arg in field.args:
                yield arg.type
        for input_object in compiled.input_objects:
            for input_field in input_object.fields:
                yield input_field.type
        for union in compiled.unions:
            for variant in union.variants:
                yield variant.type

    def reserved_imports(self, compiled: ir.CompiledSchema) -> list[str]:
        """Import lines for the reserved scalar types the module uses."""
        used = {
            ty.innermost_type().builtin
            for ty in self._all_types(compiled)
            if isinstance(ty.innermost_type(), tm.Scalar)
        }
        return self.registry.imports_for(used)

    def render(self, compiled: Optional[ir.CompiledSchema] = None) -> str:
        """Render the module template without running post hooks."""
        compiled = compiled or self.compiled
        self.ast_data = compiled.ast_data
        template = self.env.get_template("module.py.j2")
        content = template.render(
            compiled=compiled,
            config=self.config,
            imports=self.reserved_imports(compiled) + self.config.imports,
            context_alias=CONTEXT_ALIAS,
        )

        # Validate Python syntax
        try:
            ast.parse(content)
        except SyntaxError as e:
            raise GeneratedCodeError(
                f"Generated invalid Python: {e}\n"
                f"Template: module.py.j2"
            ) from e
        return content

    def generate(self, filename: str = "schema.py") -> str:
        """Run the hooks around rendering and return the module source."""
        compiled = self.hooks.run_pre_hooks(self.compiled)
        content = self.render(compiled)
        content = self.hooks.run_post_hooks(filename, content)
        logger.debug("Generated %d lines for %s", content.count("\n"), filename)
        return content

    def write(self, output_path: str) -> Path:
        """Generate the module and write it to ``output_path``."""
        path = Path(output_path)
        content = self.generate(path.name)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
        return path


def generate_code(
    source: str,
    config: Optional[CodegenConfig] = None,
    hooks: Optional[HookRunner] = None,
) -> str:
    """Compile SDL text and render the binding module in one step."""
    compiled = compile_schema(source)
    return CodeGenerator(compiled, config=config, hooks=hooks).generate()
