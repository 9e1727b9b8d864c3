"""Extension points around module rendering.

A pre-generation hook sees the ``CompiledSchema`` before any template runs
and returns the schema to render, which lets callers drop or rewrite
entities. A post-generation hook sees the finished module text.

Example usage:
    from dataclasses import replace
    from gql_bindgen.core.hooks import HookRunner

    class SkipTrails:
        def pre_generate(self, compiled):
            return replace(compiled, query_trails=())

    class Banner:
        def post_generate(self, filename, content):
            return f"# {filename}: generated, do not edit\\n" + content

    runner = HookRunner(pre_hooks=[SkipTrails()], post_hooks=[Banner()])
"""

from typing import Iterable, Protocol, runtime_checkable

from .ir import CompiledSchema


@runtime_checkable
class PreGenerateHook(Protocol):
    """Receives the compiled schema before rendering."""

    def pre_generate(self, compiled: CompiledSchema) -> CompiledSchema:
        """Return the schema to render.

        ``CompiledSchema`` is frozen; use ``dataclasses.replace`` to derive
        a modified copy.
        """
        ...


@runtime_checkable
class PostGenerateHook(Protocol):
    """Receives the rendered module before it is returned or written."""

    def post_generate(self, filename: str, content: str) -> str:
        """Return the module text to keep.

        Args:
            filename: Base name of the target module, e.g. ``schema.py``
            content: Rendered Python source
        """
        ...


class AddHeaderHook:
    """Prefix the module with a comment block.

    Header lines that are not comments already get a ``# `` prefix, blank
    lines become a bare ``#``.
    """

    def __init__(self, header: str):
        self.header = header

    def post_generate(self, _filename: str, content: str) -> str:
        lines = [
            line if line.startswith("#") else f"# {line}".rstrip()
            for line in self.header.rstrip("\n").splitlines()
        ]
        return "\n".join(lines) + "\n\n" + content


class HookRunner:
    """Ordered pre- and post-generation hooks."""

    def __init__(
        self,
        pre_hooks: Iterable[PreGenerateHook] = (),
        post_hooks: Iterable[PostGenerateHook] = (),
    ):
        self.pre_hooks: list[PreGenerateHook] = list(pre_hooks)
        self.post_hooks: list[PostGenerateHook] = list(post_hooks)

    def add_pre_hook(self, hook: PreGenerateHook):
        self.pre_hooks.append(hook)

    def add_post_hook(self, hook: PostGenerateHook):
        self.post_hooks.append(hook)

    def copy(self) -> "HookRunner":
        return HookRunner(self.pre_hooks, self.post_hooks)

    def run_pre_hooks(self, compiled: CompiledSchema) -> CompiledSchema:
        for hook in self.pre_hooks:
            compiled = hook.pre_generate(compiled)
        return compiled

    def run_post_hooks(self, filename: str, content: str) -> str:
        for hook in self.post_hooks:
            content = hook.post_generate(filename, content)
        return content
