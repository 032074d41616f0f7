"""Hooks applied to rendered modules before they are written.

A hook gets the file name and rendered source of one generated module and
returns the source to keep, e.g. to prepend a license header or run a
formatter.

Example usage:
    from gql_typegen.core.hooks import AddHeaderHook, HookRunner

    runner = HookRunner([AddHeaderHook("# Copyright 2024 My Company")])
    renderer = PythonRenderer(hooks=runner)
"""

from typing import Iterable, Optional, Protocol, runtime_checkable


@runtime_checkable
class PostGenerateHook(Protocol):
    """Anything with a ``post_generate(filename, content)`` method.

    Example:
        class FormatWithBlack:
            def post_generate(self, filename: str, content: str) -> str:
                import black
                return black.format_str(content, mode=black.FileMode())
    """

    def post_generate(self, filename: str, content: str) -> str:
        """Return the source to write for ``filename`` (e.g. "hero_query.py")."""
        ...


class AddHeaderHook:
    """Prepends a fixed header, separated from the module by a blank line."""

    def __init__(self, header: str):
        self.header = header

    def post_generate(self, _filename: str, content: str) -> str:
        separator = "\n" if self.header.endswith("\n") else "\n\n"
        return self.header + separator + content


class HookRunner:
    """Applies post-generation hooks in registration order."""

    def __init__(self, post_hooks: Optional[Iterable[PostGenerateHook]] = None):
        self.post_hooks: list[PostGenerateHook] = list(post_hooks or ())

    def add_post_hook(self, hook: PostGenerateHook):
        self.post_hooks.append(hook)

    def run_post_hooks(self, filename: str, content: str) -> str:
        for hook in self.post_hooks:
            content = hook.post_generate(filename, content)
        return content
