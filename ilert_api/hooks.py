"""Hook system for API clients.

Hooks are plain callables receiving a context object. They run around every
decorated API method:

- pre_hooks: before the call
- post_hooks: after the call, whether it succeeded or not
- error_hooks: when the call raised, before the exception propagates

Example:
    >>> @with_hooks(hooks=Hooks(pre_hooks=[lambda ctx: print(ctx)]))
    ... class MyApi:
    ...     def __init__(self, hooks: Hooks | None = None) -> None:
    ...         pass
    ...
    ...     @invoke_with_hooks(lambda self: "my-context")
    ...     def do_work(self) -> str:
    ...         return "result"
"""

import functools
import inspect
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

type Hook = Callable[[Any], None]


@dataclass(frozen=True)
class Hooks:
    """A set of hooks to run around an API call.

    Attributes:
        pre_hooks: Called before the call
        post_hooks: Called after the call (success or failure)
        error_hooks: Called when the call raised an exception
    """

    pre_hooks: list[Hook] = field(default_factory=list)
    post_hooks: list[Hook] = field(default_factory=list)
    error_hooks: list[Hook] = field(default_factory=list)

    def merge(self, other: "Hooks | None") -> "Hooks":
        """Return new Hooks running self's hooks first, then other's."""
        if other is None:
            return self
        return Hooks(
            pre_hooks=[*self.pre_hooks, *other.pre_hooks],
            post_hooks=[*self.post_hooks, *other.post_hooks],
            error_hooks=[*self.error_hooks, *other.error_hooks],
        )

    def invoke[R](
        self, context: Any, func: Callable[..., R], *args: Any, **kwargs: Any
    ) -> R:
        """Run func surrounded by the hooks.

        Args:
            context: Object passed to every hook
            func: Callable to invoke
            *args: Positional arguments for func
            **kwargs: Keyword arguments for func

        Returns:
            Whatever func returns
        """
        for hook in self.pre_hooks:
            hook(context)
        try:
            return func(*args, **kwargs)
        except Exception:
            for hook in self.error_hooks:
                hook(context)
            raise
        finally:
            for hook in self.post_hooks:
                hook(context)


def with_hooks[C: type](hooks: Hooks | None = None) -> Callable[[C], C]:
    """Class decorator installing built-in hooks on every instance.

    The decorated class must accept a ``hooks`` parameter in ``__init__``.
    Built-in hooks always run before the hooks passed by the caller. The
    merged result is stored as ``self._hooks``.
    """
    builtin = hooks or Hooks()

    def decorator(cls: C) -> C:
        original_init = cls.__init__
        signature = inspect.signature(original_init)

        @functools.wraps(original_init)
        def __init__(self: Any, *args: Any, **kwargs: Any) -> None:
            if "hooks" not in signature.parameters:
                raise ValueError(
                    f"{cls.__name__} must have a 'hooks' parameter in __init__"
                )
            bound = signature.bind(self, *args, **kwargs)
            original_init(self, *args, **kwargs)
            self._hooks = builtin.merge(bound.arguments.get("hooks"))

        cls.__init__ = __init__  # type: ignore[misc]
        return cls

    return decorator


def invoke_with_hooks[R](
    context_factory: Callable[[Any], Any] | None = None,
) -> Callable[[Callable[..., R]], Callable[..., R]]:
    """Method decorator running ``self._hooks`` around the method.

    Args:
        context_factory: Called with the instance to build the hook context.
            Hooks receive None when omitted.
    """

    def decorator(func: Callable[..., R]) -> Callable[..., R]:
        @functools.wraps(func)
        def wrapper(self: Any, *args: Any, **kwargs: Any) -> R:
            context = context_factory(self) if context_factory else None
            hooks: Hooks = getattr(self, "_hooks", None) or Hooks()
            return hooks.invoke(context, func, self, *args, **kwargs)

        return wrapper

    return decorator
