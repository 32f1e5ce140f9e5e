from __future__ import annotations

import os
from collections import defaultdict
from functools import total_ordering
from typing import Any
from typing import Callable
from typing import DefaultDict
from typing import Dict
from typing import List
from typing import Mapping
from typing import TypeVar

T = TypeVar("T")

TRUTHY = ("1", "true", "yes", "on")
FALSY = ("0", "false", "no", "off", "")


def parse_value(default: Any, text: str) -> Any:
    """Converts an environment variable string to the type of ``default``."""
    if isinstance(default, bool):
        lowered = text.strip().lower()
        if lowered in TRUTHY:
            return True
        if lowered in FALSY:
            return False
        raise ValueError(f"invalid boolean value {text!r}")
    if isinstance(default, int):
        return int(text, 0)
    return text


# @total_ordering allows us to implement `__eq__` and `__lt__` and have all the
# other comparison operators handled for us
@total_ordering
class Parameter:
    def __init__(
        self,
        name: str,
        default: Any,
        set_show_doc: str,
        *,
        help_docstring: str = "",
        env: str | None = None,
        scope: str = "config",
    ) -> None:
        # Note: `set_show_doc` should be a noun phrase, e.g. "the value of the foo"
        self.set_show_doc = set_show_doc.strip()
        self.help_docstring = help_docstring.strip()
        self.name = name
        self.default = default
        self.value = default
        self.env = env
        self.scope = scope
        self.config: Config | None = None

    @property
    def is_changed(self) -> bool:
        return self.value != self.default

    def set(self, value: Any) -> None:
        changed = value != self.value
        self.value = value
        if changed and self.config is not None:
            self.config.fire_triggers(self)

    def revert_default(self) -> None:
        self.set(self.default)

    def load_env(self, environ: Mapping[str, str]) -> None:
        if self.env and self.env in environ:
            try:
                value = parse_value(self.default, environ[self.env])
            except ValueError as e:
                raise ValueError(f"{self.env}: {e}") from e
            self.set(value)

    def attr_name(self) -> str:
        """Returns the attribute name associated with this config option,
        i.e. `my-config` has the attribute name `my_config`"""
        return self.name.replace("-", "_")

    def __getattr__(self, name: str):
        return getattr(self.value, name)

    # Casting
    def __int__(self) -> int:
        return int(self.value)

    def __str__(self) -> str:
        return str(self.value)

    def __bool__(self) -> bool:
        return bool(self.value)

    def __repr__(self) -> str:
        return f"<Parameter {self.name}={self.value!r}>"

    # If comparing with another `Parameter`, the `Parameter` objects are equal
    # if they have the same name. For any other type of object, the
    # `Parameter` is equal to the object if `self.value` is equal to the object
    def __eq__(self, other: object) -> bool:
        if isinstance(other, Parameter):
            return self.name == other.name
        return self.value == other

    def __lt__(self, other: object) -> bool:
        if isinstance(other, Parameter):
            return self.name < other.name
        return self.value < other

    __hash__ = object.__hash__


class Config:
    def __init__(self) -> None:
        self.params: Dict[str, Parameter] = {}
        self.triggers: DefaultDict[str, List[Callable[..., Any]]] = defaultdict(list)

    def add_param(
        self,
        name: str,
        default: Any,
        set_show_doc: str,
        *,
        help_docstring: str = "",
        env: str | None = None,
        scope: str = "config",
    ) -> Parameter:
        # Dictionary keys are going to have underscores, so we can't allow them here
        assert "_" not in name

        p = Parameter(
            name,
            default,
            set_show_doc,
            help_docstring=help_docstring,
            env=env,
            scope=scope,
        )
        return self.add_param_obj(p)

    def add_param_obj(self, p: Parameter) -> Parameter:
        attr_name = p.attr_name()

        # Make sure this isn't a duplicate parameter
        assert attr_name not in self.params

        p.config = self
        self.params[attr_name] = p
        p.load_env(os.environ)
        return p

    def trigger(self, *params: Parameter) -> Callable[[Callable[..., T]], Callable[..., T]]:
        names = [p.name for p in params]

        def wrapper(func: Callable[..., T]) -> Callable[..., T]:
            for name in names:
                self.triggers[name].append(func)
            return func

        return wrapper

    def fire_triggers(self, param: Parameter) -> None:
        for trigger in self.triggers[param.name]:
            trigger()

    def get_params(self, scope: str) -> List[Parameter]:
        return sorted(filter(lambda p: p.scope == scope, self.params.values()))

    def __getattr__(self, name: str) -> Parameter:
        if name in self.params:
            return self.params[name]
        else:
            raise AttributeError(f"'Config' object has no attribute '{name}'")
