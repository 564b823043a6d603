"""
Structural contract checks for symbols exported by plugin units.

Each check takes a raw symbol, confirms its shape, and hands back the value
typed for the caller. There is no coercion: a near miss is a violation.
"""

import inspect
from typing import Any, Callable, Dict, Generic, Mapping, Protocol, Set

from core.errors import ContractViolation, NilTable
from interfaces.inamed import Named
from .handle import RawSymbol

CommandFunc = Callable[[Named], None]
ModuleFactory = Callable[[], Any]

_POSITIONAL = (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)
_ANY_ANNOTATIONS = (inspect.Parameter.empty, Any, object)


def _protocol_members(proto: type) -> Set[str]:
    """Collect the public members a protocol class requires."""
    members: Set[str] = set()
    for base in proto.__mro__:
        if base in (object, Protocol, Generic) or not getattr(base, "_is_protocol", False):
            continue
        members.update(n for n in vars(base) if not n.startswith("_"))
        members.update(n for n in vars(base).get("__annotations__", {}) if not n.startswith("_"))
    return members


def _accepts_named(annotation: Any) -> bool:
    """Whether a value satisfying only Named is guaranteed to satisfy ``annotation``."""
    if annotation in _ANY_ANNOTATIONS or annotation is Named:
        return True
    if isinstance(annotation, type) and getattr(annotation, "_is_protocol", False):
        return _protocol_members(annotation) <= _protocol_members(Named)
    return False


def _signature(raw: RawSymbol, label: str) -> inspect.Signature:
    try:
        return inspect.signature(raw.value, eval_str=True)
    except (TypeError, ValueError, NameError) as e:
        raise ContractViolation(f"{label}: {raw.kind}: {e}", cause=f"invalid {raw.name} func")


def assert_command(raw: RawSymbol) -> CommandFunc:
    """
    Assert the symbol is a command: ``func(Named) -> None``.

    Args:
        raw: Looked up symbol

    Returns:
        The command callable

    Raises:
        ContractViolation: the symbol has any other shape
    """
    cause = f"invalid {raw.name} func"
    value = raw.value
    if not callable(value) or isinstance(value, type):
        raise ContractViolation(raw.kind, cause=cause)

    sig = _signature(raw, "signature unavailable")
    params = list(sig.parameters.values())
    if len(params) != 1 or params[0].kind not in _POSITIONAL:
        raise ContractViolation(raw.kind, cause=cause)

    if not _accepts_named(params[0].annotation):
        raise ContractViolation(
            f"{raw.kind}: argument type {params[0].annotation!r} is not satisfied by {Named.__name__}",
            cause=cause,
        )
    if sig.return_annotation not in (inspect.Signature.empty, None, type(None)):
        raise ContractViolation(f"{raw.kind}: must not return a value", cause=cause)

    return value


def assert_type_table(raw: RawSymbol) -> Dict[str, ModuleFactory]:
    """
    Assert the symbol is a type table: a mapping of module names to
    zero-argument factories.

    Args:
        raw: Looked up symbol

    Returns:
        A snapshot of the table

    Raises:
        NilTable: the symbol exists but holds None
        ContractViolation: the symbol has any other shape
    """
    cause = f"invalid {raw.name} table"
    value = raw.value
    if value is None:
        raise NilTable(f"{raw.name} in plugin {raw.handle.path} is nil")
    if not isinstance(value, Mapping):
        raise ContractViolation(raw.kind, cause=cause)

    table: Dict[str, ModuleFactory] = {}
    for name, factory in value.items():
        if not isinstance(name, str):
            raise ContractViolation(f"key {name!r} is not a module name", cause=cause)
        if not callable(factory):
            raise ContractViolation(f"{name}: {type(factory).__name__} is not a factory", cause=cause)
        try:
            inspect.signature(factory).bind()
        except ValueError:
            # Builtins without introspectable signatures are taken at face value
            pass
        except TypeError:
            raise ContractViolation(f"{name}: factory requires arguments", cause=cause)
        table[name] = factory
    return table


def assert_module(value: Any, name: str = "module") -> Any:
    """
    Assert a value produced by a module factory satisfies the Module capability.

    Args:
        value: Freshly constructed instance
        name: Registered module name, for diagnostics

    Returns:
        The instance

    Raises:
        ContractViolation: the instance has no usable ``init(ctx, config)``
    """
    cause = f"invalid module {name}"
    init = getattr(value, "init", None)
    if not callable(init):
        raise ContractViolation(f"{type(value).__name__} has no init method", cause=cause)
    try:
        inspect.signature(init).bind(None, None)
    except ValueError:
        pass
    except TypeError:
        raise ContractViolation(f"{type(value).__name__}.init does not accept (ctx, config)", cause=cause)
    return value
