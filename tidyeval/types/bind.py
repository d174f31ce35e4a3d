from __future__ import annotations

from typing import Callable

from tidyeval import EvaluatorFn, Value
from tidyeval.errors import TidyArityError
from tidyeval.types.closure import Closure, Formal
from tidyeval.types.dots import DotsEntry, DotsList
from tidyeval.types.environment import Environment
from tidyeval.types.frame import CallFrame
from tidyeval.types.quosure import Quosure


def bind_arguments(
    fn: Closure,
    supplied_args: list,
    ctx,
    force: Callable[..., Value],
    evaluate_fn: EvaluatorFn,
) -> CallFrame:
    """
    Single source of truth for argument matching.

    Supports:
    - Exact matching of named arguments to formals (including formals after `...`)
    - Positional filling of the remaining formals that precede `...`
    - `...` collecting every leftover argument as a (name, quosure) entry
    - Defaults, evaluated in the new frame when a formal is not supplied
    - Quoted formals (declared after `&quote`), bound to the argument's quosure
      instead of its value

    `supplied_args` are SuppliedArg records; `force` evaluates one of them in
    the caller's scope. Returns the CallFrame for evaluating the body.
    """
    local_env = Environment(outer=fn.env)
    formals = [f for f in fn.formals if not f.is_dots]
    dots_index = next((i for i, f in enumerate(fn.formals) if f.is_dots), None)
    positional_formals = [
        f for i, f in enumerate(fn.formals)
        if not f.is_dots and (dots_index is None or i < dots_index)
    ]

    matched: dict[str, object] = {}
    leftovers = []
    by_name = {f.name.id: f for f in formals}

    # Named arguments first
    for arg in supplied_args:
        if arg.name is not None and arg.name in by_name:
            if arg.name in matched:
                raise TidyArityError(f"Formal argument `{arg.name}` matched by multiple actual arguments")
            matched[arg.name] = arg
        else:
            leftovers.append(arg)

    # Then fill remaining positional formals in order
    unmatched = []
    open_formals = [f for f in positional_formals if f.name.id not in matched]
    for arg in leftovers:
        if arg.name is None and open_formals:
            matched[open_formals.pop(0).name.id] = arg
        else:
            unmatched.append(arg)

    if unmatched and dots_index is None:
        unused = ", ".join(
            f"{a.name} = {a.quosure.expr}" if a.name else str(a.quosure.expr)
            for a in unmatched
        )
        raise TidyArityError(f"Unused argument(s): {unused}")

    dots = DotsList(DotsEntry(a.name, a.quosure) for a in unmatched)
    frame = CallFrame(fn, caller_env=ctx.env, dots=dots, env=local_env)

    def _bind_supplied(formal: Formal, arg) -> None:
        if formal.quoted:
            frame.captured[formal.name.id] = arg.quosure
            local_env.define(formal.name, arg.quosure)
        else:
            local_env.define(formal.name, force(arg))

    def _bind_default(formal: Formal) -> None:
        name = formal.name.id
        if formal.default is None:
            raise TidyArityError(f"Argument `{name}` is missing, with no default")
        if formal.quoted:
            q = Quosure(formal.default, local_env)
            frame.captured[name] = q
            local_env.define(formal.name, q)
        else:
            default_ctx = ctx.child(local_env, mask=None, frame=frame)
            local_env.define(formal.name, evaluate_fn(formal.default, default_ctx))

    # Supplied arguments are forced in the order the caller wrote them
    owner = {id(arg): name for name, arg in matched.items()}
    for arg in supplied_args:
        name = owner.get(id(arg))
        if name is not None:
            _bind_supplied(by_name[name], arg)
    for formal in formals:
        if formal.name.id not in matched:
            _bind_default(formal)

    return frame
