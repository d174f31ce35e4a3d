from tidyeval import EvaluatorFn
from tidyeval import Value
from tidyeval.errors import TidyArityError, TidyInvalidSymbol
from tidyeval.types.closure import Closure, Formal
from tidyeval.types.expression import Arg
from tidyeval.types.symbol import DOTS, Symbol

QUOTE_MARKER = Symbol("&quote")


def parse_formals(specs: tuple[Arg, ...]) -> list[Formal]:
    """Build formals from call arguments.

    `x` is a required formal, `y = expr` a formal with a default, `...` the
    variadic slot. Formals after `&quote` are captured as quosures.
    """
    formals: list[Formal] = []
    quoted = False
    seen: set[str] = set()
    for spec in specs:
        if spec.name is None:
            if spec.expr == QUOTE_MARKER:
                quoted = True
                continue
            if not isinstance(spec.expr, Symbol):
                raise TidyInvalidSymbol(f"Formal argument must be a symbol, got {spec.expr}")
            name, default = spec.expr, None
        else:
            name, default = Symbol(spec.name), spec.expr
        if name.id in seen:
            raise TidyArityError(f"Repeated formal argument `{name}`")
        seen.add(name.id)
        formals.append(Formal(name, default, quoted and name != DOTS))
    return formals


def function_form(tail: tuple[Arg, ...], ctx, evaluate_fn: EvaluatorFn) -> Value:
    """function(formals..., body): the last unnamed argument is the body."""
    if not tail or tail[-1].name is not None:
        raise TidyArityError("function requires a body as its last argument")
    return Closure(parse_formals(tail[:-1]), tail[-1].expr, ctx.env)
