from tidyeval import EvaluatorFn
from tidyeval import Value
from tidyeval.types.expression import Arg


def progn_form(tail: tuple[Arg, ...], ctx, evaluate_fn: EvaluatorFn) -> Value:
    result: Value = None
    for arg in tail:
        result = evaluate_fn(arg.expr, ctx)
    return result
