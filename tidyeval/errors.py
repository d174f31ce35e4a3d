"""Error taxonomy for tidyeval.

Every error aborts the evaluation pass that raised it. Errors carry enough
context (symbol, key, pronoun kind) for wrapper authors to translate them
into their own domain errors.
"""


class TidyError(Exception):
    """ Base class for all tidyeval errors"""
    pass


class TidyInvalidSymbol(TidyError):
    """ Raised when a name that is not a Symbol is bound"""
    pass


class TidyLookupError(TidyError, LookupError):
    """ Raised when a symbol is unresolved in the relevant chain and mode"""

    def __init__(self, message: str, name: str | None = None):
        super().__init__(message)
        self.name = name


class DataPronounError(TidyLookupError):
    """ Raised when `.data` is subset with a key that is not a mask column"""

    def __init__(self, key: str):
        super().__init__(f"Column `{key}` not found in `.data`", key)
        self.key = key
        self.kind = "data"


class EnvPronounError(TidyLookupError):
    """ Raised when `.env` is subset with a key absent from the environment chain"""

    def __init__(self, key: str):
        super().__init__(f"Object `{key}` not found in `.env`", key)
        self.key = key
        self.kind = "env"


class NoMaskError(TidyError):
    """ Raised when a pronoun is referenced with no active data mask"""

    def __init__(self, name: str):
        super().__init__(f"Can't use `{name}` outside of a data mask")
        self.name = name


class MaskShapeError(TidyError, ValueError):
    """ Raised when mask columns do not share one length"""


class TidyArityError(TidyError, TypeError):
    """ Raised when a callable is invoked with the wrong argument shape"""


class TidyTypeError(TidyError, TypeError):
    """ Raised when a value has the wrong type for the operation"""


class TidyRecursionError(TidyError, RecursionError):
    """ Raised when evaluation exceeds the configured depth"""

    def __init__(self, message: str, depth: int | None = None):
        super().__init__(message)
        self.depth = depth
