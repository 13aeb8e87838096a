class SymbolicDiffException(Exception):
    "Base exception for errors raised by the differentiation engine."
    pass

class SymbolicDiffInternalException(SymbolicDiffException):
    "Base exception for broken internal invariants of the engine."
    pass

class ConstructionError(SymbolicDiffException):
    "A problem was encountered creating an expression node."
    pass

class IncompatibleTermsError(SymbolicDiffException):
    "Two terms that are not like terms were asked to be added."
    pass

class MultipleVariablesError(SymbolicDiffInternalException):
    "An expression refers to more than one differentiation variable."
    pass

class UnexpectedKindError(SymbolicDiffInternalException):
    "A kind-specific operation received a node of the wrong kind."
    pass

class EvaluationError(SymbolicDiffException):
    "A problem was encountered while numerically evaluating an expression."
    pass
