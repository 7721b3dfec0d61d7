#Error types shared by the number, monomial and polynomial parsers


class ParseError(ValueError):
    """Base class for every failure raised while reading text."""


class InvalidSyntax(ParseError):
    def __init__(self, text):
        self.text = text
        super().__init__(f"invalid syntax: {text!r}")


class InvalidValue(ParseError):
    def __init__(self, value):
        self.value = value
        super().__init__(f"invalid value: {value}")


class ParseIntError(ParseError):
    def __init__(self, text):
        self.text = text
        super().__init__(f"invalid integer literal: {text!r}")


class ParseRationalError(ParseError):
    def __init__(self, text, reason="invalid rational literal"):
        self.text = text
        super().__init__(f"{reason}: {text!r}")


# Raised by arithmetic that has no meaning for the given operands (e.g. x % y for non-integers)
class UnsupportedOperationError(ArithmeticError):
    pass
