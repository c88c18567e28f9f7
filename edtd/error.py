from enum import IntEnum


class ParseErrorKind(IntEnum):
    NO_MATCH = 0
    INCOMPLETE = 1


class DTDError(Exception):
    pass


class DTDValueError(DTDError, ValueError):
    """A literal could not be converted, or fell outside its domain."""


class DTDParseError(DTDError):
    def __init__(self, kind, context, position):
        DTDError.__init__(self, kind, context, position)
        self.kind = kind
        self.context = context
        self.position = position

    @property
    def incomplete(self):
        return self.kind == ParseErrorKind.INCOMPLETE

    def __str__(self):
        if self.incomplete:
            return 'incomplete input while parsing {} (stopped at offset {})'.format(self.context, self.position)
        return 'no match for {} at offset {}'.format(self.context, self.position)
