"""
Exceptions raised while generating code from type definitions.
"""

from typing import Optional


class GeneratorError(Exception):
    """Base exception for code generation errors."""

    pass


class SchemaError(GeneratorError):
    """Raised for malformed or out-of-range type definitions."""

    pass


class UnresolvedReferenceError(GeneratorError):
    """A type name referenced by another definition is not in the registry."""

    def __init__(self, name: str, referrer: Optional[str] = None):
        self.name = name
        self.referrer = referrer
        where = f" referenced by {referrer}" if referrer else ""
        super().__init__(f"Unknown type '{name}'{where}")


class PathResolutionError(GeneratorError):
    """A union discriminator path cannot be followed.

    Attributes:
        type_name: Type the walk was standing on when it failed
        segment: Path segment being resolved
        expected: Kind the walk required (always ``"Struct"``)
        actual: Kind found, or None when the segment names no field
    """

    def __init__(
        self,
        type_name: str,
        segment: str,
        expected: str = "Struct",
        actual: Optional[str] = None,
        union_name: Optional[str] = None,
    ):
        self.type_name = type_name
        self.segment = segment
        self.expected = expected
        self.actual = actual
        self.union_name = union_name

        prefix = f"Union {union_name}: " if union_name else ""
        if actual is None:
            message = (
                f"{prefix}discriminator segment '{segment}' is not a field "
                f"of {type_name}"
            )
        else:
            message = (
                f"{prefix}the path to union discriminator can only contain "
                f"{expected}s, {type_name} is a {actual} "
                f"(while resolving '{segment}')"
            )
        super().__init__(message)
