"""
bendec_codegen: layout-exact C++ declarations from binary type schemas.
"""

from .codegen import (
    GenerationResult,
    GeneratorConfig,
    GeneratorError,
    PathResolutionError,
    generate_types,
    render_types,
    write_types,
)

__version__ = "0.1.0"

__all__ = [
    "GenerationResult",
    "GeneratorConfig",
    "GeneratorError",
    "PathResolutionError",
    "generate_types",
    "render_types",
    "write_types",
    "__version__",
]
