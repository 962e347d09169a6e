"""themec compilers - compile routines dispatched by the parser."""

from themec.compiler.base import Compiler, Routine
from themec.compiler.jinja import JinjaCompiler
from themec.compiler.markers import decode, global_encode, revert_encode

__all__ = [
    "Compiler",
    "Routine",
    "JinjaCompiler",
    "revert_encode",
    "global_encode",
    "decode",
]
