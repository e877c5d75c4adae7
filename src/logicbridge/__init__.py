"""logicbridge - pseudo-code to C, C++, Java, JavaScript and Python compiler."""

from .compiler import PHASES, TARGETS, CompileResult, compile_source

__version__ = "0.1.0"

__all__ = ["PHASES", "TARGETS", "CompileResult", "compile_source"]
