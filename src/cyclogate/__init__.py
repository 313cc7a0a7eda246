"""
cyclogate - per-function cyclomatic complexity for one translation unit

Scores every function defined in an implementation file as
1 + the number of if/switch/for/while/do/?: nodes in its body, reports each
score as a remark, and writes a ``results.cy`` summary for CI gates.
"""

__version__ = "0.3.0"

from .analysis import ComplexityRecord, ComplexityReport
from .api import analyze_clang_ast, analyze_files, analyze_source, run_pass
from .config import CyclogateConfig, load_config
from .reporting import ReportPersister, read_report
from .traversal import ComplexityPass, PassResult

__all__ = [
    "analyze_clang_ast",
    "analyze_files",
    "analyze_source",
    "run_pass",
    "ComplexityPass",
    "PassResult",
    "ComplexityRecord",
    "ComplexityReport",
    "CyclogateConfig",
    "load_config",
    "ReportPersister",
    "read_report",
]
