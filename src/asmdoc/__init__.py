"""asmdoc - jump from an instruction mnemonic to its reference manual page.

asmdoc indexes a plain-text rendering of an instruction set manual, caches
the mnemonic to page mapping, and opens a PDF viewer at the right page.

Main features:
- Page-by-page heading scan with mnemonic family expansion (B.cond -> b.eq ...)
- Content-addressed JSON cache so large manuals are scanned once
- Shell completion from the cached index
- Ordered fallback across common PDF viewers
"""

from asmdoc.lib.errors import AsmDocError, ConfigError, MnemonicNotFoundError

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "AsmDocError",
    "ConfigError",
    "MnemonicNotFoundError",
]
