"""tightloop: warm up, sample, reduce and rank Python callables."""

from __future__ import annotations

__version__ = "0.1.0"
