"""Resolve candidate references to callables.

A reference names a callable as ``module:attr`` (an importable module)
or ``path/to/file.py:attr`` (a source file), optionally prefixed with
a report label: ``"builtin sum=tightloop.demo:builtin_sum"``.  Dotted
attribute paths (``module:Class.method``) are followed.
"""

from __future__ import annotations

import importlib
import importlib.util
import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from types import ModuleType

from tightloop.bench.timing import Candidate

log = logging.getLogger("tightloop")


@dataclass
class CandidateRef:
    """A parsed candidate reference."""

    label: str
    module: str  # Module name or path to a ``.py`` file
    attr: str

    @property
    def is_file(self) -> bool:
        return self.module.endswith(".py")


def parse_candidate_ref(ref: str) -> CandidateRef:
    """Parse ``[label=]module:attr``.

    The label defaults to the attribute path.

    Examples::

        "tightloop.demo:builtin_sum"
        "reduce=tightloop.demo:functional_reduce"
        "./bench_me.py:fast_path"
    """
    label = ""
    text = ref.strip()
    if "=" in text.split(":", 1)[0]:
        label, text = text.split("=", 1)
        label = label.strip()
        text = text.strip()
        if not label:
            raise ValueError(f"Empty label in candidate reference: '{ref}'")

    if ":" not in text:
        raise ValueError(
            f"Invalid candidate reference: '{ref}'. Expected format: '[label=]module:attr'"
        )
    module, attr = text.rsplit(":", 1)
    module = module.strip()
    attr = attr.strip()
    if not module or not attr:
        raise ValueError(
            f"Invalid candidate reference: '{ref}'. Both module and attribute are required."
        )

    return CandidateRef(label=label or attr, module=module, attr=attr)


def _import_file(path: Path) -> ModuleType:
    """Import a source file as a uniquely named module."""
    if not path.exists():
        raise ValueError(f"Candidate file does not exist: {path}")
    module_name = f"_tightloop_candidates_{path.stem}_{abs(hash(str(path.resolve())))}"
    if module_name in sys.modules:
        return sys.modules[module_name]
    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        raise ValueError(f"Cannot import candidate file: {path}")
    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except Exception as exc:
        del sys.modules[module_name]
        raise ValueError(
            f"Cannot import candidate file {path}: {type(exc).__name__}: {exc}"
        ) from exc
    return module


def load_candidate(ref: CandidateRef) -> Candidate:
    """Import the module named by *ref* and return the callable.

    Raises:
        ValueError: If the module or attribute cannot be found, importing
            the module raises, or the attribute is not callable.
    """
    if ref.is_file:
        module = _import_file(Path(ref.module))
    else:
        try:
            module = importlib.import_module(ref.module)
        except Exception as exc:
            raise ValueError(
                f"Cannot import module '{ref.module}': {type(exc).__name__}: {exc}"
            ) from exc

    obj: object = module
    for part in ref.attr.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError as exc:
            raise ValueError(f"'{ref.module}' has no attribute '{ref.attr}'") from exc

    if not callable(obj):
        raise ValueError(f"'{ref.module}:{ref.attr}' is not callable")
    log.debug("Loaded candidate %s from %s:%s", ref.label, ref.module, ref.attr)
    return obj


def load_candidates(specs: dict[str, str] | list[str]) -> dict[str, Candidate]:
    """Resolve several references, preserving their order.

    Args:
        specs: Either ``[label=]module:attr`` strings, or a mapping of
            label to ``module:attr`` (the YAML profile form).

    Raises:
        ValueError: On a malformed or unresolvable reference, or a
            duplicate label.
    """
    if isinstance(specs, dict):
        refs = [
            CandidateRef(label=label, module=parsed.module, attr=parsed.attr)
            for label, parsed in ((lbl, parse_candidate_ref(s)) for lbl, s in specs.items())
        ]
    else:
        refs = [parse_candidate_ref(s) for s in specs]

    candidates: dict[str, Candidate] = {}
    for ref in refs:
        if ref.label in candidates:
            raise ValueError(f"Duplicate candidate label: '{ref.label}'")
        candidates[ref.label] = load_candidate(ref)
    return candidates
