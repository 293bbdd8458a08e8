"""Public package surface for indexview.

Exports ``main`` for programmatic CLI invocation.
Most implementation lives in the ``listing``, ``view`` and ``preview``
subpackages.
"""

from __future__ import annotations


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)


__all__ = ["main"]
