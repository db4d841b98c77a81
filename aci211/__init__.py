# aci211/__init__.py
"""
ACI 211.1 mix design package.

Keep this file side-effect free.
Import from the submodules directly (aci211.design, aci211.report, ...).
"""

__all__ = []
