"""
Policy Document Package

Loading and normalization of F&A rate documents.
"""

from .loader import PolicyDocumentError, default_policy_template, load_policy, normalize_policy

__all__ = [
    "PolicyDocumentError",
    "default_policy_template",
    "load_policy",
    "normalize_policy",
]
