"""
runtime パッケージ公開 API。
"""

from .dependencies import PROJECT_ROOT, bootstrap, build_bootstrap_container, build_local_storage

__all__ = [
    "PROJECT_ROOT",
    "bootstrap",
    "build_bootstrap_container",
    "build_local_storage",
]
