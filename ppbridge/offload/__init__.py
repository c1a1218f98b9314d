"""
ppbridge - Offload Package

Async front-end for CPU-bound work running on an explicit worker pool.
"""

from .pool import WorkerPool, default_max_workers
from .bridge import (
    OffloadBridge,
    OffloadResult,
    OffloadStatus,
    OffloadError,
    OffloadCancelled,
    OffloadChannelClosed,
)
from .credentials import CredentialHasher, hash_password, verify_password, HASH_PROFILES

__all__ = [
    # Pool
    'WorkerPool',
    'default_max_workers',

    # Bridge
    'OffloadBridge',
    'OffloadResult',
    'OffloadStatus',
    'OffloadError',
    'OffloadCancelled',
    'OffloadChannelClosed',

    # Credentials
    'CredentialHasher',
    'hash_password',
    'verify_password',
    'HASH_PROFILES',
]
