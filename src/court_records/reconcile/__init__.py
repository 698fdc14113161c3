from court_records.reconcile.tracking import (
    KeySet,
    build_key_set,
    is_tracked,
    tracked_flags,
    composite_key,
    canonical_number,
)

__all__ = ['KeySet', 'build_key_set', 'is_tracked', 'tracked_flags', 'composite_key', 'canonical_number']
