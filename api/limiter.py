"""
api/limiter.py -- Shared slowapi rate limiter instance.

api/main.py mounts it as middleware; the route modules apply per-route limits
with @limiter.limit(). One shared instance means one shared counter store --
separate instances per module would each count in isolation and never trip.

Limits are keyed by client IP. The login and register limits are the
brute-force and account-spam guards; check-strength is limited more loosely
because the registration form calls it on every keystroke pause.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

limiter = Limiter(key_func=get_remote_address, storage_uri="memory://")
