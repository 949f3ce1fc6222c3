"""
api/limiter.py -- Shared slowapi rate limiter for the decision service.

The lookup route is the only throttled endpoint. Limits are keyed on the
socket peer (the hosting server calling us), not on the source_address in
the request body -- a caller cannot dodge its quota by varying that field.

One module-level instance: api/main.py mounts it on app.state, and
api/routes/v1/authn.py decorates routes with it. Separate instances would
keep separate counters and never trip.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

LOOKUP_RATE_LIMIT = "300/minute"

limiter = Limiter(key_func=get_remote_address, storage_uri="memory://")
