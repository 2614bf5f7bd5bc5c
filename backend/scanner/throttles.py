from rest_framework.throttling import ScopedRateThrottle


class ScannerScopedRateThrottle(ScopedRateThrottle):
    """Scoped throttle that falls back to the ``default`` rate for unscoped views."""

    default_scope = 'default'

    def allow_request(self, request, view):
        self.scope = getattr(view, self.scope_attr, None) or self.default_scope
        self.rate = self.get_rate()
        self.num_requests, self.duration = self.parse_rate(self.rate)
        return super(ScopedRateThrottle, self).allow_request(request, view)
