"""
FeatureDisabledError - Raised when an operation is gated by a toggled-off feature.
Maps to: HTTP 403 Forbidden
"""


class FeatureDisabledError(Exception):
    def __init__(self, feature: str):
        super().__init__(f"{feature} feature is disabled")
        self.feature = feature
