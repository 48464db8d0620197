"""Error taxonomy for the menu engine.

Services raise these; the API blueprint turns them into JSON envelopes
using ``status_code``.
"""


class NavtreeError(Exception):
    """Base class for all engine errors"""
    status_code = 500

    def __init__(self, message):
        super().__init__(message)
        self.message = message

    def to_dict(self):
        return {'success': False, 'error': self.message}


class NotFound(NavtreeError):
    """A menu, item or linked page does not exist"""
    status_code = 404


class ValidationError(NavtreeError):
    """Input rejected before anything was written"""
    status_code = 400


class AuthError(NavtreeError):
    """Missing or invalid bearer token"""
    status_code = 401


class TransactionFailure(NavtreeError):
    """A bulk operation was rolled back as a whole"""


class CascadeDeleteError(NavtreeError):
    """Menu deletion aborted at a fatal stage"""

    def __init__(self, message, stage):
        super().__init__(message)
        self.stage = stage

    def to_dict(self):
        data = super().to_dict()
        data['stage'] = self.stage
        return data


class PartialCascadeFailure(NavtreeError):
    """A dependent style row could not be deleted; logged, never raised to callers"""

    def __init__(self, message, menu_id, dependent):
        super().__init__(message)
        self.menu_id = menu_id
        self.dependent = dependent
