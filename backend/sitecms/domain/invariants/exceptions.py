class InvariantViolation(Exception):
    """Raised when a settings document breaks a structural rule."""
