"""Exceptions raised by the code registry."""

__all__ = ["CodeAllocationError"]


class CodeAllocationError(RuntimeError):
    """No free short code was found within the allowed number of draws."""

    def __init__(self, attempts: int) -> None:
        super().__init__(f"Could not allocate a free short code after {attempts} attempts")
        self.attempts = attempts
