"""Errors raised by partition generation."""


class GenerationExhausted(RuntimeError):
    """The iteration cap was reached without producing a valid partition."""

    def __init__(self, message: str, iterations: int):
        super().__init__(message)
        self.iterations = iterations
