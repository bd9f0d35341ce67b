"""
errors.py

Exceptions raised by huffcodec.
"""


from typing import Optional


class HuffmanError(ValueError):
    """Base class for codec failures."""


class EmptyInputError(HuffmanError):
    def __init__(self, message: str = "Input must not be empty") -> None:
        super().__init__(message)


class ParseError(HuffmanError):
    """
    Raised when a wire format, a tree header or a packed payload cannot be parsed.
    """
    def __init__(self, message: str, position: Optional[int] = None) -> None:
        self.reason = message
        self.position = position
        if position is not None:
            message = f"{message} (at byte {position})"
        super().__init__(message)


class DegenerateTreeError(HuffmanError):
    def __init__(self, message: str = "Input has a single distinct symbol") -> None:
        super().__init__(message)


class EmptyQueueError(IndexError):
    def __init__(self) -> None:
        super().__init__("extract_min from an empty priority queue")
