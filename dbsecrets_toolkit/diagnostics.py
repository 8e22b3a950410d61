"""Call-site helpers for ad hoc diagnostic logging."""
import inspect


def caller_location(depth: int = 1) -> str:
    """
    Describe a frame on the current call stack.

    Args:
        depth: Frames above caller_location itself; 1 is its direct caller

    Returns:
        "<module>.<qualified function name> line:<line number> "

    Raises:
        RuntimeError: If the requested frame does not exist
    """
    frame = inspect.currentframe()
    try:
        for _ in range(depth):
            frame = frame.f_back if frame is not None else None
        if frame is None:
            raise RuntimeError(f"No caller frame at depth {depth}")
        module = frame.f_globals.get("__name__", "?")
        return f"{module}.{frame.f_code.co_qualname} line:{frame.f_lineno} "
    finally:
        del frame


def current_location() -> str:
    """Return "<module>.<function> line:<n> " for the function calling this."""
    return caller_location(depth=2)
