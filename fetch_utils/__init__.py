def isint(x) -> bool:
    """Checks if the inserted value represents a whole number

    Parameters
    ----------
    x: str | int | float

    Returns
    -------
    bool
    """
    if isinstance(x, bool):
        return False
    try:
        a = float(x)
        b = int(a)
    except (ValueError, OverflowError, TypeError):
        return False
    else:
        return a == b
